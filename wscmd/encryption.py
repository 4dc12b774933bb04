"""
In-band encryption for a connection.

The remote peer starts the exchange with a command line of the form::

    enableencryption "<peer public key>" "<salt>"

We answer (still in plaintext) with our own public key, and from then on
every frame in both directions is encrypted.

Default engine:
- ECDH on secp384r1, public keys as base64 DER SubjectPublicKeyInfo
- key = SHA-256(salt || shared secret)
- AES-256-CFB8, IV = first 16 bytes of the key, one stream per direction
  for the whole life of the connection
"""

from __future__ import annotations
import base64
import json
import logging
from typing import Any, Callable, Dict, Optional, Protocol as TypingProtocol

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms

try:
    from cryptography.hazmat.decrepit.ciphers.modes import CFB8
except ImportError:
    from cryptography.hazmat.primitives.ciphers.modes import CFB8

from . import constants as C
from .errors import HandshakeAlreadyActive, MalformedFrame

logger = logging.getLogger(__name__)

CURVE = ec.SECP384R1()
BLOCK_SIZE = 16


class EncryptionEngine(TypingProtocol):
    def begin_key_exchange(self) -> Dict[str, Any]: ...
    def complete_key_exchange(self, remote_public_key: Any, salt: Any) -> None: ...
    def encrypt(self, data: bytes) -> bytes: ...
    def decrypt(self, data: bytes) -> bytes: ...


class ClientEncryption:
    """ Client side of the key exchange. :func:`begin_key_exchange` must be
        called before :func:`complete_key_exchange`; encrypt/decrypt are
        only usable once the exchange is complete.
    """

    def __init__(self):
        self._private_key: Optional[ec.EllipticCurvePrivateKey] = None
        self._encryptor = None
        self._decryptor = None

    def begin_key_exchange(self) -> Dict[str, Any]:
        self._private_key = ec.generate_private_key(CURVE)
        public_der = self._private_key.public_key().public_bytes(
            serialization.Encoding.DER,
            serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        return {C.PUBLIC_KEY: base64.b64encode(public_der).decode("ascii")}

    def complete_key_exchange(self, remote_public_key: str, salt: str) -> None:
        if self._private_key is None:
            raise RuntimeError("begin_key_exchange() has not been called")
        remote = serialization.load_der_public_key(base64.b64decode(remote_public_key))
        shared_secret = self._private_key.exchange(ec.ECDH(), remote)

        digest = hashes.Hash(hashes.SHA256())
        digest.update(base64.b64decode(salt))
        digest.update(shared_secret)
        secret_key = digest.finalize()
        self._init_cipher(secret_key)

    def _init_cipher(self, secret_key: bytes) -> None:
        cipher = Cipher(algorithms.AES(secret_key), CFB8(secret_key[:BLOCK_SIZE]))
        self._encryptor = cipher.encryptor()
        self._decryptor = cipher.decryptor()

    def encrypt(self, data: bytes) -> bytes:
        if self._encryptor is None:
            raise RuntimeError("key exchange is not complete")
        return self._encryptor.update(data)

    def decrypt(self, data: bytes) -> bytes:
        if self._decryptor is None:
            raise RuntimeError("key exchange is not complete")
        return self._decryptor.update(data)


def _decode_argument(token: str) -> Any:
    # Arguments are JSON strings on the wire; bare tokens are taken as-is
    try:
        return json.loads(token)
    except ValueError:
        return token


class EncryptionSession:
    """ Holds the active engine for one connection. Once installed the
        engine is never replaced or removed.
    """

    def __init__(self, engine_factory: Callable[[], EncryptionEngine] = ClientEncryption):
        self._factory = engine_factory
        self._engine: Optional[EncryptionEngine] = None

    def is_active(self) -> bool:
        return self._engine is not None

    @staticmethod
    def is_handshake(command_line: Optional[str]) -> bool:
        return isinstance(command_line, str) and command_line.startswith(C.HANDSHAKE_COMMAND + " ")

    def perform_handshake(self, command_line: str, respond: Callable[[Dict[str, Any]], None]) -> bool:
        """ Run the key exchange if *command_line* is a handshake request.
            *respond* is called with the plaintext reply before the engine
            is installed. Returns False, doing nothing, for any other
            command line.
        """
        if not self.is_handshake(command_line):
            return False
        if self.is_active():
            logger.warning("rejecting encryption handshake: encryption already enabled")
            raise HandshakeAlreadyActive("encryption is already enabled on this connection")

        args = command_line.split(" ")
        if len(args) < 3:
            raise MalformedFrame(f"{C.HANDSHAKE_COMMAND} expects a public key and a salt")
        remote_public_key = _decode_argument(args[1])
        salt = _decode_argument(args[2])

        engine = self._factory()
        params = engine.begin_key_exchange()
        try:
            engine.complete_key_exchange(remote_public_key, salt)
        except (ValueError, TypeError) as e:
            raise MalformedFrame(f"bad {C.HANDSHAKE_COMMAND} parameters: {e}") from e
        respond({C.PUBLIC_KEY: params[C.PUBLIC_KEY], C.STATUS_CODE: 0})
        self._engine = engine
        return True

    def encrypt(self, data: bytes) -> bytes:
        if self._engine is None:
            raise RuntimeError("encryption is not enabled")
        return self._engine.encrypt(data)

    def decrypt(self, data: bytes) -> bytes:
        if self._engine is None:
            raise RuntimeError("encryption is not enabled")
        return self._engine.decrypt(data)
