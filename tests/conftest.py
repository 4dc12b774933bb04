import json

import pytest

from wscmd import Connection, Notice
from wscmd.transports.memory import MemoryTransport


class FakeEngine:
    """Reversible stand-in for the encryption engine (byte-wise XOR)."""

    instances = []

    def __init__(self):
        self.remote = None
        FakeEngine.instances.append(self)

    def begin_key_exchange(self):
        return {"publicKey": "LOCALKEY"}

    def complete_key_exchange(self, remote_public_key, salt):
        self.remote = (remote_public_key, salt)

    def encrypt(self, data):
        return bytes(b ^ 0x5A for b in data)

    def decrypt(self, data):
        return bytes(b ^ 0x5A for b in data)


def raw_frame(purpose, body=None, request_id=None, **header):
    """Inbound frame bytes as the remote peer would send them."""
    hdr = {"version": 1, "messagePurpose": purpose}
    if request_id is not None:
        hdr["requestId"] = request_id
    hdr.update(header)
    return json.dumps({"header": hdr, "body": body if body is not None else {}}).encode("utf-8")


def sent_frames(transport, engine=None):
    """Decode everything the connection has sent so far."""
    out = []
    for data, binary in transport.sent:
        if binary:
            data = engine.decrypt(data)
        out.append(json.loads(data.decode("utf-8")))
    return out


class Recorder:
    """Collects (kind, notice) for every notification kind."""

    def __init__(self, conn):
        self.events = []
        for kind in Notice:
            conn.on(kind, lambda notice, kind=kind: self.events.append((kind, notice)))

    def kinds(self):
        return [kind for kind, _ in self.events]

    def of(self, kind):
        return [notice for k, notice in self.events if k == kind]


@pytest.fixture
def transport():
    t = MemoryTransport()
    t.start()
    return t


@pytest.fixture
def conn(transport):
    FakeEngine.instances.clear()
    return Connection(transport, encryption=FakeEngine)


@pytest.fixture
def recorder(conn):
    return Recorder(conn)
