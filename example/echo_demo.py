
import logging
import sys
import time

from wscmd import connect, ConnectionState, Notice, ProtocolVersion

def main():
    # Connects to a command server and answers every command by echoing it back
    # Usage: python example/echo_demo.py ws://localhost:19131 [v2]
    logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    url = sys.argv[1] if len(sys.argv) > 1 else "ws://localhost:19131"
    version = ProtocolVersion.V2 if "v2" in sys.argv[2:] else ProtocolVersion.V1

    def on_command(req):
        if req.handle_encryption_handshake():
            return
        req.respond({"statusCode": 0, "statusMessage": f"echo: {req.command_line}"})

    def on_subscribe(change):
        print("peer subscribed to", change.event_name)
        change.connection.publish_event(change.event_name, {"note": "hello"})

    conn = connect(url, version=version, handlers={
        Notice.COMMAND: on_command,
        Notice.SUBSCRIBE: on_subscribe,
        Notice.ENCRYPTION_ENABLED: lambda n: print("encryption enabled"),
        Notice.DISCONNECT: lambda n: print("disconnected"),
    })

    try:
        while conn.state is not ConnectionState.CLOSED:
            time.sleep(0.5)
    except KeyboardInterrupt:
        conn.disconnect()

if __name__ == "__main__":
    main()
