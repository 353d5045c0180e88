"""
Send one command to the gateway API socket and print the reply envelope.

Usage:
    python scripts/api_query.py generator.stats
    python scripts/api_query.py some.command --params '{"id": 1}'
    python scripts/api_query.py --raw 'not json at all'
"""

import argparse
import json
import logging
import os
import socket
import sys

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from shared.logging_config import setup_logging
from shared.socket_protocol import recv_unix_msg, send_unix_msg
from poolapi import config

logger = logging.getLogger("apiquery")


def query(socket_path: str, payload: str, timeout: float = 10.0) -> str:
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    sock.settimeout(timeout)
    try:
        sock.connect(socket_path)
        send_unix_msg(sock, payload)
        return recv_unix_msg(sock).decode("utf-8")
    finally:
        sock.close()


def main():
    parser = argparse.ArgumentParser(description="Query the pool API gateway")
    parser.add_argument("command", nargs="?", help="API command, e.g. generator.stats")
    parser.add_argument("--params", type=str, default=None, help="JSON params value")
    parser.add_argument("--raw", type=str, default=None, help="Send this payload verbatim")
    parser.add_argument(
        "--socket",
        type=str,
        default=os.path.join(config.SOCKET_DIR, config.API_SOCKET_NAME),
        help="API socket path"
    )
    parser.add_argument("--timeout", type=float, default=10.0)
    parser.add_argument("--log-level", type=str, default="WARNING")
    args = parser.parse_args()

    setup_logging("apiquery", level=args.log_level)

    if args.raw is not None:
        payload = args.raw
    elif args.command:
        request = {"command": args.command}
        if args.params is not None:
            request["params"] = json.loads(args.params)
        payload = json.dumps(request)
    else:
        parser.error("either a command or --raw is required")

    try:
        reply = query(args.socket, payload, args.timeout)
    except (OSError, ConnectionError) as e:
        logger.error(f"Failed to query {args.socket}: {e}")
        sys.exit(1)

    print(reply)


if __name__ == "__main__":
    main()
