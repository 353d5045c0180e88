from __future__ import annotations

import select
import socket
import struct
from typing import Optional

# Every frame is a little-endian uint32 length followed by the payload.
LENGTH_PREFIX = struct.Struct("<I")
MAX_FRAME_SIZE = 16 * 1024 * 1024


def _recv_exact(sock: socket.socket, size: int) -> bytes:
    data = bytearray()
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            raise ConnectionError("Socket closed mid-frame")
        data.extend(chunk)
    return bytes(data)


def send_unix_msg(sock: socket.socket, payload: bytes | str) -> None:
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    sock.sendall(LENGTH_PREFIX.pack(len(payload)) + payload)


def recv_unix_msg(sock: socket.socket) -> bytes:
    header = _recv_exact(sock, LENGTH_PREFIX.size)
    (length,) = LENGTH_PREFIX.unpack(header)
    if not length:
        raise ConnectionError("Zero length frame")
    if length > MAX_FRAME_SIZE:
        raise ConnectionError(f"Frame too large: {length} bytes")
    return _recv_exact(sock, length)


def wait_close(sock: socket.socket, timeout: float) -> bool:
    """Return True if the peer closed its end within ``timeout`` seconds."""
    try:
        readable, _, _ = select.select([sock], [], [], timeout)
        if not readable:
            return False
        return sock.recv(1, socket.MSG_PEEK) == b""
    except (OSError, ValueError):
        return False


class UnixSocketProtocol:
    def send_frame(self, sock: socket.socket, payload: bytes | str) -> bool:
        try:
            send_unix_msg(sock, payload)
        except OSError:
            return False
        return True

    def receive_frame(self, sock: socket.socket) -> Optional[bytes]:
        try:
            return recv_unix_msg(sock)
        except OSError:
            return None
