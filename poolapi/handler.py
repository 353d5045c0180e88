"""
API request handler.

One call to handle_request() serves one caller connection end to end:
decode, resolve, dispatch, encode, send, wait for the caller to hang up,
close. Every failure short of an empty buffer is turned into an error
envelope and sent back; the caller channel is closed on every path.
"""

import logging
import socket
from dataclasses import dataclass
from typing import Optional, Protocol

from shared.socket_protocol import UnixSocketProtocol, wait_close
from poolapi import config
from poolapi.decoder import decode
from poolapi.dispatcher import ProcessChannels, dispatch
from poolapi.envelope import ResponseEnvelope, encode, error_envelope, success_envelope
from poolapi.errors import EmptyRequest, GatewayError, UnknownCommand
from poolapi.registry import resolve

logger = logging.getLogger(__name__)


class CallerChannel(Protocol):
    def send(self, data: bytes) -> bool: ...

    def wait_close(self, timeout: float) -> bool: ...

    def close(self) -> None: ...


class UnixCallerChannel:
    """Caller side of an accepted API socket connection"""

    def __init__(self, sock: socket.socket):
        self.sock = sock
        self.protocol = UnixSocketProtocol()

    def receive(self) -> Optional[bytes]:
        return self.protocol.receive_frame(self.sock)

    def send(self, data: bytes) -> bool:
        return self.protocol.send_frame(self.sock, data)

    def wait_close(self, timeout: float) -> bool:
        return wait_close(self.sock, timeout)

    def close(self) -> None:
        self.sock.close()

    def __str__(self) -> str:
        try:
            return f"sockd {self.sock.fileno()}"
        except OSError:
            return "closed socket"


@dataclass
class InboundRequest:
    channel: CallerChannel
    payload: Optional[bytes]


def route(payload: Optional[bytes], channels: ProcessChannels) -> ResponseEnvelope:
    """
    Decode, resolve and dispatch one payload, returning the envelope to send.

    Raises:
        EmptyRequest: nothing to answer
    """
    try:
        request = decode(payload)
        spec = resolve(request.command)
        if spec is None:
            logger.warning(f"Failed to find matching API command {request.command}")
            raise UnknownCommand(request.command)
        reply = dispatch(spec, request.params, channels)
    except EmptyRequest:
        raise
    except GatewayError as e:
        return error_envelope(e)
    return success_envelope(reply)


def finish(channel: CallerChannel, response: Optional[bytes], close_wait: float) -> None:
    """Send the encoded envelope and give the caller a bounded time to hang up."""
    if not response:
        logger.warning(f"No response body to send to {channel}")
        return
    if not channel.send(response):
        logger.warning(f"Failed to send API response: {response!r} to {channel}")
        return
    if not channel.wait_close(close_wait):
        logger.warning(f"API handler did not detect close from {channel}")


def handle_request(
    request: InboundRequest,
    channels: ProcessChannels,
    close_wait: Optional[float] = None,
) -> None:
    if close_wait is None:
        close_wait = config.CLOSE_WAIT_SECONDS
    try:
        try:
            envelope = route(request.payload, channels)
        except EmptyRequest:
            return
        finish(request.channel, encode(envelope), close_wait)
    finally:
        request.channel.close()
