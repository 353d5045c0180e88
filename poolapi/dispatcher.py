"""
Dispatcher.

Sends a resolved command's sub-command to the sibling process that owns it
and blocks until that process answers or its channel fails. There is no
retry and no caching; a hung sibling hangs the request unless the channel
itself was built with a timeout.
"""

import logging
import os
import socket
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

from shared.socket_protocol import UnixSocketProtocol
from poolapi.errors import MissingParams, NoProcessResponse
from poolapi.registry import CommandSpec, ProcessTarget

logger = logging.getLogger(__name__)


class ProcessChannel(Protocol):
    def send_recv(self, message: str) -> Optional[str]:
        """Send one message and return the reply, or None on failure."""
        ...


class UnixProcessChannel:
    """Request/response channel to a sibling process over its unix socket"""

    def __init__(self, socket_path: str, timeout: Optional[float] = None):
        """
        Args:
            socket_path: Path of the sibling's listening socket
            timeout: Optional socket timeout in seconds (None blocks)
        """
        self.socket_path = socket_path
        self.timeout = timeout
        self.protocol = UnixSocketProtocol()

    def send_recv(self, message: str) -> Optional[str]:
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        sock.settimeout(self.timeout)
        try:
            sock.connect(self.socket_path)
            if not self.protocol.send_frame(sock, message):
                logger.warning(f"Failed to send {message!r} to {self.socket_path}")
                return None
            reply = self.protocol.receive_frame(sock)
        except OSError as e:
            logger.warning(f"Failed to reach process socket {self.socket_path}: {e}")
            return None
        finally:
            sock.close()

        if reply is None:
            logger.warning(f"No reply from {self.socket_path} to {message!r}")
            return None
        return reply.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"UnixProcessChannel({self.socket_path!r})"


@dataclass
class ProcessChannels:
    """Channel for each sibling process, keyed by ProcessTarget."""
    channels: Dict[ProcessTarget, ProcessChannel] = field(default_factory=dict)

    @classmethod
    def from_socket_dir(cls, socket_dir: str, timeout: Optional[float] = None) -> "ProcessChannels":
        channels: Dict[ProcessTarget, ProcessChannel] = {}
        for target in ProcessTarget:
            if target is ProcessTarget.NONE:
                continue
            channels[target] = UnixProcessChannel(os.path.join(socket_dir, target.value), timeout)
        return cls(channels)

    def channel_for(self, target: ProcessTarget) -> Optional[ProcessChannel]:
        return self.channels.get(target)


def dispatch(spec: CommandSpec, params: Optional[Any], channels: ProcessChannels) -> str:
    """
    Forward ``spec.remote_command`` to the process owning ``spec``.

    Raises:
        MissingParams: the command requires params and none were given
        NoProcessResponse: no channel, channel failure or empty reply
    """
    if spec.requires_params and params is None:
        logger.warning(f"Failed to find mandatory params in API command {spec.name}")
        raise MissingParams()

    # TODO: forward params to the sibling once a command takes them
    channel = channels.channel_for(spec.target)
    if channel is None:
        logger.warning(f"No channel configured for process {spec.target.value}")
        raise NoProcessResponse()

    reply = channel.send_recv(spec.remote_command)
    if not reply:
        logger.warning(
            f"Failed to get API response from process {spec.target.value} "
            f"to command {spec.remote_command}"
        )
        raise NoProcessResponse()
    return reply
