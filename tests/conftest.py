"""Shared pytest configuration and fixtures for the gateway test suite."""

import shutil
import socket
import sys
import tempfile
import threading
from pathlib import Path
from typing import List, Optional

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from shared.socket_protocol import recv_unix_msg, send_unix_msg
from poolapi.dispatcher import ProcessChannels
from poolapi.registry import ProcessTarget


# =============================================================================
# Fakes
# =============================================================================

class FakeCallerChannel:
    """Caller channel that records what the handler does with it."""

    def __init__(self, send_ok: bool = True, peer_closes: bool = True):
        self.send_ok = send_ok
        self.peer_closes = peer_closes
        self.sent: List[bytes] = []
        self.wait_calls: List[float] = []
        self.closed = False

    def send(self, data: bytes) -> bool:
        self.sent.append(data)
        return self.send_ok

    def wait_close(self, timeout: float) -> bool:
        self.wait_calls.append(timeout)
        return self.peer_closes

    def close(self) -> None:
        self.closed = True


class FakeProcessChannel:
    """Sibling process channel returning a canned reply."""

    def __init__(self, reply: Optional[str] = "OK"):
        self.reply = reply
        self.messages: List[str] = []

    def send_recv(self, message: str) -> Optional[str]:
        self.messages.append(message)
        return self.reply


class FakeProcessServer:
    """Unix socket server answering every framed request with ``reply``."""

    def __init__(self, socket_path: str, reply: Optional[bytes] = b"OK"):
        self.socket_path = socket_path
        self.reply = reply
        self.received: List[bytes] = []
        self.sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self.sock.bind(socket_path)
        self.sock.listen(4)
        self.thread = threading.Thread(target=self._serve, daemon=True)
        self.thread.start()

    def _serve(self):
        while True:
            try:
                conn, _ = self.sock.accept()
            except OSError:
                return
            with conn:
                try:
                    self.received.append(recv_unix_msg(conn))
                    if self.reply is not None:
                        send_unix_msg(conn, self.reply)
                except (OSError, ConnectionError):
                    pass

    def close(self):
        self.sock.close()


# =============================================================================
# Shared Fixtures
# =============================================================================

@pytest.fixture
def caller() -> FakeCallerChannel:
    return FakeCallerChannel()


@pytest.fixture
def process_channels():
    """One FakeProcessChannel per real sibling process."""
    fakes = {
        target: FakeProcessChannel()
        for target in ProcessTarget
        if target is not ProcessTarget.NONE
    }
    return ProcessChannels(dict(fakes))


@pytest.fixture
def socket_dir():
    """Short temp directory; unix socket paths are limited to ~108 bytes."""
    path = tempfile.mkdtemp(prefix="pa", dir="/tmp")
    yield path
    shutil.rmtree(path, ignore_errors=True)
