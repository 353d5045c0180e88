"""
API Listener

Unix socket server for admin API callers. Each accepted connection carries
one framed JSON request and is served by its own thread; nothing is shared
between requests except the read-only command registry.
"""

import logging
import os
import socket
import threading
from typing import Optional

from poolapi.dispatcher import ProcessChannels
from poolapi.handler import InboundRequest, UnixCallerChannel, handle_request

logger = logging.getLogger(__name__)


class ApiListener:
    """
    Accepts connections on the API socket and hands each one to handle_request.
    """

    def __init__(
        self,
        socket_path: str,
        channels: ProcessChannels,
        close_wait: float = 5.0,
        backlog: int = 16,
        poll_interval: float = 0.5,
        receive_timeout: Optional[float] = 10.0
    ):
        """
        Initialize API listener.

        Args:
            socket_path: Filesystem path of the API unix socket
            channels: Sibling process channels requests are routed to
            close_wait: Seconds to wait for callers to hang up after a reply
            backlog: listen() backlog
            poll_interval: Seconds between checks of the running flag
            receive_timeout: Seconds a caller has to send its request frame
        """
        self.socket_path = socket_path
        self.channels = channels
        self.close_wait = close_wait
        self.backlog = backlog
        self.poll_interval = poll_interval
        self.receive_timeout = receive_timeout

        self.server_socket: Optional[socket.socket] = None
        self.running = False
        self.ready = threading.Event()

        logger.info(f"API listener initialized: {socket_path}")

    def start(self):
        """Bind the API socket and serve until stop() is called"""
        socket_dir = os.path.dirname(self.socket_path)
        if socket_dir:
            os.makedirs(socket_dir, exist_ok=True)
        if os.path.exists(self.socket_path):
            os.unlink(self.socket_path)

        self.server_socket = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        self.server_socket.bind(self.socket_path)
        self.server_socket.listen(self.backlog)
        self.server_socket.settimeout(self.poll_interval)
        self.running = True
        self.ready.set()

        logger.info(f"API listener listening on {self.socket_path}")

        while self.running:
            try:
                client_socket, _ = self.server_socket.accept()
            except socket.timeout:
                continue
            except OSError as e:
                if self.running:
                    logger.error(f"Error accepting API connection: {e}")
                continue

            client_thread = threading.Thread(
                target=self._handle_client,
                args=(client_socket,),
                daemon=True
            )
            client_thread.start()

    def stop(self):
        """Stop accepting connections and remove the socket file"""
        self.running = False
        if self.server_socket:
            try:
                self.server_socket.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            self.server_socket.close()
        if os.path.exists(self.socket_path):
            os.unlink(self.socket_path)
        logger.info("API listener stopped")

    def _handle_client(self, client_socket: socket.socket):
        # A timed out read counts as an empty request
        client_socket.settimeout(self.receive_timeout)
        channel = UnixCallerChannel(client_socket)
        try:
            payload = channel.receive()
            handle_request(InboundRequest(channel, payload), self.channels, self.close_wait)
        except Exception as e:
            logger.error(f"Error handling API client {channel}: {e}", exc_info=True)
            channel.close()
