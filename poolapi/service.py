"""
Pool API Gateway Service

Runs the admin gateway for a pool instance:
- API listener (unix socket, <socket-dir>/api)
- Management server (HTTP FastAPI, default port 9300)

Sibling processes (generator, stratifier, connector) and the main process
are expected to listen on <socket-dir>/<name>.

Usage:
    python -m poolapi.service --socket-dir /tmp/pool --mgmt-port 9300
"""

import argparse
import logging
import os
import signal
import sys
import threading
import time
from typing import Optional

import uvicorn

from shared.logging_config import setup_logging
from poolapi import config
from poolapi.dispatcher import ProcessChannels
from poolapi.listener import ApiListener

logger = logging.getLogger(__name__)


class ApiService:
    """
    Main gateway orchestrator.
    Manages lifecycle of the API listener and the management server.
    """

    def __init__(
        self,
        socket_dir: str = config.SOCKET_DIR,
        api_socket_name: str = config.API_SOCKET_NAME,
        close_wait: float = config.CLOSE_WAIT_SECONDS,
        process_timeout: Optional[float] = config.PROCESS_TIMEOUT_SECONDS,
        mgmt_host: str = config.MGMT_HOST,
        mgmt_port: int = config.MGMT_PORT,
        enable_mgmt: bool = True
    ):
        """
        Initialize gateway service.

        Args:
            socket_dir: Directory holding the API and sibling process sockets
            api_socket_name: File name of the API socket inside socket_dir
            close_wait: Seconds to wait for callers to hang up after a reply
            process_timeout: Socket timeout for sibling requests (None blocks)
            mgmt_host: Management server host
            mgmt_port: Management server port
            enable_mgmt: Start the management server alongside the listener
        """
        self.socket_dir = socket_dir
        self.api_socket_path = os.path.join(socket_dir, api_socket_name)
        self.close_wait = close_wait
        self.mgmt_host = mgmt_host
        self.mgmt_port = mgmt_port
        self.enable_mgmt = enable_mgmt

        self.channels = ProcessChannels.from_socket_dir(socket_dir, timeout=process_timeout)

        self.listener: Optional[ApiListener] = None
        self.listener_thread: Optional[threading.Thread] = None
        self.mgmt_thread: Optional[threading.Thread] = None

        self.running = threading.Event()
        self.running.set()

        logger.info(f"API service initialized: socket={self.api_socket_path}")
        for target, channel in self.channels.channels.items():
            logger.info(f"  {target.value}: {channel}")

    def start(self):
        logger.info("Starting API service...")

        self.listener = ApiListener(
            socket_path=self.api_socket_path,
            channels=self.channels,
            close_wait=self.close_wait
        )
        self.listener_thread = threading.Thread(
            target=self.listener.start,
            daemon=False
        )
        self.listener_thread.start()

        if self.enable_mgmt:
            logger.info("Starting management server...")
            self.mgmt_thread = threading.Thread(
                target=self._run_mgmt_server,
                daemon=True
            )
            self.mgmt_thread.start()

        logger.info("API service started")

    def stop(self):
        logger.info("Stopping API service...")
        self.running.clear()

        if self.listener:
            self.listener.stop()

        if self.listener_thread and self.listener_thread.is_alive():
            self.listener_thread.join(timeout=5)

        logger.info("API service stopped")

    def _run_mgmt_server(self):
        """Run management FastAPI server in thread"""
        try:
            from poolapi.mgmt_app import app

            app.state.channels = self.channels
            app.state.api_socket = self.api_socket_path
            app.state.close_wait = self.close_wait

            uvicorn.run(
                app,
                host=self.mgmt_host,
                port=self.mgmt_port,
                log_level="info",
                access_log=False
            )
        except Exception as e:
            logger.error(f"Management server error: {e}", exc_info=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Pool API gateway service")

    parser.add_argument(
        "--socket-dir",
        type=str,
        default=config.SOCKET_DIR,
        help=f"Directory of the API and process sockets (default: {config.SOCKET_DIR})"
    )
    parser.add_argument(
        "--api-socket",
        type=str,
        default=config.API_SOCKET_NAME,
        help=f"API socket name inside socket dir (default: {config.API_SOCKET_NAME})"
    )
    parser.add_argument(
        "--close-wait",
        type=float,
        default=config.CLOSE_WAIT_SECONDS,
        help="Seconds to wait for callers to close after a reply (default: 5)"
    )
    parser.add_argument(
        "--process-timeout",
        type=float,
        default=config.PROCESS_TIMEOUT_SECONDS,
        help="Socket timeout for sibling process requests (default: block)"
    )
    parser.add_argument(
        "--mgmt-host",
        type=str,
        default=config.MGMT_HOST,
        help=f"Management server host (default: {config.MGMT_HOST})"
    )
    parser.add_argument(
        "--mgmt-port",
        type=int,
        default=config.MGMT_PORT,
        help=f"Management server port (default: {config.MGMT_PORT})"
    )
    parser.add_argument(
        "--no-mgmt",
        action="store_true",
        help="Do not start the management HTTP server"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.LOG_LEVEL,
        help="Logging level (default: INFO)"
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Optional log file path"
    )
    return parser


def main(argv=None):
    """Main entry point"""
    args = build_parser().parse_args(argv)
    setup_logging("api", level=args.log_level, log_file=args.log_file)

    service = ApiService(
        socket_dir=args.socket_dir,
        api_socket_name=args.api_socket,
        close_wait=args.close_wait,
        process_timeout=args.process_timeout,
        mgmt_host=args.mgmt_host,
        mgmt_port=args.mgmt_port,
        enable_mgmt=not args.no_mgmt
    )

    def signal_handler(signum, frame):
        logger.info(f"Received signal {signum}, shutting down...")
        service.stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    service.start()

    try:
        while service.running.is_set():
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt, shutting down...")
        service.stop()


if __name__ == "__main__":
    main()
