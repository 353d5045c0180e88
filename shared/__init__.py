"""
Shared utilities for the pool admin gateway.

- socket_protocol: length-prefixed framing for unix domain sockets
- logging_config: consistent logging setup for every launcher
"""
