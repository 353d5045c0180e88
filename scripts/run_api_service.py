"""
API Gateway Launcher Script

Starts the gateway with the socket layout of a default pool install.

Usage:
    python scripts/run_api_service.py --socket-dir /tmp/pool

Environment variables:
    POOLAPI_SOCKET_DIR: socket directory (default: /tmp/pool)
    POOLAPI_MGMT_PORT: management port (default: 9300)
"""

import os
import sys

# Add project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from poolapi.service import main


if __name__ == "__main__":
    main()
