import os
from typing import Optional


def _int_env(name: str, default: int) -> int:
    raw = str(os.getenv(name, str(default))).strip()
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


SOCKET_DIR = str(os.getenv("POOLAPI_SOCKET_DIR", "/tmp/pool")).strip()
API_SOCKET_NAME = str(os.getenv("POOLAPI_API_SOCKET", "api")).strip()
CLOSE_WAIT_SECONDS = _float_env("POOLAPI_CLOSE_WAIT_SECONDS", 5.0)
# None means block until the sibling answers or drops the connection.
PROCESS_TIMEOUT_SECONDS = _float_env("POOLAPI_PROCESS_TIMEOUT_SECONDS", None)
MGMT_HOST = str(os.getenv("POOLAPI_MGMT_HOST", "127.0.0.1")).strip()
MGMT_PORT = _int_env("POOLAPI_MGMT_PORT", 9300)
LOG_LEVEL = str(os.getenv("POOLAPI_LOG_LEVEL", "INFO")).strip()
