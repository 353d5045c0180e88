"""
Logging setup shared by the gateway service and the query client.

Levels arrive as names from the CLI and POOLAPI_LOG_LEVEL, so they are
resolved here before the root logger is configured.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def resolve_level(level: Union[int, str], default: int = logging.INFO) -> int:
    """Map "debug", "WARNING", "10" or an int to a numeric level."""
    if isinstance(level, int):
        return level
    name = str(level).strip().upper()
    if name.isdigit():
        return int(name)
    resolved = logging.getLevelName(name)
    return resolved if isinstance(resolved, int) else default


def setup_logging(
    component_name: str,
    level: Union[int, str] = logging.INFO,
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
):
    """
    Configure root logging for one gateway process.

    Args:
        component_name: Prefix shown in every line (e.g., 'api', 'apiquery')
        level: Numeric level or level name; unknown names fall back to INFO
        log_file: Also append to this file, creating parent directories
        format_string: Override the default line format
    """
    numeric_level = resolve_level(level)
    if format_string is None:
        format_string = f'[%(asctime)s] [{component_name.upper()}] %(levelname)s - %(message)s'

    logging.basicConfig(
        level=numeric_level,
        format=format_string,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    root = logging.getLogger()
    if log_file:
        log_path = Path(log_file).resolve()
        already_attached = any(
            isinstance(h, logging.FileHandler) and Path(h.baseFilename) == log_path
            for h in root.handlers
        )
        if not already_attached:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_path)
            file_handler.setFormatter(logging.Formatter(format_string, datefmt=DATE_FORMAT))
            root.addHandler(file_handler)

    logger = logging.getLogger(component_name)
    logger.info(f"{component_name} logging at {logging.getLevelName(numeric_level)}")
    return logger
