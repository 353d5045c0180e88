"""
Request decoder.

Turns the raw bytes received from an API caller into a command name and
optional params. Parser diagnostics are logged here and never returned to
the caller.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from poolapi.errors import EmptyRequest, InvalidJson, MissingCommand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedRequest:
    command: str
    params: Optional[Any] = None


def decode(raw_payload: Optional[Union[bytes, str]]) -> DecodedRequest:
    """
    Decode one API request.

    Raises:
        EmptyRequest: nothing was received (checked before parsing)
        InvalidJson: payload is not valid UTF-8 JSON
        MissingCommand: no string "command" field in a JSON object
    """
    if not raw_payload:
        logger.warning("Received empty buffer on API socket")
        raise EmptyRequest()

    logger.debug(f"API received request {raw_payload!r}")

    try:
        text = raw_payload.decode("utf-8") if isinstance(raw_payload, bytes) else raw_payload
        val = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(
            f"Failed to JSON decode API message {raw_payload!r} "
            f"(line {e.lineno}, col {e.colno}): {e.msg}"
        )
        raise InvalidJson(e.msg)
    except UnicodeDecodeError as e:
        logger.warning(f"Failed to decode API message {raw_payload!r} as UTF-8: {e}")
        raise InvalidJson(str(e))
    except (ValueError, RecursionError) as e:
        # Over-long integers and nesting deeper than the recursion limit
        logger.warning(f"Failed to JSON decode API message of {len(raw_payload)} bytes: {e}")
        raise InvalidJson(str(e))

    command = val.get("command") if isinstance(val, dict) else None
    if not isinstance(command, str):
        logger.warning(f"Failed to find API command in message {raw_payload!r}")
        raise MissingCommand()

    # Most commands take no parameters, so absence is fine here
    return DecodedRequest(command=command, params=val.get("params"))
