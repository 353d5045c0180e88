"""
Response envelope.

Every API answer has the same shape: result, error, response, in that
order. result stays false even when the sibling answered; clients treat
error == null as success.
"""

import json
from typing import List, Optional, Tuple

from pydantic import BaseModel

from poolapi.errors import GatewayError


class ResponseEnvelope(BaseModel):
    result: bool = False
    error: Optional[Tuple[int, str]] = None
    response: Optional[List[str]] = None


def success_envelope(reply: str) -> ResponseEnvelope:
    return ResponseEnvelope(result=False, error=None, response=[reply])


def error_envelope(error: GatewayError) -> ResponseEnvelope:
    return ResponseEnvelope(result=False, error=error.as_pair(), response=None)


def encode(envelope: ResponseEnvelope) -> bytes:
    body = json.dumps(
        envelope.model_dump(),
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return body.encode("utf-8")
