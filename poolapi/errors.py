"""
Gateway error taxonomy.

Each error carries the (code, message) pair written into the response
envelope. Codes match the numbering existing API clients already parse,
so MissingParams and NoProcessResponse both use -4.
"""

from typing import Optional, Tuple


class GatewayError(Exception):
    code: Optional[int] = None
    message: str = "Gateway error"

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.message)
        self.detail = detail

    def as_pair(self) -> Tuple[int, str]:
        if self.code is None:
            raise ValueError(f"{type(self).__name__} has no wire error code")
        return self.code, self.message


class EmptyRequest(GatewayError):
    """No payload was received; the caller gets no envelope."""
    message = "Empty request"


class InvalidJson(GatewayError):
    code = -1
    message = "Invalid json"


class MissingCommand(GatewayError):
    code = -2
    message = "No command"


class UnknownCommand(GatewayError):
    code = -3
    message = "Unknown command"


class MissingParams(GatewayError):
    code = -4
    message = "Missing params"


class NoProcessResponse(GatewayError):
    code = -4
    message = "No process response"
