"""
Error types raised while verifying a payment.

Each error knows the HTTP status it maps to; the web adapters render them
as ``{"verified": false, "error": ...}`` bodies.
"""

from typing import Any, Dict

from fastapi import Request
from fastapi.responses import JSONResponse


class VerificationError(Exception):
    """Base class for failures that abort a verification request."""

    status_code = 500
    default_error = "Unknown error"

    def __init__(self, error: Any = None):
        self.error = error if error not in (None, "") else self.default_error
        super().__init__(self.error if isinstance(self.error, str) else repr(self.error))

    def to_response_body(self) -> Dict[str, Any]:
        return {"verified": False, "error": self.error}


class ClientInputError(VerificationError):
    status_code = 400
    default_error = "Bad request"


class ServerConfigError(VerificationError):
    default_error = "Server misconfiguration"


class UpstreamContractError(VerificationError):
    """Paystack answered, but not with the ``{"data": {...}}`` wrapper."""

    default_error = "Invalid response from Paystack"


class UpstreamCallError(VerificationError):
    """Network failure, timeout or non-2xx status from Paystack."""


async def verification_error_handler(request: Request, exc: VerificationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_response_body())
