"""
Serverless (single-invocation) adapter.

Same verification semantics as the long-running server, but configuration
is read on every invocation and a missing secret key is a per-request 500
rather than a startup failure.
"""

import logging
from typing import Callable, Optional

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from app.config import Settings, load_settings
from app.errors import VerificationError, verification_error_handler
from app.verification import VerificationRequest, decode_body, verify_payment

logger = logging.getLogger("paystack_verify.handler")

PREFLIGHT_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def create_handler_app(
    settings_loader: Callable[[], Settings] = load_settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    app = FastAPI(title="Paystack Payment Verification (serverless)", version="1.0.0")
    app.add_exception_handler(VerificationError, verification_error_handler)

    async def handle(request: Request) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=PREFLIGHT_HEADERS)

        if request.method != "POST":
            return JSONResponse(status_code=405, content={"verified": False, "error": "Method Not Allowed"})

        settings = settings_loader()
        if not settings.paystack_secret_key:
            logger.error("PAYSTACK_SECRET_KEY not set in environment")
            settings.require_secret()

        verification_request = VerificationRequest.from_payload(decode_body(await request.body()))
        result = await verify_payment(verification_request, settings, transport=transport)
        return JSONResponse(status_code=200, content=result.to_dict())

    # methods=None: the route answers every HTTP method itself
    for path in ("/api/verify-payment", "/verify-payment"):
        app.add_route(path, handle, methods=None, include_in_schema=False)

    return app
