"""
Paystack Payment Verification Server
Long-running FastAPI application exposing POST /verify-payment
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

import httpx
import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, load_settings
from app.errors import ServerConfigError, VerificationError, verification_error_handler
from app.logging_config import configure_logging
from app.verification import VerificationRequest, decode_body, verify_payment

load_dotenv()

logger = logging.getLogger("paystack_verify.server")


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the server application

    Args:
        settings: Configuration; read from the environment when omitted
        transport: Optional httpx transport for outbound Paystack calls

    Returns:
        Configured FastAPI app. Startup fails if no secret key is configured.
    """
    if settings is None:
        settings = load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        try:
            settings.require_secret()
        except ServerConfigError:
            logger.error("PAYSTACK_SECRET_KEY environment variable not set! Please add it to your .env or environment.")
            raise
        if settings.allow_any_origin:
            logger.info("CORS allowed origins: * (open)")
        else:
            logger.info("CORS allowed origins: %s", list(settings.allowed_origins))
        yield

    app = FastAPI(
        title="Paystack Payment Verification",
        description="Verifies Paystack transactions on behalf of client applications",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.transport = transport

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.allowed_origins),
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # Registered after CORSMiddleware so it runs first
    @app.middleware("http")
    async def reject_disallowed_origins(request: Request, call_next):
        origin = request.headers.get("origin")
        if not settings.is_origin_allowed(origin):
            logger.warning("Rejected request from origin %s", origin)
            return JSONResponse(
                status_code=403,
                content={"verified": False, "error": f"CORS policy: Origin {origin} is not allowed"},
            )
        return await call_next(request)

    app.add_exception_handler(VerificationError, verification_error_handler)

    @app.get("/health")
    async def health_check() -> Dict[str, Any]:
        """
        Health check endpoint for monitoring

        Returns:
            Status and whether Paystack credentials are present
        """
        return {
            "status": "running",
            "paystack_configured": bool(settings.paystack_secret_key),
            "allowed_origins": list(settings.allowed_origins),
        }

    @app.post("/verify-payment")
    async def verify(request: Request) -> Dict[str, Any]:
        """
        Verify a Paystack transaction reference

        Body:
            JSON ``{reference, email?, currency?, amount?}``

        Returns:
            ``{verified, data}`` where data is the Paystack transaction
        """
        payload = decode_body(await request.body())
        verification_request = VerificationRequest.from_payload(payload)
        logger.info("Incoming /verify-payment for reference %s", verification_request.reference)

        result = await verify_payment(verification_request, settings, transport=app.state.transport)
        return result.to_dict()

    return app


app = create_app()


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level)

    if not settings.paystack_secret_key:
        logger.error("PAYSTACK_SECRET_KEY environment variable not set! Please add it to your .env or environment.")
        sys.exit(1)

    logger.info("Paystack verify server listening on %s (CORS origin: %s)", settings.port, ",".join(settings.allowed_origins))
    uvicorn.run(create_app(settings), host="0.0.0.0", port=settings.port)


# Run with: python -m app.main
if __name__ == "__main__":
    main()
