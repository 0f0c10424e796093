"""Vercel Serverless Function entrypoint.

This exposes the verification handler as an ASGI `app` for the Python runtime.
`vercel.json` rewrites `/api/verify-payment` and `/verify-payment` here.
"""

import os

from dotenv import load_dotenv

from app.handler import create_handler_app
from app.logging_config import configure_logging

load_dotenv()
configure_logging((os.getenv("LOG_LEVEL") or "INFO").upper())

app = create_handler_app()
