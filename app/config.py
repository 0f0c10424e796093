"""
Configuration Module
Loads process-wide settings from the environment into an immutable value
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from app.errors import ServerConfigError

DEFAULT_PORT = 3000
DEFAULT_BASE_URL = "https://api.paystack.co"
REQUEST_TIMEOUT_SECONDS = 10.0


@dataclass(frozen=True)
class Settings:
    """Read-only configuration shared by every request."""

    paystack_secret_key: Optional[str] = None
    port: int = DEFAULT_PORT
    allowed_origins: Tuple[str, ...] = ("*",)
    paystack_base_url: str = DEFAULT_BASE_URL
    request_timeout: float = REQUEST_TIMEOUT_SECONDS
    log_level: str = "INFO"

    @property
    def allow_any_origin(self) -> bool:
        return "*" in self.allowed_origins

    def is_origin_allowed(self, origin: Optional[str]) -> bool:
        # curl and server-to-server callers don't send an Origin header
        if not origin:
            return True
        if self.allow_any_origin:
            return True
        return origin in self.allowed_origins

    def require_secret(self) -> str:
        """
        Return the Paystack secret key

        Raises:
            ServerConfigError: If the key is not configured
        """
        if not self.paystack_secret_key:
            raise ServerConfigError()
        return self.paystack_secret_key


def parse_allowed_origins(raw: Optional[str]) -> Tuple[str, ...]:
    if raw is None or raw.strip() in ("", "*"):
        return ("*",)
    origins = tuple(o.strip() for o in raw.split(",") if o.strip())
    return origins or ("*",)


def _parse_port(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_PORT
    try:
        port = int(raw.strip())
    except ValueError:
        raise ServerConfigError(f"PORT must be an integer, got {raw!r}")
    if not 0 < port < 65536:
        raise ServerConfigError(f"PORT out of range: {port}")
    return port


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables

    A missing PAYSTACK_SECRET_KEY is not an error here; each hosting
    adapter decides whether that is fatal at startup or per request.

    Args:
        environ: Mapping to read from, defaults to os.environ

    Returns:
        Populated Settings
    """
    env = os.environ if environ is None else environ

    secret = (env.get("PAYSTACK_SECRET_KEY") or "").strip() or None

    return Settings(
        paystack_secret_key=secret,
        port=_parse_port(env.get("PORT")),
        allowed_origins=parse_allowed_origins(env.get("ALLOWED_ORIGIN")),
        paystack_base_url=(env.get("PAYSTACK_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )
