"""Thin async wrapper around the Paystack transaction verify endpoint."""

import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

import httpx

from app.config import DEFAULT_BASE_URL, REQUEST_TIMEOUT_SECONDS
from app.errors import UpstreamCallError, UpstreamContractError

logger = logging.getLogger("paystack_verify.paystack")

# Same set encodeURIComponent leaves untouched; "/" is always escaped.
_REFERENCE_SAFE_CHARS = "!*'()~"


def build_verify_url(base_url: str, reference: str) -> str:
    return f"{base_url.rstrip('/')}/transaction/verify/{quote(reference, safe=_REFERENCE_SAFE_CHARS)}"


def _error_payload(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class PaystackClient:
    """Fetch transactions from Paystack by reference."""

    def __init__(
        self,
        secret_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._secret_key = secret_key
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    async def fetch_transaction(self, reference: str) -> Dict[str, Any]:
        """
        Look up a transaction

        Args:
            reference: Transaction reference issued by Paystack

        Returns:
            The inner ``data`` object of the verify response

        Raises:
            UpstreamCallError: On network errors, timeouts and non-2xx responses
            UpstreamContractError: If the body is not the expected wrapper
        """
        url = build_verify_url(self.base_url, reference)
        headers = {"Authorization": f"Bearer {self._secret_key}"}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                resp = await client.get(url, headers=headers)
                resp.raise_for_status()
            except httpx.HTTPStatusError as e:
                payload = _error_payload(e.response) or str(e)
                logger.error("verify-payment error: %s", payload)
                raise UpstreamCallError(payload) from e
            except httpx.HTTPError as e:
                logger.error("verify-payment error: %s", str(e) or type(e).__name__)
                raise UpstreamCallError(str(e)) from e

        try:
            body = resp.json()
        except ValueError:
            body = None

        logger.debug("Paystack verify raw response: %s", body)

        transaction = body.get("data") if isinstance(body, dict) else None
        if not isinstance(transaction, dict):
            logger.warning("Invalid response structure from Paystack: %s", body if body is not None else resp.text)
            raise UpstreamContractError()
        return transaction
