"""
Payment verification logic shared by the server and the serverless handler.

``verify_payment`` takes a parsed request and the settings, asks Paystack
about the reference and cross-checks amount and currency against what the
client expected. A transaction that fails those checks is still a
successful call: the result simply carries ``verified=False``.
"""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from app.config import Settings
from app.errors import ClientInputError
from app.paystack import PaystackClient

logger = logging.getLogger("paystack_verify.verification")

SUCCESS_STATUS = "success"


@dataclass(frozen=True)
class VerificationRequest:
    reference: Optional[str] = None
    email: Optional[str] = None  # informational only
    currency: Optional[Any] = None
    amount: Optional[Any] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "VerificationRequest":
        """Build a request from a decoded JSON body; anything but an object counts as empty."""
        if not isinstance(payload, dict):
            payload = {}

        reference = payload.get("reference")
        if isinstance(reference, (int, float)) and not isinstance(reference, bool):
            reference = str(reference)
        elif not isinstance(reference, str):
            reference = None

        return cls(
            reference=reference,
            email=payload.get("email"),
            currency=payload.get("currency"),
            amount=payload.get("amount"),
        )


@dataclass(frozen=True)
class VerificationResult:
    verified: bool
    data: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {"verified": self.verified, "data": self.data}


def decode_body(raw: bytes) -> Any:
    """Decode a request body, treating empty or malformed JSON as ``{}``."""
    if not raw:
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Ignoring malformed JSON request body")
        return {}


def parse_amount(value: Any) -> Optional[float]:
    """Normalize a client-supplied amount to a finite number, or None if it isn't one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        # float() also takes "1_000", which is not a number to a JS client
        if "_" in value:
            return None
        value = value.strip()
    elif not isinstance(value, (int, float)):
        return None
    try:
        parsed = float(value)
    except (ValueError, OverflowError):
        return None
    return parsed if math.isfinite(parsed) else None


def round_half_up(value: float) -> float:
    # Halves go toward +inf, unlike the built-in round(); inf stays inf
    shifted = value + 0.5
    if not math.isfinite(shifted):
        return shifted
    return float(math.floor(shifted))


def amounts_match(client_amount: Any, gateway_amount: Any) -> bool:
    """
    Compare the amount the client expected with what Paystack reports.

    Paystack amounts are in the smallest currency unit (kobo, cents). The
    client may send either that or the main unit, so both ``round(x)`` and
    ``round(x * 100)`` are accepted. For round values the two readings can
    both be plausible; that ambiguity is accepted.
    """
    if client_amount is None:
        return True

    parsed = parse_amount(client_amount)
    if parsed is None:
        return False

    reported = parse_amount(gateway_amount)
    if reported is None:
        return False

    return reported in (round_half_up(parsed), round_half_up(parsed * 100))


def currencies_match(client_currency: Any, gateway_currency: Any) -> bool:
    if not client_currency or not gateway_currency:
        return True
    return str(client_currency).upper() == str(gateway_currency).upper()


def evaluate_transaction(request: VerificationRequest, transaction: Dict[str, Any]) -> bool:
    verified = transaction.get("status") == SUCCESS_STATUS

    if request.amount is not None and not amounts_match(request.amount, transaction.get("amount")):
        logger.warning(
            "Amount mismatch: client sent %r, paystack reported %r",
            request.amount, transaction.get("amount"),
        )
        verified = False

    if not currencies_match(request.currency, transaction.get("currency")):
        logger.warning(
            "Currency mismatch: client %r, tx %r",
            request.currency, transaction.get("currency"),
        )
        verified = False

    return verified


async def verify_payment(
    request: VerificationRequest,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> VerificationResult:
    """
    Verify a payment reference with Paystack.

    Raises:
        ClientInputError: reference missing or empty
        ServerConfigError: no Paystack secret key configured
        UpstreamCallError: Paystack unreachable or answered with an error status
        UpstreamContractError: Paystack answered without a ``data`` object
    """
    if not request.reference:
        raise ClientInputError("Missing reference")

    client = PaystackClient(
        settings.require_secret(),
        base_url=settings.paystack_base_url,
        timeout=settings.request_timeout,
        transport=transport,
    )
    transaction = await client.fetch_transaction(request.reference)

    verified = evaluate_transaction(request, transaction)

    logger.info(
        "Transaction %s: status=%s amount=%s currency=%s gateway_response=%s paid_at=%s verified=%s",
        transaction.get("reference"),
        transaction.get("status"),
        transaction.get("amount"),
        transaction.get("currency"),
        transaction.get("gateway_response"),
        transaction.get("paid_at"),
        verified,
    )

    return VerificationResult(verified=verified, data=transaction)
