import json

import httpx
import pytest

from app.config import Settings

SECRET = "sk_test_secret"

SUCCESS_TX = {
    "id": 4099260516,
    "status": "success",
    "reference": "ref_123",
    "amount": 7500000,
    "currency": "NGN",
    "gateway_response": "Successful",
    "paid_at": "2024-05-01T10:15:00.000Z",
}


def paystack_body(transaction):
    return {"status": True, "message": "Verification successful", "data": transaction}


class PaystackStub:
    """Records outbound requests and replays a canned Paystack response."""

    def __init__(self, status_code=200, body=None, raw=None, exc=None):
        self.status_code = status_code
        self.body = paystack_body(dict(SUCCESS_TX)) if body is None else body
        self.raw = raw
        self.exc = exc
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, content=json.dumps(self.body).encode())

    @property
    def transport(self):
        return httpx.MockTransport(self)


@pytest.fixture
def settings():
    return Settings(paystack_secret_key=SECRET)


@pytest.fixture
def stub():
    return PaystackStub()
