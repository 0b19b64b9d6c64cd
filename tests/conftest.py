"""Pytest configuration and shared fixtures for all tests.

This module provides:
- Settings pointing at a fake Blink Debit host
- FakeBlinkServer, an httpx.MockTransport handler that serves the token
  endpoint and queued API responses and records every request
- A fully wired BlinkDebitClient that never sleeps for real
"""

import httpx
import pytest

from blink_debit.client import BlinkDebitClient
from blink_debit.clients.retry import RetryExecutor
from blink_debit.clients.token_client import AccessTokenManager
from blink_debit.config import BlinkPaySettings
from blink_debit.handlers.polling import PollingOrchestrator

DEBIT_URL = "https://sandbox.debit.blinkpay.co.nz"
TOKEN_PATH = "/oauth2/token"
API_PREFIX = "/payments/v1"


class FakeBlinkServer:
    """
    In-memory Blink Debit server.

    Responses are queued per (method, path) as ``(status, json_body)`` tuples
    or exceptions to raise. The last queued entry is repeated once the queue
    is down to one item.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str], list] = {}
        self.token_responses: list = []
        self.token_requests = 0
        self.expires_in = 3600

    def add(self, method: str, path: str, *responses) -> None:
        self.routes.setdefault((method, API_PREFIX + path), []).extend(responses)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == TOKEN_PATH:
            self.token_requests += 1
            if self.token_responses:
                return self._build(self._next(self.token_responses))
            return httpx.Response(
                200,
                json={
                    "access_token": f"token-{self.token_requests}",
                    "token_type": "Bearer",
                    "expires_in": self.expires_in,
                },
            )

        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            return httpx.Response(404, json={"message": f"No route for {request.url.path}"})
        return self._build(self._next(queue))

    @staticmethod
    def _next(queue: list):
        return queue.pop(0) if len(queue) > 1 else queue[0]

    @staticmethod
    def _build(entry) -> httpx.Response:
        if isinstance(entry, Exception):
            raise entry
        status, body = entry
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def api_requests(self, method: str | None = None, path: str | None = None) -> list[httpx.Request]:
        return [
            r
            for r in self.requests
            if r.url.path != TOKEN_PATH
            and (method is None or r.method == method)
            and (path is None or r.url.path == API_PREFIX + path)
        ]


def consent_json(consent_id: str, status: str, total: str = "1.25") -> dict:
    """A single consent as returned by GET /single-consents/{id}."""
    return {
        "consent_id": consent_id,
        "status": status,
        "creation_timestamp": "2026-01-15T09:30:00Z",
        "status_updated_timestamp": "2026-01-15T09:30:05Z",
        "detail": {
            "type": "single",
            "flow": {
                "detail": {
                    "type": "decoupled",
                    "bank": "PNZ",
                    "identifier_type": "phone_number",
                    "identifier_value": "+64-259531933",
                    "callback_url": "https://www.mymerchant.co.nz/callback",
                }
            },
            "pcr": {"particulars": "particulars", "code": "code", "reference": "reference"},
            "amount": {"currency": "NZD", "total": total},
        },
        "payments": [],
    }


def payment_json(payment_id: str, status: str, consent_id: str = "c-1") -> dict:
    return {
        "payment_id": payment_id,
        "type": "single",
        "status": status,
        "creation_timestamp": "2026-01-15T09:31:00Z",
        "status_updated_timestamp": "2026-01-15T09:31:02Z",
        "detail": {"consent_id": consent_id},
        "refunds": [],
    }


@pytest.fixture
def settings():
    return BlinkPaySettings(
        debit_url=DEBIT_URL,
        client_id="test-client-id",
        client_secret="test-client-secret",
    )


@pytest.fixture
def fake_server():
    return FakeBlinkServer()


@pytest.fixture
def http_client(fake_server):
    return httpx.AsyncClient(transport=httpx.MockTransport(fake_server.handler))


@pytest.fixture
def sleep_calls():
    return []


@pytest.fixture
def fake_sleep(sleep_calls):
    async def _sleep(seconds: float) -> None:
        sleep_calls.append(seconds)

    return _sleep


@pytest.fixture
def token_manager(settings, http_client):
    return AccessTokenManager(settings, http_client)


@pytest.fixture
def blink_client(settings, http_client, token_manager, fake_sleep):
    """BlinkDebitClient wired to the fake server with instant sleeps."""
    return BlinkDebitClient(
        settings,
        http_client=http_client,
        token_manager=token_manager,
        retry_executor=RetryExecutor(token_manager, sleep=fake_sleep),
        poller=PollingOrchestrator(sleep=fake_sleep),
    )


@pytest.fixture
def make_consent():
    return consent_json


@pytest.fixture
def make_payment():
    return payment_json
