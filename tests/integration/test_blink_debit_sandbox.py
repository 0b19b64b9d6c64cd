"""
Integration tests that call the REAL BlinkPay sandbox.

These tests make actual HTTP calls to the Blink Debit sandbox and verify the
client works against the live API.

Requirements:
- BLINKPAY_DEBIT_URL, BLINKPAY_CLIENT_ID and BLINKPAY_CLIENT_SECRET must be
  set in the environment or .env
- Internet connection required
- PNZ is the sandbox test bank; its decoupled flow authorises automatically
"""

import pytest

from blink_debit import BlinkDebitClient, BlinkPaySettings
from blink_debit.models import (
    Amount,
    AuthFlow,
    Bank,
    ConsentStatus,
    DecoupledFlow,
    IdentifierType,
    Pcr,
    SingleConsentRequest,
)

pytestmark = pytest.mark.integration


@pytest.fixture
def sandbox_settings():
    """Sandbox settings from the environment."""
    settings = BlinkPaySettings()
    if not (settings.debit_url and settings.client_id and settings.client_secret):
        pytest.skip("BLINKPAY_* sandbox credentials not configured")
    return settings


class TestBlinkDebitSandbox:
    """End-to-end tests against the sandbox."""

    @pytest.mark.asyncio
    async def test_get_meta(self, sandbox_settings):
        async with BlinkDebitClient(sandbox_settings) as client:
            banks = await client.get_meta()

        assert Bank.PNZ in {bank.name for bank in banks}

    @pytest.mark.asyncio
    async def test_decoupled_single_consent_is_authorised(self, sandbox_settings):
        """Decoupled PNZ consent for 1.25 NZD becomes Authorised or Consumed."""
        request = SingleConsentRequest(
            flow=AuthFlow(
                detail=DecoupledFlow(
                    bank=Bank.PNZ,
                    identifier_type=IdentifierType.PHONE_NUMBER,
                    identifier_value="+64-259531933",
                    callback_url="https://www.mymerchant.co.nz/callback",
                )
            ),
            pcr=Pcr(particulars="particulars", code="code", reference="reference"),
            amount=Amount(total="1.25"),
        )

        async with BlinkDebitClient(sandbox_settings) as client:
            created = await client.create_single_consent(request)
            assert created.consent_id

            consent = await client.await_authorised_single_consent_or_raise(created.consent_id, 30)

        assert consent.status in (ConsentStatus.AUTHORISED, ConsentStatus.CONSUMED)
        assert consent.detail.type == "single"
        assert consent.detail.amount.total == "1.25"
