"""
Example usage of BlinkDebitClient.

Reads BLINKPAY_DEBIT_URL, BLINKPAY_CLIENT_ID and BLINKPAY_CLIENT_SECRET from
the environment (or .env), creates a decoupled single consent against the
sandbox and waits for the customer to authorise it.
"""

import asyncio

from blink_debit import (
    BlinkAggregateException,
    BlinkConsentRejectedException,
    BlinkConsentTimeoutException,
    BlinkDebitClient,
    BlinkServiceException,
    configure_logging,
)
from blink_debit.models import (
    Amount,
    AuthFlow,
    Bank,
    DecoupledFlow,
    IdentifierType,
    Pcr,
    PaymentRequest,
    SingleConsentRequest,
)


async def example_single_consent():
    """Create a consent, wait for authorisation, then check its payment."""
    print("=== Example 1: Decoupled Single Consent ===\n")

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

    async with BlinkDebitClient() as client:
        created = await client.create_single_consent(request)
        print(f"Consent ID: {created.consent_id}")

        try:
            consent = await client.await_authorised_single_consent_or_raise(created.consent_id, 30)
        except BlinkConsentRejectedException as e:
            print(f"❌ Customer rejected the consent: {e}")
            return
        except BlinkAggregateException as e:
            print(f"❌ Timed out and the revoke failed too: {e}")
            return
        except BlinkConsentTimeoutException as e:
            print(f"⚠️  Gave up waiting, consent revoked: {e}")
            return

        print(f"✅ Status: {consent.status.value}")
        print(f"Amount: {consent.detail.amount.total} {consent.detail.amount.currency.value}")

        # Westpac consents need the merchant to create the payment
        if consent.detail.flow.detail.bank == Bank.WESTPAC:
            payment = await client.create_westpac_payment(PaymentRequest(consent_id=consent.consent_id))
            settled = await client.await_successful_payment_or_raise(payment.payment_id, 10)
            print(f"Payment status: {settled.status.value}")


async def example_bank_metadata():
    """List supported banks and whether they offer decoupled flow."""
    print("\n=== Example 2: Bank Metadata ===\n")

    async with BlinkDebitClient() as client:
        try:
            banks = await client.get_meta()
        except BlinkServiceException as e:
            print(f"❌ Could not load bank metadata: {e}")
            return

    for bank in banks:
        decoupled = bank.features.decoupled_flow
        print(f"{bank.name.value}: decoupled={'yes' if decoupled and decoupled.enabled else 'no'}")


async def main():
    configure_logging(log_level="INFO", format_as_json=False)
    await example_single_consent()
    await example_bank_metadata()


if __name__ == "__main__":
    asyncio.run(main())
