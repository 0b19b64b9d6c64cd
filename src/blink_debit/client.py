"""
Public entry point of the Blink Debit client.

BlinkDebitClient wires one settings object, one httpx.AsyncClient, one
token manager, one retry executor and one polling orchestrator together and
exposes one async method per logical action. Every error that leaves a
public method is a BlinkServiceException or one of its subclasses.
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

import httpx
import structlog

from blink_debit.clients.bank_metadata import BankMetadataApi
from blink_debit.clients.base import ApiResponse, RequestParams
from blink_debit.clients.consents import EnduringConsentsApi, SingleConsentsApi
from blink_debit.clients.payments import PaymentsApi
from blink_debit.clients.quick_payments import QuickPaymentsApi
from blink_debit.clients.refunds import RefundsApi
from blink_debit.clients.retry import MAX_RETRIES, RetryExecutor
from blink_debit.clients.token_client import AccessTokenManager
from blink_debit.config import BlinkPaySettings
from blink_debit.handlers.polling import (
    PollingOrchestrator,
    classify_consent_status,
    classify_consent_status_simple,
    classify_payment_status,
    classify_payment_status_simple,
)
from blink_debit.models.bank_metadata import BankMetadata
from blink_debit.models.consent import (
    Consent,
    CreateConsentResponse,
    CreateQuickPaymentResponse,
    EnduringConsentRequest,
    QuickPaymentRequest,
    QuickPaymentResponse,
    SingleConsentRequest,
)
from blink_debit.models.exceptions import (
    BlinkConsentRejectedException,
    BlinkConsentTimeoutException,
    BlinkPaymentRejectedException,
    BlinkPaymentTimeoutException,
    BlinkServiceException,
)
from blink_debit.models.payment import (
    Payment,
    PaymentRequest,
    PaymentResponse,
    Refund,
    RefundDetail,
    RefundResponse,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")


async def _normalised(operation: Awaitable[T]) -> T:
    """Await ``operation`` and wrap anything that is not a Blink error."""
    try:
        return await operation
    except BlinkServiceException:
        raise
    except Exception as e:
        logger.error("unexpected_client_error", error_type=type(e).__name__, error=str(e))
        raise BlinkServiceException(str(e), e) from e


async def _data(operation: Awaitable[ApiResponse[T]]) -> T:
    response = await _normalised(operation)
    return response.data


class BlinkDebitClient:
    """
    Async client for the Blink Debit API.

    Configuration comes from ``settings`` if given, otherwise from the keyword
    arguments with ``BLINKPAY_*`` environment variables (and ``.env``) filling
    in the rest.

    Example:
        async with BlinkDebitClient(debit_url=url, client_id=cid, client_secret=secret) as client:
            created = await client.create_single_consent(request)
            consent = await client.await_authorised_single_consent_or_raise(created.consent_id, 60)
    """

    def __init__(
        self,
        settings: BlinkPaySettings | None = None,
        *,
        debit_url: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        timeout_seconds: float | None = None,
        retry_enabled: bool | None = None,
        http_client: httpx.AsyncClient | None = None,
        token_manager: AccessTokenManager | None = None,
        retry_executor: RetryExecutor | None = None,
        poller: PollingOrchestrator | None = None,
    ) -> None:
        if settings is None:
            overrides = {
                "debit_url": debit_url,
                "client_id": client_id,
                "client_secret": client_secret,
                "timeout_seconds": timeout_seconds,
                "retry_enabled": retry_enabled,
            }
            settings = BlinkPaySettings(**{k: v for k, v in overrides.items() if v is not None})
        settings.require_credentials()
        self.settings = settings

        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(timeout=settings.timeout_seconds)
        self.token_manager = token_manager or AccessTokenManager(settings, self.http_client)
        self.retry_executor = retry_executor or RetryExecutor(
            self.token_manager,
            max_retries=MAX_RETRIES if settings.retry_enabled else 0,
        )
        self.poller = poller or PollingOrchestrator()

        collaborators = (settings, self.http_client, self.token_manager, self.retry_executor)
        self.single_consents = SingleConsentsApi(*collaborators)
        self.enduring_consents = EnduringConsentsApi(*collaborators)
        self.quick_payments = QuickPaymentsApi(*collaborators)
        self.payments = PaymentsApi(*collaborators)
        self.refunds = RefundsApi(*collaborators)
        self.bank_metadata = BankMetadataApi(*collaborators)

        logger.debug(
            "blink_debit_client_initialized",
            base_path=settings.base_path,
            retry_enabled=settings.retry_enabled,
        )

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_http_client:
            await self.http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # Bank metadata

    async def get_meta(self, params: RequestParams | None = None) -> list[BankMetadata]:
        """Return the supported banks and their features."""
        return await _data(self.bank_metadata.get_meta(params))

    async def get_meta_with_response(
        self, params: RequestParams | None = None
    ) -> ApiResponse[list[BankMetadata]]:
        return await _normalised(self.bank_metadata.get_meta(params))

    # Single consents

    async def create_single_consent(
        self, request: SingleConsentRequest, params: RequestParams | None = None
    ) -> CreateConsentResponse:
        """Create a single consent; the customer still has to authorise it."""
        return await _data(self.single_consents.create_single_consent(request, params))

    async def create_single_consent_with_response(
        self, request: SingleConsentRequest, params: RequestParams | None = None
    ) -> ApiResponse[CreateConsentResponse]:
        return await _normalised(self.single_consents.create_single_consent(request, params))

    async def get_single_consent(
        self, consent_id: str, params: RequestParams | None = None
    ) -> Consent:
        return await _data(self.single_consents.get_single_consent(consent_id, params))

    async def get_single_consent_with_response(
        self, consent_id: str, params: RequestParams | None = None
    ) -> ApiResponse[Consent]:
        return await _normalised(self.single_consents.get_single_consent(consent_id, params))

    async def revoke_single_consent(
        self, consent_id: str, params: RequestParams | None = None
    ) -> None:
        await _normalised(self.single_consents.revoke_single_consent(consent_id, params))

    async def revoke_single_consent_with_response(
        self, consent_id: str, params: RequestParams | None = None
    ) -> ApiResponse[None]:
        return await _normalised(self.single_consents.revoke_single_consent(consent_id, params))

    async def await_authorised_single_consent(
        self, consent_id: str, max_wait_seconds: int
    ) -> Consent:
        """
        Wait for a single consent to become Authorised.

        Any other status keeps polling. When max_wait_seconds attempts run
        out the consent is revoked and BlinkConsentTimeoutException raised.
        """
        return await self._await_consent(
            consent_id,
            max_wait_seconds,
            "Single consent",
            self.single_consents.get_single_consent,
            self.single_consents.revoke_single_consent,
            precise=False,
        )

    async def await_authorised_single_consent_or_raise(
        self, consent_id: str, max_wait_seconds: int
    ) -> Consent:
        """
        Wait for a single consent to become Authorised or Consumed.

        Raises:
            BlinkConsentRejectedException: Consent was rejected or revoked
            BlinkConsentTimeoutException: Gateway timed out, or attempts ran
                out (the consent is then revoked)
            BlinkAggregateException: Attempts ran out and the revoke failed
        """
        return await self._await_consent(
            consent_id,
            max_wait_seconds,
            "Single consent",
            self.single_consents.get_single_consent,
            self.single_consents.revoke_single_consent,
            precise=True,
        )

    # Enduring consents

    async def create_enduring_consent(
        self, request: EnduringConsentRequest, params: RequestParams | None = None
    ) -> CreateConsentResponse:
        return await _data(self.enduring_consents.create_enduring_consent(request, params))

    async def create_enduring_consent_with_response(
        self, request: EnduringConsentRequest, params: RequestParams | None = None
    ) -> ApiResponse[CreateConsentResponse]:
        return await _normalised(self.enduring_consents.create_enduring_consent(request, params))

    async def get_enduring_consent(
        self, consent_id: str, params: RequestParams | None = None
    ) -> Consent:
        return await _data(self.enduring_consents.get_enduring_consent(consent_id, params))

    async def get_enduring_consent_with_response(
        self, consent_id: str, params: RequestParams | None = None
    ) -> ApiResponse[Consent]:
        return await _normalised(self.enduring_consents.get_enduring_consent(consent_id, params))

    async def revoke_enduring_consent(
        self, consent_id: str, params: RequestParams | None = None
    ) -> None:
        await _normalised(self.enduring_consents.revoke_enduring_consent(consent_id, params))

    async def revoke_enduring_consent_with_response(
        self, consent_id: str, params: RequestParams | None = None
    ) -> ApiResponse[None]:
        return await _normalised(self.enduring_consents.revoke_enduring_consent(consent_id, params))

    async def await_authorised_enduring_consent(
        self, consent_id: str, max_wait_seconds: int
    ) -> Consent:
        return await self._await_consent(
            consent_id,
            max_wait_seconds,
            "Enduring consent",
            self.enduring_consents.get_enduring_consent,
            self.enduring_consents.revoke_enduring_consent,
            precise=False,
        )

    async def await_authorised_enduring_consent_or_raise(
        self, consent_id: str, max_wait_seconds: int
    ) -> Consent:
        return await self._await_consent(
            consent_id,
            max_wait_seconds,
            "Enduring consent",
            self.enduring_consents.get_enduring_consent,
            self.enduring_consents.revoke_enduring_consent,
            precise=True,
        )

    # Quick payments

    async def create_quick_payment(
        self, request: QuickPaymentRequest, params: RequestParams | None = None
    ) -> CreateQuickPaymentResponse:
        return await _data(self.quick_payments.create_quick_payment(request, params))

    async def create_quick_payment_with_response(
        self, request: QuickPaymentRequest, params: RequestParams | None = None
    ) -> ApiResponse[CreateQuickPaymentResponse]:
        return await _normalised(self.quick_payments.create_quick_payment(request, params))

    async def get_quick_payment(
        self, quick_payment_id: str, params: RequestParams | None = None
    ) -> QuickPaymentResponse:
        return await _data(self.quick_payments.get_quick_payment(quick_payment_id, params))

    async def get_quick_payment_with_response(
        self, quick_payment_id: str, params: RequestParams | None = None
    ) -> ApiResponse[QuickPaymentResponse]:
        return await _normalised(self.quick_payments.get_quick_payment(quick_payment_id, params))

    async def revoke_quick_payment(
        self, quick_payment_id: str, params: RequestParams | None = None
    ) -> None:
        await _normalised(self.quick_payments.revoke_quick_payment(quick_payment_id, params))

    async def revoke_quick_payment_with_response(
        self, quick_payment_id: str, params: RequestParams | None = None
    ) -> ApiResponse[None]:
        return await _normalised(self.quick_payments.revoke_quick_payment(quick_payment_id, params))

    async def await_successful_quick_payment(
        self, quick_payment_id: str, max_wait_seconds: int
    ) -> QuickPaymentResponse:
        """Wait for the quick payment's consent to be Authorised; any other status keeps polling."""
        return await self._await_quick_payment(quick_payment_id, max_wait_seconds, precise=False)

    async def await_successful_quick_payment_or_raise(
        self, quick_payment_id: str, max_wait_seconds: int
    ) -> QuickPaymentResponse:
        return await self._await_quick_payment(quick_payment_id, max_wait_seconds, precise=True)

    # Payments

    async def create_payment(
        self, request: PaymentRequest, params: RequestParams | None = None
    ) -> PaymentResponse:
        return await _data(self.payments.create_payment(request, params))

    async def create_payment_with_response(
        self, request: PaymentRequest, params: RequestParams | None = None
    ) -> ApiResponse[PaymentResponse]:
        return await _normalised(self.payments.create_payment(request, params))

    async def create_westpac_payment(
        self, request: PaymentRequest, params: RequestParams | None = None
    ) -> PaymentResponse:
        """
        Create a payment against a Westpac consent.

        Westpac requires the payment to be created by the merchant once the
        customer has authorised the consent; the request is otherwise the
        same as create_payment.
        """
        return await _data(self.payments.create_payment(request, params))

    async def create_westpac_payment_with_response(
        self, request: PaymentRequest, params: RequestParams | None = None
    ) -> ApiResponse[PaymentResponse]:
        return await _normalised(self.payments.create_payment(request, params))

    async def get_payment(
        self, payment_id: str, params: RequestParams | None = None
    ) -> Payment:
        return await _data(self.payments.get_payment(payment_id, params))

    async def get_payment_with_response(
        self, payment_id: str, params: RequestParams | None = None
    ) -> ApiResponse[Payment]:
        return await _normalised(self.payments.get_payment(payment_id, params))

    async def await_successful_payment(
        self, payment_id: str, max_wait_seconds: int
    ) -> Payment:
        """
        Wait for a payment to reach AcceptedSettlementCompleted.

        Payments cannot be revoked, so running out of attempts only raises
        BlinkPaymentTimeoutException.
        """
        return await self._await_payment(payment_id, max_wait_seconds, precise=False)

    async def await_successful_payment_or_raise(
        self, payment_id: str, max_wait_seconds: int
    ) -> Payment:
        return await self._await_payment(payment_id, max_wait_seconds, precise=True)

    # Refunds

    async def create_refund(
        self, request: RefundDetail, params: RequestParams | None = None
    ) -> RefundResponse:
        """
        Create a refund.

        Raises:
            BlinkNotImplementedException: For full and partial refunds, which
                the service does not support yet
        """
        return await _data(self.refunds.create_refund(request, params))

    async def create_refund_with_response(
        self, request: RefundDetail, params: RequestParams | None = None
    ) -> ApiResponse[RefundResponse]:
        return await _normalised(self.refunds.create_refund(request, params))

    async def get_refund(self, refund_id: str, params: RequestParams | None = None) -> Refund:
        return await _data(self.refunds.get_refund(refund_id, params))

    async def get_refund_with_response(
        self, refund_id: str, params: RequestParams | None = None
    ) -> ApiResponse[Refund]:
        return await _normalised(self.refunds.get_refund(refund_id, params))

    # Polling helpers

    async def _await_consent(
        self,
        consent_id: str,
        max_wait_seconds: int,
        label: str,
        get: Any,
        revoke: Any,
        precise: bool,
    ) -> Consent:
        async def fetch(resource_id: str) -> Consent:
            return (await get(resource_id)).data

        return await _normalised(
            self.poller.await_terminal(
                consent_id,
                max_wait_seconds,
                fetch=fetch,
                status_of=lambda consent: consent.status,
                classify=classify_consent_status if precise else classify_consent_status_simple,
                rejected_exception=BlinkConsentRejectedException,
                timeout_exception=BlinkConsentTimeoutException,
                label=label,
                on_timeout_revoke=revoke,
            )
        )

    async def _await_quick_payment(
        self, quick_payment_id: str, max_wait_seconds: int, precise: bool
    ) -> QuickPaymentResponse:
        async def fetch(resource_id: str) -> QuickPaymentResponse:
            return (await self.quick_payments.get_quick_payment(resource_id)).data

        return await _normalised(
            self.poller.await_terminal(
                quick_payment_id,
                max_wait_seconds,
                fetch=fetch,
                status_of=lambda quick_payment: quick_payment.consent.status,
                classify=classify_consent_status if precise else classify_consent_status_simple,
                rejected_exception=BlinkConsentRejectedException,
                timeout_exception=BlinkConsentTimeoutException,
                label="Quick payment",
                on_timeout_revoke=self.quick_payments.revoke_quick_payment,
            )
        )

    async def _await_payment(
        self, payment_id: str, max_wait_seconds: int, precise: bool
    ) -> Payment:
        async def fetch(resource_id: str) -> Payment:
            return (await self.payments.get_payment(resource_id)).data

        return await _normalised(
            self.poller.await_terminal(
                payment_id,
                max_wait_seconds,
                fetch=fetch,
                status_of=lambda payment: payment.status,
                classify=classify_payment_status if precise else classify_payment_status_simple,
                rejected_exception=BlinkPaymentRejectedException,
                timeout_exception=BlinkPaymentTimeoutException,
                label="Payment",
            )
        )
