"""Quick payment endpoints."""

from blink_debit.clients.base import ApiResponse, BaseApi, RequestParams, require_value, resource_path
from blink_debit.models.consent import (
    CreateQuickPaymentResponse,
    QuickPaymentRequest,
    QuickPaymentResponse,
)


class QuickPaymentsApi(BaseApi):
    """``/quick-payments``: consent creation plus immediate debit."""

    async def create_quick_payment(
        self,
        body: QuickPaymentRequest,
        params: RequestParams | None = None,
    ) -> ApiResponse[CreateQuickPaymentResponse]:
        require_value(body, "body", "create_quick_payment")
        return await self._send(
            "POST",
            "/quick-payments",
            params,
            body=body,
            parse=CreateQuickPaymentResponse.model_validate,
        )

    async def get_quick_payment(
        self,
        quick_payment_id: str,
        params: RequestParams | None = None,
    ) -> ApiResponse[QuickPaymentResponse]:
        require_value(quick_payment_id, "quick_payment_id", "get_quick_payment")
        return await self._send(
            "GET",
            resource_path("/quick-payments/{}", quick_payment_id),
            params,
            parse=QuickPaymentResponse.model_validate,
        )

    async def revoke_quick_payment(
        self,
        quick_payment_id: str,
        params: RequestParams | None = None,
    ) -> ApiResponse[None]:
        require_value(quick_payment_id, "quick_payment_id", "revoke_quick_payment")
        return await self._send(
            "DELETE", resource_path("/quick-payments/{}", quick_payment_id), params
        )
