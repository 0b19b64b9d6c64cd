"""Payment endpoints."""

from blink_debit.clients.base import ApiResponse, BaseApi, RequestParams, require_value, resource_path
from blink_debit.models.payment import Payment, PaymentRequest, PaymentResponse


class PaymentsApi(BaseApi):
    """``/payments``"""

    async def create_payment(
        self,
        body: PaymentRequest,
        params: RequestParams | None = None,
    ) -> ApiResponse[PaymentResponse]:
        """
        Debit an authorised consent.

        Enduring consents need ``enduring_payment`` with the amount and PCR;
        Westpac single consents need the payment created here once authorised.
        """
        require_value(body, "body", "create_payment")
        return await self._send(
            "POST",
            "/payments",
            params,
            body=body,
            parse=PaymentResponse.model_validate,
        )

    async def get_payment(
        self,
        payment_id: str,
        params: RequestParams | None = None,
    ) -> ApiResponse[Payment]:
        require_value(payment_id, "payment_id", "get_payment")
        return await self._send(
            "GET",
            resource_path("/payments/{}", payment_id),
            params,
            parse=Payment.model_validate,
        )
