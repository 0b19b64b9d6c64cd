"""Refund endpoints."""

from pydantic import TypeAdapter, ValidationError

from blink_debit.clients.base import ApiResponse, BaseApi, RequestParams, require_value, resource_path
from blink_debit.models.exceptions import BlinkInvalidValueException
from blink_debit.models.payment import Refund, RefundDetail, RefundResponse

_refund_detail_adapter = TypeAdapter(RefundDetail)


class RefundsApi(BaseApi):
    """
    ``/refunds``

    Only account number refunds are generally available; full and partial
    refunds are answered with 501 and surface as BlinkNotImplementedException.
    """

    async def create_refund(
        self,
        body: RefundDetail,
        params: RequestParams | None = None,
    ) -> ApiResponse[RefundResponse]:
        require_value(body, "body", "create_refund")
        try:
            body = _refund_detail_adapter.validate_python(body)
        except ValidationError as e:
            raise BlinkInvalidValueException(f"Invalid refund request: {e}", e) from e
        return await self._send(
            "POST",
            "/refunds",
            params,
            body=body,
            parse=RefundResponse.model_validate,
        )

    async def get_refund(
        self,
        refund_id: str,
        params: RequestParams | None = None,
    ) -> ApiResponse[Refund]:
        require_value(refund_id, "refund_id", "get_refund")
        return await self._send(
            "GET",
            resource_path("/refunds/{}", refund_id),
            params,
            parse=Refund.model_validate,
        )
