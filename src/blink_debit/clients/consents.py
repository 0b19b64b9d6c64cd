"""Single and enduring consent endpoints."""

from blink_debit.clients.base import ApiResponse, BaseApi, RequestParams, require_value, resource_path
from blink_debit.models.consent import (
    Consent,
    CreateConsentResponse,
    EnduringConsentRequest,
    SingleConsentRequest,
)


class SingleConsentsApi(BaseApi):
    """``/single-consents``"""

    async def create_single_consent(
        self,
        body: SingleConsentRequest,
        params: RequestParams | None = None,
    ) -> ApiResponse[CreateConsentResponse]:
        """
        Create a single payment consent that goes to the customer for approval.

        A successful response does not mean the consent is authorised; poll
        its status with the returned consent ID.
        """
        require_value(body, "body", "create_single_consent")
        return await self._send(
            "POST",
            "/single-consents",
            params,
            body=body,
            parse=CreateConsentResponse.model_validate,
        )

    async def get_single_consent(
        self,
        consent_id: str,
        params: RequestParams | None = None,
    ) -> ApiResponse[Consent]:
        require_value(consent_id, "consent_id", "get_single_consent")
        return await self._send(
            "GET",
            resource_path("/single-consents/{}", consent_id),
            params,
            parse=Consent.model_validate,
        )

    async def revoke_single_consent(
        self,
        consent_id: str,
        params: RequestParams | None = None,
    ) -> ApiResponse[None]:
        require_value(consent_id, "consent_id", "revoke_single_consent")
        return await self._send("DELETE", resource_path("/single-consents/{}", consent_id), params)


class EnduringConsentsApi(BaseApi):
    """``/enduring-consents``"""

    async def create_enduring_consent(
        self,
        body: EnduringConsentRequest,
        params: RequestParams | None = None,
    ) -> ApiResponse[CreateConsentResponse]:
        require_value(body, "body", "create_enduring_consent")
        return await self._send(
            "POST",
            "/enduring-consents",
            params,
            body=body,
            parse=CreateConsentResponse.model_validate,
        )

    async def get_enduring_consent(
        self,
        consent_id: str,
        params: RequestParams | None = None,
    ) -> ApiResponse[Consent]:
        require_value(consent_id, "consent_id", "get_enduring_consent")
        return await self._send(
            "GET",
            resource_path("/enduring-consents/{}", consent_id),
            params,
            parse=Consent.model_validate,
        )

    async def revoke_enduring_consent(
        self,
        consent_id: str,
        params: RequestParams | None = None,
    ) -> ApiResponse[None]:
        require_value(consent_id, "consent_id", "revoke_enduring_consent")
        return await self._send("DELETE", resource_path("/enduring-consents/{}", consent_id), params)
