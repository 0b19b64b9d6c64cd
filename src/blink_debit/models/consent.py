"""Consent and quick payment models."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field

from blink_debit.models.common import Account, Amount, BlinkModel, Pcr, Period
from blink_debit.models.flows import AuthFlow
from blink_debit.models.payment import Payment


class ConsentStatus(str, Enum):
    """
    Consent lifecycle as reported by Blink.

    Authorised, Consumed, Rejected, Revoked and GatewayTimeout are terminal.
    """

    GATEWAY_AWAITING_SUBMISSION = "GatewayAwaitingSubmission"
    GATEWAY_TIMEOUT = "GatewayTimeout"
    AWAITING_AUTHORISATION = "AwaitingAuthorisation"
    AUTHORISED = "Authorised"
    CONSUMED = "Consumed"
    REJECTED = "Rejected"
    REVOKED = "Revoked"


class ConsentDetailType(str, Enum):
    SINGLE = "single"
    ENDURING = "enduring"


class SingleConsentRequest(BlinkModel):
    type: Literal["single"] = "single"
    flow: AuthFlow
    pcr: Pcr
    amount: Amount
    hashed_customer_identifier: str | None = None


class EnduringConsentRequest(BlinkModel):
    type: Literal["enduring"] = "enduring"
    flow: AuthFlow
    from_timestamp: datetime
    expiry_timestamp: datetime | None = None
    period: Period
    maximum_amount_period: Amount
    maximum_amount_payment: Amount | None = None
    hashed_customer_identifier: str | None = None


ConsentDetail = Annotated[
    Union[SingleConsentRequest, EnduringConsentRequest],
    Field(discriminator="type"),
]


class QuickPaymentRequest(BlinkModel):
    """A single consent that is debited as soon as it is authorised."""

    type: Literal["single"] = "single"
    flow: AuthFlow
    pcr: Pcr
    amount: Amount
    hashed_customer_identifier: str | None = None


class CardNetwork(str, Enum):
    VISA = "VISA"
    MASTERCARD = "MASTERCARD"


class Consent(BlinkModel):
    consent_id: str
    # Statuses added server-side later are kept as plain strings
    status: Union[ConsentStatus, str] = Field(union_mode="left_to_right")
    creation_timestamp: datetime
    status_updated_timestamp: datetime
    detail: ConsentDetail
    payments: list[Payment] = Field(default_factory=list)
    accounts: list[Account] | None = None
    card_network: CardNetwork | None = None


class CreateConsentResponse(BlinkModel):
    consent_id: str
    # Not returned for decoupled flow
    redirect_uri: str | None = None


class CreateQuickPaymentResponse(BlinkModel):
    quick_payment_id: str
    redirect_uri: str | None = None


class QuickPaymentResponse(BlinkModel):
    quick_payment_id: str
    consent: Consent
