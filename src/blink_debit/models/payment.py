"""Payment and refund models."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import Field

from blink_debit.models.common import Amount, BlinkModel, Pcr


class PaymentType(str, Enum):
    SINGLE = "single"
    ENDURING = "enduring"


class PaymentStatus(str, Enum):
    """Payment lifecycle. AcceptedSettlementCompleted and Rejected are terminal."""

    PENDING = "Pending"
    ACCEPTED_SETTLEMENT_IN_PROCESS = "AcceptedSettlementInProcess"
    ACCEPTED_SETTLEMENT_COMPLETED = "AcceptedSettlementCompleted"
    REJECTED = "Rejected"


class PaymentAcceptedReason(str, Enum):
    SOURCE_BANK_PAYMENT_SENT = "source_bank_payment_sent"
    CARD_NETWORK_ACCEPTED = "card_network_accepted"


class EnduringPaymentRequest(BlinkModel):
    """Amount and PCR for a payment taken against an enduring consent."""

    pcr: Pcr
    amount: Amount


class PaymentRequest(BlinkModel):
    consent_id: str
    enduring_payment: EnduringPaymentRequest | None = None
    account_reference_id: str | None = None


class PaymentResponse(BlinkModel):
    payment_id: str


class RefundDetailType(str, Enum):
    ACCOUNT_NUMBER = "account_number"
    FULL_REFUND = "full_refund"
    PARTIAL_REFUND = "partial_refund"


class RefundStatus(str, Enum):
    FAILED = "failed"
    PROCESSING = "processing"
    COMPLETED = "completed"


class AccountNumberRefundRequest(BlinkModel):
    """Request the customer's account number so the merchant can refund manually."""

    type: Literal["account_number"] = "account_number"
    payment_id: str


class FullRefundRequest(BlinkModel):
    type: Literal["full_refund"] = "full_refund"
    payment_id: str
    pcr: Pcr
    consent_redirect: str | None = None


class PartialRefundRequest(BlinkModel):
    type: Literal["partial_refund"] = "partial_refund"
    payment_id: str
    pcr: Pcr
    amount: Amount
    consent_redirect: str | None = None


RefundDetail = Annotated[
    Union[AccountNumberRefundRequest, FullRefundRequest, PartialRefundRequest],
    Field(discriminator="type"),
]


class RefundResponse(BlinkModel):
    refund_id: str


class Refund(BlinkModel):
    refund_id: str
    status: RefundStatus
    creation_timestamp: datetime
    status_updated_timestamp: datetime
    account_number: str | None = None
    detail: RefundDetail


class Payment(BlinkModel):
    payment_id: str
    type: PaymentType
    status: Union[PaymentStatus, str] = Field(union_mode="left_to_right")
    accepted_reason: PaymentAcceptedReason | None = None
    creation_timestamp: datetime
    status_updated_timestamp: datetime
    detail: PaymentRequest
    refunds: list[Refund] = Field(default_factory=list)
