"""Domain models for the Blink Debit client."""

from blink_debit.models.bank_metadata import (
    BankMetadata,
    BankMetadataFeatures,
    BankMetadataRedirectFlow,
    DecoupledFlowFeature,
    DecoupledFlowIdentifier,
    EnduringConsentFeature,
)
from blink_debit.models.common import Account, Amount, AmountCurrency, Bank, Pcr, Period
from blink_debit.models.consent import (
    Consent,
    ConsentDetailType,
    ConsentStatus,
    CreateConsentResponse,
    CreateQuickPaymentResponse,
    EnduringConsentRequest,
    QuickPaymentRequest,
    QuickPaymentResponse,
    SingleConsentRequest,
)
from blink_debit.models.exceptions import (
    BlinkAggregateException,
    BlinkClientException,
    BlinkConsentFailureException,
    BlinkConsentRejectedException,
    BlinkConsentTimeoutException,
    BlinkForbiddenException,
    BlinkInvalidValueException,
    BlinkNotImplementedException,
    BlinkPaymentFailureException,
    BlinkPaymentRejectedException,
    BlinkPaymentTimeoutException,
    BlinkRateLimitExceededException,
    BlinkResourceNotFoundException,
    BlinkRetryableException,
    BlinkServiceException,
    BlinkUnauthorisedException,
)
from blink_debit.models.flows import (
    AuthFlow,
    AuthFlowDetailType,
    DecoupledFlow,
    DecoupledFlowHint,
    GatewayFlow,
    IdentifierType,
    RedirectFlow,
    RedirectFlowHint,
)
from blink_debit.models.payment import (
    AccountNumberRefundRequest,
    EnduringPaymentRequest,
    FullRefundRequest,
    PartialRefundRequest,
    Payment,
    PaymentAcceptedReason,
    PaymentRequest,
    PaymentResponse,
    PaymentStatus,
    PaymentType,
    Refund,
    RefundDetailType,
    RefundResponse,
    RefundStatus,
)

__all__ = [
    "Account",
    "AccountNumberRefundRequest",
    "Amount",
    "AmountCurrency",
    "AuthFlow",
    "AuthFlowDetailType",
    "Bank",
    "BankMetadata",
    "BankMetadataFeatures",
    "BankMetadataRedirectFlow",
    "BlinkAggregateException",
    "BlinkClientException",
    "BlinkConsentFailureException",
    "BlinkConsentRejectedException",
    "BlinkConsentTimeoutException",
    "BlinkForbiddenException",
    "BlinkInvalidValueException",
    "BlinkNotImplementedException",
    "BlinkPaymentFailureException",
    "BlinkPaymentRejectedException",
    "BlinkPaymentTimeoutException",
    "BlinkRateLimitExceededException",
    "BlinkResourceNotFoundException",
    "BlinkRetryableException",
    "BlinkServiceException",
    "BlinkUnauthorisedException",
    "Consent",
    "ConsentDetailType",
    "ConsentStatus",
    "CreateConsentResponse",
    "CreateQuickPaymentResponse",
    "DecoupledFlow",
    "DecoupledFlowFeature",
    "DecoupledFlowHint",
    "DecoupledFlowIdentifier",
    "EnduringConsentFeature",
    "EnduringConsentRequest",
    "EnduringPaymentRequest",
    "FullRefundRequest",
    "GatewayFlow",
    "IdentifierType",
    "PartialRefundRequest",
    "Payment",
    "PaymentAcceptedReason",
    "PaymentRequest",
    "PaymentResponse",
    "PaymentStatus",
    "PaymentType",
    "Pcr",
    "Period",
    "QuickPaymentRequest",
    "QuickPaymentResponse",
    "RedirectFlow",
    "RedirectFlowHint",
    "Refund",
    "RefundDetailType",
    "RefundResponse",
    "RefundStatus",
    "SingleConsentRequest",
]
