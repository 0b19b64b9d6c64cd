"""Async Python client for the BlinkPay Blink Debit API."""

from blink_debit.client import BlinkDebitClient
from blink_debit.clients.base import ApiResponse, RequestParams
from blink_debit.config import BlinkPaySettings
from blink_debit.logging_config import configure_logging
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

__version__ = "1.0.0"

__all__ = [
    "ApiResponse",
    "BlinkAggregateException",
    "BlinkClientException",
    "BlinkConsentFailureException",
    "BlinkConsentRejectedException",
    "BlinkConsentTimeoutException",
    "BlinkDebitClient",
    "BlinkForbiddenException",
    "BlinkInvalidValueException",
    "BlinkNotImplementedException",
    "BlinkPaySettings",
    "BlinkPaymentFailureException",
    "BlinkPaymentRejectedException",
    "BlinkPaymentTimeoutException",
    "BlinkRateLimitExceededException",
    "BlinkResourceNotFoundException",
    "BlinkRetryableException",
    "BlinkServiceException",
    "BlinkUnauthorisedException",
    "RequestParams",
    "configure_logging",
]
