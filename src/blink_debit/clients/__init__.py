"""HTTP clients for the Blink Debit API."""

from blink_debit.clients.bank_metadata import BankMetadataApi
from blink_debit.clients.base import ApiResponse, BaseApi, RequestArgs, RequestParams, build_request_headers
from blink_debit.clients.consents import EnduringConsentsApi, SingleConsentsApi
from blink_debit.clients.payments import PaymentsApi
from blink_debit.clients.quick_payments import QuickPaymentsApi
from blink_debit.clients.refunds import RefundsApi
from blink_debit.clients.retry import RetryContext, RetryExecutor
from blink_debit.clients.token_client import AccessTokenManager

__all__ = [
    "AccessTokenManager",
    "ApiResponse",
    "BankMetadataApi",
    "BaseApi",
    "EnduringConsentsApi",
    "PaymentsApi",
    "QuickPaymentsApi",
    "RefundsApi",
    "RequestArgs",
    "RequestParams",
    "RetryContext",
    "RetryExecutor",
    "build_request_headers",
]
