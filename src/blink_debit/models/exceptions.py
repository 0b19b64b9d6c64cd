"""Custom exceptions for the Blink Debit client.

Every failure surfaced to a caller is a BlinkServiceException or one of its
subclasses. Lower layers raise the most specific class they can derive from
the HTTP status; the polling handler raises the consent/payment outcome
classes; the facade wraps anything else in a plain BlinkServiceException.
"""

from typing import Any

import httpx
import structlog

logger = structlog.get_logger(__name__)


class BlinkServiceException(Exception):
    """
    Base exception for all Blink Debit failures.

    Also used as the catch-all wrapper for unclassified errors, in which case
    the original error is kept on ``inner_exception``.
    """

    default_message = (
        "Service call to Blink Debit failed, please contact BlinkPay with the correlation ID"
    )

    def __init__(
        self,
        message: str | None = None,
        inner_exception: BaseException | None = None,
        *,
        status_code: int | None = None,
        correlation_id: str | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.inner_exception = inner_exception
        self.status_code = status_code
        self.correlation_id = correlation_id
        super().__init__(self.message)
        if inner_exception is not None:
            self.__cause__ = inner_exception


class BlinkClientException(BlinkServiceException):
    """Raised for 4xx responses that have no more specific class."""

    default_message = "Client error calling Blink Debit"


class BlinkUnauthorisedException(BlinkServiceException):
    """
    Raised on 401 (and 422) responses.

    A 401 on the first attempt of an operation triggers one forced token
    refresh before this surfaces.
    """

    default_message = (
        "Unauthorised access to resource, check the JWT in Authorization HTTP "
        "request header with Bearer authentication scheme"
    )


class BlinkForbiddenException(BlinkServiceException):
    """Raised on 403 responses. TERMINAL."""

    default_message = "Forbidden access to resource"


class BlinkResourceNotFoundException(BlinkServiceException):
    """Raised on 404 responses. TERMINAL."""

    default_message = "Resource not found"


class BlinkRateLimitExceededException(BlinkServiceException):
    """Raised on 429 responses. RETRYABLE."""

    default_message = "Rate limit exceeded"


class BlinkRetryableException(BlinkServiceException):
    """Raised on 408 and unclassified 5xx responses."""

    default_message = "Operation failed and will be retried"


class BlinkNotImplementedException(BlinkServiceException):
    """Raised on 501 responses, e.g. refund types not yet supported."""

    default_message = "Not implemented"


class BlinkInvalidValueException(BlinkServiceException):
    """Raised on caller misuse such as a missing required ID. Never retried."""

    default_message = "Invalid value"


class BlinkConsentFailureException(BlinkServiceException):
    """Base for consent and quick payment polling outcomes."""

    default_message = "Consent failed"


class BlinkConsentRejectedException(BlinkConsentFailureException):
    default_message = "Consent was rejected"


class BlinkConsentTimeoutException(BlinkConsentFailureException):
    default_message = "Consent timed out"


class BlinkPaymentFailureException(BlinkServiceException):
    """Base for payment polling outcomes."""

    default_message = "Payment failed"


class BlinkPaymentRejectedException(BlinkPaymentFailureException):
    default_message = "Payment was rejected"


class BlinkPaymentTimeoutException(BlinkPaymentFailureException):
    default_message = "Payment timed out"


class BlinkAggregateException(BlinkServiceException):
    """
    Raised when waiting timed out and the follow-up revoke failed as well.

    ``exceptions`` holds the timeout exception first, then the revoke error.
    """

    def __init__(self, exceptions: list[BaseException], message: str | None = None) -> None:
        self.exceptions = tuple(exceptions)
        super().__init__(
            message or "; ".join(str(e) for e in self.exceptions),
            self.exceptions[-1] if self.exceptions else None,
        )


_STATUS_EXCEPTIONS: dict[int, type[BlinkServiceException]] = {
    401: BlinkUnauthorisedException,
    403: BlinkForbiddenException,
    404: BlinkResourceNotFoundException,
    408: BlinkRetryableException,
    # Historical mapping, kept for compatibility with existing callers.
    422: BlinkUnauthorisedException,
    429: BlinkRateLimitExceededException,
    501: BlinkNotImplementedException,
}


def _error_message(response: httpx.Response) -> str | None:
    """Extract ``message`` from a DetailErrorResponseModel body, if any."""
    try:
        body: Any = response.json()
    except ValueError:
        return response.text or response.reason_phrase or None

    if isinstance(body, dict):
        message = body.get("message") or body.get("error_description") or body.get("error")
        return str(message) if message else None
    return None


def exception_for_response(response: httpx.Response) -> BlinkServiceException:
    """
    Map an error response to the matching Blink exception.

    Args:
        response: An httpx response with a 4xx or 5xx status

    Returns:
        The exception instance to raise (not raised here)
    """
    status = response.status_code
    message = _error_message(response)
    correlation_id = response.headers.get("x-correlation-id")

    logger.warning(
        "blink_debit_error_response",
        status_code=status,
        correlation_id=correlation_id,
        error=message,
    )

    exception_class = _STATUS_EXCEPTIONS.get(status)
    if exception_class is None:
        if status == 502:
            return BlinkServiceException(
                f"Service call to Blink Debit failed with error: {message}, "
                f"please contact BlinkPay with the correlation ID: {correlation_id}",
                status_code=status,
                correlation_id=correlation_id,
            )
        if 400 <= status < 500:
            exception_class = BlinkClientException
        else:
            exception_class = BlinkRetryableException

    return exception_class(message, status_code=status, correlation_id=correlation_id)
