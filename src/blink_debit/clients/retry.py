"""
Retry execution for Blink Debit HTTP operations.

One RetryContext is created per logical operation and reused across its
attempts, so request-id, correlation-id and idempotency-key stay identical
on every retry. The upstream service uses the idempotency key to
deduplicate a retried create that already succeeded server-side.

Retry behaviour:
- Network errors (no response): retry up to MAX_RETRIES times
- 401 on the first attempt: force a token refresh and retry once, outside
  the MAX_RETRIES budget
- 429 and 5xx (except 501): retry up to MAX_RETRIES times, after 1s then 5s
- 408, 501 and any other 4xx: fail immediately
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import httpx
import structlog

from blink_debit.clients.token_client import AccessTokenManager
from blink_debit.models.exceptions import BlinkServiceException, exception_for_response

logger = structlog.get_logger(__name__)

MAX_RETRIES = 2  # 3 total attempts (initial + 2 retries)
RETRY_DELAYS_SECONDS = (1.0, 5.0)


@dataclass
class RetryContext:
    """Tracking IDs for one logical operation, shared by all of its attempts."""

    request_id: str
    correlation_id: str
    idempotency_key: str | None = None
    attempt_number: int = 0
    token_refreshed: bool = False

    @property
    def requests_sent(self) -> int:
        """HTTP requests made so far, counting the one repeated after re-authentication."""
        return self.attempt_number + 1 + int(self.token_refreshed)


def is_retryable_status(status_code: int) -> bool:
    """429 and 5xx other than 501 are retryable; 408 and other 4xx are not."""
    return status_code == 429 or (500 <= status_code < 600 and status_code != 501)


def retry_delay(retry_number: int) -> float:
    """Delay before the given retry (1-based)."""
    if 1 <= retry_number <= len(RETRY_DELAYS_SECONDS):
        return RETRY_DELAYS_SECONDS[retry_number - 1]
    return RETRY_DELAYS_SECONDS[-1]


class RetryExecutor:
    """Runs one HTTP operation with classification-driven retries."""

    def __init__(
        self,
        token_manager: AccessTokenManager,
        max_retries: int = MAX_RETRIES,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.token_manager = token_manager
        self.max_retries = max_retries
        self._sleep = sleep

    async def execute(
        self,
        operation: Callable[[], Awaitable[httpx.Response]],
        context: RetryContext,
    ) -> httpx.Response:
        """
        Execute ``operation`` until it succeeds or can no longer be retried.

        Args:
            operation: Performs one HTTP attempt and returns the raw response
            context: Retry context for this logical operation

        Returns:
            The first successful (< 400) response

        Raises:
            BlinkServiceException: The classified error for non-retryable
                failures, or a wrapped error once retries are exhausted
        """
        while True:
            status_code: int | None = None
            try:
                response = await operation()
            except httpx.TransportError as e:
                error: Exception = e
            else:
                if response.status_code < 400:
                    return response
                status_code = response.status_code
                error = exception_for_response(response)

            if status_code == 401 and context.attempt_number == 0 and not context.token_refreshed:
                await self._refresh_after_unauthorised(context)
                continue

            retryable = status_code is None or is_retryable_status(status_code)
            if not retryable:
                logger.error(
                    "request_failed",
                    error=_describe(status_code),
                    error_type=type(error).__name__,
                    attempts=context.requests_sent,
                    request_id=context.request_id,
                    correlation_id=context.correlation_id,
                )
                raise error

            if context.attempt_number < self.max_retries:
                delay = retry_delay(context.attempt_number + 1)
                logger.debug(
                    "retrying_request",
                    error=_describe(status_code),
                    attempt=context.attempt_number + 1,
                    max_attempts=self.max_retries + 1,
                    delay_seconds=delay,
                    request_id=context.request_id,
                    correlation_id=context.correlation_id,
                )
                await self._sleep(delay)
                context.attempt_number += 1
                continue

            attempts = context.requests_sent
            logger.error(
                "retries_exhausted",
                error=_describe(status_code),
                attempts=attempts,
                request_id=context.request_id,
                correlation_id=context.correlation_id,
            )
            if status_code is not None:
                message = f"HTTP {status_code} after {attempts} attempt(s): {error}"
            else:
                message = f"Network error after {attempts} attempt(s): {error}"
            raise BlinkServiceException(
                message,
                error,
                status_code=status_code,
                correlation_id=context.correlation_id,
            ) from error

    async def _refresh_after_unauthorised(self, context: RetryContext) -> None:
        logger.info(
            "unauthorised_refreshing_token",
            request_id=context.request_id,
            correlation_id=context.correlation_id,
        )
        try:
            await self.token_manager.get_access_token(force_refresh=True)
        except Exception as e:
            logger.error("token_refresh_after_unauthorised_failed", error=str(e))
            raise BlinkServiceException(
                f"Authentication failed - token refresh error: {e}", e
            ) from e
        context.token_refreshed = True


def _describe(status_code: int | None) -> str:
    return f"HTTP {status_code}" if status_code is not None else "network error"
