"""
Polling of consent, quick payment and payment resources until a terminal state.

Each fetched snapshot is classified into a PollOutcome and the loop branches
on it:
- SUCCESS: return the snapshot
- REJECTED: raise the rejected exception immediately
- GATEWAY_TIMEOUT: raise the timeout exception immediately
- PENDING: sleep and poll again

``max_wait_seconds`` bounds the number of attempts (one per second), not the
elapsed time. Slow status calls can make the total wait longer than the bound.

When attempts run out, the timeout exception is raised after one best-effort
revoke of the resource, if it can be revoked.
"""

import asyncio
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, TypeVar

import structlog

from blink_debit.models.consent import ConsentStatus
from blink_debit.models.exceptions import (
    BlinkAggregateException,
    BlinkInvalidValueException,
    BlinkServiceException,
)
from blink_debit.models.payment import PaymentStatus

logger = structlog.get_logger(__name__)

T = TypeVar("T")

POLL_INTERVAL_SECONDS = 1.0


class PollOutcome(str, Enum):
    """Classification of one polled status."""

    PENDING = "pending"
    SUCCESS = "success"
    REJECTED = "rejected"
    GATEWAY_TIMEOUT = "gateway_timeout"


StatusClassifier = Callable[[Any], PollOutcome]


def _status_value(status: Any) -> str:
    return status.value if isinstance(status, Enum) else str(status)


def classify_consent_status(status: Any) -> PollOutcome:
    """Precise classification of a consent status."""
    value = _status_value(status)
    if value in (ConsentStatus.AUTHORISED.value, ConsentStatus.CONSUMED.value):
        return PollOutcome.SUCCESS
    if value in (ConsentStatus.REJECTED.value, ConsentStatus.REVOKED.value):
        return PollOutcome.REJECTED
    if value == ConsentStatus.GATEWAY_TIMEOUT.value:
        return PollOutcome.GATEWAY_TIMEOUT
    return PollOutcome.PENDING


def classify_consent_status_simple(status: Any) -> PollOutcome:
    """Only Authorised ends the wait; every other status keeps polling until attempts run out."""
    if _status_value(status) == ConsentStatus.AUTHORISED.value:
        return PollOutcome.SUCCESS
    return PollOutcome.PENDING


def classify_payment_status(status: Any) -> PollOutcome:
    """Precise classification of a payment status."""
    value = _status_value(status)
    if value == PaymentStatus.ACCEPTED_SETTLEMENT_COMPLETED.value:
        return PollOutcome.SUCCESS
    if value == PaymentStatus.REJECTED.value:
        return PollOutcome.REJECTED
    return PollOutcome.PENDING


def classify_payment_status_simple(status: Any) -> PollOutcome:
    if classify_payment_status(status) is PollOutcome.SUCCESS:
        return PollOutcome.SUCCESS
    return PollOutcome.PENDING


class PollingOrchestrator:
    """Drives repeated status checks of one resource at a fixed cadence."""

    def __init__(
        self,
        poll_interval_seconds: float = POLL_INTERVAL_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.poll_interval_seconds = poll_interval_seconds
        self._sleep = sleep

    async def await_terminal(
        self,
        resource_id: str,
        max_wait_seconds: int,
        fetch: Callable[[str], Awaitable[T]],
        status_of: Callable[[T], Any],
        classify: StatusClassifier,
        rejected_exception: type[BlinkServiceException],
        timeout_exception: type[BlinkServiceException],
        label: str,
        on_timeout_revoke: Callable[[str], Awaitable[Any]] | None = None,
    ) -> T:
        """
        Poll ``resource_id`` until it reaches a terminal state.

        Args:
            resource_id: ID of the consent, quick payment or payment
            max_wait_seconds: Number of status checks, one per second
            fetch: Fetches the latest snapshot of the resource
            status_of: Extracts the status from a snapshot
            classify: Maps the status to a PollOutcome
            rejected_exception: Raised on a REJECTED outcome
            timeout_exception: Raised on GATEWAY_TIMEOUT or when attempts run out
            label: Resource name used in messages and logs, e.g. "Single consent"
            on_timeout_revoke: Revokes the resource once attempts run out

        Returns:
            The successful snapshot

        Raises:
            BlinkInvalidValueException: If max_wait_seconds is less than 1
            BlinkAggregateException: If attempts ran out and the revoke failed too
            BlinkServiceException: (or subclass) for everything else
        """
        if max_wait_seconds is None or max_wait_seconds < 1:
            raise BlinkInvalidValueException(
                f"max_wait_seconds must be at least 1, got {max_wait_seconds}"
            )

        for attempt in range(1, max_wait_seconds + 1):
            try:
                resource = await fetch(resource_id)
            except BlinkServiceException:
                raise
            except Exception as e:
                raise BlinkServiceException(f"Unexpected error: {e}", e) from e

            status = status_of(resource)
            outcome = classify(status)

            logger.debug(
                "poll_status",
                resource=label,
                resource_id=resource_id,
                status=_status_value(status),
                outcome=outcome.value,
                attempt=attempt,
                max_attempts=max_wait_seconds,
            )

            if outcome is PollOutcome.SUCCESS:
                logger.info("poll_succeeded", resource=label, resource_id=resource_id, attempts=attempt)
                return resource

            if outcome is PollOutcome.REJECTED:
                logger.info("poll_rejected", resource=label, resource_id=resource_id)
                raise rejected_exception(
                    f"{label} [{resource_id}] has been rejected or revoked"
                )

            if outcome is PollOutcome.GATEWAY_TIMEOUT:
                logger.info("poll_gateway_timeout", resource=label, resource_id=resource_id)
                raise timeout_exception(f"Gateway timed out for {label.lower()} [{resource_id}]")

            if attempt < max_wait_seconds:
                await self._sleep(self.poll_interval_seconds)

        timeout_error = timeout_exception(
            f"{label} [{resource_id}] timed out after {max_wait_seconds} attempt(s)"
        )
        logger.warning(
            "poll_timed_out",
            resource=label,
            resource_id=resource_id,
            attempts=max_wait_seconds,
        )

        if on_timeout_revoke is not None:
            try:
                await on_timeout_revoke(resource_id)
            except Exception as revoke_error:
                logger.error(
                    "revoke_after_timeout_failed",
                    resource=label,
                    resource_id=resource_id,
                    error=str(revoke_error),
                )
                raise BlinkAggregateException(
                    [timeout_error, revoke_error],
                    f"{timeout_error}; revoke also failed: {revoke_error}",
                ) from revoke_error
            logger.info("revoked_after_timeout", resource=label, resource_id=resource_id)

        raise timeout_error
