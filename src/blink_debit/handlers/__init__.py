"""Long-running operation handlers."""

from blink_debit.handlers.polling import (
    PollingOrchestrator,
    PollOutcome,
    classify_consent_status,
    classify_consent_status_simple,
    classify_payment_status,
    classify_payment_status_simple,
)

__all__ = [
    "PollingOrchestrator",
    "PollOutcome",
    "classify_consent_status",
    "classify_consent_status_simple",
    "classify_payment_status",
    "classify_payment_status_simple",
]
