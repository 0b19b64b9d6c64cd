"""Unit tests for error response classification."""

import httpx
import pytest
from structlog.testing import capture_logs

from blink_debit.models.exceptions import (
    BlinkAggregateException,
    BlinkClientException,
    BlinkConsentFailureException,
    BlinkConsentTimeoutException,
    BlinkForbiddenException,
    BlinkNotImplementedException,
    BlinkRateLimitExceededException,
    BlinkResourceNotFoundException,
    BlinkRetryableException,
    BlinkServiceException,
    BlinkUnauthorisedException,
    exception_for_response,
)


class TestExceptionForResponse:
    """Test suite for exception_for_response."""

    @pytest.mark.parametrize(
        "status_code,exception_class",
        [
            (400, BlinkClientException),
            (401, BlinkUnauthorisedException),
            (403, BlinkForbiddenException),
            (404, BlinkResourceNotFoundException),
            (408, BlinkRetryableException),
            (409, BlinkClientException),
            (422, BlinkUnauthorisedException),
            (429, BlinkRateLimitExceededException),
            (500, BlinkRetryableException),
            (501, BlinkNotImplementedException),
            (503, BlinkRetryableException),
        ],
    )
    def test_status_mapping(self, status_code, exception_class):
        response = httpx.Response(status_code, json={"message": "boom"})

        error = exception_for_response(response)

        assert type(error) is exception_class
        assert error.status_code == status_code
        assert str(error) == "boom"

    def test_bad_gateway_mentions_correlation_id(self):
        response = httpx.Response(
            502,
            json={"message": "upstream down"},
            headers={"x-correlation-id": "corr-502"},
        )

        error = exception_for_response(response)

        assert type(error) is BlinkServiceException
        assert "upstream down" in str(error)
        assert "corr-502" in str(error)
        assert error.correlation_id == "corr-502"

    def test_oauth_error_description(self):
        response = httpx.Response(401, json={"error": "invalid_client", "error_description": "Bad secret"})

        assert str(exception_for_response(response)) == "Bad secret"

    def test_non_json_body(self):
        response = httpx.Response(404, text="Not here")

        assert str(exception_for_response(response)) == "Not here"

    def test_default_message_when_body_empty(self):
        response = httpx.Response(404, json={})

        assert str(exception_for_response(response)) == "Resource not found"

    def test_classification_logs_warning(self):
        """Classifying a response may precede a retry, so it is not an error yet."""
        response = httpx.Response(503, json={"message": "unavailable"})

        with capture_logs() as logs:
            exception_for_response(response)

        assert logs == [
            {
                "event": "blink_debit_error_response",
                "log_level": "warning",
                "status_code": 503,
                "correlation_id": None,
                "error": "unavailable",
            }
        ]


class TestExceptionHierarchy:
    """Test suite for exception construction."""

    def test_wrapper_keeps_inner_exception(self):
        inner = ValueError("bad")

        error = BlinkServiceException("wrapped", inner)

        assert error.inner_exception is inner
        assert error.__cause__ is inner

    def test_consent_outcomes_are_service_exceptions(self):
        error = BlinkConsentTimeoutException()

        assert isinstance(error, BlinkConsentFailureException)
        assert isinstance(error, BlinkServiceException)
        assert str(error) == "Consent timed out"

    def test_aggregate_holds_all_errors(self):
        timeout = BlinkConsentTimeoutException("timed out")
        revoke_error = BlinkRetryableException("revoke failed")

        error = BlinkAggregateException([timeout, revoke_error])

        assert error.exceptions == (timeout, revoke_error)
        assert "timed out" in str(error)
        assert "revoke failed" in str(error)
