"""Unit tests for the retry executor."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from structlog.testing import capture_logs

from blink_debit.clients.retry import RetryContext, RetryExecutor, is_retryable_status, retry_delay
from blink_debit.models.exceptions import (
    BlinkForbiddenException,
    BlinkRateLimitExceededException,
    BlinkResourceNotFoundException,
    BlinkRetryableException,
    BlinkServiceException,
    BlinkUnauthorisedException,
)


def scripted(*outcomes):
    """Operation returning (or raising) each outcome in turn."""
    calls = []

    async def operation():
        outcome = outcomes[min(len(calls), len(outcomes) - 1)]
        calls.append(outcome)
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(outcome, json={"message": f"status {outcome}"})

    operation.calls = calls
    return operation


@pytest.fixture
def token_manager():
    manager = MagicMock()
    manager.get_access_token = AsyncMock(return_value="refreshed-token")
    return manager


@pytest.fixture
def executor(token_manager, fake_sleep):
    return RetryExecutor(token_manager, sleep=fake_sleep)


@pytest.fixture
def context():
    return RetryContext(request_id="req-1", correlation_id="corr-1", idempotency_key="idem-1")


class TestRetryPolicy:
    """Test suite for status classification helpers."""

    @pytest.mark.parametrize("status_code", [429, 500, 502, 503, 504])
    def test_retryable_statuses(self, status_code):
        assert is_retryable_status(status_code)

    @pytest.mark.parametrize("status_code", [400, 401, 403, 404, 408, 409, 422, 501])
    def test_non_retryable_statuses(self, status_code):
        assert not is_retryable_status(status_code)

    def test_delays(self):
        assert retry_delay(1) == 1.0
        assert retry_delay(2) == 5.0


class TestRetryExecutor:
    """Test suite for RetryExecutor.execute."""

    @pytest.mark.asyncio
    async def test_success_first_attempt(self, executor, context, sleep_calls):
        operation = scripted(200)

        response = await executor.execute(operation, context)

        assert response.status_code == 200
        assert len(operation.calls) == 1
        assert sleep_calls == []

    @pytest.mark.asyncio
    async def test_server_error_retried_until_exhausted(self, executor, context, sleep_calls):
        """500 on every attempt: 3 attempts, 1s then 5s apart, then a wrapped error."""
        operation = scripted(500)

        with pytest.raises(BlinkServiceException, match=r"HTTP 500 after 3 attempt\(s\)") as exc_info:
            await executor.execute(operation, context)

        assert len(operation.calls) == 3
        assert sleep_calls == [1.0, 5.0]
        assert isinstance(exc_info.value.inner_exception, BlinkRetryableException)
        assert exc_info.value.status_code == 500
        assert context.attempt_number == 2

    @pytest.mark.asyncio
    async def test_server_error_then_success(self, executor, context, sleep_calls):
        operation = scripted(503, 200)

        response = await executor.execute(operation, context)

        assert response.status_code == 200
        assert sleep_calls == [1.0]

    @pytest.mark.asyncio
    async def test_rate_limit_exhausted(self, executor, context):
        with pytest.raises(BlinkServiceException, match="HTTP 429") as exc_info:
            await executor.execute(scripted(429), context)

        assert isinstance(exc_info.value.inner_exception, BlinkRateLimitExceededException)

    @pytest.mark.asyncio
    async def test_network_error_retried(self, executor, context, sleep_calls):
        operation = scripted(httpx.ConnectError("connection refused"))

        with pytest.raises(BlinkServiceException, match=r"Network error after 3 attempt\(s\)"):
            await executor.execute(operation, context)

        assert len(operation.calls) == 3
        assert sleep_calls == [1.0, 5.0]

    @pytest.mark.asyncio
    async def test_network_error_then_success(self, executor, context):
        operation = scripted(httpx.ReadTimeout("timed out"), 201)

        response = await executor.execute(operation, context)

        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_unauthorised_refreshes_once_and_retries(self, executor, context, token_manager, sleep_calls):
        """401 then 200: one forced refresh, two attempts, no backoff."""
        operation = scripted(401, 200)

        response = await executor.execute(operation, context)

        assert response.status_code == 200
        assert len(operation.calls) == 2
        token_manager.get_access_token.assert_awaited_once_with(force_refresh=True)
        assert sleep_calls == []
        assert context.token_refreshed

    @pytest.mark.asyncio
    async def test_repeated_unauthorised_surfaces(self, executor, context, token_manager):
        operation = scripted(401)

        with pytest.raises(BlinkUnauthorisedException):
            await executor.execute(operation, context)

        assert len(operation.calls) == 2
        assert token_manager.get_access_token.await_count == 1

    @pytest.mark.asyncio
    async def test_unauthorised_refresh_failure(self, executor, context, token_manager):
        token_manager.get_access_token.side_effect = BlinkForbiddenException("bad credentials")

        with pytest.raises(BlinkServiceException, match="Authentication failed - token refresh error"):
            await executor.execute(scripted(401), context)

    @pytest.mark.asyncio
    async def test_unauthorised_after_retry_not_refreshed(self, executor, context, token_manager):
        """A 401 on a later attempt is terminal."""
        operation = scripted(500, 401)

        with pytest.raises(BlinkUnauthorisedException):
            await executor.execute(operation, context)

        token_manager.get_access_token.assert_not_awaited()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status_code,exception_class",
        [
            (403, BlinkForbiddenException),
            (404, BlinkResourceNotFoundException),
            (408, BlinkRetryableException),
        ],
    )
    async def test_terminal_statuses_not_retried(
        self, executor, context, sleep_calls, status_code, exception_class
    ):
        operation = scripted(status_code)

        with pytest.raises(exception_class):
            await executor.execute(operation, context)

        assert len(operation.calls) == 1
        assert sleep_calls == []

    @pytest.mark.asyncio
    async def test_retries_disabled(self, token_manager, context, fake_sleep):
        executor = RetryExecutor(token_manager, max_retries=0, sleep=fake_sleep)
        operation = scripted(500)

        with pytest.raises(BlinkServiceException, match=r"after 1 attempt\(s\)"):
            await executor.execute(operation, context)

        assert len(operation.calls) == 1

    @pytest.mark.asyncio
    async def test_attempt_count_includes_reauthenticated_request(self, executor, context):
        """401 then 500s: four requests go out and the error says so."""
        operation = scripted(401, 500)

        with pytest.raises(BlinkServiceException, match=r"HTTP 500 after 4 attempt\(s\)"):
            await executor.execute(operation, context)

        assert len(operation.calls) == 4
        assert context.requests_sent == 4


class TestRetryLogging:
    """Test suite for log levels around retried requests."""

    @pytest.mark.asyncio
    async def test_recovered_request_logs_no_errors(self, executor, context):
        with capture_logs() as logs:
            await executor.execute(scripted(503, 200), context)

        assert [entry["log_level"] for entry in logs if entry["event"] == "blink_debit_error_response"] == [
            "warning"
        ]
        assert not [entry for entry in logs if entry["log_level"] == "error"]

    @pytest.mark.asyncio
    async def test_terminal_failure_logged_once_as_error(self, executor, context):
        with capture_logs() as logs:
            with pytest.raises(BlinkResourceNotFoundException):
                await executor.execute(scripted(404), context)

        errors = [entry for entry in logs if entry["log_level"] == "error"]
        assert [entry["event"] for entry in errors] == ["request_failed"]

    @pytest.mark.asyncio
    async def test_exhausted_retries_logged_once_as_error(self, executor, context):
        with capture_logs() as logs:
            with pytest.raises(BlinkServiceException):
                await executor.execute(scripted(500), context)

        errors = [entry for entry in logs if entry["log_level"] == "error"]
        assert [entry["event"] for entry in errors] == ["retries_exhausted"]
