"""Unit tests for log redaction."""

from blink_debit.logging_config import REDACTED_BEARER_TOKEN, redact_authorization, sanitise_headers


class TestRedaction:
    """Test suite for bearer token redaction."""

    def test_sanitise_headers_masks_authorization(self):
        headers = {"Authorization": "Bearer secret-token", "request-id": "req-1"}

        sanitised = sanitise_headers(headers)

        assert sanitised == {"Authorization": REDACTED_BEARER_TOKEN, "request-id": "req-1"}
        assert headers["Authorization"] == "Bearer secret-token"

    def test_processor_masks_logged_headers(self):
        event_dict = {"event": "outbound_request", "headers": {"authorization": "Bearer abc"}}

        result = redact_authorization(None, "debug", event_dict)

        assert result["headers"]["authorization"] == REDACTED_BEARER_TOKEN

    def test_processor_ignores_events_without_headers(self):
        event_dict = {"event": "poll_status", "status": "Authorised"}

        assert redact_authorization(None, "debug", event_dict) == event_dict
