"""Tests for API request logger."""

from unittest.mock import MagicMock, patch

import pytest

from nyc_transit_departures.adapters.api_request_logger import (
    log_api_request,
    redact_headers,
    should_log_requests,
)


class TestShouldLogRequests:
    """Tests for should_log_requests function."""

    def test_when_env_not_set_then_returns_false(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Given NTD_LOG_REQUESTS not set, when checking, then returns False."""
        monkeypatch.delenv("NTD_LOG_REQUESTS", raising=False)

        assert should_log_requests() is False

    @pytest.mark.parametrize("value", ["true", "True", "TRUE"])
    def test_when_env_set_to_true_then_returns_true(
        self, monkeypatch: pytest.MonkeyPatch, value: str
    ) -> None:
        """Given NTD_LOG_REQUESTS=true in any case, when checking, then returns True."""
        monkeypatch.setenv("NTD_LOG_REQUESTS", value)

        assert should_log_requests() is True

    def test_when_env_set_to_false_then_returns_false(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("NTD_LOG_REQUESTS", "false")

        assert should_log_requests() is False


def test_redact_headers_hides_credentials() -> None:
    headers = {"x-api-key": "secret", "Authorization": "Bearer t", "Accept": "*/*"}

    assert redact_headers(headers) == {
        "x-api-key": "***REDACTED***",
        "Authorization": "***REDACTED***",
        "Accept": "*/*",
    }


class TestLogApiRequest:
    """Tests for log_api_request function."""

    @patch("nyc_transit_departures.adapters.api_request_logger.should_log_requests")
    @patch("nyc_transit_departures.adapters.api_request_logger.logger")
    def test_when_logging_disabled_then_does_not_log(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given logging disabled, when calling log_api_request, then does not log."""
        mock_should_log.return_value = False

        log_api_request("GET", "https://example.com/feed")

        mock_logger.info.assert_not_called()

    @patch("nyc_transit_departures.adapters.api_request_logger.should_log_requests")
    @patch("nyc_transit_departures.adapters.api_request_logger.logger")
    def test_when_logging_enabled_then_logs_method_and_url(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given logging enabled, when calling with method and URL, then logs them."""
        mock_should_log.return_value = True

        log_api_request("GET", "https://example.com/feed")

        mock_logger.info.assert_called_once()
        assert "GET https://example.com/feed" in mock_logger.info.call_args[0][0]

    @patch("nyc_transit_departures.adapters.api_request_logger.should_log_requests")
    @patch("nyc_transit_departures.adapters.api_request_logger.logger")
    def test_when_logging_with_api_key_header_then_redacts_it(
        self, mock_logger: MagicMock, mock_should_log: MagicMock
    ) -> None:
        """Given an x-api-key header, when logging, then the key is not written."""
        mock_should_log.return_value = True

        log_api_request("GET", "https://example.com/feed", headers={"x-api-key": "secret-key"})

        call_args = mock_logger.info.call_args[0][0]
        assert "Headers:" in call_args
        assert "***REDACTED***" in call_args
        assert "secret-key" not in call_args
