"""Unit tests for the error handler and exception hierarchy."""

import pytest

from ytdl_gui.core.catalog import DownloadType
from ytdl_gui.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DownloaderException,
    InvalidStateError,
    MediaUnavailableError,
    ValidationError,
)
from ytdl_gui.utils.error_handler import (
    ErrorHandler,
    ErrorSeverity,
    get_error_handler,
    set_error_handler,
)


URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


class TestExceptions:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize("error", [
        ValidationError("bad"),
        MediaUnavailableError(URL),
        InvalidStateError(URL, "bad state"),
        AuthenticationError(),
        ConfigurationError("bad config"),
    ])
    def test_common_base(self, error):
        assert isinstance(error, DownloaderException)

    def test_validation_details(self):
        error = ValidationError("URL is null/empty/whitespace.", value="  ", field="url")
        assert error.field == "url"
        assert "Field: url" in str(error)

    def test_media_unavailable_keeps_url(self):
        original = RuntimeError("HTTP Error 404")
        error = MediaUnavailableError(URL, original_error=original)

        assert error.url == URL
        assert error.original_error is original
        assert error.recoverable
        assert "RuntimeError" in error.details

    def test_invalid_state_names_url_and_type(self):
        error = InvalidStateError(URL, "The SelectedType NONE is not valid.", DownloadType.NONE)

        assert not error.recoverable
        assert URL in str(error)
        assert "DownloadType.NONE" in str(error)

    def test_long_url_shortened(self):
        error = MediaUnavailableError("https://example.com/" + "a" * 200)
        assert error.details.endswith("...")

    def test_to_dict(self):
        data = ConfigurationError("bad", config_key="retry_attempts", expected_type="int").to_dict()
        assert data["type"] == "ConfigurationError"
        assert data["details"] == "Key: retry_attempts, Expected: int"


class TestErrorHandler:
    """Tests for ErrorHandler."""

    def test_known_exception(self):
        info = ErrorHandler().handle(ValidationError("URL is null/empty/whitespace.", field="url"))

        assert info.error_type == "ValidationError"
        assert info.message == "URL is null/empty/whitespace."
        assert info.severity == ErrorSeverity.WARNING
        assert info.error_code == "E_VALIDATIONERROR"

    def test_invalid_state_is_critical(self):
        info = ErrorHandler().handle(InvalidStateError(URL, "bad", DownloadType.NONE))

        assert info.severity == ErrorSeverity.CRITICAL
        assert not info.recoverable
        assert info.url == URL

    def test_ytdlp_message_in_media_unavailable(self):
        error = MediaUnavailableError(
            URL, "ERROR: [youtube] abc: Private video. Sign in if you've been granted access",
            original_error=RuntimeError("DownloadError")
        )
        info = ErrorHandler().handle(error)

        assert info.error_type == "YTDLPError"
        assert info.message == "This video is private."
        assert info.url == URL

    def test_unsupported_url(self):
        info = ErrorHandler().handle(RuntimeError("ERROR: Unsupported URL: https://example.com/page"))
        assert info.message == "This website is not supported."

    def test_unknown_exception(self):
        info = ErrorHandler().handle(RuntimeError("something odd"))

        assert info.error_type == "RuntimeError"
        assert info.message.startswith("An unexpected error occurred")
        assert info.error_code.startswith("E_UNKNOWN_")

    def test_context_added_to_details(self):
        info = ErrorHandler().handle(ValidationError("bad"), context="request_info")
        assert info.details.startswith("request_info")

    def test_logs_error(self, quiet_logger):
        ErrorHandler(quiet_logger).handle(MediaUnavailableError(URL))
        quiet_logger.flush()

        assert any("MediaUnavailableError" in e.message for e in quiet_logger.get_history())

    def test_callbacks(self):
        handler = ErrorHandler()
        received = []
        handler.add_callback(received.append)

        info = handler.handle(ValidationError("bad"))
        assert received == [info]

        handler.remove_callback(received.append)
        handler.handle(ValidationError("bad"))
        assert len(received) == 1

    def test_failing_callback_is_logged(self, quiet_logger):
        handler = ErrorHandler(quiet_logger)

        def broken(info):
            raise RuntimeError("callback broke")

        handler.add_callback(broken)
        handler.handle(ValidationError("bad"))
        quiet_logger.flush()

        assert any("callback broke" in e.message for e in quiet_logger.get_history())

    def test_history(self):
        handler = ErrorHandler()
        for i in range(3):
            handler.handle(ValidationError(f"bad {i}"))

        assert len(handler.get_error_history(limit=2)) == 2
        handler.clear_history()
        assert handler.get_error_history() == []

    def test_format_for_user(self):
        info = ErrorHandler().handle(MediaUnavailableError(URL))
        text = info.format_for_user()

        assert URL in text
        assert "Suggestion:" in text

    def test_error_report(self):
        handler = ErrorHandler()
        handler.handle(MediaUnavailableError(URL))

        report = handler.create_error_report()
        assert "MediaUnavailableError" in report
        assert URL in report

    def test_global_handler(self):
        handler = ErrorHandler()
        set_error_handler(handler)
        assert get_error_handler() is handler
