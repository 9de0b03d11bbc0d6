"""Centralized error handling for the extended downloader.

Maps the core's exceptions, and yt-dlp failures wrapped in them, to
messages a front-end can show. The handler reports errors; it never
decides to retry.
"""

import sys
import threading
import traceback
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Tuple, Type

from ytdl_gui.exceptions import (
    AuthenticationError,
    ConfigurationError,
    DownloaderException,
    InvalidStateError,
    MediaUnavailableError,
    ValidationError,
)


class ErrorSeverity(Enum):
    """Error severity levels for UI display."""
    INFO = auto()
    WARNING = auto()
    ERROR = auto()
    CRITICAL = auto()


@dataclass
class ErrorInfo:
    """Structured error information for display.

    Attributes:
        error_type: Exception class name, or "YTDLPError" for provider messages
        message: User-friendly error message
        details: Technical details (URL, attempted type)
        severity: Error severity level
        recoverable: Whether the caller may try again
        recovery_suggestion: Suggested action for the user
        error_code: Short code for reference
        url: Media URL involved, when known
        original_exception: The handled exception
    """
    error_type: str
    message: str
    details: Optional[str] = None
    severity: ErrorSeverity = ErrorSeverity.ERROR
    recoverable: bool = True
    recovery_suggestion: Optional[str] = None
    error_code: Optional[str] = None
    url: Optional[str] = None
    original_exception: Optional[Exception] = None

    def to_dict(self) -> dict:
        return {
            'error_type': self.error_type,
            'message': self.message,
            'details': self.details,
            'severity': self.severity.name,
            'recoverable': self.recoverable,
            'recovery_suggestion': self.recovery_suggestion,
            'error_code': self.error_code,
            'url': self.url,
        }

    def format_for_user(self) -> str:
        """Format error message for user display."""
        lines = [self.message]

        if self.url:
            lines.append(f"\nURL: {self.url}")

        if self.recovery_suggestion:
            lines.append(f"\nSuggestion: {self.recovery_suggestion}")

        if self.error_code:
            lines.append(f"\nError Code: {self.error_code}")

        return "\n".join(lines)

    def format_for_log(self) -> str:
        lines = [f"[{self.error_type}] {self.message}"]

        if self.details:
            lines.append(f"Details: {self.details}")

        if self.original_exception:
            lines.append(f"Exception: {type(self.original_exception).__name__}: {self.original_exception}")

        return " | ".join(lines)


class ErrorHandler:
    """Centralized error handler with user-friendly messages.

    Usage:
        handler = ErrorHandler(get_logger())
        try:
            session.request_info()
        except DownloaderException as e:
            print(handler.handle(e, context="request_info").format_for_user())
    """

    # (message, recovery_suggestion, severity)
    ERROR_MESSAGES: Dict[Type[Exception], Tuple[str, Optional[str], ErrorSeverity]] = {
        ValidationError: (
            "The value you entered is not valid.",
            "Check the URL or option and try again.",
            ErrorSeverity.WARNING
        ),
        MediaUnavailableError: (
            "The media you are trying to access may not be accessible at this time, "
            "or it may have been removed.",
            "Check the URL, or try again later.",
            ErrorSeverity.ERROR
        ),
        InvalidStateError: (
            "The download could not be prepared.",
            "Select a format for the chosen download type. If the problem persists, "
            "please report this issue.",
            ErrorSeverity.CRITICAL
        ),
        AuthenticationError: (
            "Authentication is required for this content.",
            "Enter your credentials, or import your browser cookies.",
            ErrorSeverity.ERROR
        ),
        ConfigurationError: (
            "Invalid configuration detected.",
            "Check your settings and correct any invalid values.",
            ErrorSeverity.WARNING
        ),
        PermissionError: (
            "Permission denied.",
            "Check that you have write access to the download folder.",
            ErrorSeverity.ERROR
        ),
        FileNotFoundError: (
            "File or directory not found.",
            "Make sure the path exists and is accessible.",
            ErrorSeverity.ERROR
        ),
        KeyboardInterrupt: (
            "Operation was cancelled.",
            None,
            ErrorSeverity.INFO
        ),
    }

    # Substrings of yt-dlp error messages
    YTDLP_ERROR_PATTERNS = [
        ("Private video", "This video is private.",
         "You need to sign in with an account that has access.",
         ErrorSeverity.ERROR),

        ("Sign in", "This content requires authentication.",
         "Enter your credentials, or import your browser cookies.",
         ErrorSeverity.ERROR),

        ("Unsupported URL", "This website is not supported.",
         "Check the URL, or use the custom download type with your own arguments.",
         ErrorSeverity.WARNING),

        ("your age", "This content is age-restricted.",
         "Import your browser cookies to verify your age.",
         ErrorSeverity.ERROR),

        ("country", "This media is not available in your country.",
         "Try using a proxy in another region.",
         ErrorSeverity.ERROR),

        ("429", "Too many requests (rate limited).",
         "Wait a few minutes before trying again.",
         ErrorSeverity.WARNING),

        ("403", "Access forbidden.",
         "The media may be restricted. Try using cookies or a proxy.",
         ErrorSeverity.ERROR),

        ("404", "Media not found.",
         "Check if the URL is correct and the media still exists.",
         ErrorSeverity.ERROR),
    ]

    def __init__(self, logger=None):
        """Initialize the error handler.

        Args:
            logger: Optional logger instance for error logging
        """
        self.logger = logger
        self._lock = threading.Lock()
        self._error_callbacks: List[Callable[[ErrorInfo], None]] = []
        self._error_history: List[ErrorInfo] = []
        self._max_history = 100

    def handle(self, error: Exception, context: Optional[str] = None) -> ErrorInfo:
        """Handle an exception and return structured error info.

        Args:
            error: The exception to handle
            context: What was happening, added to the details

        Returns:
            ErrorInfo with user-friendly error details
        """
        error_info = self._create_error_info(error)
        if context:
            error_info.details = f"{context}: {error_info.details}" if error_info.details else context

        with self._lock:
            self._error_history.append(error_info)
            if len(self._error_history) > self._max_history:
                self._error_history = self._error_history[-self._max_history:]
            callbacks = list(self._error_callbacks)

        if self.logger:
            self._get_log_method(error_info.severity)(error_info.format_for_log(), source="errors")

        for callback in callbacks:
            try:
                callback(error_info)
            except Exception as e:
                if self.logger:
                    self.logger.exception("Error callback failed", e, source="errors")
                else:
                    print(f"Error callback failed: {e}", file=sys.stderr)

        return error_info

    def _create_error_info(self, error: Exception) -> ErrorInfo:
        error_type = type(error).__name__
        url = getattr(error, 'url', None)

        # Provider failures carry yt-dlp's own message
        if isinstance(error, MediaUnavailableError) and error.original_error is not None:
            matched = self._match_ytdlp(error, url)
            if matched:
                return matched

        for exc_type, (message, suggestion, severity) in self.ERROR_MESSAGES.items():
            if isinstance(error, exc_type):
                details = str(error)
                if isinstance(error, DownloaderException):
                    message = error.message or message

                return ErrorInfo(
                    error_type=error_type,
                    message=message,
                    details=details,
                    severity=severity,
                    recoverable=getattr(error, 'recoverable', True),
                    recovery_suggestion=suggestion,
                    error_code=f"E_{error_type.upper()}",
                    url=url,
                    original_exception=error
                )

        matched = self._match_ytdlp(error, url)
        if matched:
            return matched

        return ErrorInfo(
            error_type=error_type,
            message=f"An unexpected error occurred: {str(error)[:100]}",
            details=str(error),
            severity=ErrorSeverity.ERROR,
            recoverable=True,
            recovery_suggestion="Try again. If the problem persists, please report this issue.",
            error_code=f"E_UNKNOWN_{error_type.upper()[:20]}",
            url=url,
            original_exception=error
        )

    def _match_ytdlp(self, error: Exception, url: Optional[str]) -> Optional[ErrorInfo]:
        text = str(getattr(error, 'message', None) or error).lower()
        for pattern, message, suggestion, severity in self.YTDLP_ERROR_PATTERNS:
            if pattern.lower() in text:
                return ErrorInfo(
                    error_type="YTDLPError",
                    message=message,
                    details=str(error),
                    severity=severity,
                    recoverable=True,
                    recovery_suggestion=suggestion,
                    error_code=f"E_YTDLP_{pattern.upper().replace(' ', '_')}",
                    url=url,
                    original_exception=error
                )
        return None

    def _get_log_method(self, severity: ErrorSeverity):
        mapping = {
            ErrorSeverity.INFO: self.logger.info,
            ErrorSeverity.WARNING: self.logger.warning,
            ErrorSeverity.ERROR: self.logger.error,
            ErrorSeverity.CRITICAL: self.logger.critical,
        }
        return mapping.get(severity, self.logger.error)

    def add_callback(self, callback: Callable[[ErrorInfo], None]):
        """Add an error callback for notifications."""
        with self._lock:
            self._error_callbacks.append(callback)

    def remove_callback(self, callback: Callable[[ErrorInfo], None]):
        with self._lock:
            if callback in self._error_callbacks:
                self._error_callbacks.remove(callback)

    def get_error_history(self, limit: int = 50) -> List[ErrorInfo]:
        """Get recent error history.

        Args:
            limit: Maximum number of errors to return

        Returns:
            List of recent ErrorInfo objects
        """
        with self._lock:
            return self._error_history[-limit:]

    def clear_history(self):
        with self._lock:
            self._error_history.clear()

    @staticmethod
    def format_exception(error: Exception) -> str:
        """Format an exception with full traceback."""
        return ''.join(traceback.format_exception(
            type(error), error, error.__traceback__
        ))

    def create_error_report(self) -> str:
        """Create a detailed error report for debugging.

        Returns:
            Formatted error report string
        """
        lines = [
            "=" * 50,
            "Error Report",
            "=" * 50,
            f"Generated: {datetime.now().isoformat()}",
            f"Python Version: {sys.version}",
            f"Platform: {sys.platform}",
            "",
            "Recent Errors:",
            "-" * 30,
        ]

        with self._lock:
            for i, error_info in enumerate(self._error_history[-20:], 1):
                lines.append(f"\n{i}. {error_info.error_type}")
                lines.append(f"   Message: {error_info.message}")
                if error_info.url:
                    lines.append(f"   URL: {error_info.url}")
                if error_info.details:
                    lines.append(f"   Details: {error_info.details[:200]}")
                lines.append(f"   Severity: {error_info.severity.name}")

        lines.append("\n" + "=" * 50)
        return "\n".join(lines)


_global_handler: Optional[ErrorHandler] = None


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    global _global_handler
    if _global_handler is None:
        _global_handler = ErrorHandler()
    return _global_handler


def set_error_handler(handler: ErrorHandler):
    global _global_handler
    _global_handler = handler
