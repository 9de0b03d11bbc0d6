"""Custom exception classes for the extended downloader.

This module defines the exception hierarchy used by the format catalog,
the argument builder and the media session. Every error carries enough
context (URL, attempted type) for the caller to render a message.
"""

from typing import Optional


class DownloaderException(Exception):
    """Base exception for all downloader errors.

    All custom exceptions in this application inherit from this class,
    so a single except clause can catch any application-specific error.

    Attributes:
        message: Human-readable error message
        details: Additional technical details for debugging
        recoverable: Whether the error can potentially be recovered from
    """

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        recoverable: bool = True
    ):
        self.message = message
        self.details = details
        self.recoverable = recoverable
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message

    def to_dict(self) -> dict:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'type': self.__class__.__name__,
            'message': self.message,
            'details': self.details,
            'recoverable': self.recoverable,
        }


def _short_url(url: Optional[str], limit: int = 100) -> str:
    url = url or ""
    return f"{url[:limit]}..." if len(url) > limit else url


class ValidationError(DownloaderException):
    """Raised when user input is rejected.

    Examples:
        - Empty URL, or a URL made only of unsafe characters
        - Selecting a download type that has no matching tracks
        - Setting a value that is not a download type
        - Malformed time range value
    """

    def __init__(
        self,
        message: str,
        value: Optional[str] = None,
        field: Optional[str] = None
    ):
        self.value = value
        self.field = field

        details_parts = []
        if field:
            details_parts.append(f"Field: {field}")
        if value is not None:
            details_parts.append(f"Value: {_short_url(str(value))}")

        super().__init__(
            message=message,
            details=", ".join(details_parts) if details_parts else None,
            recoverable=True
        )


class MediaUnavailableError(DownloaderException):
    """Raised when the provider returns no usable formats for a URL.

    The media may have been removed, made private, or the provider may be
    temporarily unable to reach it. The caller decides whether to retry.

    Attributes:
        url: The URL that was requested
    """

    def __init__(
        self,
        url: str,
        message: str = "The media you are trying to access may not be accessible "
                       "at this time, or it may have been removed.",
        original_error: Optional[Exception] = None
    ):
        self.url = url
        self.original_error = original_error

        details = f"URL: {_short_url(url)}"
        if original_error:
            details += f", Original: {type(original_error).__name__}"

        super().__init__(
            message=message,
            details=details,
            recoverable=True
        )


class InvalidStateError(DownloaderException):
    """Raised when a selection or type invariant has been violated.

    This signals a programming or UI error, such as building arguments for
    a download type that has no selected format. It is never recoverable
    at the core layer.

    Attributes:
        url: URL of the media session involved
        download_type: The type that was being processed
    """

    def __init__(
        self,
        url: str,
        message: str,
        download_type: Optional[object] = None
    ):
        self.url = url
        self.download_type = download_type

        details_parts = [f"URL: {_short_url(url)}"]
        if download_type is not None:
            details_parts.append(f"Type: {download_type}")

        super().__init__(
            message=message,
            details=", ".join(details_parts),
            recoverable=False
        )


class AuthenticationError(DownloaderException):
    """Raised when authentication is required or fails.

    Examples:
        - The user cancelled the authentication prompt
        - Invalid cookies-from-browser specification
    """

    def __init__(
        self,
        message: str = "Authentication required",
        auth_type: Optional[str] = None
    ):
        self.auth_type = auth_type
        super().__init__(
            message=message,
            details=f"Auth type: {auth_type}" if auth_type else None,
            recoverable=True
        )


class ConfigurationError(DownloaderException):
    """Raised for configuration-related errors.

    Examples:
        - Invalid configuration value
        - Unknown configuration key
        - Configuration file corruption
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        expected_type: Optional[str] = None
    ):
        self.config_key = config_key
        self.expected_type = expected_type

        details_parts = []
        if config_key:
            details_parts.append(f"Key: {config_key}")
        if expected_type:
            details_parts.append(f"Expected: {expected_type}")

        super().__init__(
            message=message,
            details=", ".join(details_parts) if details_parts else None,
            recoverable=True
        )
