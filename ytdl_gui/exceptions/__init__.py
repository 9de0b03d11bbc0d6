"""Custom exceptions for the extended downloader."""

from .errors import (
    DownloaderException,
    ValidationError,
    MediaUnavailableError,
    InvalidStateError,
    AuthenticationError,
    ConfigurationError,
)

__all__ = [
    'DownloaderException',
    'ValidationError',
    'MediaUnavailableError',
    'InvalidStateError',
    'AuthenticationError',
    'ConfigurationError',
]
