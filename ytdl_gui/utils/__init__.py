"""Utility modules for the extended downloader."""

from .logger import Logger, LogLevel, get_logger, set_logger
from .error_handler import (
    ErrorHandler,
    ErrorInfo,
    ErrorSeverity,
    get_error_handler,
    set_error_handler,
)

__all__ = [
    'Logger',
    'LogLevel',
    'get_logger',
    'set_logger',
    'ErrorHandler',
    'ErrorInfo',
    'ErrorSeverity',
    'get_error_handler',
    'set_error_handler',
]
