"""Configuration management modules."""

from .validators import URLValidator, TimeValidator, ConfigValidator, ValidationResult
from .config_manager import ConfigManager, DownloadSettings

__all__ = [
    'URLValidator',
    'TimeValidator',
    'ConfigValidator',
    'ValidationResult',
    'ConfigManager',
    'DownloadSettings',
]
