"""Configuration management for the extended downloader.

This module provides centralized settings management with:
- JSON-based persistence
- Validation on load/save
- Default value handling
- Thread-safe access
- Immutable snapshots for the argument builder
"""

import os
import json
import threading
from dataclasses import dataclass, field, asdict, fields, replace
from typing import Any, Callable, Dict, List, Optional

from ytdl_gui.exceptions import ConfigurationError
from ytdl_gui.utils.logger import get_logger
from .defaults import DEFAULT_CONFIG_FILE, DEFAULT_DOWNLOAD_PATH, DEFAULT_RETRY_ATTEMPTS, PROGRAM_PATH
from .validators import ConfigValidator


@dataclass(frozen=True)
class DownloadSettings:
    """Snapshot of the download settings consulted by the argument builder.

    Instances are immutable; use ``dataclasses.replace`` (or
    ``ConfigManager.update``) to derive a changed copy.
    """
    # Output paths
    download_path: str = DEFAULT_DOWNLOAD_PATH
    program_path: str = PROGRAM_PATH
    separate_downloads: bool = True
    separate_batch_downloads: bool = True
    add_date_to_batch_download_folders: bool = True
    separate_into_website_url: bool = False

    # FFmpeg
    prefer_ffmpeg: bool = False
    fix_reddit: bool = True

    # Extra files and post-processing
    save_subtitles: bool = False
    subtitle_format: str = ""
    embed_subtitles: bool = False
    save_video_info: bool = False
    save_description: bool = False
    save_annotations: bool = False
    save_thumbnail: bool = False
    write_metadata: bool = False
    keep_original_files: bool = False

    # Network
    limit_downloads: bool = False
    download_limit: int = 0
    download_limit_type: int = 0  # 0 = K, 1 = M, 2 = G
    force_ipv4: bool = False
    force_ipv6: bool = False
    use_proxy: bool = False
    proxy_type: int = -1  # index into ProxyType, -1 = none
    proxy_ip: str = ""
    proxy_port: str = ""
    retry_attempts: int = DEFAULT_RETRY_ATTEMPTS

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'DownloadSettings':
        """Create from dictionary, ignoring unknown keys."""
        valid_keys = {f.name for f in fields(cls)}
        filtered_data = {k: v for k, v in data.items() if k in valid_keys}
        return cls(**filtered_data)


class ConfigManager:
    """Manages download settings with persistence.

    Features:
    - Thread-safe access
    - Automatic validation
    - JSON persistence
    - Change notifications
    - Frozen snapshots for argument building

    Usage:
        config = ConfigManager("ytdl_gui_config.json")
        config.load()
        config.set("save_thumbnail", True)
        settings = config.snapshot()
    """

    # Derived from the running program, never persisted
    TRANSIENT_KEYS = ('program_path',)

    def __init__(
        self,
        config_file: str = DEFAULT_CONFIG_FILE,
        auto_save: bool = True
    ):
        """Initialize configuration manager.

        Args:
            config_file: Path to configuration file
            auto_save: Automatically save on changes
        """
        self.config_file = config_file
        self.auto_save = auto_save

        self._settings = DownloadSettings()
        self._lock = threading.RLock()
        self._dirty = False
        self._callbacks: List[Callable[[str, Any, Any], None]] = []
        self._logger = get_logger()

    def load(self) -> bool:
        """Load settings from file.

        Missing files are created with default values.

        Returns:
            True if loaded successfully

        Raises:
            ConfigurationError: If the file exists but is not valid JSON
        """
        with self._lock:
            if not os.path.exists(self.config_file):
                self._settings = DownloadSettings()
                self.save()
                return True

            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(
                    f"Configuration file is corrupted: {e}",
                    config_key=self.config_file
                ) from e

            if not isinstance(data, dict):
                raise ConfigurationError(
                    "Configuration file must contain an object",
                    config_key=self.config_file,
                    expected_type="dict"
                )

            result = ConfigValidator.validate_config(data)
            for warning in result.warnings:
                self._logger.warning(warning, source="config")
            if not result.is_valid:
                self._logger.warning(result.error_message, source="config")

            self._settings = DownloadSettings.from_dict(result.sanitized_value)
            self._dirty = False
            return True

    def save(self) -> bool:
        """Save settings to file.

        Returns:
            True if saved successfully
        """
        with self._lock:
            data = {
                k: v for k, v in self._settings.to_dict().items()
                if k not in self.TRANSIENT_KEYS
            }
            try:
                with open(self.config_file, 'w', encoding='utf-8') as f:
                    json.dump(data, f, indent=2, ensure_ascii=False)
            except OSError as e:
                self._logger.error(f"Error saving config: {e}", source="config")
                return False

            self._dirty = False
            return True

    def get(self, key: str, default: Any = None) -> Any:
        """Get a settings value.

        Args:
            key: Settings key
            default: Default value if key not found

        Returns:
            Settings value or default
        """
        with self._lock:
            return getattr(self._settings, key, default)

    def set(self, key: str, value: Any) -> bool:
        """Set a settings value.

        Args:
            key: Settings key
            value: New value

        Returns:
            True if set successfully
        """
        with self._lock:
            if not hasattr(self._settings, key):
                return False

            if key not in self.TRANSIENT_KEYS:
                result = ConfigValidator.validate_single(key, value)
                if not result.is_valid:
                    return False
                value = result.sanitized_value

            return self._apply({key: value})

    def update(self, updates: Dict[str, Any]) -> bool:
        """Update multiple settings values.

        Unknown keys are ignored.

        Args:
            updates: Dictionary of key-value pairs

        Returns:
            True if all values were valid
        """
        with self._lock:
            known = {k: v for k, v in updates.items() if hasattr(self._settings, k)}
            persisted = {k: v for k, v in known.items() if k not in self.TRANSIENT_KEYS}

            result = ConfigValidator.validate_config(persisted)
            changes = dict(result.sanitized_value)
            changes.update({k: v for k, v in known.items() if k in self.TRANSIENT_KEYS})

            if changes:
                self._apply(changes)
            return result.is_valid

    def _apply(self, changes: Dict[str, Any]) -> bool:
        old_settings = self._settings
        self._settings = replace(old_settings, **changes)
        self._dirty = True

        for key, value in changes.items():
            self._notify_change(key, getattr(old_settings, key), value)

        if self.auto_save:
            self.save()
        return True

    def reset(self, key: Optional[str] = None):
        """Reset settings to defaults.

        Args:
            key: Specific key to reset (None = reset all)
        """
        with self._lock:
            if key:
                if hasattr(self._settings, key):
                    self._apply({key: getattr(DownloadSettings(), key)})
            else:
                self._settings = DownloadSettings()
                self._dirty = True

                if self.auto_save:
                    self.save()

    def snapshot(self) -> DownloadSettings:
        """Get the current settings as an immutable snapshot.

        Returns:
            Frozen DownloadSettings
        """
        with self._lock:
            return self._settings

    def get_all(self) -> dict:
        """Get all settings as dictionary."""
        with self._lock:
            return self._settings.to_dict()

    def is_dirty(self) -> bool:
        """Check if there are unsaved changes."""
        with self._lock:
            return self._dirty

    def add_change_callback(self, callback: Callable[[str, Any, Any], None]):
        """Add a callback for settings changes.

        Args:
            callback: Function(key, old_value, new_value)
        """
        with self._lock:
            self._callbacks.append(callback)

    def remove_change_callback(self, callback: Callable[[str, Any, Any], None]):
        """Remove a change callback."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def _notify_change(self, key: str, old_value: Any, new_value: Any):
        """Notify callbacks of a change."""
        for callback in self._callbacks:
            try:
                callback(key, old_value, new_value)
            except Exception as e:
                self._logger.exception(f"Settings callback failed for {key}", e, source="config")
