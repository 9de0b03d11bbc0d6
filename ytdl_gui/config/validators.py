"""Input validation utilities for the extended downloader.

This module validates the inputs that reach the argument builder: media
URLs, time range bounds and download settings.
"""

import re
from typing import Optional, List, Any, Dict
from dataclasses import dataclass
from urllib.parse import urlparse

from ytdl_gui.exceptions import ValidationError
from .defaults import (
    BAD_URL_CHARS,
    ARCHIVE_URL_PREFIX,
    REDDIT_DOMAINS,
    MAX_DOWNLOAD_LIMIT,
    MAX_RETRY_ATTEMPTS,
)


@dataclass
class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether validation passed
        error_message: Error message if validation failed
        sanitized_value: Cleaned/normalized value (if applicable)
        warnings: Non-fatal warnings about the input
    """
    is_valid: bool
    error_message: Optional[str] = None
    sanitized_value: Any = None
    warnings: List[str] = None

    def __post_init__(self):
        if self.warnings is None:
            self.warnings = []

    def __bool__(self) -> bool:
        return self.is_valid


class URLValidator:
    """Validator for media URLs.

    Any site supported by the external tool is accepted, so validation only
    strips characters that would break the quoted URL argument and rejects
    what is left empty.
    """

    @classmethod
    def sanitize(cls, url: Optional[str]) -> str:
        """Trim unsafe characters from both ends of a URL.

        Args:
            url: The URL to sanitize

        Returns:
            The trimmed URL

        Raises:
            ValidationError: If the URL is empty once trimmed
        """
        if url is None or not url.strip():
            raise ValidationError("URL is null/empty/whitespace.", value=url, field="url")

        trimmed = url.strip().strip(BAD_URL_CHARS).strip()
        if not trimmed:
            raise ValidationError("URL is null/empty/whitespace.", value=url, field="url")
        return trimmed

    @classmethod
    def validate(cls, url: Optional[str]) -> ValidationResult:
        """Validate a media URL.

        Args:
            url: The URL to validate

        Returns:
            ValidationResult with the sanitized URL
        """
        try:
            sanitized = cls.sanitize(url)
        except ValidationError as e:
            return ValidationResult(is_valid=False, error_message=e.message)

        warnings = []
        if not cls.is_archive(sanitized) and not urlparse(sanitized).scheme:
            warnings.append("URL has no scheme; the external tool may not recognise it")

        return ValidationResult(
            is_valid=True,
            sanitized_value=sanitized,
            warnings=warnings
        )

    @staticmethod
    def is_archive(url: str) -> bool:
        """Check whether the URL targets the youtube archive extractor."""
        return url.lower().startswith(ARCHIVE_URL_PREFIX)

    @classmethod
    def get_url_base(cls, url: str) -> str:
        """Get the site name used for per-website download folders.

        Args:
            url: Media URL

        Returns:
            Lower-cased host name without a leading ``www.``
        """
        candidate = url if "://" in url else f"https://{url}"
        host = (urlparse(candidate).hostname or "").lower()
        if host.startswith("www."):
            host = host[4:]
        return host or "unknown"

    @classmethod
    def is_reddit(cls, url: str) -> bool:
        """Check whether the URL points to reddit."""
        host = cls.get_url_base(url)
        return any(host == domain or host.endswith("." + domain) for domain in REDDIT_DOMAINS)


class TimeValidator:
    """Validator for ``--download-sections`` time bounds."""

    TIME_PATTERN = re.compile(
        r'^(?:(?:(?P<hours>\d+):)?(?P<minutes>\d{1,2}):)?(?P<seconds>\d+(?:\.\d+)?)$'
    )

    @classmethod
    def validate(cls, value: Optional[str]) -> ValidationResult:
        """Validate and normalize a time bound.

        Accepts ``HH:MM:SS``, ``MM:SS`` or plain seconds, each with optional
        fractional seconds.

        Args:
            value: Time string

        Returns:
            ValidationResult whose sanitized value is ``HH:MM:SS[.fff]``
        """
        if value is None or not str(value).strip():
            return ValidationResult(is_valid=False, error_message="Time cannot be empty")

        match = cls.TIME_PATTERN.match(str(value).strip())
        if not match:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid time format: {value}"
            )

        hours = int(match.group('hours') or 0)
        minutes = int(match.group('minutes') or 0)
        seconds_str = match.group('seconds')
        whole, _, fraction = seconds_str.partition('.')
        seconds = int(whole)

        if match.group('minutes') is not None and (minutes > 59 or seconds > 59):
            return ValidationResult(
                is_valid=False,
                error_message=f"Minutes and seconds must be below 60: {value}"
            )

        total = hours * 3600 + minutes * 60 + seconds
        hours, remainder = divmod(total, 3600)
        minutes, seconds = divmod(remainder, 60)

        normalized = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
        if fraction:
            normalized += f".{fraction}"

        return ValidationResult(is_valid=True, sanitized_value=normalized)

    @classmethod
    def normalize(cls, value: str, field: str = "time") -> str:
        """Normalize a time bound or raise.

        Raises:
            ValidationError: If the value is not a valid time
        """
        result = cls.validate(value)
        if not result:
            raise ValidationError(result.error_message, value=value, field=field)
        return result.sanitized_value


class ConfigValidator:
    """Validator for download settings dictionaries."""

    CONFIG_SCHEMA: Dict[str, Dict[str, Any]] = {
        'download_path': {'type': str, 'default': './downloads'},
        'separate_downloads': {'type': bool, 'default': True},
        'separate_batch_downloads': {'type': bool, 'default': True},
        'add_date_to_batch_download_folders': {'type': bool, 'default': True},
        'separate_into_website_url': {'type': bool, 'default': False},
        'prefer_ffmpeg': {'type': bool, 'default': False},
        'fix_reddit': {'type': bool, 'default': True},
        'save_subtitles': {'type': bool, 'default': False},
        'subtitle_format': {'type': str, 'default': ''},
        'embed_subtitles': {'type': bool, 'default': False},
        'save_video_info': {'type': bool, 'default': False},
        'save_description': {'type': bool, 'default': False},
        'save_annotations': {'type': bool, 'default': False},
        'save_thumbnail': {'type': bool, 'default': False},
        'write_metadata': {'type': bool, 'default': False},
        'keep_original_files': {'type': bool, 'default': False},
        'limit_downloads': {'type': bool, 'default': False},
        'download_limit': {'type': int, 'default': 0, 'min': 0, 'max': MAX_DOWNLOAD_LIMIT},
        'download_limit_type': {'type': int, 'default': 0, 'allowed': [0, 1, 2]},
        'force_ipv4': {'type': bool, 'default': False},
        'force_ipv6': {'type': bool, 'default': False},
        'use_proxy': {'type': bool, 'default': False},
        'proxy_type': {'type': int, 'default': -1, 'min': -1, 'max': 4},
        'proxy_ip': {'type': str, 'default': ''},
        'proxy_port': {'type': str, 'default': ''},
        'retry_attempts': {'type': int, 'default': 10, 'min': 0, 'max': MAX_RETRY_ATTEMPTS},
    }

    TRUE_VALUES = ('true', '1', 'yes', 'on')
    FALSE_VALUES = ('false', '0', 'no', 'off')

    @classmethod
    def _to_bool(cls, value: Any) -> bool:
        """Convert a string or 0/1 flag written by hand into a bool.

        Raises:
            ValueError: If the value is not a recognised flag
        """
        if isinstance(value, (int, float)) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            text = value.strip().lower()
            if text in cls.TRUE_VALUES:
                return True
            if text in cls.FALSE_VALUES:
                return False
        raise ValueError(f"Not a boolean: {value!r}")

    @classmethod
    def validate_config(cls, config: Dict[str, Any]) -> ValidationResult:
        """Validate an entire settings dictionary.

        Args:
            config: Settings dictionary to validate

        Returns:
            ValidationResult with validated/sanitized settings
        """
        errors = []
        warnings = []
        sanitized = {}

        for key, schema in cls.CONFIG_SCHEMA.items():
            if key not in config or config[key] is None:
                continue
            value = config[key]

            expected_type = schema['type']
            if not isinstance(value, expected_type) or (
                    expected_type is int and isinstance(value, bool)):
                try:
                    value = cls._to_bool(value) if expected_type is bool else expected_type(value)
                except (ValueError, TypeError):
                    errors.append(
                        f"Invalid type for {key}: expected {expected_type.__name__}"
                    )
                    sanitized[key] = schema['default']
                    continue

            allowed = schema.get('allowed')
            if allowed and value not in allowed:
                warnings.append(f"Invalid value for {key}: {value}. Using default.")
                sanitized[key] = schema['default']
                continue

            if expected_type is int:
                min_val = schema.get('min')
                max_val = schema.get('max')
                if min_val is not None and value < min_val:
                    value = min_val
                    warnings.append(f"{key} was below minimum, set to {min_val}")
                if max_val is not None and value > max_val:
                    value = max_val
                    warnings.append(f"{key} was above maximum, set to {max_val}")

            sanitized[key] = value

        for key in config:
            if key not in cls.CONFIG_SCHEMA and key != 'program_path':
                warnings.append(f"Unknown config key: {key}")

        if errors:
            return ValidationResult(
                is_valid=False,
                error_message="; ".join(errors),
                sanitized_value=sanitized,
                warnings=warnings
            )

        return ValidationResult(
            is_valid=True,
            sanitized_value=sanitized,
            warnings=warnings
        )

    @classmethod
    def validate_single(cls, key: str, value: Any) -> ValidationResult:
        """Validate a single settings value.

        Args:
            key: Settings key
            value: Value to validate

        Returns:
            ValidationResult whose sanitized value is the cleaned value
        """
        if key not in cls.CONFIG_SCHEMA:
            return ValidationResult(
                is_valid=False,
                error_message=f"Unknown config key: {key}"
            )

        result = cls.validate_config({key: value})
        return ValidationResult(
            is_valid=result.is_valid,
            error_message=result.error_message,
            sanitized_value=result.sanitized_value.get(key),
            warnings=result.warnings
        )
