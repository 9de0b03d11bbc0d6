"""Proxy configuration for downloads.

The order of ``ProxyType`` is the numeric proxy type stored in the
download settings.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ProxyType(Enum):
    """Supported proxy types."""
    HTTP = "http"
    HTTPS = "https"
    SOCKS4 = "socks4"
    SOCKS5 = "socks5"
    SOCKS5H = "socks5h"  # SOCKS5 with remote DNS

    @property
    def protocol(self) -> str:
        """Get the URL prefix for this proxy type."""
        return f"{self.value}://"

    @classmethod
    def from_index(cls, index: int) -> Optional['ProxyType']:
        """Get the proxy type stored as ``index`` in the settings.

        Returns:
            ProxyType or None when the index is out of range
        """
        members = list(cls)
        if 0 <= index < len(members):
            return members[index]
        return None


@dataclass(frozen=True)
class ProxyConfig:
    """Proxy configuration.

    Attributes:
        proxy_type: Type of proxy (http, socks5, etc.)
        host: Proxy server hostname or IP
        port: Proxy server port
    """
    proxy_type: ProxyType
    host: str
    port: str

    def to_argument(self) -> str:
        """Format as the value of ``--proxy``."""
        return f"{self.proxy_type.protocol}{self.host}:{self.port}/"

    @classmethod
    def from_settings(cls, settings) -> Optional['ProxyConfig']:
        """Create ProxyConfig from download settings.

        Args:
            settings: DownloadSettings snapshot

        Returns:
            ProxyConfig, or None unless the proxy is enabled and fully configured
        """
        if not settings.use_proxy or settings.proxy_type < 0:
            return None

        proxy_type = ProxyType.from_index(settings.proxy_type)
        host = (settings.proxy_ip or "").strip()
        port = str(settings.proxy_port or "").strip()
        if proxy_type is None or not host or not port:
            return None

        return cls(proxy_type=proxy_type, host=host, port=port)
