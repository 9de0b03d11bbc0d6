"""Authentication module for the extended downloader.

This module provides authentication and proxy support:
- Account credentials with explicitly zeroed secret buffers
- Cookie-based authentication (browser import or file)
- Proxy support (HTTP, SOCKS4, SOCKS5)
"""

from .auth_manager import (
    AuthenticationDetails,
    BrowserType,
    SecretBuffer,
    parse_browser_spec,
    validate_browser_spec,
)
from .proxy_manager import ProxyConfig, ProxyType

__all__ = [
    # Credentials
    'AuthenticationDetails',
    'BrowserType',
    'SecretBuffer',
    'parse_browser_spec',
    'validate_browser_spec',
    # Proxy
    'ProxyConfig',
    'ProxyType',
]
