"""Authentication details for media that requires an account.

Passwords are held in ``SecretBuffer`` objects that the owning
``AuthenticationDetails`` zeroes explicitly when the media session ends.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union

from ytdl_gui.exceptions import AuthenticationError


class BrowserType(Enum):
    """Supported browsers for cookie extraction."""
    BRAVE = "brave"
    CHROME = "chrome"
    CHROMIUM = "chromium"
    EDGE = "edge"
    FIREFOX = "firefox"
    OPERA = "opera"
    SAFARI = "safari"
    VIVALDI = "vivaldi"
    WHALE = "whale"


SUPPORTED_BROWSERS = [b.value for b in BrowserType]

# BROWSER[+KEYRING][:PROFILE][::CONTAINER]
_BROWSER_SPEC = re.compile(
    r'^(?P<browser>[^+:]+)(?:\+(?P<keyring>[^:]+))?(?::(?P<profile>(?:[^:]|:(?!:))*))?(?:::(?P<container>.+))?$'
)


def validate_browser_spec(spec: str) -> str:
    """Validate a ``--cookies-from-browser`` specification.

    Args:
        spec: Browser spec, e.g. ``firefox`` or ``chrome:Profile 1``

    Returns:
        The spec with the browser name lower-cased

    Raises:
        AuthenticationError: If the browser is not supported
    """
    match = _BROWSER_SPEC.match(spec.strip()) if spec else None
    if not match:
        raise AuthenticationError(
            f"Invalid cookies-from-browser value: {spec!r}",
            auth_type="cookies-from-browser"
        )

    browser = match.group('browser').lower()
    if browser not in SUPPORTED_BROWSERS:
        raise AuthenticationError(
            f"Unsupported browser. Use one of: {', '.join(SUPPORTED_BROWSERS)}",
            auth_type="cookies-from-browser"
        )

    return browser + spec.strip()[len(browser):]


def parse_browser_spec(spec: str) -> Tuple[str, Optional[str], Optional[str], Optional[str]]:
    """Split a browser spec into the tuple yt-dlp expects.

    Returns:
        Tuple of (browser, profile, keyring, container)

    Raises:
        AuthenticationError: If the browser spec is invalid
    """
    match = _BROWSER_SPEC.match(validate_browser_spec(spec))
    return (
        match.group('browser'),
        match.group('profile') or None,
        match.group('keyring').upper() if match.group('keyring') else None,
        match.group('container') or None,
    )


class SecretBuffer:
    """Mutable buffer holding a secret.

    The buffer takes ownership of the ``bytearray`` it is given; nothing
    else should keep a reference to it. ``clear`` overwrites every byte
    before truncating, so the secret does not linger until collection.
    """

    __slots__ = ('_buffer',)

    def __init__(self, value: Union[str, bytes, bytearray] = b""):
        if isinstance(value, bytearray):
            self._buffer = value
        elif isinstance(value, str):
            self._buffer = bytearray(value.encode('utf-8'))
        else:
            self._buffer = bytearray(value)

    def reveal(self) -> str:
        """Decode the secret for placement in an argument string."""
        return self._buffer.decode('utf-8')

    def clear(self):
        """Zero and release the secret."""
        for i in range(len(self._buffer)):
            self._buffer[i] = 0
        del self._buffer[:]

    @property
    def is_cleared(self) -> bool:
        return len(self._buffer) == 0

    def __len__(self) -> int:
        return len(self._buffer)

    def __bool__(self) -> bool:
        return len(self._buffer) > 0

    def __repr__(self) -> str:
        return f"SecretBuffer(<{len(self._buffer)} bytes>)"


@dataclass(repr=False)
class AuthenticationDetails:
    """Authentication used for one media session.

    Attributes:
        username: Account username
        password: Account password
        two_factor: Two-factor authentication code
        media_password: Per-video password
        netrc: Use the .netrc file for authentication
        cookies_file: Path to a Netscape cookies file
        cookies_from_browser: Browser spec to read cookies from
    """
    username: Optional[str] = None
    password: Optional[SecretBuffer] = None
    two_factor: Optional[str] = None
    media_password: Optional[SecretBuffer] = None
    netrc: bool = False
    cookies_file: Optional[str] = None
    cookies_from_browser: Optional[str] = None

    @classmethod
    def from_strings(
        cls,
        username: Optional[str] = None,
        password: Optional[str] = None,
        two_factor: Optional[str] = None,
        media_password: Optional[str] = None,
        netrc: bool = False,
        cookies_file: Optional[str] = None,
        cookies_from_browser: Optional[str] = None
    ) -> 'AuthenticationDetails':
        """Create authentication details from plain values.

        Raises:
            AuthenticationError: If the browser spec is invalid
        """
        if cookies_from_browser:
            cookies_from_browser = validate_browser_spec(cookies_from_browser)

        return cls(
            username=username or None,
            password=SecretBuffer(password) if password else None,
            two_factor=two_factor or None,
            media_password=SecretBuffer(media_password) if media_password else None,
            netrc=netrc,
            cookies_file=cookies_file or None,
            cookies_from_browser=cookies_from_browser or None,
        )

    @property
    def is_empty(self) -> bool:
        """Whether no authentication method is configured."""
        return not any((
            self.username and self.username.strip(),
            self.password,
            self.two_factor and self.two_factor.strip(),
            self.media_password,
            self.netrc,
            self.cookies_file and self.cookies_file.strip(),
            self.cookies_from_browser and self.cookies_from_browser.strip(),
        ))

    def get_password(self) -> str:
        return self.password.reveal() if self.password else ""

    def get_media_password(self) -> str:
        return self.media_password.reveal() if self.media_password else ""

    def clear(self):
        """Zero both secret buffers and drop every credential."""
        self.username = None

        if self.password is not None:
            self.password.clear()
        self.password = None

        self.two_factor = None

        if self.media_password is not None:
            self.media_password.clear()
        self.media_password = None

        self.netrc = False
        self.cookies_file = None
        self.cookies_from_browser = None

    def __repr__(self) -> str:
        return (
            f"AuthenticationDetails(username={'***' if self.username else None}, "
            f"password={self.password!r}, media_password={self.media_password!r}, "
            f"netrc={self.netrc})"
        )
