"""Unit tests for authentication and proxy modules."""

import pytest

from ytdl_gui.auth import (
    AuthenticationDetails,
    ProxyConfig,
    ProxyType,
    SecretBuffer,
    parse_browser_spec,
    validate_browser_spec,
)
from ytdl_gui.config.config_manager import DownloadSettings
from ytdl_gui.exceptions import AuthenticationError


class TestSecretBuffer:
    """Tests for SecretBuffer."""

    def test_reveal(self):
        assert SecretBuffer("päss").reveal() == "päss"
        assert SecretBuffer(b"raw").reveal() == "raw"

    def test_takes_ownership_of_bytearray(self):
        raw = bytearray(b"secret")
        buffer = SecretBuffer(raw)

        buffer.clear()

        assert raw == bytearray()
        assert buffer.is_cleared

    def test_clear_zeroes_before_truncating(self):
        raw = bytearray(b"secret")
        view = memoryview(raw)
        buffer = SecretBuffer(raw)

        # A live export blocks resizing, so only the zeroing can happen
        with pytest.raises(BufferError):
            buffer.clear()

        assert bytes(view) == b"\x00" * 6
        view.release()

    def test_bool_and_len(self):
        buffer = SecretBuffer("abc")
        assert buffer
        assert len(buffer) == 3
        buffer.clear()
        assert not buffer
        assert len(buffer) == 0

    def test_repr_hides_secret(self):
        assert "secret" not in repr(SecretBuffer("secret"))


class TestAuthenticationDetails:
    """Tests for AuthenticationDetails."""

    def test_from_strings(self):
        auth = AuthenticationDetails.from_strings(
            username="alice", password="secret", media_password="", cookies_from_browser="Chrome"
        )

        assert auth.username == "alice"
        assert auth.get_password() == "secret"
        assert auth.media_password is None
        assert auth.get_media_password() == ""
        assert auth.cookies_from_browser == "chrome"

    def test_is_empty(self):
        assert AuthenticationDetails().is_empty
        assert AuthenticationDetails.from_strings(username="   ").is_empty
        assert not AuthenticationDetails.from_strings(netrc=True).is_empty
        assert not AuthenticationDetails.from_strings(cookies_file="cookies.txt").is_empty

    def test_clear(self):
        auth = AuthenticationDetails.from_strings(
            username="alice", password="secret", two_factor="123456",
            media_password="letmein", netrc=True, cookies_file="c.txt",
        )
        password, media_password = auth.password, auth.media_password

        auth.clear()

        assert password.is_cleared
        assert media_password.is_cleared
        assert auth.is_empty

    def test_repr_hides_secrets(self):
        auth = AuthenticationDetails.from_strings(username="alice", password="secret")
        text = repr(auth)
        assert "alice" not in text
        assert "secret" not in text


class TestBrowserSpec:
    """Tests for cookies-from-browser specs."""

    @pytest.mark.parametrize("spec,expected", [
        ("firefox", "firefox"),
        ("Chrome:Profile 1", "chrome:Profile 1"),
        ("chromium+gnomekeyring", "chromium+gnomekeyring"),
    ])
    def test_valid(self, spec, expected):
        assert validate_browser_spec(spec) == expected

    @pytest.mark.parametrize("spec", ["", "netscape", "+keyring", None])
    def test_invalid(self, spec):
        with pytest.raises(AuthenticationError):
            validate_browser_spec(spec)

    def test_parse(self):
        assert parse_browser_spec("firefox") == ("firefox", None, None, None)
        assert parse_browser_spec("chrome+basictext:Default::work") == (
            "chrome", "Default", "BASICTEXT", "work"
        )


class TestProxy:
    """Tests for proxy configuration."""

    def test_protocols(self):
        assert ProxyType.HTTP.protocol == "http://"
        assert ProxyType.SOCKS5H.protocol == "socks5h://"

    def test_from_index(self):
        assert ProxyType.from_index(0) == ProxyType.HTTP
        assert ProxyType.from_index(3) == ProxyType.SOCKS5
        assert ProxyType.from_index(5) is None
        assert ProxyType.from_index(-1) is None

    def test_to_argument(self):
        proxy = ProxyConfig(ProxyType.SOCKS5, "10.0.0.1", "1080")
        assert proxy.to_argument() == "socks5://10.0.0.1:1080/"

    def test_from_settings(self):
        settings = DownloadSettings(use_proxy=True, proxy_type=1, proxy_ip=" proxy.local ", proxy_port="3128")
        proxy = ProxyConfig.from_settings(settings)

        assert proxy == ProxyConfig(ProxyType.HTTPS, "proxy.local", "3128")

    @pytest.mark.parametrize("changes", [
        {"use_proxy": False},
        {"proxy_type": -1},
        {"proxy_ip": "  "},
        {"proxy_port": ""},
    ])
    def test_incomplete_settings(self, changes):
        values = dict(use_proxy=True, proxy_type=0, proxy_ip="proxy", proxy_port="8080")
        values.update(changes)
        assert ProxyConfig.from_settings(DownloadSettings(**values)) is None
