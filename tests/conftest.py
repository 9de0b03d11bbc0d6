"""Pytest configuration and shared fixtures."""

import pytest
import sys
import os
import tempfile

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from ytdl_gui.config.config_manager import DownloadSettings
from ytdl_gui.core.provider import MediaInfo
from ytdl_gui.utils.logger import Logger, LogLevel, set_logger


@pytest.fixture(autouse=True)
def quiet_logger():
    """Replace the global logger with one that writes nowhere."""
    logger = Logger(log_to_console=False, log_to_file=False, min_level=LogLevel.DEBUG)
    set_logger(logger)
    yield logger
    logger.shutdown()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def sample_youtube_url():
    """Sample YouTube video URL."""
    return "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


@pytest.fixture
def sample_formats():
    """Raw yt-dlp formats, worst first: 2 video, 1 audio, 1 unknown."""
    return [
        {
            "format_id": "sb0",
            "ext": "mhtml",
            "format_note": "storyboard",
            "vcodec": "none",
            "acodec": "none",
        },
        {
            "format_id": "140",
            "ext": "m4a",
            "format_note": "medium",
            "vcodec": "none",
            "acodec": "mp4a.40.2",
            "abr": 129.5,
            "asr": 44100,
            "audio_channels": 2,
            "filesize": 5000000,
        },
        {
            "format_id": "22",
            "ext": "mp4",
            "format_note": "720p",
            "width": 1280,
            "height": 720,
            "fps": 30,
            "vcodec": "avc1.64001F",
            "acodec": "mp4a.40.2",
            "filesize": 100000000,
        },
        {
            "format_id": "137",
            "ext": "mp4",
            "format_note": "1080p",
            "width": 1920,
            "height": 1080,
            "fps": 30,
            "vbr": 4400,
            "vcodec": "avc1.640028",
            "acodec": "none",
            "filesize": 200000000,
        },
    ]


@pytest.fixture
def unknown_only_formats():
    """Raw formats with neither video nor audio indication."""
    return [
        {"format_id": "u1", "ext": "bin"},
        {"format_id": "u2", "ext": "bin"},
        {"format_id": "u3", "ext": "bin"},
    ]


@pytest.fixture
def sample_media_info(sample_youtube_url, sample_formats):
    return MediaInfo(
        url=sample_youtube_url,
        title="Test Video Title",
        description="Test description",
        thumbnail_url="https://example.com/thumb.jpg",
        formats=sample_formats,
    )


class FakeProvider:
    """Provider returning canned information and counting calls."""

    def __init__(self, info=None, error=None, thumbnail=None):
        self.info = info
        self.error = error
        self.thumbnail = thumbnail
        self.info_calls = 0
        self.thumbnail_calls = 0
        self.authentication_seen = []

    def fetch_info(self, url, authentication=None):
        self.info_calls += 1
        self.authentication_seen.append(authentication)
        if self.error is not None:
            raise self.error
        return self.info

    def fetch_thumbnail(self, info):
        self.thumbnail_calls += 1
        return self.thumbnail


@pytest.fixture
def fake_provider(sample_media_info):
    return FakeProvider(info=sample_media_info)


@pytest.fixture
def settings():
    """Settings with every optional flag off and no sub-folders."""
    return DownloadSettings(
        download_path="/downloads",
        program_path="/opt/ytdl",
        separate_downloads=False,
        separate_batch_downloads=False,
        add_date_to_batch_download_folders=False,
        fix_reddit=False,
    )


class FakeFFmpeg:
    """FFmpeg probe with a fixed answer."""

    def __init__(self, path=None):
        self._path = path
        self.refresh_calls = 0

    @property
    def available(self):
        return self._path is not None

    @property
    def path(self):
        return self._path

    def refresh(self):
        self.refresh_calls += 1
        return self.available


@pytest.fixture
def no_ffmpeg():
    return FakeFFmpeg()


# Skip markers for tests requiring network
def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "network: marks tests as requiring network (deselect with '-m \"not network\"')"
    )
