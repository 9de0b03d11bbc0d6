"""Tests for the command-line entry point."""

import os

import pytest

import main
from ytdl_gui.core.provider import YtDlpProvider
from ytdl_gui.exceptions import MediaUnavailableError


URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


@pytest.fixture
def config_path(temp_dir):
    return os.path.join(temp_dir, "settings.json")


@pytest.fixture
def patched_provider(monkeypatch, sample_media_info):
    monkeypatch.setattr(
        YtDlpProvider, "fetch_info",
        lambda self, url, authentication=None: sample_media_info
    )


class TestMain:
    """Tests for main()."""

    def test_prints_protected_arguments(self, patched_provider, config_path, capsys):
        code = main.main([URL, "--config", config_path, "--username", "alice", "--password", "secret"])
        out = capsys.readouterr().out

        assert code == 0
        assert "-f 137+140/best" in out
        assert "--username *** --password ***" in out
        assert "secret" not in out

    def test_type_and_format(self, patched_provider, config_path, capsys):
        code = main.main([URL, "--config", config_path, "--type", "video", "--video", "22", "--no-audio"])

        assert code == 0
        assert "-f 22/best" in capsys.readouterr().out

    def test_list(self, patched_provider, config_path, capsys):
        code = main.main([URL, "--config", config_path, "--list"])
        out = capsys.readouterr().out

        assert code == 0
        assert "Test Video Title" in out
        assert "Video formats:" in out
        assert "(do not download)" in out

    def test_error_reported(self, monkeypatch, config_path, capsys):
        def unavailable(self, url, authentication=None):
            raise MediaUnavailableError(url)

        monkeypatch.setattr(YtDlpProvider, "fetch_info", unavailable)

        assert main.main([URL, "--config", config_path]) == 1
        assert URL in capsys.readouterr().err

    def test_unknown_format_id(self, patched_provider, config_path, capsys):
        assert main.main([URL, "--config", config_path, "--video", "999"]) == 1
        assert "No format with this identifier" in capsys.readouterr().err
