"""Unit tests for format list rows."""

from ytdl_gui.config.defaults import DO_NOT_DOWNLOAD_LABEL
from ytdl_gui.core.catalog import DownloadType, FormatCatalog, MediaStatus
from ytdl_gui.core.formats import MediaFormat
from ytdl_gui.core.presentation import (
    AUDIO_COLUMNS, VIDEO_COLUMNS, audio_row, build_rows, unknown_row, video_row,
)


class TestRows:
    """Tests for the row builders."""

    def test_video_row_without_audio(self):
        fmt = MediaFormat(
            identifier="137", extension="mp4", quality_name="1080p", size="200.0 MB",
            video_width=1920, video_height=1080, video_fps=30, video_bitrate=4400,
            video_codec="avc1", audio_codec="none",
        )
        row = video_row(fmt)

        assert len(row) == len(VIDEO_COLUMNS)
        assert row == (
            "1080p", "30", "mp4", "200.0 MB", "4400Kbps", "1920x1080", "avc1",
            "-", "-", "-", "-", "137",
        )

    def test_video_row_unknown_values(self):
        row = video_row(MediaFormat(identifier="1", video_codec="vp9"))

        assert row[0] == "?"
        assert row[1] == "?"
        assert row[2] == "Unknown"
        assert row[4] == "?"
        assert row[5] == "-1x-1"

    def test_video_row_with_audio(self):
        fmt = MediaFormat(
            identifier="22", video_codec="avc1", audio_codec="mp4a",
            audio_bitrate=128, audio_sample_rate=44100, audio_channels=2,
        )
        row = video_row(fmt)
        assert row[7:11] == ("128Kbps", "44100Hz", "mp4a", "2")

    def test_audio_row(self):
        fmt = MediaFormat(
            identifier="140", extension="m4a", size="4.8 MB",
            audio_bitrate=129.5, audio_sample_rate=44100, audio_codec="mp4a", audio_channels=2,
        )
        row = audio_row(fmt)

        assert len(row) == len(AUDIO_COLUMNS)
        assert row == ("129.5Kbps", "m4a", "4.8 MB", "44100Hz", "mp4a", "2", "140")

    def test_unknown_row_layout(self):
        row = unknown_row(MediaFormat(identifier="sb0", extension="mhtml"))
        assert len(row) == len(VIDEO_COLUMNS)
        assert row[-1] == "sb0"
        assert row[7] == "-"


class TestBuildRows:
    """Tests for build_rows()."""

    def test_ignore_row_first(self, sample_formats):
        catalog = FormatCatalog.from_formats(sample_formats)
        rows = build_rows(catalog.unknown, "unknown")

        assert rows[0].identifier is None
        assert rows[0].columns == (DO_NOT_DOWNLOAD_LABEL,)
        assert rows[1].identifier == "sb0"

    def test_statuses(self, sample_formats):
        catalog = FormatCatalog.from_formats(sample_formats)
        catalog.change_type(DownloadType.VIDEO)
        catalog.video.select_identifier("22")

        rows = build_rows(catalog.video, "video")
        assert rows[0].status == MediaStatus.BEST
        assert rows[1].status == MediaStatus.SELECTED

    def test_rows_map_back_to_catalog(self, sample_formats):
        catalog = FormatCatalog.from_formats(sample_formats)
        for row in build_rows(catalog.video, "video"):
            assert catalog.video.find(row.identifier).identifier == row.identifier
