"""Unit tests for format parsing and classification."""

import pytest

from ytdl_gui.core.formats import MediaFormat, classify, format_size, has_codec, is_positive


class TestHelpers:
    """Tests for the small value helpers."""

    def test_is_positive(self):
        assert is_positive(1)
        assert is_positive(0.5)
        assert not is_positive(0)
        assert not is_positive(-1)
        assert not is_positive(None)

    def test_has_codec(self):
        assert has_codec("avc1")
        assert not has_codec("none")
        assert not has_codec("")
        assert not has_codec("   ")
        assert not has_codec(None)

    @pytest.mark.parametrize("size,expected", [
        (None, "Unknown"),
        (0, "Unknown"),
        (512, "512 B"),
        (2048, "2.0 KB"),
        (5 * 1024 * 1024, "5.0 MB"),
        (3 * 1024 * 1024 * 1024, "3.0 GB"),
    ])
    def test_format_size(self, size, expected):
        assert format_size(size) == expected


class TestMediaFormat:
    """Tests for MediaFormat."""

    def test_from_info_dict(self):
        fmt = MediaFormat.from_info_dict({
            "format_id": "137",
            "ext": "mp4",
            "format_note": "1080p",
            "width": 1920,
            "height": 1080,
            "fps": 30,
            "vbr": 4400,
            "vcodec": "avc1.640028",
            "acodec": "none",
            "filesize_approx": 2 * 1024 * 1024,
        })

        assert fmt.identifier == "137"
        assert fmt.extension == "mp4"
        assert fmt.quality_name == "1080p"
        assert fmt.size == "2.0 MB"
        assert fmt.video_width == 1920
        assert fmt.video_bitrate == 4400
        assert fmt.audio_codec == "none"

    def test_from_info_dict_without_id(self):
        assert MediaFormat.from_info_dict({"ext": "mp4"}) is None
        assert MediaFormat.from_info_dict({"format_id": "  "}) is None

    def test_numeric_identifier_is_string(self):
        fmt = MediaFormat.from_info_dict({"format_id": 18})
        assert fmt.identifier == "18"

    @pytest.mark.parametrize("fields", [
        {"video_codec": "vp9"},
        {"video_width": 640},
        {"video_height": 360},
        {"video_bitrate": 800.0},
        {"video_fps": 24.0},
    ])
    def test_any_video_indication_is_video(self, fields):
        fmt = MediaFormat(identifier="x", audio_codec="opus", audio_bitrate=160.0, **fields)
        assert fmt.valid_video
        assert not fmt.valid_audio

    @pytest.mark.parametrize("fields", [
        {"audio_codec": "opus"},
        {"audio_sample_rate": 48000},
        {"audio_bitrate": 128.0},
        {"audio_channels": 2},
    ])
    def test_any_audio_indication_is_audio(self, fields):
        fmt = MediaFormat(identifier="x", video_codec="none", **fields)
        assert not fmt.valid_video
        assert fmt.valid_audio

    def test_no_indication(self):
        fmt = MediaFormat(identifier="x", video_codec="none", audio_codec="none", video_width=0)
        assert not fmt.valid_video
        assert not fmt.valid_audio

    def test_thumbnail_embedding(self):
        assert MediaFormat(identifier="1", extension="mp4").video_thumbnail_embedding
        assert not MediaFormat(identifier="1", extension="webm").video_thumbnail_embedding
        assert MediaFormat(identifier="1", extension="M4A").audio_thumbnail_embedding
        assert not MediaFormat(identifier="1", extension="wav").audio_thumbnail_embedding
        assert not MediaFormat(identifier="1").audio_thumbnail_embedding


class TestClassify:
    """Tests for classify()."""

    def test_categories(self, sample_formats):
        result = classify(sample_formats)

        assert [f.identifier for f in result.video] == ["137", "22"]
        assert [f.identifier for f in result.audio] == ["140"]
        assert [f.identifier for f in result.unknown] == ["sb0"]
        assert not result.unknown_formats_only

    def test_first_of_each_list_is_best(self, sample_formats):
        result = classify(sample_formats)

        for formats in (result.video, result.audio, result.unknown):
            assert formats[0].is_best
            assert not any(f.is_best for f in formats[1:])

    def test_video_never_audio(self, sample_formats):
        result = classify(sample_formats)
        audio_ids = {f.identifier for f in result.audio}
        assert "22" not in audio_ids

    def test_records_without_id_are_skipped(self):
        result = classify([{"ext": "mp4", "vcodec": "avc1"}, {"format_id": "18", "vcodec": "avc1"}])
        assert [f.identifier for f in result.video] == ["18"]

    def test_unknown_only(self, unknown_only_formats):
        result = classify(unknown_only_formats)
        assert result.unknown_formats_only
        assert [f.identifier for f in result.unknown] == ["u3", "u2", "u1"]

    def test_accepts_media_formats(self):
        formats = [MediaFormat(identifier="a", audio_codec="opus")]
        result = classify(formats)
        assert result.audio == formats
        assert formats[0].is_best
