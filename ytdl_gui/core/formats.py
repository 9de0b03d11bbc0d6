"""Format classification for media returned by the provider.

Raw yt-dlp format records are turned into ``MediaFormat`` objects and
sorted into video, audio and unknown lists.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from ytdl_gui.config.defaults import AUDIO_THUMBNAIL_EXTENSIONS, VIDEO_THUMBNAIL_EXTENSIONS


def is_positive(value: Optional[float]) -> bool:
    return value is not None and value > 0


def has_codec(value: Optional[str]) -> bool:
    return value is not None and value.strip() != "" and value != "none"


def format_size(size: Optional[float]) -> str:
    """Get formatted file size string."""
    if not size:
        return "Unknown"

    if size >= 1024 * 1024 * 1024:
        return f"{size / (1024 * 1024 * 1024):.1f} GB"
    elif size >= 1024 * 1024:
        return f"{size / (1024 * 1024):.1f} MB"
    elif size >= 1024:
        return f"{size / 1024:.1f} KB"
    return f"{int(size)} B"


@dataclass
class MediaFormat:
    """A single format offered by the provider.

    Attributes:
        identifier: Provider format id, used in the ``-f`` selector
        extension: File extension (mp4, webm, etc.)
        quality_name: Provider quality note (e.g. "1080p")
        size: Human readable size
        video_width: Video width in pixels
        video_height: Video height in pixels
        video_fps: Frames per second
        video_bitrate: Video bitrate in Kbps
        video_codec: Video codec, "none" when there is no video
        audio_sample_rate: Sample rate in Hz
        audio_bitrate: Audio bitrate in Kbps
        audio_channels: Channel count
        audio_codec: Audio codec, "none" when there is no audio
        is_best: Whether this is the provider's default pick for its list
    """
    identifier: str
    extension: Optional[str] = None
    quality_name: Optional[str] = None
    size: str = "Unknown"
    video_width: Optional[int] = None
    video_height: Optional[int] = None
    video_fps: Optional[float] = None
    video_bitrate: Optional[float] = None
    video_codec: Optional[str] = None
    audio_sample_rate: Optional[int] = None
    audio_bitrate: Optional[float] = None
    audio_channels: Optional[int] = None
    audio_codec: Optional[str] = None
    is_best: bool = False

    @property
    def valid_video(self) -> bool:
        """Whether the format carries any indication of a video stream."""
        return (
            has_codec(self.video_codec)
            or is_positive(self.video_width)
            or is_positive(self.video_height)
            or is_positive(self.video_bitrate)
            or is_positive(self.video_fps)
        )

    @property
    def has_audio_indication(self) -> bool:
        """Whether the format carries any indication of an audio stream."""
        return (
            has_codec(self.audio_codec)
            or is_positive(self.audio_sample_rate)
            or is_positive(self.audio_bitrate)
            or is_positive(self.audio_channels)
        )

    @property
    def valid_audio(self) -> bool:
        """Whether the format is an audio format (never true for video)."""
        return not self.valid_video and self.has_audio_indication

    @property
    def video_thumbnail_embedding(self) -> bool:
        """Whether the video container accepts an embedded thumbnail."""
        return (self.extension or "").lower() in VIDEO_THUMBNAIL_EXTENSIONS

    @property
    def audio_thumbnail_embedding(self) -> bool:
        """Whether the audio container accepts an embedded thumbnail."""
        return (self.extension or "").lower() in AUDIO_THUMBNAIL_EXTENSIONS

    @classmethod
    def from_info_dict(cls, fmt: Dict[str, Any]) -> Optional['MediaFormat']:
        """Parse a format dictionary from yt-dlp.

        Args:
            fmt: Format dictionary from yt-dlp

        Returns:
            MediaFormat, or None when the record has no format id
        """
        format_id = fmt.get('format_id')
        if format_id is None or str(format_id).strip() == "":
            return None

        return cls(
            identifier=str(format_id),
            extension=fmt.get('ext'),
            quality_name=fmt.get('format_note'),
            size=format_size(fmt.get('filesize') or fmt.get('filesize_approx')),
            video_width=fmt.get('width'),
            video_height=fmt.get('height'),
            video_fps=fmt.get('fps'),
            video_bitrate=fmt.get('vbr'),
            video_codec=fmt.get('vcodec'),
            audio_sample_rate=fmt.get('asr'),
            audio_bitrate=fmt.get('abr'),
            audio_channels=fmt.get('audio_channels'),
            audio_codec=fmt.get('acodec'),
        )


@dataclass
class ClassifiedFormats:
    """Formats split by category, best first."""
    video: List[MediaFormat] = field(default_factory=list)
    audio: List[MediaFormat] = field(default_factory=list)
    unknown: List[MediaFormat] = field(default_factory=list)

    @property
    def unknown_formats_only(self) -> bool:
        return not self.video and not self.audio


def classify(records: Iterable[Any]) -> ClassifiedFormats:
    """Split raw provider records into video, audio and unknown lists.

    The provider lists formats worst to best, so the records are walked in
    reverse; the first format placed in each list is marked best.

    Args:
        records: yt-dlp format dicts or MediaFormat objects

    Returns:
        ClassifiedFormats
    """
    result = ClassifiedFormats()

    for record in reversed(list(records)):
        fmt = record if isinstance(record, MediaFormat) else MediaFormat.from_info_dict(record)
        if fmt is None:
            continue

        if fmt.valid_video:
            target = result.video
        elif fmt.valid_audio:
            target = result.audio
        else:
            target = result.unknown

        fmt.is_best = not target
        target.append(fmt)

    return result
