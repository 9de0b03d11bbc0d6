"""Post-processing options for the extended downloader.

This module provides:
- The ordered remux/recode format lists behind the encoder drop-downs
- The shared FFmpeg availability probe
"""

import os
import shutil
import threading
from enum import Enum
from typing import Optional, List

from ytdl_gui.config.defaults import PROGRAM_PATH
from ytdl_gui.exceptions import ValidationError


class VideoFormat(Enum):
    """Video remux/recode targets, in drop-down order."""
    AVI = "avi"
    FLV = "flv"
    MKV = "mkv"
    MP4 = "mp4"
    MOV = "mov"
    WEBM = "webm"


class AudioFormat(Enum):
    """Audio recode targets, in drop-down order."""
    MP3 = "mp3"
    M4A = "m4a"
    AAC = "aac"
    FLAC = "flac"
    OPUS = "opus"
    VORBIS = "vorbis"
    WAV = "wav"


def _format_for(formats: List[str], index: int, kind: str) -> Optional[str]:
    if index == 0:
        return None
    if index < 0 or index > len(formats):
        raise ValidationError(
            f"{kind} encoder index out of range (1-{len(formats)})",
            value=str(index),
            field=f"{kind.lower()}_encoder_index"
        )
    return formats[index - 1]


def get_video_formats() -> List[str]:
    """Get the video remux/recode list."""
    return [f.value for f in VideoFormat]


def get_audio_formats() -> List[str]:
    """Get the audio recode list."""
    return [f.value for f in AudioFormat]


def video_format_for(index: int) -> Optional[str]:
    """Get the video format chosen by a 1-based drop-down index.

    Args:
        index: 1-based index, 0 meaning no conversion

    Returns:
        Extension name, or None for index 0

    Raises:
        ValidationError: If the index is out of range
    """
    return _format_for(get_video_formats(), index, "Video")


def audio_format_for(index: int) -> Optional[str]:
    """Get the audio format chosen by a 1-based drop-down index.

    Raises:
        ValidationError: If the index is out of range
    """
    return _format_for(get_audio_formats(), index, "Audio")


class FFmpegLocator:
    """Lazily probes for an FFmpeg binary.

    The probe runs on the first ``refresh`` and again only when asked; reads
    of ``available`` and ``path`` never trigger a search.

    Usage:
        ffmpeg = get_ffmpeg_locator()
        if not ffmpeg.available:
            ffmpeg.refresh()
        if ffmpeg.available:
            print(ffmpeg.path)
    """

    BINARY_NAMES = ('ffmpeg', 'ffmpeg.exe')

    def __init__(self, ffmpeg_path: Optional[str] = None, search_dirs: Optional[List[str]] = None):
        """Initialize the locator.

        Args:
            ffmpeg_path: Explicit path to an FFmpeg executable
            search_dirs: Directories searched before PATH (default: program directory)
        """
        self._explicit_path = ffmpeg_path
        self._search_dirs = list(search_dirs) if search_dirs is not None else [PROGRAM_PATH]
        self._path: Optional[str] = None
        self._lock = threading.Lock()

    @property
    def available(self) -> bool:
        return self._path is not None

    @property
    def path(self) -> Optional[str]:
        return self._path

    def refresh(self) -> bool:
        """Search for FFmpeg again.

        Returns:
            True if FFmpeg was found
        """
        with self._lock:
            self._path = self._find_ffmpeg()
            return self._path is not None

    def _find_ffmpeg(self) -> Optional[str]:
        if self._explicit_path and os.path.isfile(self._explicit_path):
            return self._explicit_path

        for directory in self._search_dirs:
            for name in self.BINARY_NAMES:
                candidate = os.path.join(directory, name)
                if os.path.isfile(candidate):
                    return candidate

        return shutil.which('ffmpeg')


_global_locator: Optional[FFmpegLocator] = None


def get_ffmpeg_locator() -> FFmpegLocator:
    """Get the process-wide FFmpeg locator."""
    global _global_locator
    if _global_locator is None:
        _global_locator = FFmpegLocator()
    return _global_locator
