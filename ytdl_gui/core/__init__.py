"""Core media session logic: formats, catalog, arguments and provider."""

from .formats import MediaFormat, ClassifiedFormats, classify
from .catalog import DownloadType, MediaStatus, FormatList, FormatCatalog
from .presentation import FormatRow, build_rows
from .post_processor import (
    AudioFormat,
    VideoFormat,
    FFmpegLocator,
    get_ffmpeg_locator,
    audio_format_for,
    video_format_for,
)
from .arguments import ArgumentBuilder, BuiltArguments
from .provider import MediaInfo, MediaProvider, YtDlpProvider
from .session import DownloadOptions, MediaSession, TkDispatcher, inline_dispatcher

__all__ = [
    'MediaFormat',
    'ClassifiedFormats',
    'classify',
    'DownloadType',
    'MediaStatus',
    'FormatList',
    'FormatCatalog',
    'FormatRow',
    'build_rows',
    'AudioFormat',
    'VideoFormat',
    'FFmpegLocator',
    'get_ffmpeg_locator',
    'audio_format_for',
    'video_format_for',
    'ArgumentBuilder',
    'BuiltArguments',
    'MediaInfo',
    'MediaProvider',
    'YtDlpProvider',
    'DownloadOptions',
    'MediaSession',
    'TkDispatcher',
    'inline_dispatcher',
]
