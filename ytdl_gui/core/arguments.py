"""Command-line argument builder for the external download tool.

Builds the live argument string for one media session together with a
protected copy in which every credential is replaced by a mask token.
The protected copy is the only one that may be logged or displayed.
"""

import os
from dataclasses import dataclass
from typing import List, Optional

from ytdl_gui.auth import ProxyConfig
from ytdl_gui.config.config_manager import DownloadSettings
from ytdl_gui.config.defaults import (
    ARCHIVE_FOLDER_NAME,
    AUDIO_THUMBNAIL_ENCODER_INDICES,
    BATCH_DOWNLOADS_FOLDER,
    DEFAULT_FILE_NAME_SCHEMA,
    DEFAULT_RETRY_ATTEMPTS,
    EXTENSION_PLACEHOLDER,
    MASK_TOKEN,
    RATE_LIMIT_UNITS,
    RELATIVE_PATH_PREFIXES,
    SEPARATE_AUDIO_SCHEMA_SUFFIX,
    VIDEO_THUMBNAIL_ENCODER_INDICES,
)
from ytdl_gui.config.validators import TimeValidator, URLValidator
from ytdl_gui.exceptions import InvalidStateError
from .catalog import DownloadType
from .formats import MediaFormat
from .post_processor import FFmpegLocator, audio_format_for, get_ffmpeg_locator, video_format_for


@dataclass(frozen=True)
class BuiltArguments:
    """Arguments for one download.

    Attributes:
        arguments: Live arguments, including credentials
        protected: Same arguments with credentials masked
    """
    arguments: str
    protected: str

    def __str__(self) -> str:
        return self.protected


def _custom_lines(text: Optional[str]) -> List[str]:
    return text.replace("\r\n", "\n").split("\n")


def _is_blank(text: Optional[str]) -> bool:
    return text is None or not text.strip()


def _relative(component: str) -> str:
    # Keeps the component below the folders joined before it
    return component.lstrip("/\\")


class ArgumentBuilder:
    """Builds download arguments from a settings snapshot and a session.

    The builder reads the session and the settings and never modifies
    either; the only shared state it touches is the FFmpeg probe, which is
    refreshed when FFmpeg has not been found yet.

    Usage:
        builder = ArgumentBuilder(config.snapshot())
        built = builder.build(session)
        logger.info(f"Arguments: {built.protected}")
    """

    def __init__(self, settings: DownloadSettings, ffmpeg: Optional[FFmpegLocator] = None):
        """Initialize the builder.

        Args:
            settings: Immutable download settings
            ffmpeg: FFmpeg probe (default: the process-wide locator)
        """
        self.settings = settings
        self.ffmpeg = ffmpeg or get_ffmpeg_locator()

    def build(self, session) -> BuiltArguments:
        """Build the arguments for a media session.

        Args:
            session: MediaSession with a selected type and formats

        Returns:
            BuiltArguments with the live and protected strings

        Raises:
            InvalidStateError: If the selected type is not downloadable, or
                the list it needs has no selected format
        """
        selected_type = session.selected_type
        if selected_type not in (
            DownloadType.VIDEO, DownloadType.AUDIO, DownloadType.UNKNOWN, DownloadType.CUSTOM
        ):
            raise self._invalid_type(session)

        parts = [f"\"{session.url}\" -o \"{self._output_path(session)}\""]

        video, audio = self._append_formats(parts, session)

        if selected_type != DownloadType.CUSTOM:
            self._append_options(parts, session, video, audio)

        arguments = "".join(parts)
        protected = arguments

        for flag, live, masked in self._authentication_flags(session.authentication):
            arguments += flag + live
            protected += flag + masked

        return BuiltArguments(arguments=arguments, protected=protected)

    @staticmethod
    def _invalid_type(session) -> InvalidStateError:
        return InvalidStateError(
            session.url,
            f"The SelectedType {session.selected_type} is not valid.",
            download_type=session.selected_type
        )

    def _output_path(self, session) -> str:
        """Directory and file name schema passed to ``-o``."""
        settings = self.settings
        options = session.options

        download_path = settings.download_path
        if download_path.startswith(RELATIVE_PATH_PREFIXES):
            download_path = os.path.join(settings.program_path, download_path[2:])

        folders = [download_path]

        if session.batch_download_item and settings.separate_batch_downloads:
            folders.append(BATCH_DOWNLOADS_FOLDER)
            if settings.add_date_to_batch_download_folders and session.batch_download_time:
                folders.append(_relative(session.batch_download_time))

        if settings.separate_into_website_url:
            if URLValidator.is_archive(session.url):
                folders.append(ARCHIVE_FOLDER_NAME)
            else:
                folders.append(URLValidator.get_url_base(session.url))

        if settings.separate_downloads:
            folders.append(session.selected_type.folder_name)

        schema = _relative(options.file_name_schema or "")
        if _is_blank(schema):
            schema = DEFAULT_FILE_NAME_SCHEMA
        if not schema.lower().endswith(EXTENSION_PLACEHOLDER):
            schema += EXTENSION_PLACEHOLDER

        if session.selected_type == DownloadType.VIDEO and options.video_separate_audio:
            schema = schema[:-len(EXTENSION_PLACEHOLDER)] + SEPARATE_AUDIO_SCHEMA_SUFFIX

        return os.path.join(*folders, schema)

    def _append_formats(self, parts: List[str], session):
        """Append the format selector and conversion flags.

        Returns:
            Tuple of the video and audio formats that were selected
        """
        catalog = session.catalog
        options = session.options
        selected_type = session.selected_type

        video: Optional[MediaFormat] = None
        audio: Optional[MediaFormat] = None

        if selected_type == DownloadType.VIDEO:
            video = catalog.video.selected
            if video is None:
                raise self._invalid_type(session)

            parts.append(f" -f {video.identifier}")
            if options.video_download_audio and catalog.audio.selected is not None:
                audio = catalog.audio.selected
                parts.append(("/best," if options.video_separate_audio else "+") + audio.identifier + "/best")
            else:
                parts.append("/best")

            if catalog.unknown.selected is not None:
                parts.append(f",{catalog.unknown.selected.identifier}")

            if options.video_remux_index > 0:
                parts.append(f" --remux-video {video_format_for(options.video_remux_index)}")
            elif options.video_encoder_index > 0:
                parts.append(f" --recode-video {video_format_for(options.video_encoder_index)}")

        elif selected_type == DownloadType.AUDIO:
            audio = catalog.audio.selected
            if audio is None:
                raise self._invalid_type(session)

            parts.append(f" -f {audio.identifier}/best")
            if catalog.unknown.selected is not None:
                parts.append(f",{catalog.unknown.selected.identifier}")

            if options.audio_encoder_index > 0:
                parts.append(f" --recode-video {audio_format_for(options.audio_encoder_index)}")

        elif selected_type == DownloadType.UNKNOWN:
            unknown = catalog.unknown.selected
            if unknown is None:
                raise self._invalid_type(session)
            parts.append(f" -f {unknown.identifier}/best")

        elif not _is_blank(options.custom_arguments):
            parts.append(" " + "\n".join(_custom_lines(options.custom_arguments)))

        return video, audio

    def _append_options(self, parts: List[str], session, video: Optional[MediaFormat], audio: Optional[MediaFormat]):
        """Append the optional download flags in their fixed order."""
        settings = self.settings
        options = session.options
        selected_type = session.selected_type

        if settings.prefer_ffmpeg or (settings.fix_reddit and URLValidator.is_reddit(session.url)):
            if not self.ffmpeg.available:
                self.ffmpeg.refresh()
            if self.ffmpeg.available:
                parts.append(f" --ffmpeg-location \"{self.ffmpeg.path}\" --hls-prefer-ffmpeg")

        if settings.save_subtitles:
            parts.append(" --all-subs")
            if not _is_blank(settings.subtitle_format):
                parts.append(f" --sub-format {settings.subtitle_format}")
            if settings.embed_subtitles and selected_type == DownloadType.VIDEO:
                parts.append(" --embed-subs")

        if settings.save_video_info:
            parts.append(" --write-info-json")

        if settings.save_description:
            parts.append(" --write-description")

        if settings.save_annotations:
            parts.append(" --write-annotations")

        if settings.save_thumbnail:
            parts.append(" --write-thumbnail")
            if self._embed_thumbnail(selected_type, options, video, audio):
                parts.append(" --embed-thumbnail")

        if settings.write_metadata:
            parts.append(" --add-metadata")

        if settings.keep_original_files:
            parts.append(" -k")

        if settings.limit_downloads and settings.download_limit > 0:
            unit = RATE_LIMIT_UNITS.get(settings.download_limit_type, RATE_LIMIT_UNITS[0])
            parts.append(f" --limit-rate {settings.download_limit}{unit}")

        if settings.force_ipv4:
            parts.append(" --force-ipv4")
        elif settings.force_ipv6:
            parts.append(" --force-ipv6")

        proxy = ProxyConfig.from_settings(settings)
        if proxy is not None:
            parts.append(f" --proxy {proxy.to_argument()}")

        if settings.retry_attempts != DEFAULT_RETRY_ATTEMPTS and settings.retry_attempts > 0:
            parts.append(f" --retries {settings.retry_attempts}")

        if not options.skip_unavailable_fragments:
            parts.append(" --abort-on-unavailable-fragment")

        if not options.abort_on_error:
            parts.append(" --no-abort-on-error")

        if options.fragment_threads > 1:
            parts.append(f" --concurrent-fragments {options.fragment_threads}")

        parts.append(self._download_sections(options))

        if not session.batch_download_item:
            parts.append(" --no-playlist")

        if not _is_blank(options.custom_arguments):
            parts.append(" " + " ".join(_custom_lines(options.custom_arguments)))

    @staticmethod
    def _embed_thumbnail(selected_type: DownloadType, options, video: Optional[MediaFormat], audio: Optional[MediaFormat]) -> bool:
        if selected_type == DownloadType.VIDEO:
            return (
                (video is not None and video.video_thumbnail_embedding)
                or options.video_encoder_index in VIDEO_THUMBNAIL_ENCODER_INDICES
            )
        if selected_type == DownloadType.AUDIO:
            return (
                (audio is not None and audio.audio_thumbnail_embedding)
                or options.audio_encoder_index in AUDIO_THUMBNAIL_ENCODER_INDICES
            )
        return False

    @staticmethod
    def _download_sections(options) -> str:
        """Time range flag, or an empty string without bounds.

        Raises:
            ValidationError: If a bound is not a valid time
        """
        start = None if _is_blank(options.start_time) else TimeValidator.normalize(options.start_time, "start_time")
        end = None if _is_blank(options.end_time) else TimeValidator.normalize(options.end_time, "end_time")

        if start and end:
            return f" --download-sections \"*{start}-{end}\""
        if start:
            return f" --download-sections \"*{start}-inf\""
        if end:
            return f" --download-sections \"*00:00:00-{end}\""
        return ""

    @staticmethod
    def _authentication_flags(authentication):
        """Yield (flag, live value, protected value) for each credential."""
        if authentication is None:
            return

        if not _is_blank(authentication.username):
            yield " --username ", authentication.username, MASK_TOKEN
        if authentication.password:
            yield " --password ", authentication.get_password(), MASK_TOKEN
        if not _is_blank(authentication.two_factor):
            yield " --twofactor ", authentication.two_factor, MASK_TOKEN
        if authentication.media_password:
            yield " --video-password ", authentication.get_media_password(), MASK_TOKEN
        if authentication.netrc:
            yield " --netrc", "", ""
        if not _is_blank(authentication.cookies_file):
            yield " --cookies ", authentication.cookies_file, MASK_TOKEN
        if not _is_blank(authentication.cookies_from_browser):
            yield " --cookies-from-browser ", authentication.cookies_from_browser, MASK_TOKEN
