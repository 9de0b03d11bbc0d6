"""Media session for the extended downloader.

A session owns everything about one URL: the retrieved information, the
format catalog with its selections, per-download options and the
authentication used for it. Sessions move from created to info retrieved
and end when they are disposed.

Usage:
    with MediaSession("https://www.youtube.com/watch?v=...") as session:
        session.request_info()
        session.catalog.video.select_identifier("137")
        built = session.build_arguments(config.snapshot())
"""

from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Optional

from ytdl_gui.auth import AuthenticationDetails
from ytdl_gui.config.config_manager import DownloadSettings
from ytdl_gui.config.defaults import MEDIA_NAME_UNAVAILABLE
from ytdl_gui.config.validators import URLValidator
from ytdl_gui.exceptions import InvalidStateError, MediaUnavailableError, ValidationError
from ytdl_gui.utils.logger import get_logger
from .arguments import ArgumentBuilder, BuiltArguments
from .catalog import DownloadType, FormatCatalog, FormatList
from .post_processor import FFmpegLocator
from .provider import MediaInfo, MediaProvider, YtDlpProvider


Dispatcher = Callable[[Callable[[], None]], None]


def inline_dispatcher(callback: Callable[[], None]):
    """Run a completion callback on whichever thread finished the work."""
    callback()


class TkDispatcher:
    """Deliver completion callbacks on the tkinter main loop.

    Args:
        widget: Any widget of the owning window
    """

    def __init__(self, widget):
        self.widget = widget

    def __call__(self, callback: Callable[[], None]):
        self.widget.after(0, callback)


@dataclass
class DownloadOptions:
    """Per-session download options chosen in the media window.

    Encoder indices are 1-based positions in the remux/recode lists, with 0
    meaning no conversion.
    """
    video_remux_index: int = 0
    video_encoder_index: int = 0
    audio_encoder_index: int = 0
    audio_vbr: bool = False
    vbr_index: int = 0
    video_download_audio: bool = True
    video_separate_audio: bool = False
    abort_on_error: bool = True
    skip_unavailable_fragments: bool = False
    fragment_threads: int = 1
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    custom_arguments: Optional[str] = None
    file_name_schema: Optional[str] = None


class MediaSession:
    """State of one media item from info retrieval to download arguments."""

    _executor: Optional[ThreadPoolExecutor] = None

    def __init__(
        self,
        url: str,
        provider: Optional[MediaProvider] = None,
        authentication: Optional[AuthenticationDetails] = None,
        archived: bool = False,
        batch_download_item: bool = False,
        batch_download_time: Optional[str] = None,
        options: Optional[DownloadOptions] = None
    ):
        """Initialize a session.

        Args:
            url: Media URL
            provider: Information provider (default: yt-dlp)
            authentication: Credentials; the session takes ownership
            archived: Whether the URL targets the archive extractor
            batch_download_item: Whether the session is part of a batch
            batch_download_time: Folder name of the batch, when dated
            options: Download options (default: DownloadOptions())

        Raises:
            ValidationError: If the URL is empty once sanitized
        """
        self.url = URLValidator.sanitize(url)
        self.provider = provider or YtDlpProvider()
        self.authentication = authentication
        self.archived = archived or URLValidator.is_archive(self.url)
        self.batch_download_item = batch_download_item
        self.batch_download_time = batch_download_time
        self.options = options or DownloadOptions()

        self.catalog = FormatCatalog()
        self.selected_type = DownloadType.NONE
        self.media_name: Optional[str] = None
        self.media_description: Optional[str] = None
        self.progress_media_name: Optional[str] = None
        self.thumbnail = None
        self.info: Optional[MediaInfo] = None
        self.info_retrieved = False
        self.protected_arguments = ""
        self.disposed = False

        self.logger = get_logger()

    @classmethod
    def _default_executor(cls) -> ThreadPoolExecutor:
        if cls._executor is None:
            cls._executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="media-info")
        return cls._executor

    @property
    def unknown_formats_only(self) -> bool:
        return self.catalog.unknown_formats_only

    def request_info(self) -> bool:
        """Retrieve media information and classify its formats.

        Does nothing once the information has been retrieved.

        Returns:
            True when the information is available

        Raises:
            ValidationError: If the URL is empty
            MediaUnavailableError: If the provider returns no formats
            InvalidStateError: If the session has been disposed
        """
        if self.disposed:
            raise InvalidStateError(self.url, "The media session has been disposed.", self.selected_type)

        if self.info_retrieved:
            return True

        if not self.url or not self.url.strip():
            raise ValidationError("URL is null/empty/whitespace.", value=self.url, field="url")

        info = self.provider.fetch_info(self.url, self.authentication)
        if not info.formats:
            raise MediaUnavailableError(self.url)

        catalog = FormatCatalog.from_formats(info.formats)
        if catalog.is_empty:
            raise MediaUnavailableError(self.url)

        self.info = info
        self.catalog = catalog
        self.media_name = info.title if info.title and info.title.strip() else MEDIA_NAME_UNAVAILABLE
        self.media_description = info.description
        self.progress_media_name = self.media_name
        self.selected_type = catalog.change_type(
            catalog.default_type(), self.options.video_download_audio
        )
        self.info_retrieved = True

        self.logger.info(
            f"Retrieved {len(catalog.video.formats)} video, {len(catalog.audio.formats)} audio "
            f"and {len(catalog.unknown.formats)} unknown formats: {self.media_name}",
            source="session"
        )
        return True

    def request_info_async(
        self,
        on_complete: Optional[Callable[[Future], None]] = None,
        dispatcher: Optional[Dispatcher] = None,
        executor: Optional[Executor] = None
    ) -> Future:
        """Retrieve media information on a worker thread.

        Errors are set on the returned future rather than raised.

        Args:
            on_complete: Called with the finished future
            dispatcher: Delivers the callback (default: inline on the worker)
            executor: Executor to run on (default: shared info executor)

        Returns:
            Future resolving to True, or to the retrieval error
        """
        dispatcher = dispatcher or inline_dispatcher
        future = (executor or self._default_executor()).submit(self.request_info)

        if on_complete is not None:
            future.add_done_callback(lambda done: dispatcher(lambda: on_complete(done)))

        return future

    def request_thumbnail(self, force_redownload: bool = False):
        """Get the thumbnail, downloading it on first use.

        Args:
            force_redownload: Download again even when cached

        Returns:
            PIL image, or None when the media has no thumbnail

        Raises:
            MediaUnavailableError: If the thumbnail cannot be downloaded
        """
        if self.thumbnail is not None and not force_redownload:
            return self.thumbnail

        if not self.info_retrieved:
            self.request_info()

        self.thumbnail = self.provider.fetch_thumbnail(self.info)
        return self.thumbnail

    def authenticate(self, prompt: Callable[[], Optional[AuthenticationDetails]]) -> bool:
        """Make sure the session has authentication.

        Args:
            prompt: Asks the user for credentials, returning None on cancel

        Returns:
            True if authentication is available
        """
        if self.authentication is not None:
            return True

        authentication = prompt()
        if authentication is None or authentication.is_empty:
            self.logger.debug(f"Authentication cancelled: {self.url}", source="session")
            return False

        self.authentication = authentication
        return True

    def change_type(self, new_type: DownloadType) -> DownloadType:
        """Switch the download type.

        Raises:
            ValidationError: If the type has no tracks or is not valid
        """
        self.selected_type = self.catalog.change_type(new_type, self.options.video_download_audio)
        return self.selected_type

    def format_list(self, kind: str) -> FormatList:
        """Get the catalog list named "video", "audio" or "unknown"."""
        if kind not in ('video', 'audio', 'unknown'):
            raise ValidationError("Unknown format list", value=kind, field="kind")
        return getattr(self.catalog, kind)

    def select_format(self, kind: str, index: int) -> Any:
        """Select a row of one format list.

        Raises:
            ValidationError: If the list or index is invalid
        """
        return self.format_list(kind).select(index)

    def build_arguments(self, settings: DownloadSettings, ffmpeg: Optional[FFmpegLocator] = None) -> BuiltArguments:
        """Build the download arguments for the current selection.

        Args:
            settings: Settings snapshot
            ffmpeg: FFmpeg probe (default: the process-wide locator)

        Returns:
            BuiltArguments

        Raises:
            InvalidStateError: If the selected type cannot be downloaded
        """
        built = ArgumentBuilder(settings, ffmpeg).build(self)
        self.protected_arguments = built.protected
        self.logger.debug(f"Arguments: {built.protected}", source="arguments")
        return built

    def dispose(self):
        """Release secrets and drop everything retrieved for the media.

        Calling it again does nothing.
        """
        if self.disposed:
            return

        self._clear_secrets()
        self.catalog.clear()
        self.options.custom_arguments = None
        self.info = None
        self.thumbnail = None
        self.protected_arguments = ""
        self.info_retrieved = False
        self.selected_type = DownloadType.NONE
        self.disposed = True

    def close(self):
        self.dispose()

    def _clear_secrets(self):
        if self.authentication is not None:
            self.authentication.clear()
            self.authentication = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.dispose()
        return False

    def __del__(self):
        # Owner forgot to dispose
        if not getattr(self, 'disposed', True):
            self._clear_secrets()
