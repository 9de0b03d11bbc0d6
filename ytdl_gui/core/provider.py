"""Media information provider backed by yt-dlp.

The session only depends on the ``MediaProvider`` protocol, so tests and
other front-ends can supply their own provider.
"""

from dataclasses import dataclass, field
from io import BytesIO
from typing import Any, Dict, List, Optional, Protocol

import requests
import yt_dlp
from PIL import Image

from ytdl_gui.auth import AuthenticationDetails, parse_browser_spec
from ytdl_gui.config.defaults import THUMBNAIL_TIMEOUT
from ytdl_gui.exceptions import MediaUnavailableError
from ytdl_gui.utils.logger import get_logger


@dataclass
class MediaInfo:
    """Information returned by a provider for one URL.

    Attributes:
        url: The URL that was requested
        title: Media title
        description: Media description
        thumbnail_url: Thumbnail location, if any
        formats: Raw format records in provider order
    """
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    formats: List[Dict[str, Any]] = field(default_factory=list)


class MediaProvider(Protocol):
    """Source of media information and thumbnails."""

    def fetch_info(self, url: str, authentication: Optional[AuthenticationDetails] = None) -> MediaInfo:
        ...

    def fetch_thumbnail(self, info: MediaInfo) -> Optional[Image.Image]:
        ...


class YtDlpProvider:
    """Provider that extracts media information with yt-dlp.

    Usage:
        provider = YtDlpProvider()
        info = provider.fetch_info("https://www.youtube.com/watch?v=...")
        print(info.title, len(info.formats))
    """

    def __init__(self, extra_options: Optional[Dict[str, Any]] = None):
        """Initialize the provider.

        Args:
            extra_options: Additional yt-dlp options merged into every call
        """
        self.extra_options = dict(extra_options or {})
        self.logger = get_logger()

    def build_options(self, authentication: Optional[AuthenticationDetails] = None) -> Dict[str, Any]:
        """Build the yt-dlp options for an info extraction.

        Args:
            authentication: Credentials to pass to yt-dlp

        Returns:
            Options dictionary for ``yt_dlp.YoutubeDL``
        """
        ydl_opts = {
            'quiet': True,
            'no_warnings': True,
            'extract_flat': False,
            'skip_download': True,
        }
        ydl_opts.update(self.extra_options)

        if authentication is None:
            return ydl_opts

        if authentication.username:
            ydl_opts['username'] = authentication.username
        if authentication.password:
            ydl_opts['password'] = authentication.get_password()
        if authentication.two_factor:
            ydl_opts['twofactor'] = authentication.two_factor
        if authentication.media_password:
            ydl_opts['videopassword'] = authentication.get_media_password()
        if authentication.netrc:
            ydl_opts['usenetrc'] = True
        if authentication.cookies_file:
            ydl_opts['cookiefile'] = authentication.cookies_file
        if authentication.cookies_from_browser:
            ydl_opts['cookiesfrombrowser'] = parse_browser_spec(authentication.cookies_from_browser)

        return ydl_opts

    def fetch_info(self, url: str, authentication: Optional[AuthenticationDetails] = None) -> MediaInfo:
        """Extract media information without downloading.

        Args:
            url: Media URL
            authentication: Optional credentials

        Returns:
            MediaInfo

        Raises:
            MediaUnavailableError: If yt-dlp cannot extract the media
        """
        self.logger.debug(f"Extracting info: {url}", source="provider")

        try:
            with yt_dlp.YoutubeDL(self.build_options(authentication)) as ydl:
                info = ydl.extract_info(url, download=False)
        except yt_dlp.utils.DownloadError as e:
            raise MediaUnavailableError(url, str(e), original_error=e) from e

        if not info:
            raise MediaUnavailableError(url, "Could not extract media information")

        return MediaInfo(
            url=url,
            title=info.get('title'),
            description=info.get('description'),
            thumbnail_url=info.get('thumbnail'),
            formats=list(info.get('formats') or []),
        )

    def fetch_thumbnail(self, info: MediaInfo) -> Optional[Image.Image]:
        """Download and decode the thumbnail.

        Images are converted to RGB unless they already are, so the result
        can be saved as JPEG.

        Args:
            info: Media information with a thumbnail URL

        Returns:
            Decoded image, or None when the media has no thumbnail

        Raises:
            MediaUnavailableError: If the thumbnail cannot be downloaded or decoded
        """
        if not info.thumbnail_url:
            return None

        try:
            response = requests.get(info.thumbnail_url, timeout=THUMBNAIL_TIMEOUT)
            response.raise_for_status()
            image = Image.open(BytesIO(response.content))
            image.load()
        except (requests.RequestException, OSError) as e:
            raise MediaUnavailableError(
                info.url, "The thumbnail could not be downloaded.", original_error=e
            ) from e

        if image.mode != "RGB":
            image = image.convert("RGB")
        return image
