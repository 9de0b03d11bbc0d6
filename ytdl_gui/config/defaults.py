"""Default configuration values for the extended downloader."""

import os
import sys


# Application metadata
APP_NAME = "youtube-dl-gui"
APP_VERSION = "3.0.0"

# Default paths
DEFAULT_DOWNLOAD_PATH = "./downloads"
DEFAULT_CONFIG_FILE = "ytdl_gui_config.json"
PROGRAM_PATH = os.path.dirname(os.path.abspath(sys.argv[0] or __file__))

# Relative download paths are resolved against the program directory
RELATIVE_PATH_PREFIXES = ("./", ".\\", "\\.")

# File name schema
DEFAULT_FILE_NAME_SCHEMA = "%(title)s-%(id)s.%(ext)s"
EXTENSION_PLACEHOLDER = ".%(ext)s"
SEPARATE_AUDIO_SCHEMA_SUFFIX = "_%(format_id)s.%(ext)s"

# URL handling
BAD_URL_CHARS = "\\\"\n\r\t\0\b'"
ARCHIVE_URL_PREFIX = "ytarchive:"
ARCHIVE_FOLDER_NAME = "archived.youtube.com"
REDDIT_DOMAINS = ("reddit.com", "redd.it")

# Output folders
BATCH_DOWNLOADS_FOLDER = "# Batch Downloads #"

# Argument building
DEFAULT_RETRY_ATTEMPTS = 10
MASK_TOKEN = "***"
RATE_LIMIT_UNITS = {
    0: "K",
    1: "M",
    2: "G",
}

# Encoder indices (1-based) that force --embed-thumbnail
VIDEO_THUMBNAIL_ENCODER_INDICES = (4,)
AUDIO_THUMBNAIL_ENCODER_INDICES = (1, 2)

# Containers that accept an embedded thumbnail
VIDEO_THUMBNAIL_EXTENSIONS = ("mp4", "m4v", "mov", "mkv")
AUDIO_THUMBNAIL_EXTENSIONS = ("mp3", "m4a", "flac", "ogg", "opus", "mka")

# Catalog labels
DO_NOT_DOWNLOAD_LABEL = "(do not download)"
MEDIA_NAME_UNAVAILABLE = "[media name unavailable]"

# Limits
MAX_FRAGMENT_THREADS = 32
MAX_RETRY_ATTEMPTS = 100
MAX_DOWNLOAD_LIMIT = 1000000

# Timeouts
THUMBNAIL_TIMEOUT = 30
