"""Core of the youtube-dl-gui extended downloader.

Format classification, the format catalog, the command-line argument
builder for yt-dlp and the media session lifecycle.
"""

__version__ = "3.0.0"
