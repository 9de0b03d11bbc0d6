#!/usr/bin/env python3
"""youtube-dl-gui extended downloader - command-line entry point.

Retrieves the formats of a URL and prints the download arguments that
the GUI would pass to yt-dlp. Credentials are always shown masked.

Usage:
    python main.py URL [--type video|audio|unknown|custom] [--video ID] ...

Or, once installed:
    ytdl-gui-args URL
"""

import argparse
import sys

from ytdl_gui import __version__
from ytdl_gui.auth import AuthenticationDetails
from ytdl_gui.config import ConfigManager
from ytdl_gui.config.defaults import DEFAULT_CONFIG_FILE
from ytdl_gui.core import DownloadOptions, DownloadType, MediaSession, build_rows
from ytdl_gui.exceptions import DownloaderException
from ytdl_gui.utils import ErrorHandler, get_logger


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ytdl-gui-args",
        description="Build yt-dlp arguments for a media URL."
    )
    parser.add_argument("url", help="Media URL")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help="Settings file")
    parser.add_argument(
        "--type", dest="download_type",
        choices=["video", "audio", "unknown", "custom"],
        help="Download type (default: best available)"
    )
    parser.add_argument("--video", help="Video format id")
    parser.add_argument("--audio", help="Audio format id")
    parser.add_argument("--unknown", help="Unknown format id")
    parser.add_argument("--list", action="store_true", help="List the formats and exit")
    parser.add_argument("--separate-audio", action="store_true", help="Keep audio in its own file")
    parser.add_argument("--no-audio", action="store_true", help="Download video without audio")
    parser.add_argument("--start", help="Start time of the section to download")
    parser.add_argument("--end", help="End time of the section to download")
    parser.add_argument("--custom", help="Custom yt-dlp arguments")
    parser.add_argument("--schema", help="File name schema")
    parser.add_argument("--username", help="Account username")
    parser.add_argument("--password", help="Account password")
    parser.add_argument("--netrc", action="store_true", help="Authenticate with .netrc")
    parser.add_argument("--cookies", help="Cookies file")
    parser.add_argument("--cookies-from-browser", help="Browser to read cookies from")
    return parser


def print_formats(session: MediaSession):
    for kind in ("video", "audio", "unknown"):
        rows = build_rows(session.format_list(kind), kind)
        if not rows:
            continue
        print(f"{kind.capitalize()} formats:")
        for row in rows:
            marker = f" [{row.status.name.lower()}]" if row.status else ""
            print(f"  {' | '.join(row.columns)}{marker}")


def main(argv=None) -> int:
    """Main entry point."""
    args = create_parser().parse_args(argv)
    logger = get_logger()
    handler = ErrorHandler(logger)

    try:
        config = ConfigManager(config_file=args.config)
        config.load()

        authentication = AuthenticationDetails.from_strings(
            username=args.username,
            password=args.password,
            netrc=args.netrc,
            cookies_file=args.cookies,
            cookies_from_browser=args.cookies_from_browser,
        )

        options = DownloadOptions(
            video_download_audio=not args.no_audio,
            video_separate_audio=args.separate_audio,
            start_time=args.start,
            end_time=args.end,
            custom_arguments=args.custom,
            file_name_schema=args.schema,
        )

        with MediaSession(
            args.url,
            authentication=None if authentication.is_empty else authentication,
            options=options
        ) as session:
            session.request_info()

            if args.list:
                print(session.media_name)
                print_formats(session)
                return 0

            if args.download_type:
                session.change_type(DownloadType[args.download_type.upper()])
            if args.video:
                session.catalog.video.select_identifier(args.video)
            if args.audio:
                session.catalog.audio.select_identifier(args.audio)
            if args.unknown:
                session.catalog.unknown.select_identifier(args.unknown)

            session.build_arguments(config.snapshot())
            print(session.protected_arguments)

    except DownloaderException as e:
        print(handler.handle(e).format_for_user(), file=sys.stderr)
        return 1
    finally:
        logger.shutdown()

    return 0


if __name__ == "__main__":
    sys.exit(main())
