"""Display rows for the format list views.

Rows are derived from the catalog on demand and carry the format
identifier, so a view maps a clicked row back to the catalog with
``FormatList.find`` or by row index.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ytdl_gui.config.defaults import DO_NOT_DOWNLOAD_LABEL
from .catalog import FormatList, MediaStatus
from .formats import MediaFormat, has_codec, is_positive


VIDEO_COLUMNS = (
    "Quality", "FPS", "Extension", "Size", "Video bitrate", "Resolution",
    "Video codec", "Audio bitrate", "Sample rate", "Audio codec", "Channels", "ID",
)
AUDIO_COLUMNS = (
    "Bitrate", "Extension", "Size", "Sample rate", "Codec", "Channels", "ID",
)
UNKNOWN_COLUMNS = VIDEO_COLUMNS


@dataclass(frozen=True)
class FormatRow:
    """One row of a format list view.

    Attributes:
        identifier: Format id, None for the ignore row
        columns: Cell texts
        status: Best/selected marker, None for unmarked rows
    """
    identifier: Optional[str]
    columns: Tuple[str, ...]
    status: Optional[MediaStatus] = None


def _number(value: Optional[float]) -> str:
    if not is_positive(value):
        return "?"
    if float(value).is_integer():
        return str(int(value))
    return f"{round(value, 2):g}"


def _audio_cells(fmt: MediaFormat, has_audio: bool) -> Tuple[str, str, str, str]:
    if not has_audio:
        return ("-", "-", "-", "-")
    return (
        f"{_number(fmt.audio_bitrate)}Kbps",
        f"{_number(fmt.audio_sample_rate)}Hz",
        fmt.audio_codec if has_codec(fmt.audio_codec) else "Unknown",
        str(fmt.audio_channels) if fmt.audio_channels is not None else "?",
    )


def _video_layout(fmt: MediaFormat, has_audio: bool) -> Tuple[str, ...]:
    return (
        fmt.quality_name if fmt.quality_name and fmt.quality_name.strip() else "?",
        _number(fmt.video_fps),
        fmt.extension or "Unknown",
        fmt.size,
        f"{_number(fmt.video_bitrate)}Kbps" if is_positive(fmt.video_bitrate) else "?",
        f"{fmt.video_width if fmt.video_width is not None else -1}x"
        f"{fmt.video_height if fmt.video_height is not None else -1}",
        fmt.video_codec if has_codec(fmt.video_codec) else "Unknown",
    ) + _audio_cells(fmt, has_audio) + (fmt.identifier,)


def video_row(fmt: MediaFormat) -> Tuple[str, ...]:
    """Cells of a video format row; audio cells are dashed without audio."""
    return _video_layout(fmt, fmt.has_audio_indication)


def unknown_row(fmt: MediaFormat) -> Tuple[str, ...]:
    """Cells of an unknown format row, laid out like a video row."""
    has_audio = (
        has_codec(fmt.audio_codec)
        or is_positive(fmt.audio_sample_rate)
        or is_positive(fmt.audio_bitrate)
    )
    return _video_layout(fmt, has_audio)


def audio_row(fmt: MediaFormat) -> Tuple[str, ...]:
    """Cells of an audio format row."""
    return (
        f"{_number(fmt.audio_bitrate)}Kbps",
        fmt.extension or "Unknown",
        fmt.size,
        f"{_number(fmt.audio_sample_rate)}Hz",
        fmt.audio_codec if has_codec(fmt.audio_codec) else "Unknown",
        str(fmt.audio_channels) if fmt.audio_channels is not None else "?",
        fmt.identifier,
    )


ROW_BUILDERS = {
    'video': video_row,
    'audio': audio_row,
    'unknown': unknown_row,
}


def build_rows(format_list: FormatList, kind: str) -> List[FormatRow]:
    """Build the rows of one format list view.

    Args:
        format_list: Catalog list to render
        kind: "video", "audio" or "unknown"

    Returns:
        Rows in list order, with the ignore row first when present
    """
    builder = ROW_BUILDERS[kind]
    best_index = format_list.best_index
    selected_index = format_list.selected_index

    rows = []
    for index, fmt in enumerate(format_list):
        if index == selected_index:
            status = format_list.selected_status
        elif index == best_index:
            status = format_list.best_status
        else:
            status = None

        if fmt is None:
            rows.append(FormatRow(None, (DO_NOT_DOWNLOAD_LABEL,), status))
        else:
            rows.append(FormatRow(fmt.identifier, builder(fmt), status))

    return rows
