"""Format catalog for a single media item.

Holds the video, audio and unknown format lists with their selections and
the best/selected markers shown by the format list views. The catalog keeps
no reference to any widget; views look entries up by identifier or index.
"""

from enum import Enum, auto
from typing import Any, Iterable, Iterator, List, Optional

from ytdl_gui.exceptions import ValidationError
from .formats import MediaFormat, classify


class DownloadType(Enum):
    """What a media session downloads."""
    NONE = 0
    VIDEO = 1
    AUDIO = 2
    UNKNOWN = 3
    CUSTOM = 4

    @property
    def folder_name(self) -> str:
        """Name of the per-type output sub-folder."""
        return self.name.capitalize()


class MediaStatus(Enum):
    """Marker shown next to the best and selected rows."""
    BEST = auto()
    SELECTED = auto()
    BEST_DISABLED = auto()
    SELECTED_DISABLED = auto()


class FormatList:
    """Ordered formats of one category with an independent selection.

    When ``include_ignore`` is set, index 0 is the "do not download" entry
    (``None``) and it starts out selected. Otherwise the first format, the
    provider's best pick, starts out selected.
    """

    def __init__(self, formats: Optional[Iterable[MediaFormat]] = None, include_ignore: bool = False):
        formats = list(formats or [])
        self._has_ignore = include_ignore
        self._entries: List[Optional[MediaFormat]] = ([None] if include_ignore else []) + formats
        self.selected: Optional[MediaFormat] = None if include_ignore or not formats else formats[0]
        self.best_status = MediaStatus.BEST
        self.selected_status = MediaStatus.BEST

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> Optional[MediaFormat]:
        return self._entries[index]

    def __iter__(self) -> Iterator[Optional[MediaFormat]]:
        return iter(self._entries)

    @property
    def has_ignore_entry(self) -> bool:
        return self._has_ignore

    @property
    def formats(self) -> List[MediaFormat]:
        """Real formats, without the ignore entry."""
        return [f for f in self._entries if f is not None]

    @property
    def best_index(self) -> Optional[int]:
        """Row index of the provider's best format."""
        if not self.formats:
            return None
        return 1 if self._has_ignore else 0

    @property
    def best(self) -> Optional[MediaFormat]:
        index = self.best_index
        return None if index is None else self._entries[index]

    @property
    def selected_index(self) -> Optional[int]:
        """Row index of the selection (0 for the ignore entry)."""
        if self.selected is None:
            return 0 if self._has_ignore else None
        for index, entry in enumerate(self._entries):
            if entry is self.selected:
                return index
        return None

    def is_ignore_entry(self, index: int) -> bool:
        return self._has_ignore and index == 0

    def select(self, index: int) -> Optional[MediaFormat]:
        """Select the entry at ``index``.

        Raises:
            ValidationError: If the index is out of range
        """
        if index < 0 or index >= len(self._entries):
            raise ValidationError("Format index out of range", value=str(index), field="format")
        self.selected = self._entries[index]
        return self.selected

    def find(self, identifier: str) -> Optional[MediaFormat]:
        for entry in self._entries:
            if entry is not None and entry.identifier == identifier:
                return entry
        return None

    def select_identifier(self, identifier: Optional[str]) -> Optional[MediaFormat]:
        """Select a format by provider id; ``None`` selects the ignore entry.

        Raises:
            ValidationError: If no such format exists
        """
        if identifier is None:
            if not self._has_ignore:
                raise ValidationError("This list has no ignore entry", field="format")
            self.selected = None
            return None

        fmt = self.find(identifier)
        if fmt is None:
            raise ValidationError("No format with this identifier", value=identifier, field="format")
        self.selected = fmt
        return fmt

    def mark(self, enabled: bool):
        """Update the best/selected markers for an enabled or disabled list."""
        self.best_status = MediaStatus.BEST if enabled else MediaStatus.BEST_DISABLED
        self.selected_status = MediaStatus.SELECTED if enabled else MediaStatus.SELECTED_DISABLED

    def clear(self):
        self._entries.clear()
        self._has_ignore = False
        self.selected = None


class FormatCatalog:
    """Video, audio and unknown format lists of one media item.

    Usage:
        catalog = FormatCatalog.from_formats(info['formats'])
        catalog.video.select_identifier("137")
        catalog.change_type(DownloadType.VIDEO, download_audio=True)
    """

    def __init__(
        self,
        video: Optional[FormatList] = None,
        audio: Optional[FormatList] = None,
        unknown: Optional[FormatList] = None
    ):
        self.video = video or FormatList()
        self.audio = audio or FormatList()
        self.unknown = unknown or FormatList()

    @classmethod
    def from_formats(cls, records: Iterable[Any]) -> 'FormatCatalog':
        """Classify provider records into a catalog.

        An ignore entry is put in front of the unknown list only when there
        are video or audio formats too, making unknown tracks opt-in.

        Args:
            records: yt-dlp format dicts in provider order

        Returns:
            FormatCatalog
        """
        classified = classify(records)
        include_ignore = not classified.unknown_formats_only and bool(classified.unknown)

        return cls(
            video=FormatList(classified.video),
            audio=FormatList(classified.audio),
            unknown=FormatList(classified.unknown, include_ignore=include_ignore),
        )

    @property
    def unknown_formats_only(self) -> bool:
        return not self.video.formats and not self.audio.formats

    @property
    def is_empty(self) -> bool:
        return not (self.video.formats or self.audio.formats or self.unknown.formats)

    def default_type(self) -> DownloadType:
        """Get the download type chosen when info is first retrieved."""
        if self.video.formats:
            return DownloadType.VIDEO
        if self.audio.formats:
            return DownloadType.AUDIO
        if self.unknown.formats:
            return DownloadType.UNKNOWN
        return DownloadType.CUSTOM

    def change_type(self, new_type: DownloadType, download_audio: bool = True) -> DownloadType:
        """Switch the authoritative list and update the list markers.

        Args:
            new_type: Type to download as
            download_audio: Whether audio is downloaded along with video

        Returns:
            The new type

        Raises:
            ValidationError: If the type has no tracks, or is not selectable
        """
        if new_type == DownloadType.VIDEO:
            if not self.video.formats:
                raise ValidationError(
                    "Cannot select video format when there are no video tracks to download.",
                    field="download_type"
                )
            self.video.mark(True)
            self.audio.mark(download_audio)
            self.unknown.mark(True)
        elif new_type == DownloadType.AUDIO:
            if not self.audio.formats:
                raise ValidationError(
                    "Cannot select audio format when there are no audio tracks to download.",
                    field="download_type"
                )
            self.video.mark(False)
            self.audio.mark(True)
            self.unknown.mark(True)
        elif new_type == DownloadType.UNKNOWN:
            if not self.unknown.formats:
                raise ValidationError(
                    "Cannot select unknown format when there are no unknown tracks to download.",
                    field="download_type"
                )
            self.video.mark(False)
            self.audio.mark(False)
            self.unknown.mark(True)
        elif new_type == DownloadType.CUSTOM:
            self.video.mark(False)
            self.audio.mark(False)
            self.unknown.mark(False)
        else:
            raise ValidationError(
                f"\"{new_type}\" cannot be set as a media type.",
                value=str(new_type),
                field="download_type"
            )

        return new_type

    def clear(self):
        self.video.clear()
        self.audio.clear()
        self.unknown.clear()
