"""Data models for subtitle cues and raw subtitle sources."""

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from urllib.parse import urlparse

from ..config import EXTENSION_FORMATS
from ..exceptions import UnsupportedFormatError


class SubtitleFormat(str, Enum):
    """Declared format of a subtitle payload."""

    SRT = "srt"
    VTT = "vtt"
    TTML = "ttml"
    DFXP = "dfxp"
    CUSTOM = "custom"

    @classmethod
    def from_extension(cls, name: str) -> "SubtitleFormat":
        """Guess the format from a file name, path or URL suffix."""
        path = urlparse(name).path if "://" in name else name
        suffix = PurePosixPath(path.replace("\\", "/")).suffix.lower()
        try:
            return cls(EXTENSION_FORMATS[suffix])
        except KeyError:
            raise UnsupportedFormatError(
                f"Cannot infer subtitle format from {name!r}"
            ) from None


def format_timestamp(ms: int) -> str:
    """Render milliseconds as HH:MM:SS.mmm."""
    if ms < 0:
        ms = 0
    total_seconds, millis = divmod(int(ms), 1000)
    total_minutes, s = divmod(total_seconds, 60)
    h, m = divmod(total_minutes, 60)
    return f"{h:02d}:{m:02d}:{s:02d}.{millis:03d}"


@dataclass(frozen=True)
class Cue:
    """A single timed text entry. Times are milliseconds from media start."""

    index: int
    start: int
    end: int
    text: str

    def __lt__(self, other: "Cue") -> bool:
        return self.start < other.start

    def __le__(self, other: "Cue") -> bool:
        return self.start <= other.start

    def __gt__(self, other: "Cue") -> bool:
        return self.start > other.start

    def __ge__(self, other: "Cue") -> bool:
        return self.start >= other.start

    def __str__(self) -> str:
        return f"{format_timestamp(self.start)} --> {format_timestamp(self.end)}\n{self.text}"

    @property
    def duration(self) -> int:
        return self.end - self.start

    def in_range(self, time_ms: float) -> bool:
        return self.start <= time_ms <= self.end

    def is_after(self, time_ms: float) -> bool:
        """True when ``time_ms`` falls after this cue has ended."""
        return time_ms > self.end

    def is_before(self, time_ms: float) -> bool:
        """True when ``time_ms`` falls before this cue starts."""
        return time_ms < self.start

    def validate(self) -> None:
        if self.start < 0 or self.end < 0:
            raise ValueError("Cue timing must be non-negative")
        if self.end < self.start:
            raise ValueError("Cue end must be >= start")


@dataclass(frozen=True)
class SubtitleObject:
    """Unparsed subtitle payload together with its declared format."""

    data: str
    format: SubtitleFormat
