"""subcue - decode subtitle files into timed cues and look them up by time."""

from .core import (
    Cue,
    FileSubtitle,
    NetworkSubtitle,
    StringSubtitle,
    SubtitleController,
    SubtitleFormat,
    SubtitleObject,
)
from .exceptions import NotInitializedError, SubcueError, UnsupportedFormatError

__version__ = "0.1.0"

__all__ = [
    "Cue",
    "SubtitleFormat",
    "SubtitleObject",
    "SubtitleController",
    "StringSubtitle",
    "FileSubtitle",
    "NetworkSubtitle",
    "SubcueError",
    "NotInitializedError",
    "UnsupportedFormatError",
]
