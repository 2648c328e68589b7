"""Time lookup over a start-sorted cue sequence."""

from typing import Iterable, Iterator, List, Optional, Tuple

from .models import Cue


class CueIndex:
    """Immutable start-sorted cues with point-in-time queries.

    Intervals are inclusive at both ends, so an instant where one cue ends and
    the next begins belongs to both: ``range_at`` returns both of them while
    ``lookup_at`` returns whichever one the binary search reaches first.
    """

    def __init__(self, cues: Iterable[Cue]):
        self._cues: Tuple[Cue, ...] = tuple(cues)

    def __len__(self) -> int:
        return len(self._cues)

    def __iter__(self) -> Iterator[Cue]:
        return iter(self._cues)

    def __bool__(self) -> bool:
        return bool(self._cues)

    @property
    def cues(self) -> Tuple[Cue, ...]:
        return self._cues

    def lookup_at(self, time_ms: float) -> Optional[Cue]:
        """Binary search for the cue showing at ``time_ms``.

        Needs non-overlapping intervals for a unique answer; with overlaps the
        first containing cue probed is returned, not necessarily the earliest.
        """
        low, high = 0, len(self._cues) - 1
        while low <= high:
            mid = low + (high - low) // 2
            candidate = self._cues[mid]
            if candidate.is_after(time_ms):
                low = mid + 1
            elif candidate.is_before(time_ms):
                high = mid - 1
            else:
                return candidate
        return None

    def range_at(self, time_ms: float) -> List[Cue]:
        """Every cue whose interval contains ``time_ms`` (linear scan)."""
        return [cue for cue in self._cues if cue.in_range(time_ms)]
