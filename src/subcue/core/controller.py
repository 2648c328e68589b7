"""Subtitle controller: provider -> parser -> reconciliation -> lookup."""

import asyncio
from enum import Enum
from typing import List, Optional, Tuple

from ..config import DEFAULT_SEPARATOR
from ..exceptions import NotInitializedError
from ..utils.logging import get_logger
from .lookup import CueIndex
from .models import Cue
from .parser import OnParsing, Parser, make_parser
from .providers import SubtitleProvider
from .reconcile import flatten_cues

logger = get_logger(__name__)


class ControllerState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    INITIALIZED = "initialized"


def decode_subtitles(parser: Parser) -> List[Cue]:
    """Extract and reconcile in one go; runs off the event loop."""
    return flatten_cues(parser.parse())


class SubtitleController:
    """Loads a subtitle once and answers "what is showing at time t".

    ``pattern``/``on_parsing`` switch the controller to a custom parser;
    otherwise the provider's declared format picks a built-in one.
    """

    def __init__(
        self,
        provider: SubtitleProvider,
        pattern: Optional[str] = None,
        on_parsing: Optional[OnParsing] = None,
    ):
        self._provider = provider
        self._pattern = pattern
        self._on_parsing = on_parsing
        self._parser: Optional[Parser] = None
        self._cues: List[Cue] = []
        self._index = CueIndex(())
        self._state = ControllerState.UNINITIALIZED
        self._lock = asyncio.Lock()

    @property
    def provider(self) -> SubtitleProvider:
        return self._provider

    @property
    def state(self) -> ControllerState:
        return self._state

    @property
    def initialized(self) -> bool:
        return self._state is ControllerState.INITIALIZED

    @property
    def parser(self) -> Parser:
        self._require_initialized()
        return self._parser

    @property
    def cues(self) -> Tuple[Cue, ...]:
        return self._index.cues

    def _require_initialized(self) -> None:
        if not self.initialized:
            raise NotInitializedError()

    async def initialize(self) -> None:
        """Fetch, parse and reconcile the subtitle. Later calls are no-ops.

        Concurrent callers wait for the first one to finish. If anything fails
        the controller goes back to uninitialized and the error propagates.
        """
        async with self._lock:
            if self.initialized:
                return
            self._state = ControllerState.INITIALIZING
            try:
                source = await self._provider.get_subtitle()
                parser = make_parser(source, self._pattern, self._on_parsing)
                cues = await asyncio.to_thread(decode_subtitles, parser)
            except BaseException:
                self._state = ControllerState.UNINITIALIZED
                raise

            self._parser = parser
            self._cues.extend(cues)
            self.sort()
            self._state = ControllerState.INITIALIZED
            logger.info(f"Loaded {len(self._cues)} {source.format.value} cues")

    def sort(self) -> None:
        """Order cues by start time and rebuild the lookup index."""
        self._cues.sort(key=lambda cue: cue.start)
        self._index = CueIndex(self._cues)

    def lookup_at(self, time_ms: float) -> Optional[Cue]:
        """The cue showing at ``time_ms``, or None in a gap."""
        self._require_initialized()
        return self._index.lookup_at(time_ms)

    def range_at(self, time_ms: float) -> List[Cue]:
        """All cues showing at ``time_ms``; use when cues may overlap."""
        self._require_initialized()
        return self._index.range_at(time_ms)

    def all_cues_joined(self, separator: str = DEFAULT_SEPARATOR) -> str:
        return separator.join(str(cue) for cue in self._index)
