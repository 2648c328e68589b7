"""Flatten raw extracted cues into a clean, ordered sequence.

Subtitle files often split one spoken line over several timing blocks, repeat
a block with identical timing, or carry markup in the text. ``flatten_cues``
repairs that in stages:

1. drop cues with no text;
2. merge adjacent cues sharing exactly the same span;
3. repeat merge rounds until nothing changes (bounded by a round cap):
   contiguous same-text merge, near same-text merge, trailing out-of-order
   trim, then sanitize and reindex;
4. stable sort by start time and reindex.

Every pass builds a new list of frozen cues; the input is never modified.
Merges only see neighbours in input order, so when the input is unsorted the
final sort can bring same-text cues together that a later call would merge.
"""

from dataclasses import replace
from typing import Callable, List, Sequence, Tuple

from ..config import MAX_RECONCILE_ROUNDS, MERGE_GAP_MS
from ..utils.logging import get_logger
from .models import Cue
from .text_utils import sanitize_text

logger = get_logger(__name__)

MergeTest = Callable[[Cue, Cue], bool]
MergeFn = Callable[[Cue, Cue], Cue]


def _merge_adjacent(
    cues: Sequence[Cue], should_merge: MergeTest, merge: MergeFn
) -> Tuple[List[Cue], int]:
    """Fold adjacent pairs; a merged cue is compared with the next one too."""
    merged: List[Cue] = []
    count = 0
    for cue in cues:
        if merged and should_merge(merged[-1], cue):
            merged[-1] = merge(merged[-1], cue)
            count += 1
        else:
            merged.append(cue)
    return merged, count


def _join_span(previous: Cue, current: Cue) -> Cue:
    return Cue(
        index=previous.index,
        start=previous.start,
        end=current.end,
        text=previous.text,
    )


def _stack_texts(previous: Cue, current: Cue) -> Cue:
    text = (
        previous.text
        if previous.text == current.text
        else f"{previous.text}\n{current.text}"
    )
    return Cue(index=previous.index, start=current.start, end=current.end, text=text)


# ----------------------
# Individual passes
# ----------------------
def drop_empty(cues: Sequence[Cue]) -> List[Cue]:
    return [cue for cue in cues if cue.text.strip()]


def merge_same_span(cues: Sequence[Cue]) -> Tuple[List[Cue], int]:
    """Merge neighbours with identical start and end, stacking their texts."""
    return _merge_adjacent(
        cues,
        lambda prev, cur: prev.start == cur.start and prev.end == cur.end,
        _stack_texts,
    )


def merge_contiguous(cues: Sequence[Cue]) -> Tuple[List[Cue], int]:
    """Merge same-text neighbours where one ends exactly as the next starts."""
    return _merge_adjacent(
        cues,
        lambda prev, cur: prev.text == cur.text and prev.end == cur.start,
        _join_span,
    )


def merge_near(
    cues: Sequence[Cue], gap_ms: int = MERGE_GAP_MS
) -> Tuple[List[Cue], int]:
    """Merge same-text neighbours separated by less than ``gap_ms``.

    Overlapping neighbours have a negative gap and merge as well.
    """
    return _merge_adjacent(
        cues,
        lambda prev, cur: prev.text == cur.text and cur.start - prev.end < gap_ms,
        _join_span,
    )


def trim_trailing(cues: Sequence[Cue]) -> Tuple[List[Cue], bool]:
    """Drop a final cue that ends before the second-to-last one starts."""
    if len(cues) >= 2 and cues[-1].end < cues[-2].start:
        return list(cues[:-1]), True
    return list(cues), False


def sanitize_and_reindex(cues: Sequence[Cue]) -> Tuple[List[Cue], bool]:
    """Sanitize every text, drop cues emptied by it, number from 1."""
    result: List[Cue] = []
    changed = False
    for cue in cues:
        text = sanitize_text(cue.text)
        if text != cue.text:
            changed = True
        if not text.strip():
            changed = True
            continue
        result.append(Cue(index=len(result) + 1, start=cue.start, end=cue.end, text=text))
    return result, changed


def reindex(cues: Sequence[Cue]) -> List[Cue]:
    return [
        cue if cue.index == i else replace(cue, index=i)
        for i, cue in enumerate(cues, start=1)
    ]


# ----------------------
# Full reconciliation
# ----------------------
def flatten_cues(
    cues: Sequence[Cue],
    merge_gap_ms: int = MERGE_GAP_MS,
    max_rounds: int = MAX_RECONCILE_ROUNDS,
) -> List[Cue]:
    """Reconcile raw cues into a sanitized, start-sorted, 1..N indexed list.

    Args:
        cues: Cues in extraction order (not necessarily sorted)
        merge_gap_ms: Same-text neighbours closer than this are merged
        max_rounds: Upper bound on merge rounds

    Returns:
        New list of cues
    """
    current = drop_empty(cues)
    current, span_merges = merge_same_span(current)
    if span_merges:
        logger.debug(f"Merged {span_merges} cues sharing an identical span")

    rounds = 0
    settled = False
    while rounds < max_rounds:
        rounds += 1
        current, contiguous = merge_contiguous(current)
        current, near = merge_near(current, merge_gap_ms)
        current, trimmed = trim_trailing(current)
        current, text_changed = sanitize_and_reindex(current)
        if not (contiguous or near or trimmed or text_changed):
            settled = True
            break
        logger.debug(
            f"Round {rounds}: {contiguous} contiguous and {near} near merges"
            f"{', trimmed trailing cue' if trimmed else ''}"
        )

    if not settled:
        logger.warning(
            f"Cue reconciliation stopped after {max_rounds} rounds without settling"
        )

    result = reindex(sorted(current, key=lambda cue: cue.start))
    logger.debug(f"Reconciled {len(cues)} raw cues into {len(result)} in {rounds} rounds")
    return result
