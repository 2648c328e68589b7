"""JSON serialization for cue sequences."""

import json
from typing import Iterable, List

from .models import Cue, format_timestamp


def cue_to_dict(cue: Cue) -> dict:
    return {
        "index": cue.index,
        "start": cue.start,
        "end": cue.end,
        "start_timestamp": format_timestamp(cue.start),
        "end_timestamp": format_timestamp(cue.end),
        "text": cue.text,
    }


def cues_to_json(cues: Iterable[Cue]) -> List[dict]:
    """Convert cues into JSON-serializable dicts."""
    return [cue_to_dict(cue) for cue in cues]


def save_cues_to_json(filepath: str, cues: Iterable[Cue]) -> None:
    """Save cues to a JSON file."""
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump({"cues": cues_to_json(cues)}, f, indent=2, ensure_ascii=False)
