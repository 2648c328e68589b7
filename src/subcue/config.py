"""Configuration settings for subcue."""

import os

from .exceptions import ConfigError

# Reconciliation (can be overridden via environment variables)
MERGE_GAP_MS = int(os.getenv("SUBCUE_MERGE_GAP_MS", "500"))  # same-text cues closer than this merge
# Upper bound on merge rounds. Every productive round shrinks the cue list or
# the total text length, so the loop always settles; the cap only bounds the
# worst case at MAX_RECONCILE_ROUNDS * N comparisons.
MAX_RECONCILE_ROUNDS = int(os.getenv("SUBCUE_MAX_RECONCILE_ROUNDS", "50"))

# Sanitizer: older consumers expect "&nbsp;" to decode to an apostrophe
LEGACY_NBSP = os.getenv("SUBCUE_LEGACY_NBSP", "").strip().lower() in {"1", "true", "yes"}

# Providers
NETWORK_TIMEOUT = float(os.getenv("SUBCUE_NETWORK_TIMEOUT", "10"))
DEFAULT_ENCODING = "utf-8"

# Output
DEFAULT_SEPARATOR = ", "

# File suffixes recognised when no format is declared
EXTENSION_FORMATS = {
    ".srt": "srt",
    ".vtt": "vtt",
    ".webvtt": "vtt",
    ".ttml": "ttml",
    ".dfxp": "dfxp",
    ".xml": "ttml",
}

def validate_config() -> None:
    """Validate configuration values."""
    if MERGE_GAP_MS < 0:
        raise ConfigError("Merge gap must be non-negative")

    if MAX_RECONCILE_ROUNDS < 1:
        raise ConfigError("Reconciliation needs at least one round")

    if NETWORK_TIMEOUT <= 0:
        raise ConfigError("Invalid network timeout")

# Validate config on import
validate_config()
