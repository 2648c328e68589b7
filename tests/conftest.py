"""Test configuration and fixtures.

Provides reusable fixtures for:
- Temporary files and directories
- Sample SubRip, WebVTT and TTML payloads
- In-memory subtitle providers
"""

import asyncio
import tempfile
from pathlib import Path

import pytest

from subcue.core.models import Cue, SubtitleFormat, SubtitleObject


# =============================================================================
# Basic Fixtures
# =============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


# =============================================================================
# Subtitle Payloads
# =============================================================================

SAMPLE_SRT = """1
00:00:01,000 --> 00:00:02,500
Hello there

2
00:00:03,000 --> 00:00:04,000
<i>General</i> Kenobi
second line

3
00:00:05,000 --> 00:00:06,000

4
00:01:00,000 --> 00:01:01,000
Bye
"""

SAMPLE_VTT = """WEBVTT

intro
00:01.000 --> 00:02.000 align:start position:10%
Hello

2
00:00:03.000 --> 00:00:04.500
World
"""

SAMPLE_TTML = """<?xml version="1.0" encoding="utf-8"?>
<tt xmlns="http://www.w3.org/ns/ttml"><body><div>
<p begin="00:00:01.000" end="00:00:02.000">Hello &amp; welcome</p>
<p begin="00:00:03.500" end="00:00:04.000" style="s1"><span tts:color="red">Red</span></p>
</div></body></tt>
"""


@pytest.fixture
def sample_srt():
    return SAMPLE_SRT


@pytest.fixture
def sample_vtt():
    return SAMPLE_VTT


@pytest.fixture
def sample_ttml():
    return SAMPLE_TTML


@pytest.fixture
def srt_file(temp_dir):
    """Write the sample SubRip payload to disk."""
    path = temp_dir / "sample.srt"
    path.write_text(SAMPLE_SRT, encoding="utf-8")
    return path


@pytest.fixture
def sample_cues():
    """Three sorted, non-overlapping cues."""
    return [
        Cue(index=1, start=1000, end=2000, text="A"),
        Cue(index=2, start=3000, end=4000, text="B"),
        Cue(index=3, start=5000, end=6000, text="C"),
    ]


# =============================================================================
# Providers
# =============================================================================


class FakeProvider:
    """Provider returning a fixed payload and counting fetches."""

    def __init__(self, data="", fmt=SubtitleFormat.SRT, error=None):
        self.data = data
        self.format = fmt
        self.error = error
        self.calls = 0

    async def get_subtitle(self):
        self.calls += 1
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return SubtitleObject(data=self.data, format=self.format)


@pytest.fixture
def fake_provider():
    return FakeProvider(SAMPLE_SRT, SubtitleFormat.SRT)


@pytest.fixture
def make_provider():
    """Factory for FakeProvider instances."""
    return FakeProvider
