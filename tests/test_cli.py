"""Tests for the command-line interface."""

import json
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from subcue import __version__
from subcue.cli import cli


def invoke(*args):
    return CliRunner().invoke(cli, [str(a) for a in args])


def test_version():
    result = invoke("--version")
    assert result.exit_code == 0
    assert __version__ in result.output


def test_help_lists_commands():
    result = invoke("--help")
    assert result.exit_code == 0
    assert "cues" in result.output
    assert "at" in result.output


class TestCuesCommand:
    def test_plain_output(self, srt_file):
        result = invoke("cues", srt_file)
        assert result.exit_code == 0
        assert "00:00:01.000 --> 00:00:02.500\nHello there" in result.output
        assert "General Kenobi\nsecond line" in result.output
        assert "<i>" not in result.output

    def test_json_output(self, srt_file):
        result = invoke("cues", srt_file, "--json")
        assert result.exit_code == 0
        assert '"text": "Bye"' in result.output
        assert '"start_timestamp": "00:01:00.000"' in result.output

    def test_custom_separator(self, srt_file):
        result = invoke("cues", srt_file, "--separator", " || ")
        assert "Hello there || 00:00:03.000" in result.output

    def test_output_file(self, srt_file, temp_dir):
        out = temp_dir / "out" / "cues.json"
        out.parent.mkdir()
        result = invoke("cues", srt_file, "--output", out)

        assert result.exit_code == 0
        assert "Hello there" in result.output
        saved = json.loads(out.read_text(encoding="utf-8"))
        assert [item["text"] for item in saved["cues"]] == [
            "Hello there",
            "General Kenobi\nsecond line",
            "Bye",
        ]

    def test_output_file_unwritable(self, srt_file, temp_dir):
        result = invoke("cues", srt_file, "--output", temp_dir / "missing" / "cues.json")
        assert result.exit_code == 1
        assert "Could not write" in result.output

    def test_missing_file(self, temp_dir):
        result = invoke("cues", temp_dir / "missing.srt")
        assert result.exit_code == 1

    def test_unknown_extension_needs_format(self, temp_dir):
        path = temp_dir / "captions.txt"
        path.write_text("WEBVTT\n\n00:01.000 --> 00:02.000\nHi\n", encoding="utf-8")

        assert invoke("cues", path).exit_code == 1
        result = invoke("cues", path, "--format", "vtt")
        assert result.exit_code == 0
        assert "Hi" in result.output

    def test_custom_pattern(self, temp_dir):
        path = temp_dir / "lines.txt"
        path.write_text("1-2 first\n4-5 second\n", encoding="utf-8")

        result = invoke(
            "cues", path, "--pattern", r"(?P<start_s>\d+)-(?P<end_s>\d+) (?P<text>.+)"
        )
        assert result.exit_code == 0
        assert "00:00:04.000 --> 00:00:05.000\nsecond" in result.output


class TestAtCommand:
    def test_hit(self, srt_file):
        result = invoke("at", srt_file, "1.5")
        assert result.exit_code == 0
        assert "Hello there" in result.output

    def test_clock_time(self, srt_file):
        result = invoke("at", srt_file, "00:00:03.500")
        assert result.exit_code == 0
        assert "General Kenobi" in result.output

    def test_gap_exits_nonzero(self, srt_file):
        result = invoke("at", srt_file, "2.75")
        assert result.exit_code == 1
        assert "No cue at 2.75" in result.output

    def test_invalid_time(self, srt_file):
        result = invoke("at", srt_file, "soon")
        assert result.exit_code == 1
        assert "Invalid time" in result.output

    def test_all_and_json(self, srt_file):
        result = invoke("at", srt_file, "60.5", "--all", "--json")
        assert result.exit_code == 0
        assert '"text": "Bye"' in result.output
        assert '"index": 3' in result.output

    def test_url_source(self, sample_vtt):
        response = MagicMock()
        response.content = sample_vtt.encode("utf-8")
        with patch("subcue.core.providers.requests.get", return_value=response) as mock_get:
            result = invoke("at", "https://example.com/captions.vtt", "3.2")

        assert result.exit_code == 0
        assert "World" in result.output
        mock_get.assert_called_once()
