"""Command-line interface using Click."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click
import requests

from . import __version__
from .core.controller import SubtitleController
from .core.models import SubtitleFormat
from .core.providers import FileSubtitle, NetworkSubtitle, SubtitleProvider
from .core.serialization import cue_to_dict, cues_to_json, save_cues_to_json
from .exceptions import SubcueError
from .utils.logging import setup_logging
from .utils.validation import parse_time_ms

FORMAT_CHOICES = [fmt.value for fmt in SubtitleFormat]

# Failures worth a one-line error instead of a traceback
CLI_ERRORS = (SubcueError, OSError, requests.RequestException)


def build_provider(source: str, fmt: Optional[str] = None) -> SubtitleProvider:
    """Pick a provider for a path or an http(s) URL."""
    subtitle_format = SubtitleFormat(fmt) if fmt else None
    if source.startswith(("http://", "https://")):
        return NetworkSubtitle(source, format=subtitle_format)
    return FileSubtitle(source, format=subtitle_format)


def load_controller(
    source: str, fmt: Optional[str] = None, pattern: Optional[str] = None
) -> SubtitleController:
    """Build a controller for ``source`` and run its initialization."""
    if pattern and not fmt:
        fmt = SubtitleFormat.CUSTOM.value
    controller = SubtitleController(build_provider(source, fmt), pattern=pattern)
    asyncio.run(controller.initialize())
    return controller


def _source_options(func):
    func = click.option('--pattern', help='Custom regex with start_*/end_*/text named groups')(func)
    func = click.option('--format', 'fmt', type=click.Choice(FORMAT_CHOICES),
                        help='Subtitle format (default: from file extension)')(func)
    return func


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--log-file', type=click.Path(), help='Log to file')
@click.pass_context
def cli(ctx, verbose, log_file):
    """subcue - decode subtitle files and look up cues by playback time."""
    ctx.ensure_object(dict)
    logger = setup_logging(
        level="DEBUG" if verbose else "INFO",
        log_file=Path(log_file) if log_file else None,
        verbose=verbose
    )
    ctx.obj['logger'] = logger
    ctx.obj['verbose'] = verbose


@cli.command()
@click.argument('source')
@_source_options
@click.option('--json', 'as_json', is_flag=True, help='Print cues as JSON')
@click.option('--separator', default='\n\n', show_default=False,
              help='Text between cues in plain output (default: blank line)')
@click.option('--output', '-o', type=click.Path(dir_okay=False),
              help='Also save the cues as JSON to this file')
@click.pass_context
def cues(ctx, source, fmt, pattern, as_json, separator, output):
    """Print every reconciled cue of SOURCE (file path or URL)."""
    logger = ctx.obj['logger']

    try:
        controller = load_controller(source, fmt, pattern)
    except CLI_ERRORS as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    if output:
        try:
            save_cues_to_json(output, controller.cues)
        except OSError as e:
            logger.error(f"❌ Could not write {output}: {e}")
            sys.exit(1)
        logger.info(f"Saved {len(controller.cues)} cues to {output}")

    if as_json:
        click.echo(json.dumps(cues_to_json(controller.cues), indent=2, ensure_ascii=False))
    else:
        click.echo(controller.all_cues_joined(separator))


@cli.command()
@click.argument('source')
@click.argument('time')
@_source_options
@click.option('--all', 'show_all', is_flag=True,
              help='Show every overlapping cue, not just one')
@click.option('--json', 'as_json', is_flag=True, help='Print cues as JSON')
@click.pass_context
def at(ctx, source, time, fmt, pattern, show_all, as_json):
    """Show the cue of SOURCE playing at TIME (HH:MM:SS.mmm, MM:SS.mmm or seconds)."""
    logger = ctx.obj['logger']

    try:
        time_ms = parse_time_ms(time)
        controller = load_controller(source, fmt, pattern)
    except CLI_ERRORS as e:
        logger.error(f"❌ {e}")
        sys.exit(1)

    if show_all:
        found = controller.range_at(time_ms)
    else:
        cue = controller.lookup_at(time_ms)
        found = [cue] if cue else []

    if not found:
        logger.info(f"No cue at {time}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps([cue_to_dict(c) for c in found], indent=2, ensure_ascii=False))
    else:
        click.echo("\n\n".join(str(c) for c in found))


if __name__ == '__main__':
    cli()
