"""Subtitle providers: where the raw payload comes from.

A provider is anything with an awaitable ``get_subtitle()`` returning a
``SubtitleObject``. Blocking I/O runs in a worker thread. Errors are not
wrapped: ``OSError`` from files and ``requests`` exceptions from the network
reach the caller unchanged.
"""

import asyncio
from pathlib import Path
from typing import Optional, Protocol, Union

import requests

from ..config import DEFAULT_ENCODING, NETWORK_TIMEOUT
from ..utils.logging import get_logger
from ..utils.retry import retry_request
from .models import SubtitleFormat, SubtitleObject

logger = get_logger(__name__)


class SubtitleProvider(Protocol):
    async def get_subtitle(self) -> SubtitleObject:
        ...


class StringSubtitle:
    """Subtitle text already held in memory."""

    def __init__(self, data: str, format: SubtitleFormat):
        self.data = data
        self.format = SubtitleFormat(format)

    async def get_subtitle(self) -> SubtitleObject:
        return SubtitleObject(data=self.data, format=self.format)


class FileSubtitle:
    """Subtitle file on disk; the format defaults to the file extension."""

    def __init__(
        self,
        path: Union[str, Path],
        format: Optional[SubtitleFormat] = None,
        encoding: str = DEFAULT_ENCODING,
    ):
        self.path = Path(path)
        self.format = (
            SubtitleFormat(format) if format else SubtitleFormat.from_extension(self.path.name)
        )
        self.encoding = encoding

    async def get_subtitle(self) -> SubtitleObject:
        data = await asyncio.to_thread(
            self.path.read_text, encoding=self.encoding, errors="replace"
        )
        logger.debug(f"Read {len(data)} characters from {self.path}")
        return SubtitleObject(data=data, format=self.format)


class NetworkSubtitle:
    """Subtitle fetched over HTTP(S).

    Requests are made once by default. ``max_retries`` opts into retrying
    connection failures and timeouts with exponential backoff; HTTP error
    statuses are raised straight away.
    """

    def __init__(
        self,
        url: str,
        format: Optional[SubtitleFormat] = None,
        timeout: float = NETWORK_TIMEOUT,
        max_retries: int = 0,
        encoding: str = DEFAULT_ENCODING,
    ):
        self.url = url
        self.format = SubtitleFormat(format) if format else SubtitleFormat.from_extension(url)
        self.timeout = timeout
        self.max_retries = max_retries
        self.encoding = encoding

    def _fetch(self) -> str:
        response = requests.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        return response.content.decode(self.encoding, errors="replace")

    def download(self) -> str:
        """Blocking download of the subtitle text."""
        data = retry_request(
            self._fetch,
            max_retries=self.max_retries,
            exceptions=(requests.ConnectionError, requests.Timeout),
        )
        logger.debug(f"Downloaded {len(data)} characters from {self.url}")
        return data

    async def get_subtitle(self) -> SubtitleObject:
        data = await asyncio.to_thread(self.download)
        return SubtitleObject(data=data, format=self.format)
