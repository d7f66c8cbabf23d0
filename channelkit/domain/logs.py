"""Log retrievers — turn a URL posted in chat into raw log texts."""

import re
import sys
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Iterable, Optional, Set
from urllib.parse import urlparse

import aiohttp


def _log(msg: str):
    print(msg, file=sys.stderr)


class Order(IntEnum):
    """Run order; lower values run first."""

    EARLIEST = -100
    EARLY = -50
    DEFAULT = 0
    LATE = 50
    LATEST = 100


class LogRetriever(ABC):
    """Base class for retrievers.

    ``predicate()`` decides whether a URL is handled; ``process()`` returns
    the log texts found behind it.
    """

    identifier: str = ""
    order: Order = Order.DEFAULT

    async def setup(self) -> None:
        pass

    async def predicate(self, url: str) -> bool:
        return True

    @abstractmethod
    async def process(self, url: str) -> Set[str]: ...


_PASTEBIN_HOSTS = {"pastebin.com", "www.pastebin.com"}
_PASTE_ID_RE = re.compile(r"^/(?:raw/)?([A-Za-z0-9]+)/?$")


class PastebinRetriever(LogRetriever):
    """Downloads pastebin.com pastes through their raw endpoint."""

    identifier = "pastebin"
    order = Order.DEFAULT

    RAW_URL = "https://pastebin.com/raw/{paste_id}"

    def __init__(self, timeout: float = 30.0):
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    @staticmethod
    def paste_id(url: str) -> Optional[str]:
        parsed = urlparse(url)
        if parsed.scheme not in ("http", "https") or parsed.netloc.lower() not in _PASTEBIN_HOSTS:
            return None
        m = _PASTE_ID_RE.match(parsed.path)
        return m.group(1) if m else None

    async def predicate(self, url: str) -> bool:
        return self.paste_id(url) is not None

    async def process(self, url: str) -> Set[str]:
        paste_id = self.paste_id(url)
        if paste_id is None:
            return set()
        raw_url = self.RAW_URL.format(paste_id=paste_id)
        async with aiohttp.ClientSession(timeout=self._timeout) as session:
            async with session.get(raw_url) as resp:
                resp.raise_for_status()
                text = await resp.text()
        return {text} if text.strip() else set()


async def retrieve_logs(retrievers: Iterable[LogRetriever], url: str) -> Set[str]:
    """Run every matching retriever in order and union their results.

    A failing retriever is logged and skipped.
    """
    logs: Set[str] = set()
    for retriever in sorted(retrievers, key=lambda r: r.order):
        try:
            if not await retriever.predicate(url):
                continue
            logs |= await retriever.process(url)
        except Exception as e:
            _log(f"[logs:{retriever.identifier}] failed for {url}: {e}")
    return logs
