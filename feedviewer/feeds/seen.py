"""Externally maintained list of links that are no longer new."""

from __future__ import annotations

import bisect
from pathlib import Path

from ..errors import FeedReadError


def read_urls(path: str | Path) -> list[str]:
    """Read a newline-separated URL list and return it sorted.

    A missing file is an empty list: nothing has been marked yet.
    """
    try:
        with open(path, "rb") as fp:
            data = fp.read()
    except FileNotFoundError:
        return []
    except OSError as exc:
        raise FeedReadError(str(path), exc) from exc
    urls = [line.decode("utf-8", errors="replace") for line in data.split(b"\n") if line]
    urls.sort()
    return urls


class SeenUrls:
    """Sorted URL list with binary-search membership."""

    def __init__(self, urls: list[str]) -> None:
        self._urls = sorted(urls)

    @classmethod
    def from_file(cls, path: str | Path) -> SeenUrls:
        return cls(read_urls(path))

    def __contains__(self, url: object) -> bool:
        if not isinstance(url, str):
            return False
        idx = bisect.bisect_left(self._urls, url)
        return idx < len(self._urls) and self._urls[idx] == url
