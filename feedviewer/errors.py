"""Exception types surfaced by feedviewer.

Anything deriving from ``FeedViewerError`` is fatal: the CLI restores the
terminal, logs the error, and exits with a one-line message.
"""

from __future__ import annotations


class FeedViewerError(Exception):
    """Base class for fatal feedviewer errors."""


class FeedReadError(FeedViewerError):
    """A feed file or the seen-URL list could not be opened or read."""

    def __init__(self, path: str, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"{path}: {cause}")


class SpawnError(FeedViewerError):
    """An external program could not be started."""

    def __init__(self, command: str, cause: BaseException) -> None:
        self.command = command
        self.cause = cause
        super().__init__(f"cannot run {command!r}: {cause}")
