"""Session bootstrap: wire settings, feeds, terminal, and the main loop.

Feeds are loaded before the terminal enters TUI mode, so a feed that cannot
be read fails with the user's screen untouched.
"""

from __future__ import annotations

import logging
import os
import sys
import termios
from collections.abc import Mapping, Sequence

from ..errors import FeedViewerError
from ..feeds.store import FeedStore, feeds_from_paths
from ..input.reader import InputDecoder
from ..terminal import TerminalController
from .app import Application
from .config import ViewerSettings, load_preferences
from .external import ExternalPrograms
from .loop import run_main_loop
from .signals import SignalSlot

logger = logging.getLogger(__name__)

CONTROLLING_TTY = "/dev/tty"


def run_viewer(paths: Sequence[str], environ: Mapping[str, str] | None = None) -> int:
    """Browse ``paths`` (or a feed piped on standard input) and return the exit status."""
    settings = ViewerSettings.from_environ(environ)
    feeds = feeds_from_paths(paths)

    stdin_stream = None
    tty_file = None
    if paths:
        input_fd = sys.stdin.fileno()
    else:
        if os.isatty(sys.stdin.fileno()):
            raise FeedViewerError("no feed files given and standard input is a terminal")
        stdin_stream = sys.stdin.buffer
        try:
            tty_file = open(CONTROLLING_TTY, "rb", buffering=0)
        except OSError as exc:
            raise FeedViewerError(f"{CONTROLLING_TTY}: {exc.strerror or exc}") from exc
        input_fd = tty_file.fileno()

    store = FeedStore(
        feeds,
        url_file=settings.url_file,
        lazy=settings.lazy_load,
        stdin=stdin_stream,
    )
    try:
        try:
            terminal = TerminalController(input_fd, sys.stdout.fileno())
        except termios.error as exc:
            raise FeedViewerError("input is not a terminal") from exc
        decoder = InputDecoder(input_fd)
        signals = SignalSlot()
        app = Application(
            store,
            terminal,
            ExternalPrograms(settings, terminal),
            decoder=decoder,
            signals=signals,
            preferences=load_preferences(),
        )
        app.load_initial()
        logger.info("browsing %d feeds (%d/%d new)", len(feeds), store.total_new, store.total_count)
        return run_main_loop(app, terminal, decoder, signals)
    finally:
        store.close()
        if tty_file is not None:
            tty_file.close()
