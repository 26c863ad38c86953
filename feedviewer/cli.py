"""Command-line front door for feedviewer.

Parses options, configures logging, and runs an interactive session over
the given feed files (or one feed read from standard input).
"""

from __future__ import annotations

import argparse
import logging
import os
from collections.abc import Sequence

from . import __version__
from .errors import FeedViewerError
from .runtime import run_viewer
from .runtime.logs import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feedviewer",
        description="Browse tab-separated feed files in the terminal.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        metavar="FILE",
        help="Feed files to browse. Reads one feed from standard input when omitted.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Write a debug log to the user log directory (also FEEDVIEWER_DEBUG=1).",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, run the viewer, and exit with its status.

    Fatal errors are reported as ``feedviewer: <message>`` after the terminal
    has been restored.
    """
    args = build_parser().parse_args(argv)
    debug = args.debug or os.environ.get("FEEDVIEWER_DEBUG") == "1"
    configure_logging(debug)
    try:
        status = run_viewer(args.files)
    except FeedViewerError as exc:
        logger.error("fatal: %s", exc)
        raise SystemExit(f"feedviewer: {exc}") from exc
    raise SystemExit(status)


if __name__ == "__main__":
    main()
