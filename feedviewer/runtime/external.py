"""External collaborators: opener, pager, clipboard helper, mark-read tool.

The opener and clipboard helper run detached with their output discarded.
The pager and mark-read command are waited for; the pager gets the terminal
back for the duration of its run.
"""

from __future__ import annotations

import logging
import os
import shlex
import subprocess
from typing import TYPE_CHECKING

from ..errors import SpawnError

if TYPE_CHECKING:
    from ..terminal import TerminalController
    from .config import ViewerSettings

logger = logging.getLogger(__name__)

SHELL = "/bin/sh"


class ExternalPrograms:
    def __init__(self, settings: ViewerSettings, terminal: TerminalController) -> None:
        self.settings = settings
        self.terminal = terminal

    def _spawn_detached(self, command: str, value: str) -> None:
        argv = [*shlex.split(command), value]
        logger.info("spawning %s", argv)
        try:
            subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except (OSError, ValueError) as exc:
            raise SpawnError(command, exc) from exc

    def plumb(self, url: str) -> None:
        """Hand ``url`` to the opener; empty URLs are ignored."""
        if url:
            self._spawn_detached(self.settings.plumber, url)

    def yank(self, value: str) -> None:
        if value:
            self._spawn_detached(self.settings.yanker, value)

    def pipe(self, line: str) -> None:
        """Run the pager on ``line`` with the terminal handed back to it."""
        command = self.settings.piper
        logger.info("piping item to %r", command)
        with self.terminal.suspended():
            try:
                proc = subprocess.run(
                    [SHELL, "-c", command],
                    input=(line + "\n").encode("utf-8", errors="replace"),
                    check=False,
                )
            except OSError as exc:
                raise SpawnError(command, exc) from exc
        if proc.returncode != 0:
            logger.warning("%r exited with status %d", command, proc.returncode)

    def mark(self, links: list[str], read: bool) -> bool:
        """Feed ``links`` to the mark read/unread command.

        Returns whether the command exited successfully.
        """
        command = self.settings.mark_read_command if read else self.settings.mark_unread_command
        env = dict(os.environ)
        if self.settings.url_file:
            env["SFEED_URL_FILE"] = self.settings.url_file
        payload = "".join(f"{link}\n" for link in links)
        logger.info("running %r on %d links", command, len(links))
        try:
            proc = subprocess.run(
                [SHELL, "-c", command],
                input=payload.encode("utf-8", errors="replace"),
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                env=env,
                check=False,
            )
        except OSError as exc:
            raise SpawnError(command, exc) from exc
        if proc.returncode != 0:
            logger.warning("%r exited with status %d", command, proc.returncode)
            return False
        return True
