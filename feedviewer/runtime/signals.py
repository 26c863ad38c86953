"""Single-slot signal notification.

Handlers only record the last signal number; the main loop takes it after
each input event or read timeout and acts on it outside the handler.
"""

from __future__ import annotations

import contextlib
import signal

HANDLED_SIGNALS: tuple[int, ...] = (
    signal.SIGHUP,
    signal.SIGINT,
    signal.SIGTERM,
    signal.SIGWINCH,
)


class SignalSlot:
    def __init__(self) -> None:
        self._last: int | None = None
        self._previous: dict[int, object] = {}

    def notify(self, signo: int, frame: object = None) -> None:
        """Signal handler: remember ``signo``, nothing else."""
        self._last = signo

    def peek(self) -> int | None:
        return self._last

    def take(self) -> int | None:
        signo = self._last
        self._last = None
        return signo

    def install(self) -> None:
        for signo in HANDLED_SIGNALS:
            self._previous[signo] = signal.signal(signo, self.notify)

    def restore(self) -> None:
        for signo, previous in self._previous.items():
            signal.signal(signo, previous)
        self._previous.clear()

    @contextlib.contextmanager
    def installed(self):
        try:
            self.install()
            yield self
        finally:
            self.restore()
