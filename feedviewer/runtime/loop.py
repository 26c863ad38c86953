"""Main interactive event loop.

Each iteration decodes one input event (or a read timeout), dispatches it,
then acts on at most one pending signal before redrawing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..input.reader import EOF, INTERRUPTED, TIMEOUT

if TYPE_CHECKING:
    from ..input.reader import InputDecoder
    from ..terminal import TerminalController
    from .app import Application
    from .signals import SignalSlot


def run_main_loop(
    app: Application,
    terminal: TerminalController,
    decoder: InputDecoder,
    signals: SignalSlot,
) -> int:
    """Run the TUI until quit, EOF, or a terminating signal.

    Returns the process exit status. The terminal is restored on every exit
    path, including exceptions raised by commands.
    """
    with signals.installed(), terminal.tui_mode(mouse=app.mouse_enabled):
        app.update_geometry()
        app.update_title()
        app.draw()
        while True:
            event = decoder.next_event()
            if event == EOF:
                return 0
            if event not in (TIMEOUT, INTERRUPTED) and app.handle_event(event):
                return 0
            signo = signals.take()
            if signo is not None:
                status = app.handle_signal(signo)
                if status is not None:
                    return status
            app.draw()
