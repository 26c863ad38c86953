"""Tests for the last-signal slot and logging setup."""

from __future__ import annotations

import logging
import signal
import tempfile
import unittest
from pathlib import Path

from feedviewer.runtime.logs import configure_logging
from feedviewer.runtime.signals import HANDLED_SIGNALS, SignalSlot


class SignalSlotTests(unittest.TestCase):
    def test_take_clears_last_signal(self) -> None:
        slot = SignalSlot()
        slot.notify(signal.SIGHUP)
        slot.notify(signal.SIGWINCH)

        self.assertEqual(slot.peek(), signal.SIGWINCH)
        self.assertEqual(slot.take(), signal.SIGWINCH)
        self.assertIsNone(slot.take())

    def test_installed_restores_previous_handlers(self) -> None:
        before = {signo: signal.getsignal(signo) for signo in HANDLED_SIGNALS}
        slot = SignalSlot()

        with slot.installed():
            for signo in HANDLED_SIGNALS:
                self.assertEqual(signal.getsignal(signo), slot.notify)
            signal.raise_signal(signal.SIGWINCH)
            self.assertEqual(slot.take(), signal.SIGWINCH)

        for signo, handler in before.items():
            self.assertEqual(signal.getsignal(signo), handler)


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        configure_logging(False)

    def test_debug_logs_to_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "logs" / "feedviewer.log"
            self.assertEqual(configure_logging(True, log_path), log_path)

            logging.getLogger("feedviewer.test").debug("hello %s", "log")
            for handler in logging.getLogger("feedviewer").handlers:
                handler.flush()

            self.assertIn("hello log", log_path.read_text(encoding="utf-8"))
            configure_logging(False)

    def test_non_debug_discards_records(self) -> None:
        self.assertIsNone(configure_logging(False))
        handlers = logging.getLogger("feedviewer").handlers
        self.assertEqual(len(handlers), 1)
        self.assertIsInstance(handlers[0], logging.NullHandler)


if __name__ == "__main__":
    unittest.main()
