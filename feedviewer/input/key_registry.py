"""Key-token dispatch table."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True)
class KeyBinding:
    """One action reachable from one or more key tokens."""

    keys: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyMap:
    """Map decoded key tokens to action callbacks.

    Handlers return ``True`` to request quitting; ``None``/``False`` means the
    loop keeps running.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    def bind(self, *bindings: KeyBinding) -> KeyMap:
        """Register bindings, overwriting earlier handlers for the same keys."""
        for binding in bindings:
            for key in binding.keys:
                self._handlers[key] = binding.handler
        return self

    def __contains__(self, key: str) -> bool:
        return key in self._handlers

    def dispatch(self, key: str) -> bool | None:
        """Invoke the handler bound to ``key``; unbound keys are ignored."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()
