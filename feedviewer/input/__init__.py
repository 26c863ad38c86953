"""Input-layer public API: terminal byte decoding and key dispatch."""

from .key_registry import KeyBinding, KeyMap
from .reader import (
    EOF,
    ESC_SEQUENCE_TIMEOUT_MS,
    INTERRUPTED,
    READ_TIMEOUT_MS,
    TIMEOUT,
    InputDecoder,
    MouseReport,
    decode_mouse_report,
    read_byte,
)

__all__ = [
    "EOF",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "INTERRUPTED",
    "READ_TIMEOUT_MS",
    "TIMEOUT",
    "InputDecoder",
    "KeyBinding",
    "KeyMap",
    "MouseReport",
    "decode_mouse_report",
    "read_byte",
]
