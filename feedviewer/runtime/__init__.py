"""Public runtime entry points.

``run_viewer`` bootstraps a full session; ``run_main_loop`` is the event
loop it drives, exposed for tests and composition code.
"""

from __future__ import annotations


def run_viewer(*args, **kwargs):
    """Lazily import the session bootstrap to keep package import light."""
    from .bootstrap import run_viewer as _run_viewer

    return _run_viewer(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import the loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = ["run_main_loop", "run_viewer"]
