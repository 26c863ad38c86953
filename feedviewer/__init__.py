"""feedviewer package.

Interactive terminal browser for tab-separated feed files.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
