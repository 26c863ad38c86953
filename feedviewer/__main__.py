"""Module entrypoint for ``python -m feedviewer``.

All argument parsing and runtime setup happen in ``feedviewer.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
