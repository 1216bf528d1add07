"""Module entrypoint for ``python -m pollwatch``.

All argument parsing and runtime setup happen in ``pollwatch.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
