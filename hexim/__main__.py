"""Module entrypoint for ``python -m hexim``.

All argument parsing and runtime setup happen in ``hexim.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
