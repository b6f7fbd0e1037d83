"""Compat entry point for the perfgate CLI.

Exposes the same `main()` function as the `perfgate.cli` package so that
`python -m perfgate.cli_entry` behaves like the installed console script.
"""

from .cli import main  # re-export from the real CLI package

__all__ = ["main"]

if __name__ == "__main__":
    main()
