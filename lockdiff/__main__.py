"""
Executable module for lockdiff.

Running:
    python -m lockdiff

is equivalent to:
    lockdiff

This module simply forwards execution to the CLI entrypoint defined in
`lockdiff.cli`.
"""

from __future__ import annotations

import sys


def _print_startup_error(exc: ImportError) -> None:
    """Explain on stderr why the CLI could not be loaded."""
    sys.stderr.write("lockdiff CLI could not be started.\n")
    sys.stderr.write(f"Python version : {sys.version}\n")
    try:
        from lockdiff.__version__ import __version__

        sys.stderr.write(f"lockdiff version: {__version__}\n")
    except ImportError:
        sys.stderr.write("lockdiff version: <unknown>\n")
    sys.stderr.write("\n")
    sys.stderr.write(f"ImportError: {exc}\n")


def main() -> int:
    """
    Main entrypoint when executing `python -m lockdiff`.

    Returns:
        Exit code returned by the CLI.
    """
    try:
        # Import lazily so dependencies are only loaded during CLI use
        from lockdiff.cli import main as cli_main
    except ImportError as exc:
        _print_startup_error(exc)
        return 1

    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
