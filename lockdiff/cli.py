"""
Command-line interface for lockdiff.

This module provides the main CLI entry point and handles global options,
configuration loading, and command registration.
"""

from __future__ import annotations

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click

from lockdiff.config import load_config
from lockdiff.__version__ import __version__
from lockdiff.context import LockDiffContext
from lockdiff.exceptions import ConfigError, LockDiffError
from lockdiff.utils.console import print_error, print_warning, reconfigure_console
from lockdiff.utils.logger import get_logger, level_for_verbosity, setup_logging

logger = get_logger("cli")


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file.",
    envvar="LOCKDIFF_CONFIG",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (can be repeated: -v, -vv).",
)
@click.option(
    "--color/--no-color",
    default=True,
    help="Enable or disable colored output.",
    envvar="LOCKDIFF_COLOR",
)
@click.version_option(
    version=__version__,
    prog_name="lockdiff",
    message="%(prog)s %(version)s",
)
@click.pass_context
def cli(
    ctx: click.Context,
    config: Optional[Path],
    verbose: int,
    color: bool,
) -> None:
    """Show what changed in your Pipfile.lock.

    \b
    Available commands:
      lockdiff diff                Compare Pipfile.lock with a git revision
      lockdiff compare A B         Rank two version strings
      lockdiff sort V...           Sort version strings, oldest first
      lockdiff pin                 Pin Pipfile entries to locked versions

    \b
    Examples:
      lockdiff diff
      lockdiff diff --ref origin/main --develop
      lockdiff compare 1.0.0 1.0.0rc1

    Use ``lockdiff COMMAND --help`` for command-specific options.
    """
    _configure_logging(verbose)

    try:
        loaded_config = load_config(config)
    except ConfigError as exc:
        print_error(str(exc))
        raise SystemExit(1) from exc

    lockdiff_ctx = LockDiffContext()
    lockdiff_ctx.config_path = config or loaded_config.source_path
    lockdiff_ctx.color = color
    lockdiff_ctx.verbose = verbose
    lockdiff_ctx.config = loaded_config
    ctx.obj = lockdiff_ctx

    # Respect NO_COLOR for downstream libraries
    if color:
        os.environ.pop("NO_COLOR", None)
    else:
        os.environ["NO_COLOR"] = "1"
    reconfigure_console()

    logger.debug("lockdiff v%s", __version__)
    logger.debug("Config path: %s", lockdiff_ctx.config_path)
    if loaded_config.source_path:
        logger.debug("Loaded configuration: %s", loaded_config.to_log_dict())
    logger.debug("Verbosity: %s | Color: %s", verbose, color)


def _configure_logging(verbose: int) -> None:
    """Configure logging level based on verbosity flags."""
    level = level_for_verbosity(verbose)
    setup_logging(level=level, verbose=verbose >= 2)
    logger.debug("Logging initialized at %s level", logging.getLevelName(level))


# Register CLI subcommands
from lockdiff.commands.diff import diff  # noqa: E402
from lockdiff.commands.pin import pin  # noqa: E402
from lockdiff.commands.compare import compare, sort  # noqa: E402

cli.add_command(diff)
cli.add_command(compare)
cli.add_command(sort)
cli.add_command(pin)


def main() -> int:
    """Main entry point for the lockdiff CLI.

    Returns:
        Exit code:
            0   Success (or no differences)
            1   Application error, or differences with ``diff --exit-code``
            2   Usage error (Click)
            130 Interrupted by user (Ctrl+C)
    """
    try:
        result = cli(standalone_mode=False)
        return result if isinstance(result, int) else 0

    except click.ClickException as exc:
        exc.show()
        return exc.exit_code

    except click.exceptions.Exit as exc:
        return exc.exit_code

    except click.Abort:
        print_warning("\nOperation cancelled by user")
        return 130

    except LockDiffError as exc:
        print_error(str(exc))
        logger.debug(
            "LockDiffError details: %s",
            exc.details or "<none>",
            exc_info=True,
        )
        return 1

    except KeyboardInterrupt:
        print_warning("\nOperation cancelled by user")
        return 130

    except Exception as exc:
        print_error(f"Unexpected error: {exc}")
        logger.exception("Unhandled exception in CLI")
        return 1


if __name__ == "__main__":
    sys.exit(main())
