"""Pin command implementation for lockdiff.

Rewrites the version specifiers in a ``Pipfile`` to the exact versions
recorded in ``Pipfile.lock``, so ``requests = "*"`` becomes
``requests = "==2.32.3"``. Comments, ordering and formatting of the
Pipfile are left untouched.

Entries locked to a git reference or a local path, and Pipfile entries
without a version (``git = ...``, ``path = ...``), are skipped with a
warning.

Typical usage::

    # Preview what would be pinned
    $ lockdiff pin --dry-run

    # Pin runtime and dev packages, keeping a backup
    $ lockdiff pin --develop --backup -y
"""

from __future__ import annotations

import sys
import shutil
from pathlib import Path
from dataclasses import dataclass
from typing import List, Optional

import click
from packaging.utils import canonicalize_name

from lockdiff.constants import DEFAULT_LOCKFILE, DEFAULT_PIPFILE, PIPFILE_SECTIONS
from lockdiff.context import LockDiffContext, pass_context
from lockdiff.core import EditablePipfile, PipfileLock
from lockdiff.exceptions import LockDiffError
from lockdiff.models import Dependency, PipDependency
from lockdiff.utils import (
    confirm,
    create_timestamped_backup,
    get_logger,
    print_error,
    print_success,
    print_table,
    print_warning,
    safe_write_file,
)

logger = get_logger("commands.pin")


@dataclass(frozen=True)
class PinChange:
    """A planned rewrite of one Pipfile entry."""

    name: str
    section: str
    old: str
    new: str


@click.command()
@click.argument(
    "pipfile",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=DEFAULT_PIPFILE,
)
@click.option(
    "--lockfile",
    "-l",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Lockfile to read versions from (default: Pipfile.lock next to PIPFILE).",
)
@click.option(
    "--develop/--no-develop",
    default=None,
    help="Also pin [dev-packages].",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Preview changes without applying them.",
)
@click.option(
    "--yes",
    "-y",
    is_flag=True,
    help="Skip confirmation prompt.",
)
@click.option(
    "--backup",
    is_flag=True,
    help="Create backup file before pinning.",
)
@pass_context
def pin(
    ctx: LockDiffContext,
    pipfile: Path,
    lockfile: Optional[Path],
    develop: Optional[bool],
    dry_run: bool,
    yes: bool,
    backup: bool,
) -> None:
    """Pin PIPFILE entries to the versions in Pipfile.lock.

    Args:
        ctx: lockdiff context with configuration and verbosity settings.
        pipfile: Path to the Pipfile (default: ``Pipfile``).
        lockfile: Lockfile to take versions from.
        develop: Also pin ``[dev-packages]``; defaults to the
            ``include_develop`` setting.
        dry_run: Preview changes without modifying the file.
        yes: Skip confirmation prompt before writing.
        backup: Create a timestamped backup before modifying the file.

    Exits:
        0 if the Pipfile was pinned or nothing needed pinning,
        1 if an error occurred.
    """
    include_develop = ctx.settings.include_develop if develop is None else develop
    lockfile = lockfile or pipfile.with_name(DEFAULT_LOCKFILE)

    try:
        _pin(pipfile, lockfile, include_develop, dry_run, yes, backup)
        sys.exit(0)

    except LockDiffError as e:
        print_error(f"{e}")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Error in pin command")
        sys.exit(1)


def _pin(
    pipfile: Path,
    lockfile: Path,
    include_develop: bool,
    dry_run: bool,
    skip_confirm: bool,
    backup: bool,
) -> None:
    """Plan, confirm and apply the pins.

    Raises:
        LockDiffError: Either file cannot be read or parsed, or the
            rewritten Pipfile cannot be written.
    """
    document = EditablePipfile.from_file(pipfile)
    lock = PipfileLock.from_file(lockfile)

    sections = ["default"] + (["develop"] if include_develop else [])
    changes: List[PinChange] = []
    for lock_section in sections:
        changes.extend(_plan_section(document, lock, lock_section))

    if not changes:
        print_success("All Pipfile entries already match the lockfile")
        return

    _display_plan(changes, dry_run)

    if dry_run:
        print_warning("\nDry run mode - no changes applied")
        return

    if not skip_confirm and not confirm(f"\nPin {len(changes)} package(s)?"):
        logger.info("Pin cancelled by user")
        return

    backup_path = None
    if backup:
        backup_path = create_timestamped_backup(pipfile)
        logger.info("Created backup: %s", backup_path)

    try:
        for change in changes:
            document.set_version(change.name, change.new, section=change.section)
        safe_write_file(pipfile, document.to_text())
    except Exception as e:
        if backup_path and backup_path.exists():
            print_error(f"Error during pin: {e}")
            logger.info("Restoring from backup...")
            shutil.copy2(backup_path, pipfile)
            print_success("Restored original file from backup")
        raise LockDiffError(f"Failed to pin {pipfile}: {e}") from e

    print_success(f"Pinned {len(changes)} package(s) in {pipfile}")


def _plan_section(
    document: EditablePipfile,
    lock: PipfileLock,
    lock_section: str,
) -> List[PinChange]:
    """Collect the entries of one Pipfile section whose version differs."""
    section = PIPFILE_SECTIONS[lock_section]
    locked = {canonicalize_name(name): dep for name, dep in lock.section(lock_section).items()}

    changes: List[PinChange] = []
    for entry in document.iter_dependencies(section):
        dependency: Optional[Dependency] = locked.get(canonicalize_name(entry.name))

        if dependency is None:
            print_warning(f"{entry.name} is not in the lockfile, skipping")
            continue
        if not isinstance(dependency, PipDependency):
            logger.info("Skipping %s: locked to %s %s", entry.name, dependency.kind, dependency)
            continue
        if not entry.is_pinnable:
            print_warning(f"{entry.name} has no version specifier, skipping")
            continue

        pinned = f"=={dependency}"
        if entry.version == pinned:
            continue
        changes.append(PinChange(entry.name, section, entry.version or "", pinned))

    return changes


def _display_plan(changes: List[PinChange], dry_run: bool) -> None:
    """Show the planned rewrites as a Rich table."""
    title = "Pin Plan (Dry Run)" if dry_run else "Pin Plan"
    rows = [
        {
            "Package": change.name,
            "Section": change.section,
            "Current": change.old,
            "Pinned": change.new,
        }
        for change in changes
    ]
    print_table(
        rows,
        title=title,
        column_styles={
            "Package": {"style": "bold cyan", "no_wrap": True},
            "Section": {"style": "dim"},
            "Current": {"justify": "center", "style": "yellow"},
            "Pinned": {"justify": "center", "style": "bold green"},
        },
    )
