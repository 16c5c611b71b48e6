"""Diff command implementation for lockdiff.

Compares the working-tree ``Pipfile.lock`` with an older copy and reports
which dependencies changed, were added, or were deleted.

The command orchestrates three core components:

1. **git**: reads the committed lockfile at ``--ref`` (default ``HEAD``),
   unless ``--against`` names another lockfile on disk.
2. **PipfileLock**: parses both lockfiles into dependency mappings.
3. **compare_dependencies**: diffs the mappings by exact value, then each
   change is labeled (``major``, ``patch``, ``downgrade`` ...) by the
   version comparator.

Typical usage::

    # What changed since the last commit?
    $ lockdiff diff

    # Compare against another branch, including dev dependencies
    $ lockdiff diff --ref origin/main --develop

    # Machine-readable output, non-zero exit when something changed
    $ lockdiff diff --format json --exit-code
"""

from __future__ import annotations

import sys
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import click

from lockdiff.constants import DEFAULT_LOCKFILE
from lockdiff.context import LockDiffContext, pass_context
from lockdiff.core import (
    DiffEntry,
    PipfileLock,
    compare_dependencies,
    read_committed_file,
)
from lockdiff.exceptions import LockDiffError, VersionParseError
from lockdiff.utils import (
    colorize_update_type,
    get_logger,
    get_raw_console,
    print_error,
    print_success,
    print_table,
    print_warning,
)

logger = get_logger("commands.diff")

SectionReport = Tuple[str, List[DiffEntry]]


@click.command()
@click.argument(
    "lockfile",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=DEFAULT_LOCKFILE,
)
@click.option(
    "--ref",
    "-r",
    default=None,
    help="Git revision holding the old lockfile (default: HEAD or config).",
)
@click.option(
    "--against",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Compare with another lockfile on disk instead of git.",
)
@click.option(
    "--develop/--no-develop",
    default=None,
    help="Also diff [develop] dependencies.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["table", "simple", "json"], case_sensitive=False),
    default="table",
    help="Output format.",
)
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Fail on versions that cannot be parsed instead of reporting 'unknown'.",
)
@click.option(
    "--exit-code",
    is_flag=True,
    help="Exit with status 1 when differences are found.",
)
@pass_context
def diff(
    ctx: LockDiffContext,
    lockfile: Path,
    ref: Optional[str],
    against: Optional[Path],
    develop: Optional[bool],
    output_format: str,
    strict: Optional[bool],
    exit_code: bool,
) -> None:
    """Show how LOCKFILE changed relative to a git revision.

    Changed entries are listed with their old and new values and the kind
    of version change. Git and path dependencies are compared by reference
    only and labeled ``unknown``.
    """
    settings = ctx.settings
    ref = ref or settings.ref
    include_develop = settings.include_develop if develop is None else develop
    strict = settings.strict_versions if strict is None else strict

    try:
        total = _diff(
            lockfile,
            ref=ref,
            against=against,
            include_develop=include_develop,
            output_format=output_format.lower(),
            strict=strict,
        )
        sys.exit(1 if exit_code and total else 0)

    except LockDiffError as e:
        print_error(f"{e}")
        sys.exit(1)
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        logger.exception("Error in diff command")
        sys.exit(1)


def _diff(
    lockfile: Path,
    *,
    ref: str,
    against: Optional[Path],
    include_develop: bool,
    output_format: str,
    strict: bool,
) -> int:
    """Load both lockfiles, render the report and return the change count.

    Raises:
        LockDiffError: A lockfile cannot be read or parsed, git fails, or
            ``strict`` is set and a version cannot be parsed.
    """
    new_lock = PipfileLock.from_file(lockfile)
    old_lock = _load_old_lockfile(lockfile, ref=ref, against=against)

    sections = ["default"] + (["develop"] if include_develop else [])
    try:
        reports: List[SectionReport] = [
            (
                section,
                compare_dependencies(
                    new_lock.section(section), old_lock.section(section)
                ).entries(strict=strict),
            )
            for section in sections
        ]
    except VersionParseError as exc:
        raise LockDiffError(f"Cannot rank versions: {exc}") from exc

    total = sum(len(entries) for _, entries in reports)
    logger.info(
        "%d difference(s) between %s and %s", total, old_lock.source, new_lock.source
    )

    if output_format == "json":
        _display_json(reports)
    elif total == 0:
        print_success(f"No dependency changes since {old_lock.source}")
    elif output_format == "simple":
        _display_simple(reports)
    else:
        _display_table(reports)

    return total


def _load_old_lockfile(
    lockfile: Path,
    *,
    ref: str,
    against: Optional[Path],
) -> PipfileLock:
    """Load the lockfile to compare against, from disk or from git."""
    if against is not None:
        return PipfileLock.from_file(against)

    blob = read_committed_file(lockfile, ref=ref)
    return PipfileLock.from_bytes(blob, source=f"{ref}:{lockfile.name}")


# ---------------------------------------------------------------------------
# Display renderers
# ---------------------------------------------------------------------------

_STATUS_LABELS: Dict[str, str] = {
    "changed": "[yellow]~ CHANGED[/yellow]",
    "new": "[green]+ NEW[/green]",
    "deleted": "[red]- DELETED[/red]",
}

_SIMPLE_HEADINGS: Dict[str, str] = {
    "changed": "Changed:",
    "new": "New:",
    "deleted": "Deleted:",
}


def _value(dependency: Any) -> str:
    return str(dependency) if dependency is not None else "[dim]-[/dim]"


def _display_table(reports: List[SectionReport]) -> None:
    """Render each section as a Rich table."""
    column_styles: Dict[str, Dict[str, Any]] = {
        "Status": {"justify": "center", "no_wrap": True},
        "Package": {"style": "bold cyan", "no_wrap": True},
        "Old": {"justify": "center", "style": "dim"},
        "New": {"justify": "center", "style": "bold green"},
        "Change": {"justify": "center"},
    }

    for section, entries in reports:
        if not entries:
            continue
        rows = [
            {
                "Status": _STATUS_LABELS[entry.status],
                "Package": entry.name,
                "Old": _value(entry.old),
                "New": _value(entry.new),
                "Change": colorize_update_type(entry.update_type),
            }
            for entry in entries
        ]
        print_table(rows, title=f"{section} dependencies", column_styles=column_styles)

    _warn_unknown(reports)


def _display_simple(reports: List[SectionReport]) -> None:
    """Render a plain listing grouped by change status.

    Example::

        Changed:
          requests: 2.31.0 => 2.32.3 (minor)
        New:
          idna: 3.7
    """
    console = get_raw_console()

    for section, entries in reports:
        if not entries:
            continue
        if len(reports) > 1:
            console.print(f"[bold]\\[{section}][/bold]")
        for status, heading in _SIMPLE_HEADINGS.items():
            group = [e for e in entries if e.status == status]
            if not group:
                continue
            console.print(heading)
            for entry in group:
                if status == "changed":
                    console.print(
                        f"  {entry.name}: {entry.old} => {entry.new} ({entry.update_type})",
                        highlight=False,
                    )
                else:
                    value = entry.new if status == "new" else entry.old
                    console.print(f"  {entry.name}: {value}", highlight=False)

    _warn_unknown(reports)


def _display_json(reports: List[SectionReport]) -> None:
    """Render ``{section: [entry, ...]}`` as JSON on stdout."""
    data = {section: [entry.to_json() for entry in entries] for section, entries in reports}
    click.echo(json.dumps(data, indent=2))


def _warn_unknown(reports: List[SectionReport]) -> None:
    unknown = [
        entry.name
        for _, entries in reports
        for entry in entries
        if entry.status == "changed" and entry.update_type == "unknown"
    ]
    if unknown:
        print_warning(
            f"{len(unknown)} change(s) could not be ranked: {', '.join(unknown)}"
        )
