"""Version comparison commands for lockdiff.

Thin CLI wrappers around the version comparator, handy for checking how
lockdiff ranks a pair of versions or a list of them::

    $ lockdiff compare 1.0.0rc1 1.0.0
    1.0.0rc1 < 1.0.0

    $ lockdiff sort 1.0 1.0.dev1 1.0a1 1.0.post1
    1.0a1
    1.0.dev1
    1.0
    1.0.post1
"""

from __future__ import annotations

from typing import List, Tuple

import click

from lockdiff.core import compare_versions, parse_version, version_cmp_key
from lockdiff.exceptions import VersionParseError
from lockdiff.models import Version
from lockdiff.utils import get_logger

logger = get_logger("commands.compare")


def _parse_argument(text: str, param_hint: str) -> Version:
    """Parse a version argument, reporting failures as Click usage errors."""
    try:
        return parse_version(text)
    except VersionParseError as e:
        raise click.BadParameter(str(e), param_hint=param_hint) from e


@click.command()
@click.argument("version1")
@click.argument("version2")
def compare(version1: str, version2: str) -> None:
    """Print how VERSION1 ranks against VERSION2.

    The output is ``VERSION1 <op> VERSION2`` where ``<op>`` is one of
    ``<``, ``==`` or ``>``. Unparseable versions exit with status 2.
    """
    left = _parse_argument(version1, "VERSION1")
    right = _parse_argument(version2, "VERSION2")

    ordering = compare_versions(left, right)
    logger.debug("%r vs %r -> %s", left, right, ordering.name)

    click.echo(f"{version1} {ordering.symbol} {version2}")


@click.command()
@click.argument("versions", nargs=-1, required=True)
@click.option(
    "--reverse",
    "-r",
    is_flag=True,
    help="Print newest first.",
)
def sort(versions: Tuple[str, ...], reverse: bool) -> None:
    """Sort VERSIONS, oldest first, printing one per line.

    Versions are printed as given. Versions that compare equal (for
    example ``1.0`` and ``v1.0``) keep their input order.
    """
    parsed: List[Tuple[Version, str]] = [
        (_parse_argument(text, "VERSIONS"), text) for text in versions
    ]

    ordered = sorted(parsed, key=lambda pair: version_cmp_key(pair[0]), reverse=reverse)
    for _version, text in ordered:
        click.echo(text)
