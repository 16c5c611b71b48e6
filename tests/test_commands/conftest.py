from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable, Dict, Generator, Optional

import pytest
from click.testing import CliRunner

from lockdiff.utils.console import reconfigure_console
from lockdiff.utils.logger import disable_logging


@pytest.fixture(autouse=True)
def isolated_cli(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Run every CLI test from an empty directory with a fresh console.

    Config discovery looks at the working directory, and the logging
    handler installed by the CLI points at the runner's stderr.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("LOCKDIFF_CONFIG", raising=False)
    monkeypatch.delenv("LOCKDIFF_COLOR", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    reconfigure_console()
    yield
    disable_logging()
    reconfigure_console()


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def write_lockfile(tmp_path: Path) -> Callable[..., Path]:
    """Write a ``Pipfile.lock`` with ``{name: version}`` sections."""

    def _write(
        default: Dict[str, Any],
        develop: Optional[Dict[str, Any]] = None,
        *,
        name: str = "Pipfile.lock",
    ) -> Path:
        def section(entries: Dict[str, Any]) -> Dict[str, Any]:
            return {
                pkg: value if isinstance(value, dict) else {"version": f"=={value}"}
                for pkg, value in entries.items()
            }

        path = tmp_path / name
        path.write_text(
            json.dumps(
                {
                    "_meta": {"pipfile-spec": 6, "requires": {"python_version": "3.11"}},
                    "default": section(default),
                    "develop": section(develop or {}),
                },
                indent=4,
            ),
            encoding="utf-8",
        )
        return path

    return _write
