"""
Shared context object for lockdiff CLI commands.

This module defines the global Click context used to share configuration
and runtime options across CLI subcommands.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from lockdiff.config import LockDiffConfig


class LockDiffContext:
    """Global context object for lockdiff CLI commands.

    Attributes:
        config_path: Path to the lockdiff configuration file, if provided.
        verbose: Verbosity level (0=WARNING, 1=INFO, 2+=DEBUG).
        color: Whether colored terminal output is enabled.
        config: Loaded configuration (``None`` until the group callback runs).
    """

    __slots__ = ("config_path", "verbose", "color", "config")

    def __init__(self) -> None:
        self.config_path: Optional[Path] = None
        self.verbose: int = 0
        self.color: bool = True
        self.config: Optional[LockDiffConfig] = None

    @property
    def settings(self) -> LockDiffConfig:
        """Loaded configuration, or defaults when none was loaded."""
        return self.config if self.config is not None else LockDiffConfig()


#: Click decorator for injecting :class:`LockDiffContext` into commands.
pass_context = click.make_pass_decorator(LockDiffContext, ensure=True)
