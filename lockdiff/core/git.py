"""
Git integration for lockdiff.

Reads the committed copy of a file by shelling out to the ``git``
executable, so no git library is required. Only read-only plumbing
commands are used.
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path, PurePosixPath
from typing import List, Union

from lockdiff.exceptions import GitError
from lockdiff.utils.logger import get_logger

logger = get_logger("core.git")

PathLike = Union[str, Path]


def _run_git(args: List[str], *, cwd: PathLike) -> bytes:
    """Run ``git <args>`` in ``cwd`` and return its stdout."""
    command = ["git", *args]
    env = os.environ.copy()
    env["GIT_TERMINAL_PROMPT"] = "0"

    logger.debug("Running %s in %s", " ".join(command), cwd)
    try:
        result = subprocess.run(
            command,
            cwd=str(cwd),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=env,
            check=False,
        )
    except FileNotFoundError as exc:
        raise GitError(
            "git executable not found", command=" ".join(command)
        ) from exc
    except OSError as exc:
        raise GitError(
            f"Failed to run git: {exc}", command=" ".join(command)
        ) from exc

    if result.returncode != 0:
        raise GitError(
            f"git exited with status {result.returncode}",
            command=" ".join(command),
            stderr=result.stderr.decode("utf-8", errors="replace"),
        )
    return result.stdout


def find_repo_root(path: PathLike) -> Path:
    """Return the top-level directory of the repository containing ``path``.

    ``path`` may be a file or a directory.

    Raises:
        GitError: ``path`` is not inside a git working tree.
    """
    start = Path(path).resolve()
    cwd = start if start.is_dir() else start.parent
    output = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    root = Path(output.decode("utf-8").strip()).resolve()
    logger.debug("Repository root: %s", root)
    return root


def path_in_repo(repo_root: PathLike, path: PathLike) -> PurePosixPath:
    """Express ``path`` relative to ``repo_root`` in git's ``/`` notation.

    Raises:
        GitError: ``path`` lies outside the repository.
    """
    root = Path(repo_root).resolve()
    target = Path(path).resolve()
    try:
        relative = target.relative_to(root)
    except ValueError:
        raise GitError(f"{target} is outside repository {root}") from None
    return PurePosixPath(*relative.parts)


def read_file_at_ref(
    repo_root: PathLike,
    relative_path: Union[str, PurePosixPath],
    ref: str = "HEAD",
) -> bytes:
    """Return the contents of ``relative_path`` as committed at ``ref``.

    Raises:
        GitError: The ref does not exist or does not contain the file.
    """
    spec = f"{ref}:{PurePosixPath(relative_path)}"
    return _run_git(["show", spec], cwd=repo_root)


def read_committed_file(path: PathLike, ref: str = "HEAD") -> bytes:
    """Locate the repository around ``path`` and read the file at ``ref``."""
    root = find_repo_root(path)
    relative = path_in_repo(root, path)
    logger.info("Reading %s at %s", relative, ref)
    return read_file_at_ref(root, relative, ref)
