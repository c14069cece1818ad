# git.py
# Small, focused wrapper around the Git CLI.
# This module centralizes all Git interactions so the rest of the codebase
# never needs to call subprocess("git ...") directly.

from __future__ import annotations

import asyncio
import subprocess
from pathlib import Path
from typing import Optional


def _git(args: list[str], cwd: Optional[str] = None) -> str:
    """
    Execute a git command and return its stdout as a clean string.

    Args:
        args: List of git arguments (e.g. ["status", "--porcelain"])
        cwd: Optional working directory in which to run the git command.

    Returns:
        Stdout from the git command with surrounding whitespace removed.

    Raises:
        subprocess.CalledProcessError: if git exits non-zero
    """
    out = subprocess.check_output(
        ["git", *args],
        cwd=cwd,
        text=True,
    )
    return out.strip()


def repo_root(cwd: Optional[str] = None) -> Path:
    """
    Return the absolute path to the root of the current Git repository.

    Uses git itself as the source of truth rather than guessing based
    on filesystem layout.
    """
    return Path(_git(["rev-parse", "--show-toplevel"], cwd=cwd))


async def git_root_directory_async(cwd: Optional[str] = None) -> Path:
    return await asyncio.to_thread(repo_root, cwd)


def is_dirty(cwd: Optional[str] = None) -> bool:
    """
    Check whether the working tree has uncommitted changes.

    This includes modified, staged and untracked files.
    """
    # Any porcelain output at all means the tree is not clean.
    return _git(["status", "--porcelain"], cwd=cwd) != ""


async def is_dirty_async(cwd: Optional[str] = None) -> bool:
    return await asyncio.to_thread(is_dirty, cwd)


def make_archive(output: Path, ref: str = "HEAD", cwd: Optional[str] = None) -> Path:
    """
    Write a gzipped tarball of `ref` (repository root) to `output`.

    Only committed content is archived; uncommitted changes are not included.
    """
    root = repo_root(cwd)
    _git(["archive", "--format=tar.gz", f"--output={output}", ref], cwd=str(root))
    return output


async def make_archive_async(output: Path, ref: str = "HEAD", cwd: Optional[str] = None) -> Path:
    return await asyncio.to_thread(make_archive, output, ref, cwd)
