# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Shallow git clones into scoped temporary directories."""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import subprocess
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from skulls.core.exceptions import GitCloneError

logger = logging.getLogger("skulls.install.git")

_AUTH_HINTS = ("Authentication failed", "could not read Username", "Permission denied", "Repository not found")


def clone_repo(url: str, ref: str | None = None) -> Path:
    """Clone *url* (depth 1) into a new temporary directory and return it.

    Raises
    ------
    GitCloneError
        If git is missing or the clone fails. The temporary directory is
        removed before raising.
    """
    tmp_dir = Path(tempfile.mkdtemp(prefix="skulls-"))
    args = ["git", "clone", "--depth", "1"]
    if ref:
        args.extend(["--branch", ref])
    args.extend([url, str(tmp_dir)])

    logger.info("Cloning %s%s", url, f" @ {ref}" if ref else "")
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            check=False,
            env={**os.environ, "GIT_TERMINAL_PROMPT": "0"},
        )
    except OSError as exc:
        cleanup_dir(tmp_dir)
        raise GitCloneError(f"Failed to run git: {exc}") from exc

    if result.returncode != 0:
        cleanup_dir(tmp_dir)
        stderr = result.stderr.strip() or result.stdout.strip()
        message = f"Failed to clone {url}\n{stderr}"
        if any(hint in stderr for hint in _AUTH_HINTS):
            message += "\nFor private repositories, check your git credentials or SSH keys."
        raise GitCloneError(message)
    return tmp_dir


def cleanup_dir(path: Path) -> None:
    """Remove a temporary directory; failures are logged, never raised."""
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove temporary directory %s: %s", path, exc)


@asynccontextmanager
async def cloned_repository(url: str, ref: str | None = None) -> AsyncIterator[Path]:
    """Clone *url* for the duration of the block, then delete the clone."""
    path = await asyncio.to_thread(clone_repo, url, ref)
    try:
        yield path
    finally:
        await asyncio.to_thread(cleanup_dir, path)
