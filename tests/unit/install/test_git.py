# Copyright (c) 2026 Veritas Aequitas Holdings LLC. All rights reserved.
"""Unit tests for shallow clones with a mocked git binary."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from skulls.core.exceptions import GitCloneError
from skulls.install.git import cleanup_dir, clone_repo, cloned_repository


def _fake_git(returncode: int = 0, stderr: str = ""):
    calls: list[list[str]] = []

    def run(args, **kwargs):
        calls.append(args)
        if returncode == 0:
            (Path(args[-1]) / "SKILL.md").write_text("cloned", encoding="utf-8")
        return subprocess.CompletedProcess(args, returncode, stdout="", stderr=stderr)

    return run, calls


class TestCloneRepo:
    """Tests for clone_repo()."""

    def test_shallow_clone_with_ref(self) -> None:
        run, calls = _fake_git()
        with patch("skulls.install.git.subprocess.run", side_effect=run):
            path = clone_repo("https://github.com/o/r.git", "v1")
        try:
            assert calls[0][:6] == ["git", "clone", "--depth", "1", "--branch", "v1"]
            assert calls[0][6] == "https://github.com/o/r.git"
            assert (path / "SKILL.md").exists()
        finally:
            cleanup_dir(path)

    def test_no_branch_flag_without_ref(self) -> None:
        run, calls = _fake_git()
        with patch("skulls.install.git.subprocess.run", side_effect=run):
            path = clone_repo("https://github.com/o/r.git")
        cleanup_dir(path)
        assert "--branch" not in calls[0]

    def test_failure_cleans_up_and_hints_auth(self) -> None:
        run, calls = _fake_git(128, "fatal: Authentication failed for 'https://github.com/o/r.git'")
        with patch("skulls.install.git.subprocess.run", side_effect=run):
            with pytest.raises(GitCloneError, match="credentials") as exc_info:
                clone_repo("https://github.com/o/r.git")
        assert "Failed to clone" in str(exc_info.value)
        assert not Path(calls[0][-1]).exists()

    def test_missing_git_binary(self) -> None:
        with patch("skulls.install.git.subprocess.run", side_effect=FileNotFoundError("git")):
            with pytest.raises(GitCloneError, match="Failed to run git"):
                clone_repo("https://github.com/o/r.git")


class TestClonedRepository:
    """Tests for the cloned_repository() context manager."""

    async def test_removes_clone_on_exit(self) -> None:
        run, _ = _fake_git()
        with patch("skulls.install.git.subprocess.run", side_effect=run):
            async with cloned_repository("https://github.com/o/r.git") as repo:
                assert (repo / "SKILL.md").exists()
        assert not repo.exists()

    async def test_removes_clone_on_error(self) -> None:
        run, _ = _fake_git()
        with patch("skulls.install.git.subprocess.run", side_effect=run):
            with pytest.raises(RuntimeError):
                async with cloned_repository("https://github.com/o/r.git") as repo:
                    raise RuntimeError("boom")
        assert not repo.exists()


def test_cleanup_missing_dir_is_silent(tmp_path: Path) -> None:
    cleanup_dir(tmp_path / "never-created")
