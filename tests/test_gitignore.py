"""Tests for gitignore module — .gitignore loading and matching."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from boundwalk.gitignore import GitIgnoreFilter, load_gitignore_filter


class TestLoadGitignoreFilter:
    """Test load_gitignore_filter returns a filter or None."""

    def test_no_gitignore_returns_none(self, tmp_path: Path) -> None:
        assert load_gitignore_filter(tmp_path) is None

    @pytest.mark.parametrize(
        "content",
        [
            "*.pyc\n__pycache__/\n",
            "",
            "# comment line\n",
        ],
    )
    def test_gitignore_file_returns_filter(self, tmp_path: Path, content: str) -> None:
        (tmp_path / ".gitignore").write_text(content)
        assert load_gitignore_filter(tmp_path) is not None

    def test_nonexistent_root_returns_none(self, tmp_path: Path) -> None:
        assert load_gitignore_filter(tmp_path / "nonexistent") is None


class TestGitignoreMatching:
    """Test that a loaded filter matches relative paths like git does."""

    @pytest.mark.parametrize(
        ("gitignore_content", "relative_path", "is_dir", "expected"),
        [
            # wildcard patterns
            ("*.pyc\n", "foo.pyc", False, True),
            ("*.pyc\n", "foo.py", False, False),
            # directory patterns only match directories
            ("__pycache__/\n", "__pycache__", True, True),
            ("__pycache__/\n", "src/__pycache__", True, True),
            ("__pycache__/\n", "__pycache__", False, False),
            # nested path matching
            ("node_modules/\n*.pyc\n", "deep/node_modules", True, True),
            ("node_modules/\n*.pyc\n", "src/app.pyc", False, True),
            ("node_modules/\n*.pyc\n", "src/app.py", False, False),
            # anchored patterns
            ("/build\n", "build", True, True),
            ("/build\n", "src/build", True, False),
            # empty gitignore matches nothing
            ("", "anything.py", False, False),
            # comment lines are ignored
            ("# ignore pyc\n*.pyc\n", "foo.pyc", False, True),
            ("# ignore pyc\n*.pyc\n", "# ignore pyc", False, False),
        ],
    )
    def test_pattern_matching(
        self,
        tmp_path: Path,
        gitignore_content: str,
        relative_path: str,
        is_dir: bool,
        expected: bool,
    ) -> None:
        (tmp_path / ".gitignore").write_text(gitignore_content)
        gitignore_filter = load_gitignore_filter(tmp_path)
        assert gitignore_filter is not None
        assert gitignore_filter.should_exclude(relative_path, is_dir) is expected

    def test_from_lines(self) -> None:
        gitignore_filter = GitIgnoreFilter.from_lines(["*.log", "!keep.log"])
        assert gitignore_filter.should_exclude("error.log", False) is True
        assert gitignore_filter.should_exclude("keep.log", False) is False


class TestGitignoreErrorHandling:
    """Test graceful handling of filesystem errors."""

    @pytest.mark.skipif(os.name == "nt", reason="chmod not reliable on Windows")
    @pytest.mark.skipif(
        hasattr(os, "geteuid") and os.geteuid() == 0,
        reason="root ignores file permissions",
    )
    def test_unreadable_gitignore_returns_none(self, tmp_path: Path) -> None:
        gitignore = tmp_path / ".gitignore"
        gitignore.write_text("*.pyc\n")
        gitignore.chmod(0o000)
        try:
            assert load_gitignore_filter(tmp_path) is None
        finally:
            gitignore.chmod(stat.S_IRUSR | stat.S_IWUSR)
