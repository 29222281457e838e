"""Shared fixtures for boundwalk tests."""

from __future__ import annotations

import os
from pathlib import Path

import pytest


@pytest.fixture
def scenario_tree(tmp_path: Path) -> Path:
    """Create the standard four-file test tree.

    Structure::

        root/
        ├── dir1/
        │   ├── file2.txt
        │   └── subdir1/
        │       └── file3.txt
        ├── dir2/
        │   └── file4.txt
        └── file1.txt
    """
    (tmp_path / "file1.txt").write_text("1")
    (tmp_path / "dir1" / "subdir1").mkdir(parents=True)
    (tmp_path / "dir1" / "file2.txt").write_text("2")
    (tmp_path / "dir1" / "subdir1" / "file3.txt").write_text("3")
    (tmp_path / "dir2").mkdir()
    (tmp_path / "dir2" / "file4.txt").write_text("4")
    return tmp_path


@pytest.fixture
def wide_tree(tmp_path: Path) -> Path:
    """Root holding twenty subdirectories ``sub_00`` .. ``sub_19``, one file each."""
    for i in range(20):
        subdir = tmp_path / f"sub_{i:02}"
        subdir.mkdir()
        (subdir / "file.txt").write_text("data")
    return tmp_path


@pytest.fixture
def gitignore_tree(tmp_path: Path) -> Path:
    """Tree with .gitignore for gitignore-integration testing.

    Structure::

        root/
        ├── .gitignore          (*.pyc, node_modules/, dist/)
        ├── dist/
        │   └── bundle.js
        ├── node_modules/
        │   └── pkg/
        │       └── index.js
        ├── src/
        │   ├── app.py
        │   └── app.pyc
        └── README.md
    """
    (tmp_path / ".gitignore").write_text("*.pyc\nnode_modules/\ndist/\n")
    (tmp_path / "dist").mkdir()
    (tmp_path / "dist" / "bundle.js").write_text("bundle")
    (tmp_path / "node_modules" / "pkg").mkdir(parents=True)
    (tmp_path / "node_modules" / "pkg" / "index.js").write_text("js")
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text("app")
    (tmp_path / "src" / "app.pyc").write_bytes(b"\x00")
    (tmp_path / "README.md").write_text("readme")
    return tmp_path


def _symlinks_supported(tmp_path_factory: pytest.TempPathFactory) -> bool:
    probe_dir = tmp_path_factory.mktemp("symlink_probe")
    try:
        os.symlink(probe_dir, probe_dir / "link", target_is_directory=True)
    except (OSError, NotImplementedError):
        return False
    return True


@pytest.fixture
def symlinks(tmp_path_factory: pytest.TempPathFactory) -> None:
    """Skip the test when the platform or user cannot create symlinks."""
    if not _symlinks_supported(tmp_path_factory):
        pytest.skip("symlink creation not permitted")
