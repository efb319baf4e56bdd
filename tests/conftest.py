"""
Shared fixtures for sync tests.

Builds small source and target trees under tmp_path. Repositories are
marked with an empty `.git` directory, which is all find_repo_root
looks for; no real git is needed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import pytest

from assetsync.logging_config import HumanFormatter, JSONFormatter
from assetsync.models.asset import AssetLocator, AssetRecord


class RecordingStager:
    """Stands in for git add; remembers every call."""

    def __init__(self):
        self.calls: List[Tuple[List[str], Path]] = []

    def __call__(self, paths, repo):
        self.calls.append((list(paths), Path(repo)))


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    path = tmp_path / "source"
    path.mkdir()
    return path


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    """Target tree that is itself a repository root."""
    path = tmp_path / "target"
    (path / ".git").mkdir(parents=True)
    return path


@pytest.fixture
def stager() -> RecordingStager:
    return RecordingStager()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """setup_logging() replaces root handlers; drop the ones it added."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, (HumanFormatter, JSONFormatter)):
            root.removeHandler(handler)
    root.setLevel(level)


def write_files(root: Path, files: Dict[str, bytes]) -> None:
    """Helper to write {relative path: bytes} under root."""
    for rel_path, data in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)


def make_locator(repo: Path, root: Path, paths: Sequence[str]) -> AssetLocator:
    """Helper to build a locator for paths under root, all owned by repo."""
    return {p: AssetRecord(repo=repo, file=root / p) for p in paths}
