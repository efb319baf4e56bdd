"""
Asset Models — Records and change sets shared by the sync passes.

An asset path is a relative POSIX path identifying one tracked file.
It is the join key between the source-tree and target-tree locators.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Dict, List, Set

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssetRecord(BaseModel):
    """Where an asset physically lives, and which repository owns it."""

    model_config = ConfigDict(frozen=True)

    repo: Path
    file: Path

    @property
    def relative_to_repo(self) -> str:
        """The file path relative to its repository root, POSIX style."""
        return self.file.relative_to(self.repo).as_posix()


# Asset path -> record, for one tree (source or target)
AssetLocator = Dict[str, AssetRecord]


def _check_relative(path: str) -> str:
    """Reject paths that would resolve outside the tree they are joined to."""
    if not path:
        raise ValueError("empty asset path")
    if PurePosixPath(path).is_absolute() or PureWindowsPath(path).anchor:
        raise ValueError(f"asset path must be relative: {path}")
    if ".." in path.replace("\\", "/").split("/"):
        raise ValueError(f"asset path must not contain '..': {path}")
    return path


def _dedupe(paths: List[str]) -> List[str]:
    seen: Set[str] = set()
    result = []
    for path in paths:
        if path not in seen:
            seen.add(path)
            result.append(path)
    return result


class ChangeSets(BaseModel):
    """
    Precomputed classification of asset paths.

    The three sets are expected to be disjoint. That is the caller's
    contract; nothing here enforces it. Use overlapping() to detect
    paths that were classified more than once.
    """

    added: List[str] = Field(default_factory=list)
    modified: List[str] = Field(default_factory=list)
    removed: List[str] = Field(default_factory=list)

    @field_validator("added", "modified", "removed", mode="after")
    @classmethod
    def _unique_paths(cls, value: List[str]) -> List[str]:
        return _dedupe([_check_relative(p) for p in value])

    def overlapping(self) -> List[str]:
        """Paths present in more than one set, sorted."""
        added, modified, removed = set(self.added), set(self.modified), set(self.removed)
        return sorted((added & modified) | (added & removed) | (modified & removed))

    def total(self) -> int:
        return len(self.added) + len(self.modified) + len(self.removed)

    def is_empty(self) -> bool:
        return self.total() == 0
