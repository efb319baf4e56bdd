"""
Sync Settings — Parse ASSET_SYNC_* environment variables.

Every value can be overridden on the command line; the environment only
supplies defaults.

    ASSET_SYNC_SOURCE_DIR=/work/icons-source
    ASSET_SYNC_TARGET_DIR=/work/product
    ASSET_SYNC_PATTERNS=*.svg,*.png
    ASSET_SYNC_STAGE=true
    ASSET_SYNC_GIT_TIMEOUT=60
    ASSET_SYNC_STAGE_BATCH=100
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ..sync.vcs import DEFAULT_BATCH_SIZE, DEFAULT_GIT_TIMEOUT

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes")


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} is not an integer, using {default}")
        return default
    if value < 1:
        logger.warning(f"{name}={value} must be positive, using {default}")
        return default
    return value


@dataclass
class SyncSettings:
    """Defaults for a sync run."""

    source_dir: Optional[Path] = None
    target_dir: Optional[Path] = None
    patterns: List[str] = field(default_factory=list)
    stage: bool = True
    git_timeout: int = DEFAULT_GIT_TIMEOUT
    stage_batch_size: int = DEFAULT_BATCH_SIZE

    @classmethod
    def from_env(cls) -> "SyncSettings":
        """Read settings from the environment."""
        source = os.environ.get("ASSET_SYNC_SOURCE_DIR")
        target = os.environ.get("ASSET_SYNC_TARGET_DIR")
        patterns = [
            p.strip()
            for p in os.environ.get("ASSET_SYNC_PATTERNS", "").split(",")
            if p.strip()
        ]

        return cls(
            source_dir=Path(source) if source else None,
            target_dir=Path(target) if target else None,
            patterns=patterns,
            stage=os.environ.get("ASSET_SYNC_STAGE", "true").lower() in TRUE_VALUES,
            git_timeout=_int_env("ASSET_SYNC_GIT_TIMEOUT", DEFAULT_GIT_TIMEOUT),
            stage_batch_size=_int_env("ASSET_SYNC_STAGE_BATCH", DEFAULT_BATCH_SIZE),
        )
