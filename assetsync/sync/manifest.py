"""
Change Manifest — Load precomputed change sets from disk.

The manifest is produced by whatever diffed the two trees. YAML and JSON
are both accepted:

    added:
      - icons/a.svg
    modified:
      - icons/b.svg
    removed:
      - icons/old/c.svg

Missing keys mean an empty set.
"""

from __future__ import annotations

import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models.asset import ChangeSets
from .errors import ManifestError


def load_changes(path: Path) -> ChangeSets:
    """Read a change manifest. Raises ManifestError on bad input."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestError(f"Cannot read change manifest {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ManifestError(f"Cannot parse change manifest {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ManifestError(f"Change manifest {path} must be a mapping, got {type(data).__name__}")

    # `removed:` with nothing under it parses as None
    data = {k: v if v is not None else [] for k, v in data.items()}

    try:
        return ChangeSets(**data)
    except ValidationError as e:
        raise ManifestError(f"Invalid change manifest {path}: {e}") from e
