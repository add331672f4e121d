"""File-based persistence helpers for the JSON map store."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..config import settings


class FileStorage:
    """Thin wrapper around the data root for reading and writing JSON documents."""

    def __init__(self, root: Path | None = None) -> None:
        self.root = (root or settings.data_root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def path_for(self, name: str) -> Path:
        return self.root / name

    def read_json(self, path: Path, default: Any = None) -> Any:
        """Load a JSON document, returning ``default`` for a missing or blank file."""
        if not path.exists():
            return default
        with path.open("r", encoding="utf-8") as handle:
            content = handle.read()
        if not content.strip():
            return default
        return json.loads(content)

    def write_json(self, path: Path, data: Any, *, indent: int = 2) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        # Readers only ever see a complete document
        staging = path.with_suffix(path.suffix + ".tmp")
        with staging.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, ensure_ascii=False, indent=indent)
        staging.replace(path)
