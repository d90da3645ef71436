"""Output store: one JSON document per registry item, plus index and bundle."""

from __future__ import annotations

import json
import shutil
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence

from ..logging import get_logger
from ..models import SEARCH_DIRS

INDEX_KEY = "registry"
BUNDLE_KEY = "all"

logger = get_logger("stores.registry")


class RegistryStore:
    """Stores item documents keyed by ``<subfolder>/<name>`` under a root directory."""

    def __init__(self, root: Path, search_dirs: Sequence[str] = SEARCH_DIRS) -> None:
        self.root = Path(root)
        self.search_dirs = tuple(search_dirs)

    def reset(self) -> None:
        """Erase every document from a previous build and recreate the root."""
        if self.root.exists():
            shutil.rmtree(self.root)
        self.root.mkdir(parents=True, exist_ok=True)

    def write(self, key: str, document: Mapping[str, Any]) -> Path:
        """Persist ``document`` as ``<root>/<key>.json``; I/O errors propagate."""
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")
        return path

    def read(self, key: str) -> Optional[Dict[str, Any]]:
        path = self._path_for(key)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Failed to load %s: %s", path, exc)
            return None
        if not isinstance(data, dict):
            return None
        return data

    def lookup(self, name: str) -> Optional[Dict[str, Any]]:
        """Return the first item named ``name`` across subfolders in priority order."""
        normalized = name[:-5] if name.lower().endswith(".json") else name
        if not normalized or "/" in normalized or "\\" in normalized or normalized.startswith("."):
            return None
        for subfolder in self.search_dirs:
            document = self.read(f"{subfolder}/{normalized}")
            if document is not None:
                return document
        return None

    def index(self) -> Optional[Dict[str, Any]]:
        return self.read(INDEX_KEY)

    def bundle(self) -> Optional[Dict[str, Any]]:
        return self.read(BUNDLE_KEY)

    def _path_for(self, key: str) -> Path:
        path = self.root / f"{key}.json"
        if not path.resolve().is_relative_to(self.root.resolve()):
            raise ValueError(f"Registry key {key!r} resolves outside {self.root}")
        return path


__all__ = ["BUNDLE_KEY", "INDEX_KEY", "RegistryStore"]
