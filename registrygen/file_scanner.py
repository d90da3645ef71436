"""Source tree walking, concurrent reads and alias rewriting."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .logging import get_logger

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "__pycache__",
}

_EXCLUDED_FILES = {
    ".DS_Store",
    "Thumbs.db",
}

logger = get_logger("scanner")


@dataclass(frozen=True)
class ScannedFile:
    """A file read from a collector's source subtree."""

    relative_path: str
    content: str


def rewrite_aliases(content: str, rewrites: Sequence[Tuple[str, str]]) -> str:
    """Rewrite internal import prefixes to their published alias."""
    for prefix, replacement in rewrites:
        content = content.replace(prefix, replacement)
    return content


def _iter_files(
    root: Path,
    extensions: Sequence[str],
    exclude: Set[Path],
    recursive: bool,
) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(root):
        current_dir = Path(dirpath)
        if recursive:
            dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
        else:
            dirnames[:] = []

        for filename in sorted(filenames):
            if filename in _EXCLUDED_FILES:
                continue
            if extensions and not filename.endswith(tuple(extensions)):
                continue
            path = current_dir / filename
            if path in exclude:
                continue
            yield path


class SourceScanner:
    """Walks a source subtree and reads matching files concurrently."""

    def __init__(self, max_workers: int = 8) -> None:
        self.max_workers = max(1, max_workers)

    def walk(
        self,
        directory: Path,
        *,
        extensions: Sequence[str] = (),
        exclude: Iterable[Path] = (),
        recursive: bool = True,
    ) -> List[Path]:
        """Return matching files under ``directory`` in a stable order."""
        if not directory.is_dir():
            logger.debug("Source directory %s does not exist; nothing to collect", directory)
            return []
        excluded = {Path(path) for path in exclude}
        return sorted(_iter_files(directory, extensions, excluded, recursive))

    def scan(
        self,
        directory: Path,
        *,
        extensions: Sequence[str] = (),
        exclude: Iterable[Path] = (),
        recursive: bool = True,
    ) -> List[ScannedFile]:
        """Return the contents of matching files, keyed by POSIX relative path."""
        paths = self.walk(directory, extensions=extensions, exclude=exclude, recursive=recursive)
        if not paths:
            return []

        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            contents = list(pool.map(_read_text, paths))

        scanned: List[ScannedFile] = []
        for path, content in zip(paths, contents):
            if content is None:
                continue
            relative = path.relative_to(directory).as_posix()
            scanned.append(ScannedFile(relative_path=relative, content=content))
        return scanned


def _read_text(path: Path) -> Optional[str]:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("Skipping unreadable source file %s: %s", path, exc)
        return None


__all__ = ["ScannedFile", "SourceScanner", "rewrite_aliases"]
