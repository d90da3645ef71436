"""Collector contract and the grouping/target helpers shared by every item type."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from ..analyzers import FileDependencyAnalyzer
from ..config import RegistryConfig
from ..file_scanner import SourceScanner, rewrite_aliases
from ..logging import get_logger
from ..models import (
    ITEM_SCHEMA_URL,
    AssetFile,
    CollectorResult,
    ItemType,
    RegistryItem,
    TargetMeta,
    TypeConfig,
    is_target_required,
)
from ..validators import is_valid_item_document

_EXTENSION_PATTERN = re.compile(r"\.[^.]+$")

logger = get_logger("collectors")


@dataclass
class CollectorContext:
    """Read-only state shared by all collectors during one build."""

    config: RegistryConfig
    target_meta: TargetMeta
    analyzer: FileDependencyAnalyzer
    scanner: SourceScanner


@dataclass(frozen=True)
class CollectorSpec:
    """Static description of one item type's source conventions."""

    key: str
    type_config: TypeConfig
    source_dir: Callable[[RegistryConfig], Path]
    path_prefix: Callable[[RegistryConfig], str] = lambda config: ""
    extensions: Tuple[str, ...] = ()
    recursive: bool = True
    exclude_root_index: bool = False
    rewrite_shared_ui: bool = True
    # "relative" (post-prefix path), "canonical" (full path) or None
    target_fallback: Optional[str] = None
    title_template: str = "{title}"
    description_template: str = "{title}."
    json_only: bool = False


def is_safe_item_name(name: object) -> bool:
    """True when ``name`` can be used as a single output file name."""
    if not isinstance(name, str) or not name:
        return False
    return "/" not in name and "\\" not in name and not name.startswith(".")


def to_title(slug: str) -> str:
    """Title-case hyphen separated words: ``chat-box`` -> ``Chat Box``."""
    return " ".join(word[:1].upper() + word[1:] for word in slug.split("-"))


def group_name(path: str, prefix: str) -> str:
    """Return the group a canonical path belongs to under ``prefix``."""
    relative = path[len(prefix) :] if path.startswith(prefix) else path
    segments = relative.split("/")
    if len(segments) > 1:
        return segments[0]
    return _EXTENSION_PATTERN.sub("", segments[0])


def group_files(files: List[AssetFile], prefix: str) -> Dict[str, List[AssetFile]]:
    """Partition files into groups keyed by their top-level path segment."""
    groups: Dict[str, List[AssetFile]] = {}
    for asset in files:
        groups.setdefault(group_name(asset.path, prefix), []).append(asset)
    return groups


def resolve_target(
    path: str,
    item_type: ItemType,
    target_meta: TargetMeta,
    fallback: Optional[str] = None,
) -> Optional[str]:
    """Resolve an install target.

    Priority: an explicit ``meta.json`` entry for ``path``, then ``fallback``
    for types that require a target, otherwise None.
    """
    explicit = target_meta.lookup(path)
    if explicit:
        return explicit
    if is_target_required(item_type):
        return fallback or None
    return None


class Collector:
    """Produces the items of exactly one type, as described by its spec."""

    def __init__(self, spec: CollectorSpec) -> None:
        self.spec = spec

    @property
    def type_config(self) -> TypeConfig:
        return self.spec.type_config

    @property
    def item_type(self) -> ItemType:
        return self.spec.type_config.item_type

    def __repr__(self) -> str:
        return f"Collector({self.spec.key!r})"

    # ------------------------------------------------------------------
    # Scan -> group pipeline

    def collect(self, ctx: CollectorContext) -> List[AssetFile]:
        """Scan the type's source subtree into asset files."""
        if self.spec.json_only:
            return []

        config = ctx.config
        source_dir = self.spec.source_dir(config)
        prefix = self.spec.path_prefix(config)
        exclude = [source_dir / "index.ts"] if self.spec.exclude_root_index else []
        rewrites = config.alias_rewrites
        if not self.spec.rewrite_shared_ui:
            rewrites = rewrites[1:]

        scanned = ctx.scanner.scan(
            source_dir,
            extensions=self.spec.extensions,
            exclude=exclude,
            recursive=self.spec.recursive,
        )

        files: List[AssetFile] = []
        for source in scanned:
            path = f"{prefix}{source.relative_path}"
            files.append(
                AssetFile(
                    type=self.item_type,
                    path=path,
                    content=rewrite_aliases(source.content, rewrites),
                    target=resolve_target(
                        path,
                        self.item_type,
                        ctx.target_meta,
                        self._fallback_target(config, source.relative_path, path),
                    ),
                )
            )
        logger.debug("%s collector found %d files in %s", self.spec.key, len(files), source_dir)
        return files

    def build_items(self, files: List[AssetFile], ctx: CollectorContext) -> CollectorResult:
        """Group files into items and attach their dependency metadata."""
        result = CollectorResult(type_config=self.type_config, files=list(files))
        prefix = self.spec.path_prefix(ctx.config)

        for group, group_assets in group_files(files, prefix).items():
            deps = ctx.analyzer.analyze(
                group_assets, current_group=group, group_namespace=f"@/{prefix}"
            )
            title = to_title(group)
            item = RegistryItem(
                name=group,
                type=self.item_type,
                title=self.spec.title_template.format(title=title),
                description=self.spec.description_template.format(title=title),
                files=group_assets,
                deps=deps,
            )
            document = item.to_document()
            if is_valid_item_document(document, f"{self.spec.key}:{group}"):
                result.outputs[group] = document
                result.items.append(item.summary())
            else:
                logger.error("Skipping invalid %s: %s", self.spec.type_config.label, group)
        return result

    def _fallback_target(self, config: RegistryConfig, relative: str, path: str) -> Optional[str]:
        if not config.fallback_targets:
            return None
        if self.spec.target_fallback == "relative":
            return relative
        if self.spec.target_fallback == "canonical":
            return path
        return None

    # ------------------------------------------------------------------
    # Pass-through JSON definitions

    def collect_and_build(self, ctx: CollectorContext) -> Optional[CollectorResult]:
        """Read pre-authored item documents; None for scan-based types or no items."""
        if not self.spec.json_only:
            return None

        source_dir = self.spec.source_dir(ctx.config)
        paths = ctx.scanner.walk(source_dir, extensions=(".json",), recursive=False)
        if not paths:
            return None

        result = CollectorResult(type_config=self.type_config)
        for path in paths:
            document = self._load_definition(path)
            if document is None:
                continue
            name = document["name"]
            if is_valid_item_document(document, f"{self.spec.key}:{name}"):
                result.outputs[name] = document
                result.items.append(_summary_of(document))
            else:
                logger.error("Skipping invalid %s: %s", self.spec.type_config.label, name)

        if not result.outputs:
            return None
        return result

    def _load_definition(self, path: Path) -> Optional[Dict[str, Any]]:
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.error("Failed to read %s file %s: %s", self.spec.key, path, exc)
            return None
        if not isinstance(document, dict):
            logger.error("Failed to read %s file %s: expected a JSON object", self.spec.key, path)
            return None

        document["name"] = document.get("name") or path.stem
        if not is_safe_item_name(document["name"]):
            logger.error(
                "Skipping %s file %s: name %r is not a plain file name",
                self.spec.key,
                path,
                document["name"],
            )
            return None
        document["type"] = document.get("type") or self.item_type.value
        document["$schema"] = document.get("$schema") or ITEM_SCHEMA_URL
        return document


def _summary_of(document: Dict[str, Any]) -> Dict[str, Any]:
    summary = {key: document[key] for key in ("name", "type", "title", "description") if key in document}
    files = document.get("files")
    if files:
        summary["files"] = [
            {key: entry[key] for key in ("path", "type", "target") if key in entry}
            for entry in files
            if isinstance(entry, dict)
        ]
    return summary


__all__ = [
    "Collector",
    "CollectorContext",
    "CollectorSpec",
    "group_files",
    "group_name",
    "is_safe_item_name",
    "resolve_target",
    "to_title",
]
