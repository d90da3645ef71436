"""Core data models shared across registrygen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

ITEM_SCHEMA_URL = "https://shadcn-vue.com/schema/registry-item.json"
REGISTRY_SCHEMA_URL = "https://shadcn-vue.com/schema/registry.json"


class ItemType(str, Enum):
    """Registry item types understood by the pipeline."""

    COMPONENT = "registry:component"
    HOOK = "registry:hook"
    LIB = "registry:lib"
    UI = "registry:ui"
    BLOCK = "registry:block"
    PAGE = "registry:page"
    FILE = "registry:file"
    STYLE = "registry:style"
    THEME = "registry:theme"


TARGET_REQUIRED_TYPES = frozenset({ItemType.FILE, ItemType.PAGE})
JSON_ONLY_TYPES = frozenset({ItemType.STYLE, ItemType.THEME})
BUNDLE_TYPES = frozenset(
    {
        ItemType.COMPONENT,
        ItemType.LIB,
        ItemType.HOOK,
        ItemType.UI,
        ItemType.PAGE,
        ItemType.FILE,
    }
)


def is_target_required(item_type: ItemType | str) -> bool:
    return _coerce_type(item_type) in TARGET_REQUIRED_TYPES


def _coerce_type(item_type: ItemType | str) -> Optional[ItemType]:
    if isinstance(item_type, ItemType):
        return item_type
    try:
        return ItemType(item_type)
    except ValueError:
        return None


@dataclass(frozen=True)
class TypeConfig:
    """Output metadata for one registry item type."""

    output_dir: str
    item_type: ItemType
    target_required: bool
    label: str


TYPE_CONFIGS: Dict[str, TypeConfig] = {
    "component": TypeConfig("components", ItemType.COMPONENT, False, "component"),
    "hook": TypeConfig("hooks", ItemType.HOOK, False, "hook"),
    "lib": TypeConfig("lib", ItemType.LIB, False, "lib"),
    "ui": TypeConfig("ui", ItemType.UI, False, "ui"),
    "example": TypeConfig("examples", ItemType.BLOCK, False, "example"),
    "page": TypeConfig("pages", ItemType.PAGE, True, "page"),
    "file": TypeConfig("files", ItemType.FILE, True, "file"),
    "theme": TypeConfig("themes", ItemType.THEME, False, "theme"),
    "style": TypeConfig("styles", ItemType.STYLE, False, "style"),
}

# Lookup priority used by readers of the output store; first match wins.
SEARCH_DIRS = (
    "components",
    "hooks",
    "lib",
    "ui",
    "examples",
    "pages",
    "files",
    "themes",
    "styles",
)


@dataclass(frozen=True)
class AssetFile:
    """A single file as it will appear inside a published item."""

    type: ItemType
    path: str
    content: str
    target: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type.value,
            "path": self.path,
            "content": self.content,
        }
        if self.target:
            data["target"] = self.target
        return data

    def summary(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"path": self.path, "type": self.type.value}
        if self.target:
            data["target"] = self.target
        return data


@dataclass
class DependencySets:
    """Runtime, dev-only and cross-item dependencies, in first-seen order."""

    dependencies: Dict[str, None] = field(default_factory=dict)
    dev_dependencies: Dict[str, None] = field(default_factory=dict)
    registry_dependencies: Dict[str, None] = field(default_factory=dict)

    def merge(self, other: "DependencySets") -> None:
        self.dependencies.update(other.dependencies)
        self.dev_dependencies.update(other.dev_dependencies)
        self.registry_dependencies.update(other.registry_dependencies)

    def as_lists(self) -> Dict[str, List[str]]:
        return {
            "dependencies": list(self.dependencies),
            "devDependencies": list(self.dev_dependencies),
            "registryDependencies": list(self.registry_dependencies),
        }


@dataclass
class RegistryItem:
    """A published unit: one group of files plus its dependency metadata."""

    name: str
    type: ItemType
    title: str
    description: str
    files: List[AssetFile] = field(default_factory=list)
    deps: DependencySets = field(default_factory=DependencySets)

    def summary(self) -> Dict[str, Any]:
        """Return the index entry for this item (no file contents)."""
        return {
            "name": self.name,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "files": [asset.summary() for asset in self.files],
        }

    def to_document(self) -> Dict[str, Any]:
        """Return the full item document written to the output store."""
        document: Dict[str, Any] = {"$schema": ITEM_SCHEMA_URL}
        document.update(self.summary())
        document["files"] = [asset.to_dict() for asset in self.files]
        document.update(self.deps.as_lists())
        return document


@dataclass
class TargetMeta:
    """Explicit install-target overrides keyed by canonical path."""

    targets: Dict[str, str] = field(default_factory=dict)

    def lookup(self, path: str) -> Optional[str]:
        target = self.targets.get(path)
        return target or None

    @classmethod
    def from_payload(cls, payload: object) -> "TargetMeta":
        if not isinstance(payload, Mapping):
            return cls()
        raw = payload.get("targets")
        if not isinstance(raw, Mapping):
            return cls()
        targets = {
            str(path): str(target)
            for path, target in raw.items()
            if isinstance(path, str) and isinstance(target, str)
        }
        return cls(targets=targets)


@dataclass
class CollectorResult:
    """Files, items and persistable documents produced for one item type."""

    type_config: TypeConfig
    files: List[AssetFile] = field(default_factory=list)
    items: List[Dict[str, Any]] = field(default_factory=list)
    outputs: Dict[str, Dict[str, Any]] = field(default_factory=dict)


__all__ = [
    "AssetFile",
    "BUNDLE_TYPES",
    "CollectorResult",
    "DependencySets",
    "ITEM_SCHEMA_URL",
    "ItemType",
    "JSON_ONLY_TYPES",
    "REGISTRY_SCHEMA_URL",
    "RegistryItem",
    "SEARCH_DIRS",
    "TARGET_REQUIRED_TYPES",
    "TYPE_CONFIGS",
    "TargetMeta",
    "TypeConfig",
    "is_target_required",
]
