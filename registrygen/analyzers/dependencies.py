"""Dependency classification for collected files."""

from __future__ import annotations

import json
import posixpath
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple

from ..config import RegistryConfig
from ..logging import get_logger
from ..models import DependencySets

TYPES_PREFIX = "@types/"

logger = get_logger("analyzers.dependencies")


# Package manifest helpers


def load_package_json(path: Path) -> Dict[str, object]:
    """Return the parsed package.json contents or an empty dict."""
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Ignoring unreadable package manifest %s: %s", path, exc)
        return {}
    if isinstance(data, dict):
        return data
    return {}


def _dependency_names(manifest: Mapping[str, object], key: str) -> List[str]:
    deps = manifest.get(key, {})
    if isinstance(deps, dict):
        return [str(name) for name in deps]
    return []


def build_types_dev_deps_map(dev_dependencies: Iterable[str]) -> Dict[str, List[str]]:
    """Map runtime package names to their ``@types/`` declaration packages."""
    mapping: Dict[str, List[str]] = {}
    for dev_dep in dev_dependencies:
        if not dev_dep.startswith(TYPES_PREFIX):
            continue
        name = dev_dep[len(TYPES_PREFIX) :]
        # DefinitelyTyped encodes @scope/pkg as @types/scope__pkg
        runtime = f"@{name.replace('__', '/', 1)}" if "__" in name else name
        mapping.setdefault(runtime, []).append(dev_dep)
    return mapping


@dataclass
class AllowLists:
    """Packages a registry item is allowed to declare as dependencies."""

    runtime: Set[str] = field(default_factory=set)
    dev: Set[str] = field(default_factory=set)
    types_map: Dict[str, List[str]] = field(default_factory=dict)


def load_allow_lists(config: RegistryConfig) -> AllowLists:
    """Merge declared dependencies of the source packages minus exclusions."""
    runtime: Dict[str, None] = {}
    dev: Dict[str, None] = {}
    for manifest_path in config.package_json_paths:
        manifest = load_package_json(manifest_path)
        runtime.update(dict.fromkeys(_dependency_names(manifest, "dependencies")))
        dev.update(dict.fromkeys(_dependency_names(manifest, "devDependencies")))

    internal_prefix = f"{config.internal_scope}/"
    excluded_runtime = {config.framework_package, config.shared_ui_package}
    allowed_runtime = {
        name
        for name in runtime
        if name not in excluded_runtime and not name.startswith(internal_prefix)
    }
    excluded_dev = set(config.excluded_dev_dependencies)
    allowed_dev = {name for name in dev if name not in excluded_dev}

    return AllowLists(
        runtime=allowed_runtime,
        dev=allowed_dev,
        types_map=build_types_dev_deps_map(sorted(allowed_dev)),
    )


# Specifier helpers


def get_base_package_name(specifier: str) -> str:
    """Normalize a specifier to its package root (scoped or unscoped)."""
    if specifier.startswith("@"):
        return "/".join(specifier.split("/")[:2])
    return specifier.split("/")[0]


def extract_registry_slug(module_path: str, base_path: str) -> str:
    """Return the item slug addressed by ``module_path`` under ``base_path``."""
    if not module_path.startswith(base_path):
        return ""
    rest = [segment for segment in module_path[len(base_path) :].split("/") if segment]
    if not rest:
        return ""
    slug = rest[0]
    if len(rest) == 1:
        slug = posixpath.splitext(slug)[0]
    return slug


@dataclass(frozen=True)
class AliasNamespace:
    """An internal import root owned by one collector namespace."""

    prefix: str
    qualified: bool


def default_namespaces(config: RegistryConfig) -> List[AliasNamespace]:
    # Examples live inside the component alias, so they must match first.
    return [
        AliasNamespace("@/components/ui/", qualified=False),
        AliasNamespace(f"{config.component_alias}examples/", qualified=True),
        AliasNamespace(config.component_alias, qualified=True),
        AliasNamespace("@/composables/", qualified=True),
        AliasNamespace("@/lib/", qualified=True),
    ]


class DependencyClassifier:
    """Partitions module specifiers into runtime, dev and cross-item dependencies."""

    def __init__(
        self,
        allow: AllowLists,
        namespaces: Sequence[AliasNamespace],
        item_url: Callable[[str], str],
    ) -> None:
        self.allow = allow
        self.namespaces = list(namespaces)
        self.item_url = item_url

    @classmethod
    def from_config(cls, config: RegistryConfig, allow: AllowLists) -> "DependencyClassifier":
        return cls(allow, default_namespaces(config), config.item_url)

    def classify(
        self,
        specifiers: Iterable[str],
        *,
        file_path: Optional[str] = None,
        current_group: Optional[str] = None,
        group_namespace: Optional[str] = None,
        skip_internal_deps: bool = False,
    ) -> DependencySets:
        """Partition ``specifiers`` for the item ``current_group``.

        ``group_namespace`` is the alias prefix the item is published under
        (e.g. ``@/components/self/``); a slug equal to ``current_group`` is only
        treated as a self-reference inside that namespace. Without it, any
        namespace matches.
        """
        result = DependencySets()
        owner = (current_group, group_namespace)
        for specifier in specifiers:
            if specifier.startswith(("./", "../")):
                candidate = self._resolve_relative(specifier, file_path)
                if candidate is not None:
                    self._add_internal(candidate, result, owner, skip_internal_deps)
                continue

            if specifier.startswith("~/"):
                specifier = "@/" + specifier[2:]

            if self._add_internal(specifier, result, owner, skip_internal_deps):
                continue

            self._add_package(specifier, result)
        return result

    def _resolve_relative(self, specifier: str, file_path: Optional[str]) -> Optional[str]:
        if not file_path:
            return None
        resolved = posixpath.normpath(posixpath.join(posixpath.dirname(file_path), specifier))
        if resolved.startswith("..") or resolved.startswith("/"):
            return None
        return f"@/{resolved}"

    def _add_internal(
        self,
        specifier: str,
        result: DependencySets,
        owner: Tuple[Optional[str], Optional[str]],
        skip_internal_deps: bool,
    ) -> bool:
        """Record an aliased specifier; return False when no namespace matches."""
        for namespace in self.namespaces:
            if not specifier.startswith(namespace.prefix):
                continue
            slug = extract_registry_slug(specifier, namespace.prefix)
            if not slug or skip_internal_deps or _is_owner(slug, namespace, owner):
                return True
            reference = self.item_url(slug) if namespace.qualified else slug
            result.registry_dependencies[reference] = None
            return True
        return False

    def _add_package(self, specifier: str, result: DependencySets) -> None:
        package = get_base_package_name(specifier)
        if package in self.allow.runtime:
            result.dependencies[package] = None
            for types_package in self.allow.types_map.get(package, []):
                result.dev_dependencies[types_package] = None
        if specifier in self.allow.dev:
            result.dev_dependencies[specifier] = None


def _is_owner(
    slug: str, namespace: AliasNamespace, owner: Tuple[Optional[str], Optional[str]]
) -> bool:
    group, group_namespace = owner
    if slug != group:
        return False
    return group_namespace is None or namespace.prefix == group_namespace


__all__ = [
    "AliasNamespace",
    "AllowLists",
    "DependencyClassifier",
    "build_types_dev_deps_map",
    "default_namespaces",
    "extract_registry_slug",
    "get_base_package_name",
    "load_allow_lists",
    "load_package_json",
]
