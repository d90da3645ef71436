"""Configuration loading for registrygen (.registrygen.yml + environment)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import yaml

CONFIG_FILENAME = ".registrygen.yml"

_ENV_OVERRIDES = {
    "BASE_NAME": "base_name",
    "HOMEPAGE": "homepage",
    "BASE_URL": "base_url",
    "REGISTRY_TITLE": "registry_title",
    "REGISTRY_DESCRIPTION": "registry_description",
}


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class RegistryConfig:
    """Settings for one registry build, constructed once and passed explicitly."""

    root: Path
    base_name: str = "self"
    homepage: str = "https://example.com"
    base_url: str = "http://localhost:3001"
    registry_title: str = "All Elements"
    registry_description: str = "A collection of all elements."
    # Left unset, these resolve under ``root`` in __post_init__.
    output_dir: Path = None  # type: ignore[assignment]
    elements_dir: Path = None  # type: ignore[assignment]
    examples_dir: Path = None  # type: ignore[assignment]
    framework_package: str = "vue"
    internal_scope: str = "@repo"
    shared_ui_package: str = "@repo/shadcn-vue"
    excluded_dev_dependencies: List[str] = field(default_factory=lambda: ["typescript"])
    fallback_targets: bool = True
    max_workers: int = 8

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        if self.output_dir is None:
            self.output_dir = self.root / "server" / "assets" / "registry"
        if self.elements_dir is None:
            self.elements_dir = self.root / "packages" / "elements"
        if self.examples_dir is None:
            self.examples_dir = self.root / "packages" / "examples"

    @property
    def component_alias(self) -> str:
        return f"@/components/{self.base_name}/"

    @property
    def alias_rewrites(self) -> List[Tuple[str, str]]:
        """Import prefixes rewritten to their published alias, in order."""
        return [
            (f"{self.shared_ui_package}/", "@/"),
            (f"{self.internal_scope}/elements/", self.component_alias),
        ]

    @property
    def meta_path(self) -> Path:
        return self.elements_dir / "meta.json"

    @property
    def package_json_paths(self) -> List[Path]:
        return [self.elements_dir / "package.json", self.examples_dir / "package.json"]

    def item_url(self, slug: str) -> str:
        return f"{self.base_url.rstrip('/')}/{slug}.json"

    def with_overrides(self, **overrides: Any) -> "RegistryConfig":
        """Return a copy with non-None overrides applied."""
        values = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **values)


def load_config(
    config_path: Path, *, environ: Optional[Mapping[str, str]] = None
) -> RegistryConfig:
    """Load configuration from disk, then apply environment overrides."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    data: Dict[str, Any] = {}
    if config_file.exists():
        data = _read_config(config_file)
        if not isinstance(data, dict):
            raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    registry_data = _as_dict(data.get("registry"))
    paths_data = _as_dict(data.get("paths"))
    deps_data = _as_dict(data.get("dependencies"))
    build_data = _as_dict(data.get("build"))

    values: Dict[str, Any] = {}
    for key in ("base_name", "homepage", "base_url", "registry_title", "registry_description"):
        value = _as_str(registry_data.get(key))
        if value:
            values[key] = value

    for key in ("output_dir", "elements_dir", "examples_dir"):
        value = _as_str(paths_data.get(key))
        if value:
            values[key] = root / value

    for key in ("framework_package", "internal_scope", "shared_ui_package"):
        value = _as_str(deps_data.get(key))
        if value:
            values[key] = value
    if "excluded_dev" in deps_data:
        values["excluded_dev_dependencies"] = _as_str_list(deps_data.get("excluded_dev"))

    fallback = _as_bool(build_data.get("fallback_targets"))
    if fallback is not None:
        values["fallback_targets"] = fallback
    workers = _as_int(build_data.get("max_workers"))
    if workers is not None and workers > 0:
        values["max_workers"] = workers

    env = os.environ if environ is None else environ
    for env_key, attr in _ENV_OVERRIDES.items():
        env_value = env.get(env_key)
        if env_value:
            values[attr] = env_value

    return RegistryConfig(root=root, **values)


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "RegistryConfig", "load_config"]
