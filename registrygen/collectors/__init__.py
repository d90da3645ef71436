"""Item-type collectors and the default collector set."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict, List

from .base import (
    Collector,
    CollectorContext,
    CollectorSpec,
    group_files,
    group_name,
    is_safe_item_name,
    resolve_target,
    to_title,
)
from ..config import RegistryConfig
from ..models import TYPE_CONFIGS


def _elements(*parts: str) -> Callable[[RegistryConfig], Path]:
    def _source(config: RegistryConfig) -> Path:
        return config.elements_dir.joinpath("src", *parts)

    return _source


def _examples_source(config: RegistryConfig) -> Path:
    return config.examples_dir / "src"


COLLECTOR_SPECS: Dict[str, CollectorSpec] = {
    "component": CollectorSpec(
        key="component",
        type_config=TYPE_CONFIGS["component"],
        source_dir=_elements("components"),
        path_prefix=lambda config: f"components/{config.base_name}/",
        extensions=(".vue", ".ts"),
        exclude_root_index=True,
        description_template="{title} components.",
    ),
    "hook": CollectorSpec(
        key="hook",
        type_config=TYPE_CONFIGS["hook"],
        source_dir=_elements("composables"),
        path_prefix=lambda config: "composables/",
        extensions=(".ts",),
        rewrite_shared_ui=False,
        description_template="{title} composable hook.",
    ),
    "example": CollectorSpec(
        key="example",
        type_config=TYPE_CONFIGS["example"],
        source_dir=_examples_source,
        path_prefix=lambda config: f"components/{config.base_name}/examples/",
        extensions=(".vue",),
        recursive=False,
        rewrite_shared_ui=False,
        title_template="{title} Example",
        description_template="Example implementation of {title}.",
    ),
    "lib": CollectorSpec(
        key="lib",
        type_config=TYPE_CONFIGS["lib"],
        source_dir=_elements("lib"),
        path_prefix=lambda config: "lib/",
        extensions=(".ts",),
        description_template="{title} utility library.",
    ),
    "ui": CollectorSpec(
        key="ui",
        type_config=TYPE_CONFIGS["ui"],
        source_dir=_elements("ui"),
        path_prefix=lambda config: "components/ui/",
        extensions=(".vue", ".ts"),
        exclude_root_index=True,
        description_template="{title} UI primitive.",
    ),
    "page": CollectorSpec(
        key="page",
        type_config=TYPE_CONFIGS["page"],
        source_dir=_elements("pages"),
        path_prefix=lambda config: "pages/",
        extensions=(".vue", ".ts"),
        target_fallback="canonical",
        title_template="{title} Page",
        description_template="{title} page component.",
    ),
    "file": CollectorSpec(
        key="file",
        type_config=TYPE_CONFIGS["file"],
        source_dir=_elements("files"),
        path_prefix=lambda config: "files/",
        target_fallback="relative",
        description_template="{title} file.",
    ),
    "style": CollectorSpec(
        key="style",
        type_config=TYPE_CONFIGS["style"],
        source_dir=_elements("styles"),
        json_only=True,
    ),
    "theme": CollectorSpec(
        key="theme",
        type_config=TYPE_CONFIGS["theme"],
        source_dir=_elements("themes"),
        json_only=True,
    ),
}

# Iteration order only affects write sequencing, never the output.
DEFAULT_ORDER = ("component", "hook", "example", "lib", "ui", "page", "file", "style", "theme")


def create_default_collectors() -> List[Collector]:
    """Return one collector per item type in the default order."""
    return [Collector(COLLECTOR_SPECS[key]) for key in DEFAULT_ORDER]


__all__ = [
    "COLLECTOR_SPECS",
    "Collector",
    "CollectorContext",
    "CollectorSpec",
    "DEFAULT_ORDER",
    "create_default_collectors",
    "group_files",
    "group_name",
    "is_safe_item_name",
    "resolve_target",
    "to_title",
]
