"""Registry assembly: runs every collector and writes the output store."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .analyzers import (
    DependencyClassifier,
    FileDependencyAnalyzer,
    ImportExtractor,
    SourceExtractor,
    load_allow_lists,
)
from .collectors import Collector, CollectorContext, create_default_collectors
from .config import RegistryConfig
from .file_scanner import SourceScanner
from .logging import get_logger
from .models import (
    BUNDLE_TYPES,
    ITEM_SCHEMA_URL,
    REGISTRY_SCHEMA_URL,
    AssetFile,
    CollectorResult,
    DependencySets,
    ItemType,
    TargetMeta,
    is_target_required,
)
from .stores import BUNDLE_KEY, INDEX_KEY, RegistryStore
from .validators import is_valid_item_document

BUNDLE_NAME = "all"


@dataclass
class BuildResult:
    """Summary of one registry build."""

    output_dir: Path
    results: List[CollectorResult] = field(default_factory=list)
    index: Dict[str, Any] = field(default_factory=dict)
    bundle: Optional[Dict[str, Any]] = None
    dropped_files: List[str] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return sum(len(result.outputs) for result in self.results)


class RegistryAssembler:
    """Coordinates collectors, validation and persistence for a registry build."""

    def __init__(
        self,
        config: RegistryConfig,
        collectors: Optional[Iterable[Collector]] = None,
        store: RegistryStore | None = None,
        scanner: SourceScanner | None = None,
        source_extractor: SourceExtractor | None = None,
        import_extractor: ImportExtractor | None = None,
    ) -> None:
        self.config = config
        self.collectors = list(collectors) if collectors is not None else create_default_collectors()
        self.store = store or RegistryStore(config.output_dir)
        self.scanner = scanner or SourceScanner(max_workers=config.max_workers)
        self.source_extractor = source_extractor or SourceExtractor()
        self.import_extractor = import_extractor or ImportExtractor()
        self.logger = get_logger("builder")

    def build(self) -> BuildResult:
        """Run the full pipeline; only output-store write errors propagate."""
        self.logger.info("Building registry from %s", self.config.root)

        allow = load_allow_lists(self.config)
        self.logger.debug(
            "Allow-lists: %d runtime, %d dev packages", len(allow.runtime), len(allow.dev)
        )
        target_meta = self._load_target_meta()

        self.store.reset()

        classifier = DependencyClassifier.from_config(self.config, allow)
        ctx = CollectorContext(
            config=self.config,
            target_meta=target_meta,
            analyzer=FileDependencyAnalyzer(
                classifier,
                source_extractor=self.source_extractor,
                import_extractor=self.import_extractor,
            ),
            scanner=self.scanner,
        )

        build = BuildResult(output_dir=self.store.root)
        for collector in self.collectors:
            result = self._run_collector(collector, ctx, build)
            if result is not None:
                build.results.append(result)

        self._write_items(build.results)

        build.index = self._build_index(build.results)
        self.store.write(INDEX_KEY, build.index)

        build.bundle = self._build_bundle(build.results, ctx)
        if build.bundle is not None:
            self.store.write(BUNDLE_KEY, build.bundle)

        self.logger.info(
            "Registry assets generated at %s (%d items)", self.store.root, build.item_count
        )
        return build

    def _run_collector(
        self, collector: Collector, ctx: CollectorContext, build: BuildResult
    ) -> Optional[CollectorResult]:
        combined = collector.collect_and_build(ctx)
        if combined is not None:
            return combined

        files = collector.collect(ctx)
        if not files:
            return None

        valid_files: List[AssetFile] = []
        for asset in files:
            if is_target_required(asset.type) and not asset.target:
                self.logger.error(
                    'File "%s" of type "%s" requires a target but none was provided. Skipping.',
                    asset.path,
                    asset.type.value,
                )
                build.dropped_files.append(asset.path)
                continue
            valid_files.append(asset)

        if not valid_files:
            return None
        return collector.build_items(valid_files, ctx)

    def _write_items(self, results: Iterable[CollectorResult]) -> None:
        for result in results:
            subfolder = result.type_config.output_dir
            for name, document in result.outputs.items():
                self.store.write(f"{subfolder}/{name}", document)

    def _build_index(self, results: Iterable[CollectorResult]) -> Dict[str, Any]:
        items: List[Dict[str, Any]] = []
        for result in results:
            items.extend(result.items)
        return {
            "$schema": REGISTRY_SCHEMA_URL,
            "name": self.config.base_name,
            "homepage": self.config.homepage,
            "items": items,
        }

    def _build_bundle(
        self, results: Iterable[CollectorResult], ctx: CollectorContext
    ) -> Optional[Dict[str, Any]]:
        bundle_files: List[AssetFile] = []
        for result in results:
            bundle_files.extend(asset for asset in result.files if asset.type in BUNDLE_TYPES)

        if not bundle_files:
            self.logger.info("No installable files found; skipping %s.json", BUNDLE_NAME)
            return None

        deps = DependencySets()
        for asset in bundle_files:
            deps.merge(ctx.analyzer.analyze([asset], skip_internal_deps=True))

        document: Dict[str, Any] = {
            "$schema": ITEM_SCHEMA_URL,
            "name": BUNDLE_NAME,
            "type": ItemType.COMPONENT.value,
            "title": self.config.registry_title,
            "description": self.config.registry_description,
            "files": [asset.to_dict() for asset in bundle_files],
        }
        document.update(deps.as_lists())

        if not is_valid_item_document(document, BUNDLE_NAME):
            self.logger.error("Skipping invalid %s.json", BUNDLE_NAME)
            return None
        return document

    def _load_target_meta(self) -> TargetMeta:
        meta_path = self.config.meta_path
        try:
            payload = json.loads(meta_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            self.logger.debug("No target metadata at %s", meta_path)
            return TargetMeta()
        except (OSError, json.JSONDecodeError) as exc:
            self.logger.warning("Ignoring unreadable target metadata %s: %s", meta_path, exc)
            return TargetMeta()
        return TargetMeta.from_payload(payload)


def build_registry(config: RegistryConfig) -> BuildResult:
    """Convenience wrapper used by the CLI."""
    return RegistryAssembler(config).build()


__all__ = [
    "BUNDLE_NAME",
    "BuildResult",
    "RegistryAssembler",
    "build_registry",
]
