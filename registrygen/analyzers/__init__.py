"""Source, import and dependency analyzers for collected files."""

from __future__ import annotations

from typing import Iterable, Optional

from .dependencies import (
    AliasNamespace,
    AllowLists,
    DependencyClassifier,
    build_types_dev_deps_map,
    get_base_package_name,
    load_allow_lists,
)
from .imports import ImportExtractor
from .parsers import TREE_SITTER_AVAILABLE
from .source import SourceExtractor
from ..models import AssetFile, DependencySets


class FileDependencyAnalyzer:
    """Runs source extraction, import extraction and classification over files."""

    def __init__(
        self,
        classifier: DependencyClassifier,
        source_extractor: Optional[SourceExtractor] = None,
        import_extractor: Optional[ImportExtractor] = None,
    ) -> None:
        self.classifier = classifier
        self.source_extractor = source_extractor or SourceExtractor()
        self.import_extractor = import_extractor or ImportExtractor()

    def analyze(
        self,
        files: Iterable[AssetFile],
        *,
        current_group: Optional[str] = None,
        group_namespace: Optional[str] = None,
        skip_internal_deps: bool = False,
    ) -> DependencySets:
        """Return the merged dependency sets of ``files``."""
        merged = DependencySets()
        for asset in files:
            code = self.source_extractor.extract(asset)
            if not code:
                continue
            specifiers = self.import_extractor.extract(code)
            merged.merge(
                self.classifier.classify(
                    specifiers,
                    file_path=asset.path,
                    current_group=current_group,
                    group_namespace=group_namespace,
                    skip_internal_deps=skip_internal_deps,
                )
            )
        return merged


__all__ = [
    "AliasNamespace",
    "AllowLists",
    "DependencyClassifier",
    "FileDependencyAnalyzer",
    "ImportExtractor",
    "SourceExtractor",
    "TREE_SITTER_AVAILABLE",
    "build_types_dev_deps_map",
    "get_base_package_name",
    "load_allow_lists",
]
