"""Extraction of analyzable script text from collected files."""

from __future__ import annotations

from typing import List, Optional

from .parsers import get_parser, node_text
from ..logging import get_logger
from ..models import AssetFile

SCRIPT_EXTENSIONS = (".ts", ".js", ".tsx", ".jsx", ".mjs", ".mts")
CONTAINER_EXTENSIONS = (".vue",)

logger = get_logger("analyzers.source")


class SourceExtractor:
    """Returns the importable code of a file.

    Single-file component documents contribute their ``<script>`` and
    ``<script setup>`` regions, joined in that order by a newline. Plain
    script files are returned unchanged. Anything else yields ``""``.
    """

    def extract(self, asset: AssetFile) -> str:
        if asset.path.endswith(CONTAINER_EXTENSIONS):
            return self.extract_script_regions(asset.content)
        if asset.path.endswith(SCRIPT_EXTENSIONS):
            return asset.content
        return ""

    def extract_script_regions(self, document: str) -> str:
        parser = get_parser("html")
        if parser is None:
            logger.debug("HTML grammar unavailable; skipping script regions")
            return ""

        source_bytes = document.encode("utf-8")
        tree = parser.parse(source_bytes)

        script: Optional[str] = None
        script_setup: Optional[str] = None
        for child in tree.root_node.children:
            if child.type != "script_element":
                continue
            is_setup = "setup" in _attribute_names(child, source_bytes)
            content = _raw_text(child, source_bytes)
            if is_setup and script_setup is None:
                script_setup = content
            elif not is_setup and script is None:
                script = content

        if script is None and script_setup is None:
            return ""
        return "\n".join([script or "", script_setup or ""])


def _attribute_names(script_node, source_bytes: bytes) -> List[str]:  # type: ignore[no-untyped-def]
    names: List[str] = []
    for child in script_node.children:
        if child.type != "start_tag":
            continue
        for attribute in child.children:
            if attribute.type != "attribute":
                continue
            for part in attribute.children:
                if part.type == "attribute_name":
                    names.append(node_text(part, source_bytes).strip().lower())
    return names


def _raw_text(script_node, source_bytes: bytes) -> str:  # type: ignore[no-untyped-def]
    for child in script_node.children:
        if child.type == "raw_text":
            return node_text(child, source_bytes)
    return ""


__all__ = ["CONTAINER_EXTENSIONS", "SCRIPT_EXTENSIONS", "SourceExtractor"]
