"""Tree-sitter powered module-specifier extraction."""

from __future__ import annotations

from typing import Dict, Iterator, List

from .parsers import get_parser, node_text
from ..logging import get_logger

logger = get_logger("analyzers.imports")

_QUOTES = ("'", '"', "`")


class ImportExtractor:
    """Collects module specifiers from static imports and ``import("...")`` calls."""

    language_key = "typescript"

    def extract(self, code: str) -> List[str]:
        """Return specifiers in first-seen order: static imports, then dynamic ones."""
        if not code.strip():
            return []
        parser = get_parser(self.language_key)
        if parser is None:
            logger.debug("TypeScript grammar unavailable; skipping import extraction")
            return []

        try:
            source_bytes = code.encode("utf-8")
            tree = parser.parse(source_bytes)
        except (ValueError, TypeError, UnicodeEncodeError) as exc:
            logger.warning("Failed to parse script fragment: %s", exc)
            return []

        if tree.root_node.has_error:
            logger.debug("Script fragment contains syntax errors; using recovered tree")

        static: List[str] = []
        dynamic: List[str] = []
        for node in _walk(tree.root_node):
            if node.type == "import_statement":
                specifier = self._static_specifier(node, source_bytes)
                if specifier:
                    static.append(specifier)
            elif node.type == "call_expression":
                specifier = self._dynamic_specifier(node, source_bytes)
                if specifier:
                    dynamic.append(specifier)

        ordered: Dict[str, None] = dict.fromkeys(static)
        ordered.update(dict.fromkeys(dynamic))
        return list(ordered)

    @staticmethod
    def _static_specifier(node, source_bytes: bytes) -> str:  # type: ignore[no-untyped-def]
        source = node.child_by_field_name("source")
        if source is None or source.type != "string":
            return ""
        return _unquote(node_text(source, source_bytes))

    @staticmethod
    def _dynamic_specifier(node, source_bytes: bytes) -> str:  # type: ignore[no-untyped-def]
        function = node.child_by_field_name("function")
        if function is None or function.type != "import":
            return ""
        arguments = node.child_by_field_name("arguments")
        if arguments is None or not arguments.named_children:
            return ""
        first = arguments.named_children[0]
        if first.type != "string":
            return ""
        return _unquote(node_text(first, source_bytes))


def _walk(root) -> Iterator:  # type: ignore[no-untyped-def]
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _unquote(literal: str) -> str:
    if len(literal) >= 2 and literal[0] in _QUOTES and literal[-1] == literal[0]:
        return literal[1:-1]
    return literal


__all__ = ["ImportExtractor"]
