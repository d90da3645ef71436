"""Shared tree-sitter parser cache."""

from __future__ import annotations

from typing import Dict, Optional

from ..logging import get_logger

try:  # pragma: no cover - optional dependency
    from tree_sitter import Parser
    from tree_sitter_languages import get_language

    TREE_SITTER_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    Parser = None  # type: ignore[assignment]
    get_language = None  # type: ignore[assignment]
    TREE_SITTER_AVAILABLE = False


logger = get_logger("analyzers.parsers")

_PARSERS: Dict[str, "Parser"] = {}
_FAILED: set[str] = set()


def get_parser(language_key: str) -> Optional["Parser"]:
    """Return a cached parser for ``language_key`` or None when unavailable."""
    parser = _PARSERS.get(language_key)
    if parser is not None:
        return parser
    if language_key in _FAILED:
        return None
    if not TREE_SITTER_AVAILABLE:
        _FAILED.add(language_key)
        logger.warning("tree_sitter is not installed; %s sources will not be analyzed", language_key)
        return None
    try:
        language = get_language(language_key)
        parser = Parser()
        parser.set_language(language)
    except Exception as exc:  # grammar bundles raise a mix of OSError/AttributeError/TypeError
        _FAILED.add(language_key)
        logger.warning("tree-sitter grammar %r could not be loaded: %s", language_key, exc)
        return None
    _PARSERS[language_key] = parser
    return parser


def node_text(node, source_bytes: bytes) -> str:  # type: ignore[no-untyped-def]
    return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


__all__ = ["TREE_SITTER_AVAILABLE", "get_parser", "node_text"]
