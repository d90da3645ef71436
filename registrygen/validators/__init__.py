"""Validation package for registry item documents."""

from .schema import (
    RegistryFileEntry,
    RegistryItemDocument,
    SchemaValidationError,
    is_valid_item_document,
    validate_item_document,
)

__all__ = [
    "RegistryFileEntry",
    "RegistryItemDocument",
    "SchemaValidationError",
    "is_valid_item_document",
    "validate_item_document",
]
