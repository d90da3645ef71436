"""Schema validation for registry item documents."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from ..logging import get_logger
from ..models import JSON_ONLY_TYPES, TARGET_REQUIRED_TYPES, ItemType

logger = get_logger("validators.schema")


class SchemaValidationError(ValueError):
    """Raised when an item document does not satisfy the registry item schema."""

    def __init__(self, label: str, issues: List[str]) -> None:
        self.label = label
        self.issues = issues
        super().__init__(f"Invalid registry item ({label}): {'; '.join(issues)}")


class RegistryFileEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    path: str
    type: ItemType
    target: Optional[str] = None

    @model_validator(mode="after")
    def _require_target(self) -> "RegistryFileEntry":
        if self.type in TARGET_REQUIRED_TYPES and not self.target:
            raise ValueError(f"file '{self.path}' of type {self.type.value} requires a target")
        return self


class RegistryItemDocument(BaseModel):
    """Structure every persisted item document must satisfy."""

    model_config = ConfigDict(extra="allow")

    name: str
    type: ItemType
    title: str
    description: str
    files: Optional[List[RegistryFileEntry]] = None
    dependencies: List[str] = []
    devDependencies: List[str] = []
    registryDependencies: List[str] = []

    @model_validator(mode="after")
    def _require_files(self) -> "RegistryItemDocument":
        if self.type not in JSON_ONLY_TYPES and not self.files:
            raise ValueError("files must be a non-empty array")
        return self


def validate_item_document(document: Mapping[str, Any], label: str) -> RegistryItemDocument:
    """Validate ``document`` or raise :class:`SchemaValidationError`."""
    try:
        return RegistryItemDocument.model_validate(dict(document))
    except ValidationError as exc:
        issues = [_format_issue(error) for error in exc.errors()]
        raise SchemaValidationError(label, issues) from exc


def is_valid_item_document(document: Mapping[str, Any], label: str) -> bool:
    """Return True for a valid document; log the issues and return False otherwise."""
    try:
        validate_item_document(document, label)
    except SchemaValidationError as exc:
        logger.error("%s", exc)
        return False
    return True


def _format_issue(error: Mapping[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = str(error.get("msg", "invalid value"))
    return f"{location}: {message}" if location else message


__all__ = [
    "RegistryFileEntry",
    "RegistryItemDocument",
    "SchemaValidationError",
    "is_valid_item_document",
    "validate_item_document",
]
