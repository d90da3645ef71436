"""Tests for registry item schema validation."""

from __future__ import annotations

import logging

import pytest

from registrygen.validators import (
    SchemaValidationError,
    is_valid_item_document,
    validate_item_document,
)


def _document(**overrides):  # type: ignore[no-untyped-def]
    document = {
        "$schema": "https://shadcn-vue.com/schema/registry-item.json",
        "name": "button",
        "type": "registry:ui",
        "title": "Button",
        "description": "Button UI primitive.",
        "files": [{"path": "components/ui/button/Button.vue", "type": "registry:ui", "content": ""}],
        "dependencies": [],
        "devDependencies": [],
        "registryDependencies": [],
    }
    document.update(overrides)
    return document


def test_valid_document_passes() -> None:
    model = validate_item_document(_document(), "ui:button")
    assert model.name == "button"
    assert is_valid_item_document(_document(), "ui:button") is True


def test_missing_required_fields_are_reported() -> None:
    document = _document()
    del document["title"]
    with pytest.raises(SchemaValidationError) as excinfo:
        validate_item_document(document, "ui:button")
    assert excinfo.value.label == "ui:button"
    assert any(issue.startswith("title") for issue in excinfo.value.issues)


def test_unknown_type_is_rejected() -> None:
    with pytest.raises(SchemaValidationError):
        validate_item_document(_document(type="registry:widget"), "x")


def test_files_are_required_for_installable_types() -> None:
    with pytest.raises(SchemaValidationError):
        validate_item_document(_document(files=[]), "x")
    document = _document()
    del document["files"]
    assert is_valid_item_document(document, "x") is False


def test_json_only_types_may_omit_files() -> None:
    document = _document(type="registry:theme", name="midnight")
    del document["files"]
    assert is_valid_item_document(document, "theme:midnight") is True


def test_target_required_file_entries(caplog: pytest.LogCaptureFixture) -> None:
    entry = {"path": "files/app.json", "type": "registry:file", "content": "{}"}
    with caplog.at_level(logging.ERROR, logger="registrygen"):
        assert is_valid_item_document(_document(type="registry:file", files=[entry]), "file:app") is False
    assert "requires a target" in caplog.text

    entry["target"] = "app.json"
    assert is_valid_item_document(_document(type="registry:file", files=[entry]), "file:app") is True


def test_extra_fields_are_allowed() -> None:
    assert is_valid_item_document(_document(cssVars={"light": {}}, author="me"), "x") is True


def test_dependency_lists_must_be_strings() -> None:
    assert is_valid_item_document(_document(dependencies="lodash"), "x") is False
