"""Tests for the registry lookup service."""

from __future__ import annotations

from pathlib import Path

import pytest

from registrygen.config import RegistryConfig
from registrygen.service import create_app, transform_registry_dependencies
from registrygen.stores import RegistryStore

fastapi = pytest.importorskip("fastapi")
from fastapi.testclient import TestClient  # noqa: E402


def _client(tmp_path: Path) -> tuple[TestClient, RegistryStore]:
    config = RegistryConfig(root=tmp_path, output_dir=tmp_path / "registry")
    store = RegistryStore(config.output_dir)
    store.reset()
    return TestClient(create_app(config)), store


def test_transform_registry_dependencies_rules() -> None:
    item = {
        "name": "foo",
        "registryDependencies": [
            "button",
            "/bar.json",
            "http://localhost:3001/baz.json",
            "qux.json",
            "use_thing",
        ],
    }
    transformed = transform_registry_dependencies(item, "https://reg.example.com")
    assert transformed["registryDependencies"] == [
        "button",
        "https://reg.example.com/bar.json",
        "http://localhost:3001/baz.json",
        "https://reg.example.com/qux.json",
        "https://reg.example.com/use_thing.json",
    ]
    assert item["registryDependencies"][1] == "/bar.json"


def test_transform_leaves_items_without_dependency_list() -> None:
    item = {"name": "midnight"}
    assert transform_registry_dependencies(item, "http://x") is item


def test_health(tmp_path: Path) -> None:
    client, _ = _client(tmp_path)
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_index_falls_back_to_empty_listing(tmp_path: Path) -> None:
    client, store = _client(tmp_path)
    assert client.get("/registry.json").json()["items"] == []

    store.write("registry", {"name": "self", "homepage": "h", "items": [{"name": "foo"}]})
    assert client.get("/registry.json").json()["items"] == [{"name": "foo"}]


def test_item_lookup_rewrites_dependencies(tmp_path: Path) -> None:
    client, store = _client(tmp_path)
    store.write(
        "components/foo",
        {"name": "foo", "registryDependencies": ["button", "/bar.json"]},
    )

    response = client.get("/foo.json")

    assert response.status_code == 200
    assert response.json()["registryDependencies"] == ["button", "http://testserver/bar.json"]


def test_unknown_item_returns_404_with_suggestions(tmp_path: Path) -> None:
    client, _ = _client(tmp_path)
    response = client.get("/nope.json")
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == 'Component "nope" not found.'
    assert "/all.json" in body["suggestions"]


def test_bundle_endpoint(tmp_path: Path) -> None:
    client, store = _client(tmp_path)
    assert client.get("/all.json").status_code == 404

    store.write("all", {"name": "all", "registryDependencies": []})
    response = client.get("/all.json")
    assert response.status_code == 200
    assert response.json()["name"] == "all"
