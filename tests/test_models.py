"""Tests for registrygen.models."""

from __future__ import annotations

from registrygen.models import (
    AssetFile,
    DependencySets,
    ItemType,
    RegistryItem,
    is_target_required,
)


def test_target_requirement_by_type() -> None:
    assert is_target_required(ItemType.FILE)
    assert is_target_required("registry:page")
    assert not is_target_required(ItemType.UI)
    assert not is_target_required("registry:unknown")


def test_asset_file_omits_empty_target() -> None:
    asset = AssetFile(ItemType.LIB, "lib/utils.ts", "export {}")
    assert asset.to_dict() == {"type": "registry:lib", "path": "lib/utils.ts", "content": "export {}"}
    assert asset.summary() == {"path": "lib/utils.ts", "type": "registry:lib"}

    targeted = AssetFile(ItemType.FILE, "files/a.json", "{}", target="a.json")
    assert targeted.summary()["target"] == "a.json"


def test_dependency_sets_merge_preserves_first_seen_order() -> None:
    first = DependencySets()
    first.dependencies.update(dict.fromkeys(["b", "a"]))
    second = DependencySets()
    second.dependencies.update(dict.fromkeys(["a", "c"]))
    second.registry_dependencies["button"] = None

    first.merge(second)

    assert first.as_lists() == {
        "dependencies": ["b", "a", "c"],
        "devDependencies": [],
        "registryDependencies": ["button"],
    }


def test_registry_item_document_carries_contents_and_deps() -> None:
    item = RegistryItem(
        name="utils",
        type=ItemType.LIB,
        title="Utils",
        description="Utils utility library.",
        files=[AssetFile(ItemType.LIB, "lib/utils.ts", "export {}")],
    )
    document = item.to_document()

    assert list(document)[:2] == ["$schema", "name"]
    assert document["files"][0]["content"] == "export {}"
    assert document["registryDependencies"] == []
    assert "content" not in item.summary()["files"][0]
