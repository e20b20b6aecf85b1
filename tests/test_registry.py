"""Tests for wot_meta.registry and wot_meta.component_map."""

from __future__ import annotations

from pathlib import Path

import pytest

from wot_meta.component_map import COMPONENT_MAP, ComponentEntry, find_entry, normalize_tag
from wot_meta.registry import ComponentRegistry

ENTRIES = [
    ComponentEntry("wd-button"),
    ComponentEntry("wd-circle"),
    ComponentEntry("wd-table"),
    ComponentEntry("wd-table-col", "table"),
]


@pytest.fixture
def registry(docs_dir: Path) -> ComponentRegistry:
    return ComponentRegistry(ENTRIES, docs_dir=docs_dir).load()


def test_normalize_tag() -> None:
    assert normalize_tag("WdButton") == "wd-button"
    assert normalize_tag("button") == "wd-button"
    assert normalize_tag("wd-table-col") == "wd-table-col"


def test_component_map_entries() -> None:
    tags = [e.tag for e in COMPONENT_MAP]

    assert len(tags) == len(set(tags))
    assert all(tag.startswith("wd-") for tag in tags)
    assert find_entry("table-col") == ComponentEntry("wd-table-col", "table")
    assert find_entry("wd-table-col").component_name == "table-col"
    assert find_entry("no-such-thing") is None


def test_get_accepts_every_tag_spelling(registry: ComponentRegistry) -> None:
    assert registry.get("wd-button") is registry.get("button") is registry.get("WdButton")
    assert "table-col" in registry
    assert len(registry) == 4


def test_find_prop_by_kebab_or_camel(registry: ComponentRegistry) -> None:
    assert registry.find_prop("wd-button", "open-type").name == "open-type"
    assert registry.find_prop("wd-button", "openType").name == "open-type"
    assert registry.find_prop("wd-circle", "strokeWidth").name == "stroke-width"
    assert registry.find_prop("wd-button", "missing") is None
    assert registry.find_prop("wd-nothing", "type") is None


def test_binding_spellings_resolve_to_themselves(registry: ComponentRegistry) -> None:
    for name in ("v-model", "model-value", "modelValue"):
        assert registry.find_prop("circle", name).name == name


def test_find_event_and_external_class(registry: ComponentRegistry) -> None:
    assert registry.find_event("wd-table", "rowClick").name == "row-click"
    assert registry.find_external_class("wd-button", "customClass").name == "custom-class"
    assert registry.find_external_class("wd-table", "custom-class") is None


def test_search(registry: ComponentRegistry) -> None:
    assert [m.name for m in registry.search("TABLE")] == ["wd-table", "wd-table-col"]


def test_clear(registry: ComponentRegistry) -> None:
    registry.clear()
    assert not registry.loaded
    assert registry.get("button") is None


def test_registries_do_not_share_state(docs_dir: Path) -> None:
    first = ComponentRegistry(ENTRIES[:1], docs_dir=docs_dir).load()
    second = ComponentRegistry(ENTRIES[1:2], docs_dir=docs_dir).load()

    assert first.tags() == ["wd-button"]
    assert second.tags() == ["wd-circle"]


@pytest.mark.asyncio
async def test_load_async_matches_load(docs_dir: Path, registry: ComponentRegistry) -> None:
    async_registry = await ComponentRegistry(ENTRIES, docs_dir=docs_dir).load_async()

    assert async_registry.tags() == registry.tags()
    for tag in registry.tags():
        assert async_registry.get(tag) == registry.get(tag)
