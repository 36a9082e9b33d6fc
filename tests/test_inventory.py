"""
Tests for crawl state containers.
"""

import dataclasses

import pytest

from wireframe_reader.crawler import AssetInventory, AssetKind, AssetRecord, VisitedSet


def record(url: str, kind: AssetKind = AssetKind.IMAGE, name: str = "wf") -> AssetRecord:
    return AssetRecord(name=name, url=url, kind=kind, description="context")


class TestAssetRecord:
    """Tests for AssetRecord."""

    def test_immutable(self):
        item = record("https://gytx.dev/a.png")

        with pytest.raises(dataclasses.FrozenInstanceError):
            item.name = "other"

    def test_to_dict(self):
        item = record("https://gytx.dev/a.pdf", AssetKind.DOCUMENT, "Spec")

        assert item.to_dict() == {
            "name": "Spec",
            "url": "https://gytx.dev/a.pdf",
            "type": "document",
            "description": "context",
        }

    def test_default_description(self):
        item = AssetRecord(name="a", url="https://gytx.dev/a.png", kind=AssetKind.IMAGE)
        assert item.description == ""


class TestAssetInventory:
    """Tests for AssetInventory."""

    def test_keeps_discovery_order(self):
        inventory = AssetInventory()
        for name in ("c", "a", "b"):
            inventory.add(record(f"https://gytx.dev/{name}.png"))

        assert [r.url for r in inventory] == [
            "https://gytx.dev/c.png",
            "https://gytx.dev/a.png",
            "https://gytx.dev/b.png",
        ]

    def test_deduplicates_by_url(self):
        """The first record for a URL wins."""
        inventory = AssetInventory()

        assert inventory.add(record("https://gytx.dev/a.png", name="first"))
        assert not inventory.add(record("https://gytx.dev/a.png", name="second"))
        assert not inventory.add(record("https://gytx.dev/a.png#zoom", name="third"))

        assert len(inventory) == 1
        assert inventory.records[0].name == "first"
        assert "https://gytx.dev/a.png" in inventory

    def test_records_is_a_copy(self):
        inventory = AssetInventory()
        inventory.add(record("https://gytx.dev/a.png"))

        inventory.records.clear()

        assert len(inventory) == 1

    def test_count_by_kind(self):
        inventory = AssetInventory()
        inventory.add(record("https://gytx.dev/a.png"))
        inventory.add(record("https://gytx.dev/b.png"))
        inventory.add(record("https://gytx.dev/c.pdf", AssetKind.DOCUMENT))

        assert inventory.count_by_kind() == {AssetKind.IMAGE: 2, AssetKind.DOCUMENT: 1}


class TestVisitedSet:
    """Tests for VisitedSet."""

    def test_mark_once(self):
        visited = VisitedSet()

        assert visited.mark("https://gytx.dev/a/")
        assert not visited.mark("https://gytx.dev/a/")
        assert len(visited) == 1

    def test_fragment_is_same_page(self):
        visited = VisitedSet()
        visited.mark("https://gytx.dev/a/")

        assert "https://gytx.dev/a/#section" in visited
        assert not visited.mark("https://gytx.dev/a/#section")

    def test_empty_path_is_root(self):
        visited = VisitedSet()
        visited.mark("https://gytx.dev")

        assert "https://gytx.dev/" in visited
        assert not visited.mark("https://GYTX.dev/")
        assert list(visited) == ["https://gytx.dev/"]

    def test_query_is_different_page(self):
        visited = VisitedSet()
        visited.mark("https://gytx.dev/a/")

        assert visited.mark("https://gytx.dev/a/?page=2")
        assert len(visited) == 2

    def test_iteration_sorted(self):
        visited = VisitedSet()
        visited.mark("https://gytx.dev/b/")
        visited.mark("https://gytx.dev/a/")

        assert list(visited) == ["https://gytx.dev/a/", "https://gytx.dev/b/"]
