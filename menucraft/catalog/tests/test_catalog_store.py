# menucraft/catalog/tests/test_catalog_store.py

import pytest

from ...core.exceptions import ConflictError, InvalidReorderError, NotFoundError
from ..schemas.result_schemas import CatalogSnapshot
from ..services.catalog_store import CatalogStore, EntityCollection
from .factories import CategoryFactory, ItemFactory


class TestEntityCollection:
    """Ordering and lookup behaviour of a single collection"""

    def test_add_inserts_at_head(self, store):
        """New entities are shown first"""
        store.categories.add(CategoryFactory(id="catC"))

        assert store.categories.ids() == ["catC", "catA", "catB"]

    def test_add_duplicate_id_conflicts(self, store):
        with pytest.raises(ConflictError):
            store.items.add(ItemFactory(id="i1"))

        assert store.items.ids() == ["i1", "i2", "i3", "i4"]

    def test_update_keeps_position(self, store):
        renamed = store.items.get("i2").model_copy(update={"name": "Cheesy Bread"})

        store.items.update(renamed)

        assert store.items.ids() == ["i1", "i2", "i3", "i4"]
        assert store.items.get("i2").name == "Cheesy Bread"

    def test_update_unknown_id_is_noop(self, store):
        """Unknown ids are ignored under the relaxed policy"""
        before = store.items.all()

        result = store.items.update(ItemFactory(id="ghost"))

        assert result is None
        assert store.items.all() == before

    def test_remove_unknown_id_is_noop(self, store):
        assert store.items.remove("ghost") is None
        assert len(store.items) == 4

    def test_strict_policy_raises_not_found(self):
        collection = EntityCollection("item", [ItemFactory(id="i1")], strict_not_found=True)

        with pytest.raises(NotFoundError) as exc_info:
            collection.remove("ghost")

        assert exc_info.value.to_dict()["error"]["code"] == "CAT001"
        assert collection.ids() == ["i1"]

    def test_reorder_replaces_order(self, store):
        items = store.items.all()
        new_order = [items[2], items[0], items[3], items[1]]

        store.items.reorder(new_order)

        assert store.items.ids() == ["i3", "i1", "i4", "i2"]

    def test_reorder_rejects_non_permutation(self, store):
        """A dropped or duplicated id leaves the collection untouched"""
        items = store.items.all()

        with pytest.raises(InvalidReorderError):
            store.items.reorder(items[:3])
        with pytest.raises(InvalidReorderError):
            store.items.reorder(items + [items[0]])
        with pytest.raises(InvalidReorderError):
            store.items.reorder(items[:3] + [ItemFactory(id="ghost")])

        assert store.items.ids() == ["i1", "i2", "i3", "i4"]

    def test_reorder_ids(self, store):
        store.categories.reorder_ids(["catB", "catA"])

        assert store.categories.ids() == ["catB", "catA"]

    def test_reorder_ids_unknown_id(self, store):
        with pytest.raises(InvalidReorderError) as exc_info:
            store.categories.reorder_ids(["catB", "catZ"])

        details = exc_info.value.details
        assert details["unexpected_ids"] == ["catZ"]
        assert details["missing_ids"] == ["catA"]

    def test_duplicate_ids_rejected_on_construction(self):
        with pytest.raises(ConflictError):
            EntityCollection("item", [ItemFactory(id="i1"), ItemFactory(id="i1")])


class TestCatalogStore:
    """Derived counts and the snapshot layout"""

    def test_category_item_count_is_live(self, store):
        assert store.category_item_count("catA") == 3
        assert store.category_item_count("catB") == 1

        store.items.remove("i1")

        assert store.category_item_count("catA") == 2

    def test_categories_with_counts(self, store):
        counts = {category.id: category.item_count for category in store.categories_with_counts()}

        assert counts == {"catA": 3, "catB": 1}

    def test_menu_item_count(self, store):
        """The open menu is counted live, other menus report their stored count"""
        assert store.menu_item_count("menu1") == 4
        assert store.menu_item_count("menu2") == 7
        assert store.menu_item_count("unknown") == 0

    def test_set_active_menu_requires_menu(self, store):
        with pytest.raises(NotFoundError):
            store.set_active_menu("ghost")

        store.set_active_menu("menu2")
        assert store.active_menu_id == "menu2"

    def test_collection_by_kind(self, store):
        assert store.collection("category") is store.categories
        assert store.collection("modifier") is store.modifiers

    def test_snapshot_round_trip(self, store):
        snapshot = store.snapshot()
        restored = CatalogStore.from_snapshot(snapshot)

        assert restored.items.ids() == store.items.ids()
        assert restored.categories.all() == store.categories.all()
        assert restored.active_menu_id == "menu1"

    def test_snapshot_is_detached(self, store):
        snapshot = store.snapshot()

        store.items.remove("i1")

        assert "i1" in snapshot.items
        assert snapshot.item_order == ["i1", "i2", "i3", "i4"]

    def test_snapshot_order_must_match_collection(self):
        with pytest.raises(ValueError):
            CatalogSnapshot(items={"i1": ItemFactory(id="i1")}, item_order=["i1", "i1"])

    def test_menus_with_counts(self, store):
        counts = {menu.id: menu.item_count for menu in store.menus_with_counts()}

        assert counts == {"menu1": 4, "menu2": 7}

    def test_wire_format_uses_camel_case(self, store):
        wire = store.categories_with_counts()[0].to_wire()

        assert wire["itemCount"] == 3
        assert wire["selectedModifiers"] == ["mod1"]
        assert "lastModified" in wire

    def test_item_requires_existing_category(self, store):
        """Items can only be filed under a live category"""
        with pytest.raises(NotFoundError):
            store.items.add(ItemFactory(id="orphan", category="nope"))
        with pytest.raises(NotFoundError):
            store.items.update(store.items.get("i1").model_copy(update={"category": "nope"}))
        with pytest.raises(NotFoundError):
            store.items.replace_all([ItemFactory(id="orphan", category="nope")])

        assert "orphan" not in store.items
        assert store.items.get("i1").category == "catA"
        assert store.items.ids() == ["i1", "i2", "i3", "i4"]

    def test_construction_rejects_orphaned_items(self):
        with pytest.raises(NotFoundError):
            CatalogStore(items=[ItemFactory(id="i1", category="catA")])

    def test_removing_category_removes_its_items(self, store):
        store.categories.remove("catA")

        assert store.items.ids() == ["i4"]

    def test_replacing_categories_removes_orphans(self, store):
        store.categories.replace_all([store.categories.get("catA")])

        assert store.items.ids() == ["i1", "i2", "i3"]
