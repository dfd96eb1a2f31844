# menucraft/catalog/tests/test_bulk_operations.py

import pytest

from ...core.exceptions import NotFoundError
from ..schemas.catalog_schemas import ItemStatus, SelectedModifier


class TestBulkOperations:
    """Multi-item copy, move, delete and status changes"""

    def test_bulk_move(self, service, store):
        """Moved items change category and keep their ids and positions"""
        result = service.bulk.bulk_move(["i1", "i2"], "catB")

        assert store.items.get("i1").category == "catB"
        assert store.items.get("i2").category == "catB"
        assert store.items.get("i3").category == "catA"
        assert store.items.ids() == ["i1", "i2", "i3", "i4"]
        assert result.affected == 2
        assert result.item_ids == ["i1", "i2"]

    def test_bulk_move_refreshes_counts(self, service, store):
        service.bulk.bulk_move(["i1", "i2"], "catB")

        assert store.category_item_count("catA") == 1
        assert store.category_item_count("catB") == 3

    def test_bulk_move_skips_items_already_in_target(self, service, store, clock):
        clock.advance(days=1)

        result = service.bulk.bulk_move(["i1", "i4"], "catB")

        assert result.item_ids == ["i1"]
        assert store.items.get("i1").last_modified == "02.01.2024"
        assert store.items.get("i4").last_modified == "01.01.2024"

    def test_bulk_copy(self, service, store):
        """Copies get fresh ids and land at the head in request order"""
        result = service.bulk.bulk_copy(["i2", "i1"], "catB")

        assert result.item_ids == ["item_100", "item_101"]
        assert store.items.ids() == ["item_100", "item_101", "i1", "i2", "i3", "i4"]

        copy_of_i2 = store.items.get("item_100")
        original = store.items.get("i2")
        assert copy_of_i2.category == "catB"
        assert copy_of_i2.name == original.name
        assert copy_of_i2.price_options == original.price_options
        assert copy_of_i2.last_modified == "01.01.2024"
        assert original.category == "catA"

    def test_bulk_copy_is_deep(self, service, store):
        service.bulk.bulk_copy(["i1"], "catB")

        store.items.get("item_100").price_options[0].price = 99

        assert store.items.get("i1").price_options[0].price == 9.5

    def test_bulk_copy_deep_copies_images_and_modifiers(self, service, store):
        modifier = SelectedModifier.from_modifier(store.modifiers.get("mod1"))
        store.items.update(
            store.items.get("i1").model_copy(
                update={"images": ["bruschetta.png"], "selected_modifiers": [modifier]}
            )
        )
        service.bulk.bulk_copy(["i1"], "catB")

        duplicate = store.items.get("item_100")
        duplicate.images.append("other.png")
        duplicate.selected_modifiers[0].name = "Changed"
        duplicate.selected_modifiers[0].selected_options[0].price = 42

        original = store.items.get("i1")
        assert original.images == ["bruschetta.png"]
        assert original.selected_modifiers[0].name == modifier.name
        assert original.selected_modifiers[0].selected_options[0].price == 1.0

    def test_bulk_copy_into_own_category(self, service, store):
        service.bulk.bulk_copy(["i1"], "catA")

        assert store.category_item_count("catA") == 4

    def test_bulk_copy_dedupes_ids(self, service):
        result = service.bulk.bulk_copy(["i1", "i1"], "catB")

        assert result.requested == 2
        assert result.affected == 1

    def test_bulk_delete(self, service, store):
        result = service.bulk.bulk_delete(["i1", "i3", "ghost"])

        assert store.items.ids() == ["i2", "i4"]
        assert result.affected == 2
        assert result.missing_ids == ["ghost"]

    def test_bulk_delete_is_idempotent(self, service, store):
        service.bulk.bulk_delete(["i1"])
        result = service.bulk.bulk_delete(["i1"])

        assert result.affected == 0
        assert store.items.ids() == ["i2", "i3", "i4"]

    def test_empty_selection(self, service, store):
        before = store.items.all()

        assert service.bulk.bulk_copy([], "catB").affected == 0
        assert service.bulk.bulk_move([], "catB").affected == 0
        assert service.bulk.bulk_delete([]).affected == 0
        assert store.items.all() == before

    @pytest.mark.parametrize("operation", ["bulk_copy", "bulk_move"])
    def test_missing_target_category(self, service, store, operation):
        before = store.items.all()

        with pytest.raises(NotFoundError):
            getattr(service.bulk, operation)(["i1"], "catZ")

        assert store.items.all() == before

    def test_bulk_update_status(self, service, store):
        result = service.bulk.bulk_update_status(["i1", "i2"], ItemStatus.UNAVAILABLE)

        assert result.operation == "bulk_deactivate_items"
        assert store.items.get("i1").status == ItemStatus.UNAVAILABLE
        assert store.items.get("i1").is_available is False
        assert store.items.get("i3").status == ItemStatus.AVAILABLE
