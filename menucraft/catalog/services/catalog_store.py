# menucraft/catalog/services/catalog_store.py

"""
Ordered in-memory collections for menus, categories, items and modifiers.

List order is the display order. New entities go to the head of their
collection (newest first) and drag-reorder replaces a whole list at once.
Item counts are never stored: they are computed from the live item list
whenever asked for. Every item names a live category, and removing a
category removes its items.
"""

import logging
from typing import Callable, Dict, Generic, Iterable, Iterator, List, Optional, Sequence, TypeVar

from ...core.config import settings
from ...core.exceptions import ConflictError, InvalidReorderError, NotFoundError
from ..schemas.catalog_schemas import (
    ArchivedItem,
    Category,
    EntityKind,
    Item,
    Menu,
    Modifier,
)
from ..schemas.result_schemas import CatalogSnapshot

logger = logging.getLogger(__name__)

EntityT = TypeVar("EntityT", Menu, Category, Item, Modifier, ArchivedItem)


class EntityCollection(Generic[EntityT]):
    """Ordered collection of entities with unique ids"""

    def __init__(
        self,
        entity_type: str,
        entities: Optional[Iterable[EntityT]] = None,
        strict_not_found: Optional[bool] = None,
    ):
        self.entity_type = entity_type
        self.strict_not_found = (
            settings.STRICT_NOT_FOUND if strict_not_found is None else strict_not_found
        )
        self._entities: List[EntityT] = []
        for entity in entities or []:
            if self._index_of(entity.id) is not None:
                raise ConflictError(entity_type, entity.id)
            self._entities.append(entity)

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[EntityT]:
        return iter(list(self._entities))

    def __contains__(self, entity_id: str) -> bool:
        return self._index_of(entity_id) is not None

    def _index_of(self, entity_id: str) -> Optional[int]:
        for index, entity in enumerate(self._entities):
            if entity.id == entity_id:
                return index
        return None

    def report_missing(self, entity_id: str, action: str):
        """Apply the not-found policy: raise when strict, log otherwise"""
        if self.strict_not_found:
            raise NotFoundError(self.entity_type, entity_id)
        logger.warning(f"{action} ignored: {self.entity_type} {entity_id} not found")

    def all(self) -> List[EntityT]:
        return list(self._entities)

    def ids(self) -> List[str]:
        return [entity.id for entity in self._entities]

    def get(self, entity_id: str) -> Optional[EntityT]:
        index = self._index_of(entity_id)
        return None if index is None else self._entities[index]

    def require(self, entity_id: str) -> EntityT:
        entity = self.get(entity_id)
        if entity is None:
            raise NotFoundError(self.entity_type, entity_id)
        return entity

    def filter(self, predicate: Callable[[EntityT], bool]) -> List[EntityT]:
        return [entity for entity in self._entities if predicate(entity)]

    def add(self, entity: EntityT) -> EntityT:
        """Insert at the head of the collection"""
        if entity.id in self:
            raise ConflictError(self.entity_type, entity.id)
        self._entities.insert(0, entity)
        logger.info(f"Added {self.entity_type} {entity.id}")
        return entity

    def add_many(self, entities: Sequence[EntityT]) -> List[EntityT]:
        """Insert a batch at the head, keeping the batch's own order"""
        seen = set()
        for entity in entities:
            if entity.id in self or entity.id in seen:
                raise ConflictError(self.entity_type, entity.id)
            seen.add(entity.id)
        self._entities = list(entities) + self._entities
        return list(entities)

    def append(self, entity: EntityT) -> EntityT:
        """Insert at the tail of the collection"""
        if entity.id in self:
            raise ConflictError(self.entity_type, entity.id)
        self._entities.append(entity)
        return entity

    def update(self, entity: EntityT) -> Optional[EntityT]:
        """Replace by id, keeping the position"""
        index = self._index_of(entity.id)
        if index is None:
            self.report_missing(entity.id, "Update")
            return None
        self._entities[index] = entity
        logger.info(f"Updated {self.entity_type} {entity.id}")
        return entity

    def remove(self, entity_id: str) -> Optional[EntityT]:
        index = self._index_of(entity_id)
        if index is None:
            self.report_missing(entity_id, "Remove")
            return None
        removed = self._entities.pop(index)
        logger.info(f"Removed {self.entity_type} {entity_id}")
        return removed

    def remove_where(self, predicate: Callable[[EntityT], bool]) -> List[EntityT]:
        removed = [entity for entity in self._entities if predicate(entity)]
        if removed:
            self._entities = [entity for entity in self._entities if not predicate(entity)]
        return removed

    def replace_all(self, entities: Sequence[EntityT]):
        """Swap in a whole new list (used by atomic bulk operations)"""
        self._entities = list(entities)

    def reorder(self, new_order: Sequence[EntityT]) -> List[EntityT]:
        """
        Replace the collection with ``new_order``.

        ``new_order`` must hold every current id exactly once; otherwise
        InvalidReorderError is raised and the collection is left untouched.
        Entities in ``new_order`` replace the stored ones.
        """
        current_ids = set(self.ids())
        new_ids = [entity.id for entity in new_order]

        duplicates = sorted({entity_id for entity_id in new_ids if new_ids.count(entity_id) > 1})
        missing = [entity_id for entity_id in self.ids() if entity_id not in new_ids]
        unexpected = [entity_id for entity_id in new_ids if entity_id not in current_ids]

        if duplicates or missing or unexpected:
            raise InvalidReorderError(self.entity_type, missing, unexpected, duplicates)

        self._entities = list(new_order)
        logger.info(f"Reordered {len(new_ids)} {self.entity_type} entries")
        return self.all()

    def reorder_ids(self, new_id_order: Sequence[str]) -> List[EntityT]:
        """Reorder by ids instead of entities"""
        by_id: Dict[str, EntityT] = {entity.id: entity for entity in self._entities}
        unexpected = [entity_id for entity_id in new_id_order if entity_id not in by_id]
        if unexpected:
            missing = [entity_id for entity_id in by_id if entity_id not in new_id_order]
            raise InvalidReorderError(self.entity_type, missing, unexpected, [])
        return self.reorder([by_id[entity_id] for entity_id in new_id_order])


class CategoryCollection(EntityCollection[Category]):
    """Categories; removing one also removes the items filed under it"""

    def __init__(
        self,
        entities: Optional[Iterable[Category]] = None,
        strict_not_found: Optional[bool] = None,
    ):
        super().__init__("category", entities, strict_not_found)
        # wired by CatalogStore once the item collection exists
        self.items: Optional["ItemCollection"] = None

    def _drop_orphaned_items(self) -> List[Item]:
        if self.items is None:
            return []
        orphans = self.items.remove_where(lambda item: item.category not in self)
        if orphans:
            logger.info(f"Removed {len(orphans)} items of deleted categories")
        return orphans

    def remove(self, entity_id: str) -> Optional[Category]:
        removed = super().remove(entity_id)
        if removed is not None:
            self._drop_orphaned_items()
        return removed

    def remove_where(self, predicate: Callable[[Category], bool]) -> List[Category]:
        removed = super().remove_where(predicate)
        if removed:
            self._drop_orphaned_items()
        return removed

    def replace_all(self, entities: Sequence[Category]):
        super().replace_all(entities)
        self._drop_orphaned_items()


class ItemCollection(EntityCollection[Item]):
    """
    Items whose ``category`` must name a live category.

    Every write that could introduce an item checks the category first and
    raises NotFoundError, leaving the collection unchanged.
    """

    def __init__(
        self,
        categories: EntityCollection[Category],
        entities: Optional[Iterable[Item]] = None,
        strict_not_found: Optional[bool] = None,
    ):
        self.categories = categories
        entities = list(entities or [])
        self._check_categories(entities)
        super().__init__("item", entities, strict_not_found)

    def _check_categories(self, items: Iterable[Item]):
        for item in items:
            if item.category not in self.categories:
                raise NotFoundError("category", item.category)

    def add(self, entity: Item) -> Item:
        self._check_categories([entity])
        return super().add(entity)

    def add_many(self, entities: Sequence[Item]) -> List[Item]:
        self._check_categories(entities)
        return super().add_many(entities)

    def append(self, entity: Item) -> Item:
        self._check_categories([entity])
        return super().append(entity)

    def update(self, entity: Item) -> Optional[Item]:
        if entity.id in self:
            self._check_categories([entity])
        return super().update(entity)

    def replace_all(self, entities: Sequence[Item]):
        self._check_categories(entities)
        super().replace_all(entities)

    def reorder(self, new_order: Sequence[Item]) -> List[Item]:
        # ids outside the collection are reported by the permutation check
        self._check_categories([item for item in new_order if item.id in self])
        return super().reorder(new_order)


class CatalogStore:
    """Owns the live catalog collections and the archive"""

    def __init__(
        self,
        menus: Optional[Iterable[Menu]] = None,
        categories: Optional[Iterable[Category]] = None,
        items: Optional[Iterable[Item]] = None,
        modifiers: Optional[Iterable[Modifier]] = None,
        archived: Optional[Iterable[ArchivedItem]] = None,
        active_menu_id: Optional[str] = None,
        strict_not_found: Optional[bool] = None,
    ):
        self.menus: EntityCollection[Menu] = EntityCollection(
            "menu", menus, strict_not_found
        )
        self.categories = CategoryCollection(categories, strict_not_found)
        self.items = ItemCollection(self.categories, items, strict_not_found)
        self.categories.items = self.items
        self.modifiers: EntityCollection[Modifier] = EntityCollection(
            "modifier", modifiers, strict_not_found
        )
        self.archived: EntityCollection[ArchivedItem] = EntityCollection(
            "archived item", archived, strict_not_found
        )
        self.active_menu_id = active_menu_id

    def collection(self, kind: EntityKind) -> EntityCollection:
        return {
            EntityKind.MENU: self.menus,
            EntityKind.CATEGORY: self.categories,
            EntityKind.ITEM: self.items,
            EntityKind.MODIFIER: self.modifiers,
        }[EntityKind(kind)]

    # Active menu
    def set_active_menu(self, menu_id: Optional[str]):
        """Categories (and so items) belong to whichever menu is open"""
        if menu_id is not None:
            self.menus.require(menu_id)
        self.active_menu_id = menu_id

    # Derived counts
    def items_in_category(self, category_id: str) -> List[Item]:
        return self.items.filter(lambda item: item.category == category_id)

    def category_item_count(self, category_id: str) -> int:
        return len(self.items_in_category(category_id))

    def menu_item_count(self, menu_id: str) -> int:
        """
        Items of the open menu are counted live. Menus that are not open
        have no loaded categories, so their stored count is reported.
        """
        if menu_id == self.active_menu_id:
            return len(self.items)
        menu = self.menus.get(menu_id)
        return menu.item_count if menu else 0

    def modifier_usage_count(self, modifier_id: str) -> int:
        return len(
            self.items.filter(
                lambda item: any(m.id == modifier_id for m in item.selected_modifiers)
            )
        )

    def categories_with_counts(self) -> List[Category]:
        return [
            category.model_copy(update={"item_count": self.category_item_count(category.id)})
            for category in self.categories
        ]

    def menus_with_counts(self) -> List[Menu]:
        return [
            menu.model_copy(update={"item_count": self.menu_item_count(menu.id)})
            for menu in self.menus
        ]

    # State layout
    def snapshot(self) -> CatalogSnapshot:
        return CatalogSnapshot(
            menus={menu.id: menu.model_copy(deep=True) for menu in self.menus},
            menu_order=self.menus.ids(),
            categories={c.id: c.model_copy(deep=True) for c in self.categories},
            category_order=self.categories.ids(),
            items={item.id: item.model_copy(deep=True) for item in self.items},
            item_order=self.items.ids(),
            modifiers={m.id: m.model_copy(deep=True) for m in self.modifiers},
            modifier_order=self.modifiers.ids(),
            archived={a.id: a.model_copy(deep=True) for a in self.archived},
            archived_order=self.archived.ids(),
            active_menu_id=self.active_menu_id,
        )

    @classmethod
    def from_snapshot(
        cls, snapshot: CatalogSnapshot, strict_not_found: Optional[bool] = None
    ) -> "CatalogStore":
        return cls(
            menus=[snapshot.menus[i].model_copy(deep=True) for i in snapshot.menu_order],
            categories=[snapshot.categories[i].model_copy(deep=True) for i in snapshot.category_order],
            items=[snapshot.items[i].model_copy(deep=True) for i in snapshot.item_order],
            modifiers=[snapshot.modifiers[i].model_copy(deep=True) for i in snapshot.modifier_order],
            archived=[snapshot.archived[i].model_copy(deep=True) for i in snapshot.archived_order],
            active_menu_id=snapshot.active_menu_id,
            strict_not_found=strict_not_found,
        )
