# menucraft/catalog/services/lifecycle_service.py

"""
Deletion lifecycle.

Each entity kind has one deletion policy:

    ARCHIVABLE  delete -> archive (restorable) -> permanently delete
    IMMEDIATE   delete removes the entity for good

Default table: menus and modifiers are archivable, categories and items are
removed immediately. Deleting a category also deletes its items. Removing a
modifier from the live catalog drops it from every category's modifier list;
item snapshots of it are kept.
"""

import logging
from enum import Enum
from typing import Dict, List, Optional

from ...core.clock import Clock, SystemClock
from ...core.exceptions import ArchivePolicyError, ConflictError
from ..schemas.catalog_schemas import (
    ArchivedItem,
    CatalogEntity,
    EntityKind,
    Item,
    Menu,
    Modifier,
)
from .catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class DeletionPolicy(str, Enum):
    ARCHIVABLE = "archivable"
    IMMEDIATE = "immediate"


DEFAULT_DELETION_POLICIES: Dict[EntityKind, DeletionPolicy] = {
    EntityKind.MENU: DeletionPolicy.ARCHIVABLE,
    EntityKind.CATEGORY: DeletionPolicy.IMMEDIATE,
    EntityKind.ITEM: DeletionPolicy.IMMEDIATE,
    EntityKind.MODIFIER: DeletionPolicy.ARCHIVABLE,
}


class LifecycleService:
    """Applies the deletion policy table to catalog entities"""

    def __init__(
        self,
        store: CatalogStore,
        clock: Optional[Clock] = None,
        policies: Optional[Dict[EntityKind, DeletionPolicy]] = None,
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.policies = dict(DEFAULT_DELETION_POLICIES)
        if policies:
            self.policies.update(
                {EntityKind(kind): DeletionPolicy(policy) for kind, policy in policies.items()}
            )
        # An archived category would leave its items pointing at nothing
        if self.policies[EntityKind.CATEGORY] != DeletionPolicy.IMMEDIATE:
            raise ValueError("Categories must be deleted immediately (their items cascade)")

    def policy_for(self, kind: EntityKind) -> DeletionPolicy:
        return self.policies[EntityKind(kind)]

    def delete(self, kind: EntityKind, entity_id: str) -> Optional[CatalogEntity]:
        """
        Delete according to the kind's policy.

        Returns the removed entity, or None when the id is unknown and the
        store runs with the relaxed not-found policy.
        """
        kind = EntityKind(kind)
        if self.policy_for(kind) == DeletionPolicy.ARCHIVABLE:
            archived = self.archive(kind, entity_id)
            return archived.to_entity() if archived else None
        return self._delete_immediately(kind, entity_id)

    def _delete_immediately(self, kind: EntityKind, entity_id: str) -> Optional[CatalogEntity]:
        item_count = self.store.category_item_count(entity_id) if kind == EntityKind.CATEGORY else 0
        # the store drops a removed category's items
        removed = self.store.collection(kind).remove(entity_id)
        if removed is None:
            return None

        if kind == EntityKind.CATEGORY:
            logger.info(f"Deleted category {entity_id} and {item_count} of its items")
        elif kind == EntityKind.MODIFIER:
            self._detach_modifier(entity_id)

        return removed

    def _detach_modifier(self, modifier_id: str) -> List[str]:
        """Drop the modifier from every category; returns the ids it was dropped from"""
        detached = []
        for category in self.store.categories:
            if modifier_id in category.selected_modifiers:
                detached.append(category.id)
                self.store.categories.update(
                    category.model_copy(
                        update={
                            "selected_modifiers": [
                                mid for mid in category.selected_modifiers if mid != modifier_id
                            ]
                        }
                    )
                )
        return detached

    def _archive_summary(self, entity: CatalogEntity) -> Dict:
        if isinstance(entity, Menu):
            return {
                "item_count": self.store.menu_item_count(entity.id),
                "status": entity.status.value,
                "last_modified": entity.last_modified,
            }
        if isinstance(entity, Modifier):
            return {"item_count": self.store.modifier_usage_count(entity.id)}
        return {"status": entity.status.value, "last_modified": entity.last_modified}

    def archive(self, kind: EntityKind, entity_id: str) -> Optional[ArchivedItem]:
        """
        Move an entity from its live collection to the archive.

        Raises:
            ArchivePolicyError: the kind is deleted immediately
        """
        kind = EntityKind(kind)
        if self.policy_for(kind) != DeletionPolicy.ARCHIVABLE:
            raise ArchivePolicyError(kind.value)

        collection = self.store.collection(kind)
        entity = collection.get(entity_id)
        if entity is None:
            collection.report_missing(entity_id, "Archive")
            return None

        if entity_id in self.store.archived:
            raise ConflictError("archived item", entity_id)

        summary = self._archive_summary(entity)
        collection.remove(entity_id)
        attached = self._detach_modifier(entity_id) if kind == EntityKind.MODIFIER else []

        archived = ArchivedItem(
            id=entity.id,
            name=entity.name,
            type=kind,
            deleted_at=self.clock.now(),
            payload=entity.model_dump(),
            attached_category_ids=attached,
            **summary,
        )
        if kind == EntityKind.MENU and self.store.active_menu_id == entity_id:
            self.store.active_menu_id = None
        self.store.archived.append(archived)

        logger.info(f"Archived {kind.value} {entity_id}")
        return archived

    def restore(self, archived_id: str) -> Optional[CatalogEntity]:
        """
        Put an archived entity back at the head of its home collection.

        Raises:
            ConflictError: an entity with the same id is live again
            NotFoundError: an archived item's category no longer exists
        """
        archived = self.store.archived.get(archived_id)
        if archived is None:
            self.store.archived.report_missing(archived_id, "Restore")
            return None

        entity = archived.to_entity()
        collection = self.store.collection(archived.type)
        if entity.id in collection:
            raise ConflictError(archived.type.value, entity.id)
        if isinstance(entity, Item):
            self.store.categories.require(entity.category)

        self.store.archived.remove(archived_id)
        collection.add(entity)
        if archived.type == EntityKind.MODIFIER:
            self._reattach_modifier(entity.id, archived.attached_category_ids)

        logger.info(f"Restored {archived.type.value} {entity.id}")
        return entity

    def _reattach_modifier(self, modifier_id: str, category_ids: List[str]):
        """Re-link a restored modifier to the categories that still exist"""
        for category_id in category_ids:
            category = self.store.categories.get(category_id)
            if category is None or modifier_id in category.selected_modifiers:
                continue
            self.store.categories.update(
                category.model_copy(
                    update={"selected_modifiers": category.selected_modifiers + [modifier_id]}
                )
            )

    def permanently_delete(self, archived_id: str) -> Optional[ArchivedItem]:
        removed = self.store.archived.remove(archived_id)
        if removed is not None:
            logger.info(f"Permanently deleted {removed.type.value} {archived_id}")
        return removed

    def archived_items(self, kind: Optional[EntityKind] = None) -> List[ArchivedItem]:
        if kind is None:
            return self.store.archived.all()
        kind = EntityKind(kind)
        return self.store.archived.filter(lambda archived: archived.type == kind)

    def clear_archived(self) -> int:
        count = len(self.store.archived)
        self.store.archived.replace_all([])
        logger.info(f"Cleared {count} archived entries")
        return count

