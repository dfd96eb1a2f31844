# menucraft/catalog/services/bulk_operations.py

"""Bulk copy/move/delete of items across categories"""

import logging
from typing import List, Optional, Sequence, Tuple

from ...core.clock import Clock, IdGenerator, SystemClock, UuidIdGenerator, format_last_modified
from ..schemas.catalog_schemas import EntityKind, Item, ItemStatus
from ..schemas.result_schemas import BulkOperationResult
from .catalog_store import CatalogStore

logger = logging.getLogger(__name__)


class BulkOperationsService:
    """
    Multi-item operations built on the catalog store.

    Each operation computes the complete new item list first and swaps it in
    at the end, so a failure never leaves a half-applied change behind.
    """

    def __init__(
        self,
        store: CatalogStore,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.id_generator = id_generator or UuidIdGenerator()

    def _split_ids(self, item_ids: Sequence[str]) -> Tuple[List[str], List[str]]:
        """Deduplicate requested ids (first occurrence wins) into found/missing"""
        found, missing = [], []
        for item_id in dict.fromkeys(item_ids):
            (found if item_id in self.store.items else missing).append(item_id)
        return found, missing

    def _now_label(self) -> str:
        return format_last_modified(self.clock.now())

    def bulk_delete(self, item_ids: Sequence[str]) -> BulkOperationResult:
        """Remove every matching item; unknown ids are ignored"""
        found, missing = self._split_ids(item_ids)
        targets = set(found)

        self.store.items.replace_all(
            [item for item in self.store.items if item.id not in targets]
        )

        logger.info(f"Bulk deleted {len(found)} items ({len(missing)} not found)")
        return BulkOperationResult(
            operation="bulk_delete",
            requested=len(item_ids),
            affected=len(found),
            item_ids=found,
            missing_ids=missing,
        )

    def bulk_copy(self, item_ids: Sequence[str], target_category_id: str) -> BulkOperationResult:
        """
        Deep-copy items into ``target_category_id``.

        Copies get fresh ids and a refreshed ``last_modified``; they are put at
        the head of the item list in the order of ``item_ids``. Copying into
        the item's own category is allowed and yields duplicates.

        Raises:
            NotFoundError: target category does not exist
        """
        self.store.categories.require(target_category_id)
        found, missing = self._split_ids(item_ids)
        last_modified = self._now_label()

        copies: List[Item] = []
        for item_id in found:
            original = self.store.items.get(item_id)
            copies.append(
                original.model_copy(
                    deep=True,
                    update={
                        "id": self.id_generator.generate(EntityKind.ITEM.id_prefix),
                        "category": target_category_id,
                        "last_modified": last_modified,
                    },
                )
            )

        self.store.items.add_many(copies)

        logger.info(f"Bulk copied {len(copies)} items into category {target_category_id}")
        return BulkOperationResult(
            operation="bulk_copy",
            requested=len(item_ids),
            affected=len(copies),
            item_ids=[item.id for item in copies],
            missing_ids=missing,
        )

    def bulk_move(self, item_ids: Sequence[str], target_category_id: str) -> BulkOperationResult:
        """
        Move items into ``target_category_id``, keeping ids and positions.

        Items already in the target category are left as they are.

        Raises:
            NotFoundError: target category does not exist
        """
        self.store.categories.require(target_category_id)
        found, missing = self._split_ids(item_ids)
        targets = set(found)
        last_modified = self._now_label()

        moved: List[str] = []
        new_items: List[Item] = []
        for item in self.store.items:
            if item.id in targets and item.category != target_category_id:
                item = item.model_copy(
                    update={"category": target_category_id, "last_modified": last_modified}
                )
                moved.append(item.id)
            new_items.append(item)

        self.store.items.replace_all(new_items)

        logger.info(f"Bulk moved {len(moved)} items into category {target_category_id}")
        return BulkOperationResult(
            operation="bulk_move",
            requested=len(item_ids),
            affected=len(moved),
            item_ids=moved,
            missing_ids=missing,
        )

    def bulk_update_status(self, item_ids: Sequence[str], status: ItemStatus) -> BulkOperationResult:
        """Mark items available/unavailable"""
        status = ItemStatus(status)
        found, missing = self._split_ids(item_ids)
        targets = set(found)
        last_modified = self._now_label()

        changed: List[str] = []
        new_items: List[Item] = []
        for item in self.store.items:
            if item.id in targets and item.status != status:
                item = item.model_copy(
                    update={
                        "status": status,
                        "is_available": status == ItemStatus.AVAILABLE,
                        "last_modified": last_modified,
                    }
                )
                changed.append(item.id)
            new_items.append(item)

        self.store.items.replace_all(new_items)

        logger.info(f"Bulk set {len(changed)} items to {status.value}")
        return BulkOperationResult(
            operation=f"bulk_{'activate' if status == ItemStatus.AVAILABLE else 'deactivate'}_items",
            requested=len(item_ids),
            affected=len(changed),
            item_ids=changed,
            missing_ids=missing,
        )
