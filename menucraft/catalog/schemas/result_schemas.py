# menucraft/catalog/schemas/result_schemas.py

from typing import Dict, List, Optional

from pydantic import Field, model_validator

from .base import CatalogModel
from .catalog_schemas import ArchivedItem, CatalogEntity, Category, Item, Menu, Modifier


class BulkOperationResult(CatalogModel):
    operation: str
    requested: int
    affected: int
    item_ids: List[str] = Field(default_factory=list)
    missing_ids: List[str] = Field(default_factory=list)


class MutationResult(CatalogModel):
    """Outcome of a form commit; ``errors`` is a field->message map"""

    success: bool
    entity: Optional[CatalogEntity] = None
    errors: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def ok(cls, entity: CatalogEntity) -> "MutationResult":
        return cls(success=True, entity=entity)

    @classmethod
    def invalid(cls, errors: Dict[str, str]) -> "MutationResult":
        return cls(success=False, errors=errors)


class CatalogSnapshot(CatalogModel):
    """In-memory state layout: every collection keyed by id with an explicit order"""

    menus: Dict[str, Menu] = Field(default_factory=dict)
    menu_order: List[str] = Field(default_factory=list)
    categories: Dict[str, Category] = Field(default_factory=dict)
    category_order: List[str] = Field(default_factory=list)
    items: Dict[str, Item] = Field(default_factory=dict)
    item_order: List[str] = Field(default_factory=list)
    modifiers: Dict[str, Modifier] = Field(default_factory=dict)
    modifier_order: List[str] = Field(default_factory=list)
    archived: Dict[str, ArchivedItem] = Field(default_factory=dict)
    archived_order: List[str] = Field(default_factory=list)
    active_menu_id: Optional[str] = None

    @model_validator(mode="after")
    def orders_match_collections(self):
        pairs = [
            ("menus", self.menus, self.menu_order),
            ("categories", self.categories, self.category_order),
            ("items", self.items, self.item_order),
            ("modifiers", self.modifiers, self.modifier_order),
            ("archived", self.archived, self.archived_order),
        ]
        for name, collection, order in pairs:
            if len(order) != len(set(order)) or set(order) != set(collection):
                raise ValueError(f"{name} order must list every {name} id exactly once")
        return self
