# menucraft/catalog/schemas/catalog_schemas.py

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import Field, field_validator

from ...core.config import settings
from .base import CatalogModel
from .visibility_schemas import VisibilitySettings


class EntityKind(str, Enum):
    MENU = "menu"
    CATEGORY = "category"
    ITEM = "item"
    MODIFIER = "modifier"

    @property
    def id_prefix(self) -> str:
        return _ID_PREFIXES[self]


_ID_PREFIXES = {
    EntityKind.MENU: "menu",
    EntityKind.CATEGORY: "cat",
    EntityKind.ITEM: "item",
    EntityKind.MODIFIER: "mod",
}


class MenuStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"


class ItemStatus(str, Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class ModifierType(str, Enum):
    OPTIONAL = "optional"
    REQUIRED = "required"


# Pricing
class PriceOption(CatalogModel):
    id: str
    name: str = ""  # empty name = simple (single price) mode
    price: float = Field(default=0, ge=0)
    unit: Optional[str] = None


def simple_price_option(option_id: str = "1", price: float = 0) -> PriceOption:
    return PriceOption(id=option_id, name="", price=price)


# Modifiers
class ModifierOption(CatalogModel):
    id: str
    name: str
    price: float = Field(default=0, ge=0)
    unit: Optional[str] = None


class Modifier(CatalogModel):
    id: str
    name: str
    type: ModifierType = ModifierType.OPTIONAL
    allow_multiple: bool = False
    options: List[ModifierOption] = Field(default_factory=list)


class SelectedModifier(CatalogModel):
    """Copy of a modifier taken when it was attached to an item"""

    id: str
    name: str
    type: ModifierType = ModifierType.OPTIONAL
    selected_options: List[ModifierOption] = Field(default_factory=list)

    @classmethod
    def from_modifier(
        cls, modifier: Modifier, option_ids: Optional[List[str]] = None
    ) -> "SelectedModifier":
        options = [
            option.model_copy(deep=True)
            for option in modifier.options
            if option_ids is None or option.id in option_ids
        ]
        return cls(
            id=modifier.id,
            name=modifier.name,
            type=modifier.type,
            selected_options=options,
        )


# Catalog entities
class Menu(CatalogModel):
    id: str
    name: str
    description: Optional[str] = None
    item_count: int = Field(default=0, ge=0)  # advisory, see CatalogStore.menu_item_count
    status: MenuStatus = MenuStatus.DRAFT
    last_modified: str = ""


class Category(CatalogModel):
    id: str
    name: str
    description: Optional[str] = None
    item_count: int = Field(default=0, ge=0)  # advisory, see CatalogStore.category_item_count
    status: MenuStatus = MenuStatus.ACTIVE
    last_modified: str = ""
    selected_modifiers: List[str] = Field(default_factory=list)
    tax_category: Optional[str] = None
    visibility_settings: Optional[VisibilitySettings] = None

    @field_validator("selected_modifiers")
    def unique_modifier_ids(cls, v):
        return list(dict.fromkeys(v))


class Item(CatalogModel):
    id: str
    name: str
    description: Optional[str] = None
    category: str
    images: List[str] = Field(default_factory=list)
    status: ItemStatus = ItemStatus.AVAILABLE
    last_modified: str = ""
    price_options: List[PriceOption] = Field(default_factory=lambda: [simple_price_option()])
    labels: List[str] = Field(default_factory=list)
    display_options: List[str] = Field(default_factory=list)
    size: Optional[float] = None
    unit: Optional[str] = None
    preparation_time: Optional[float] = None
    ingredient_warnings: List[str] = Field(default_factory=list)
    tax_category: Optional[str] = None
    is_sold_out: Optional[bool] = None
    is_available: Optional[bool] = None
    is_featured: Optional[bool] = None
    recommended_items: List[str] = Field(default_factory=list)
    selected_modifiers: List[SelectedModifier] = Field(default_factory=list)
    visibility_settings: Optional[VisibilitySettings] = None

    @field_validator("images")
    def validate_images(cls, v):
        if len(v) > settings.MAX_ITEM_IMAGES:
            raise ValueError(f"An item can have at most {settings.MAX_ITEM_IMAGES} images")
        return v

    @field_validator("price_options")
    def never_empty_price_options(cls, v):
        if not v:
            return [simple_price_option()]
        return v


CatalogEntity = Union[Menu, Category, Item, Modifier]

ENTITY_MODELS = {
    EntityKind.MENU: Menu,
    EntityKind.CATEGORY: Category,
    EntityKind.ITEM: Item,
    EntityKind.MODIFIER: Modifier,
}


class ArchivedItem(CatalogModel):
    """Soft-deleted entity waiting for restore or permanent deletion"""

    id: str
    name: str
    item_count: int = 0
    status: Optional[str] = None
    last_modified: Optional[str] = None
    type: EntityKind
    deleted_at: datetime
    payload: Dict[str, Any] = Field(default_factory=dict)
    # categories that listed an archived modifier, re-linked on restore
    attached_category_ids: List[str] = Field(default_factory=list)

    def to_entity(self) -> CatalogEntity:
        """Rebuild the pre-archive entity, dropping ``type`` and ``deleted_at``"""
        model = ENTITY_MODELS[self.type]
        if self.payload:
            return model.model_validate(self.payload)
        fields = {"id": self.id, "name": self.name}
        if self.type in (EntityKind.MENU, EntityKind.CATEGORY):
            fields["item_count"] = self.item_count
            fields["last_modified"] = self.last_modified or ""
            if self.status:
                fields["status"] = self.status
        return model.model_validate(fields)
