# menucraft/catalog/schemas/__init__.py

from .catalog_schemas import (
    ArchivedItem,
    CatalogEntity,
    Category,
    EntityKind,
    Item,
    ItemStatus,
    Menu,
    MenuStatus,
    Modifier,
    ModifierOption,
    ModifierType,
    PriceOption,
    SelectedModifier,
)
from .form_schemas import (
    CategoryFormData,
    ItemFormData,
    MenuFormData,
    ModifierFormData,
    ModifierOptionForm,
    PriceOptionForm,
)
from .result_schemas import BulkOperationResult, CatalogSnapshot, MutationResult
from .visibility_schemas import ShowOnlyWithin, Visibility, VisibilitySettings, Weekday

__all__ = [
    # Entities
    "ArchivedItem",
    "CatalogEntity",
    "Category",
    "EntityKind",
    "Item",
    "ItemStatus",
    "Menu",
    "MenuStatus",
    "Modifier",
    "ModifierOption",
    "ModifierType",
    "PriceOption",
    "SelectedModifier",
    # Forms
    "CategoryFormData",
    "ItemFormData",
    "MenuFormData",
    "ModifierFormData",
    "ModifierOptionForm",
    "PriceOptionForm",
    # Results
    "BulkOperationResult",
    "CatalogSnapshot",
    "MutationResult",
    # Visibility
    "ShowOnlyWithin",
    "Visibility",
    "VisibilitySettings",
    "Weekday",
]
