# menucraft/catalog/services/catalog_service.py

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from ...core.clock import Clock, IdGenerator, SystemClock, UuidIdGenerator, format_last_modified
from ...core.config import settings
from ..schemas.catalog_schemas import (
    CatalogEntity,
    Category,
    EntityKind,
    Item,
    ItemStatus,
    Menu,
    MenuStatus,
    Modifier,
    ModifierOption,
    PriceOption,
)
from ..schemas.form_schemas import (
    CategoryFormData,
    ItemFormData,
    MenuFormData,
    ModifierFormData,
)
from ..schemas.result_schemas import MutationResult
from ..schemas.visibility_schemas import Visibility, VisibilitySettings
from ..utils.pricing_utils import effective_price, parse_price
from .bulk_operations import BulkOperationsService
from .catalog_store import CatalogStore
from .form_validation import (
    FormInput,
    as_form,
    is_complete_modifier_option,
    validate_category,
    validate_item,
    validate_menu,
    validate_modifier,
)
from .lifecycle_service import LifecycleService
from .visibility_service import SettingsInput, is_visible, normalize

logger = logging.getLogger(__name__)


class CatalogService:
    """Service class for catalog management operations"""

    def __init__(
        self,
        store: Optional[CatalogStore] = None,
        clock: Optional[Clock] = None,
        id_generator: Optional[IdGenerator] = None,
    ):
        self.store = store or CatalogStore()
        self.clock = clock or SystemClock()
        self.id_generator = id_generator or UuidIdGenerator()
        self.bulk = BulkOperationsService(self.store, self.clock, self.id_generator)
        self.lifecycle = LifecycleService(self.store, self.clock)

    def _new_id(self, kind: EntityKind) -> str:
        return self.id_generator.generate(kind.id_prefix)

    def _last_modified(self) -> str:
        return format_last_modified(self.clock.now())

    def _missing(self, collection, entity_id: str) -> MutationResult:
        collection.report_missing(entity_id, "Update")
        return MutationResult.invalid({"id": f"{collection.entity_type.capitalize()} not found"})

    # Menu operations
    def create_menu(self, data: FormInput) -> MutationResult:
        """Create a new menu (starts as a draft)"""
        errors = validate_menu(data)
        if errors:
            return MutationResult.invalid(errors)

        form = as_form(MenuFormData, data)
        menu = Menu(
            id=self._new_id(EntityKind.MENU),
            name=form.name.strip(),
            description=form.description.strip(),
            item_count=0,
            status=MenuStatus.DRAFT,
            last_modified=self._last_modified(),
        )
        self.store.menus.add(menu)
        return MutationResult.ok(menu)

    def update_menu(self, menu_id: str, data: FormInput) -> MutationResult:
        """Update a menu's name and description"""
        errors = validate_menu(data)
        if errors:
            return MutationResult.invalid(errors)

        existing = self.store.menus.get(menu_id)
        if existing is None:
            return self._missing(self.store.menus, menu_id)

        form = as_form(MenuFormData, data)
        menu = existing.model_copy(
            update={
                "name": form.name.strip(),
                "description": form.description.strip(),
                "last_modified": self._last_modified(),
            }
        )
        self.store.menus.update(menu)
        return MutationResult.ok(menu)

    def set_menu_status(self, menu_id: str, status: MenuStatus) -> Optional[Menu]:
        menu = self.store.menus.get(menu_id)
        if menu is None:
            self.store.menus.report_missing(menu_id, "Status change")
            return None
        menu = menu.model_copy(
            update={"status": MenuStatus(status), "last_modified": self._last_modified()}
        )
        return self.store.menus.update(menu)

    # Category operations
    def _category_fields(self, form: CategoryFormData) -> Dict[str, Any]:
        return {
            "name": form.name.strip(),
            "description": form.description.strip(),
            "selected_modifiers": list(form.selected_modifiers),
            "tax_category": form.tax_category,
            "last_modified": self._last_modified(),
        }

    def create_category(self, data: FormInput) -> MutationResult:
        """Create a new category (visible by default)"""
        errors = validate_category(data)
        if errors:
            return MutationResult.invalid(errors)

        form = as_form(CategoryFormData, data)
        category = Category(
            id=self._new_id(EntityKind.CATEGORY),
            status=MenuStatus.ACTIVE,
            visibility_settings=VisibilitySettings(visibility=Visibility.VISIBLE),
            **self._category_fields(form),
        )
        self.store.categories.add(category)
        return MutationResult.ok(category)

    def update_category(self, category_id: str, data: FormInput) -> MutationResult:
        errors = validate_category(data)
        if errors:
            return MutationResult.invalid(errors)

        existing = self.store.categories.get(category_id)
        if existing is None:
            return self._missing(self.store.categories, category_id)

        form = as_form(CategoryFormData, data)
        category = existing.model_copy(update=self._category_fields(form))
        self.store.categories.update(category)
        return MutationResult.ok(category)

    # Item operations
    def _item_fields(self, form: ItemFormData) -> Dict[str, Any]:
        """Convert item form data to entity fields"""
        size = parse_price(form.size)
        preparation_time = parse_price(form.preparation_time)
        return {
            "name": form.name.strip(),
            "description": form.description.strip() or None,
            "images": [image for image in form.images if image and image.strip()],
            "status": ItemStatus.AVAILABLE if form.is_available else ItemStatus.UNAVAILABLE,
            "price_options": [
                PriceOption(
                    id=option.id,
                    name=(option.name or "").strip(),
                    price=parse_price(option.price) or 0,
                    unit=option.unit or None,
                )
                for option in form.price_options
            ],
            "labels": list(form.labels),
            "display_options": list(form.display_options),
            "size": size or None,
            "unit": form.unit or None,
            "preparation_time": preparation_time or None,
            "ingredient_warnings": list(form.ingredient_warnings),
            "tax_category": form.tax_category or None,
            "is_sold_out": form.is_sold_out,
            "is_available": form.is_available,
            "is_featured": form.is_featured,
            "recommended_items": list(form.recommended_items),
            "selected_modifiers": [m.model_copy(deep=True) for m in form.selected_modifiers],
            "last_modified": self._last_modified(),
        }

    def create_item(self, data: FormInput, category_id: str) -> MutationResult:
        """
        Create a new menu item in ``category_id``.

        Raises:
            NotFoundError: the category does not exist
        """
        self.store.categories.require(category_id)

        errors = validate_item(data)
        if errors:
            return MutationResult.invalid(errors)

        form = as_form(ItemFormData, data)
        item = Item(
            id=self._new_id(EntityKind.ITEM),
            category=category_id,
            **self._item_fields(form),
        )
        self.store.items.add(item)
        return MutationResult.ok(item)

    def update_item(self, item_id: str, data: FormInput) -> MutationResult:
        """Update a menu item; the category and visibility settings are kept"""
        errors = validate_item(data)
        if errors:
            return MutationResult.invalid(errors)

        existing = self.store.items.get(item_id)
        if existing is None:
            return self._missing(self.store.items, item_id)

        form = as_form(ItemFormData, data)
        item = Item.model_validate(
            {**existing.model_dump(), **self._item_fields(form)}
        )
        self.store.items.update(item)
        return MutationResult.ok(item)

    # Modifier operations
    def _modifier_fields(self, form: ModifierFormData) -> Dict[str, Any]:
        # Only complete options are kept
        return {
            "name": form.name.strip(),
            "type": form.type,
            "allow_multiple": form.allow_multiple,
            "options": [
                ModifierOption(
                    id=option.id,
                    name=option.name.strip(),
                    price=parse_price(option.price) or 0,
                    unit=option.unit.strip(),
                )
                for option in form.options
                if is_complete_modifier_option(option)
            ],
        }

    def create_modifier(self, data: FormInput) -> MutationResult:
        errors = validate_modifier(data)
        if errors:
            return MutationResult.invalid(errors)

        form = as_form(ModifierFormData, data)
        modifier = Modifier(id=self._new_id(EntityKind.MODIFIER), **self._modifier_fields(form))
        self.store.modifiers.add(modifier)
        return MutationResult.ok(modifier)

    def update_modifier(self, modifier_id: str, data: FormInput) -> MutationResult:
        errors = validate_modifier(data)
        if errors:
            return MutationResult.invalid(errors)

        existing = self.store.modifiers.get(modifier_id)
        if existing is None:
            return self._missing(self.store.modifiers, modifier_id)

        form = as_form(ModifierFormData, data)
        modifier = existing.model_copy(update=self._modifier_fields(form))
        self.store.modifiers.update(modifier)
        return MutationResult.ok(modifier)

    # Duplication
    def duplicate(self, kind: EntityKind, entity_id: str) -> CatalogEntity:
        """
        Copy an entity under a fresh id with " (Copy)" appended to its name.

        Raises:
            NotFoundError: the entity does not exist
        """
        kind = EntityKind(kind)
        collection = self.store.collection(kind)
        original = collection.require(entity_id)

        update: Dict[str, Any] = {
            "id": self._new_id(kind),
            "name": f"{original.name}{settings.COPY_NAME_SUFFIX}",
        }
        if kind != EntityKind.MODIFIER:
            update["last_modified"] = self._last_modified()

        duplicated = original.model_copy(deep=True, update=update)
        collection.add(duplicated)
        return duplicated

    def duplicate_menu(self, menu_id: str) -> Menu:
        return self.duplicate(EntityKind.MENU, menu_id)

    def duplicate_category(self, category_id: str) -> Category:
        return self.duplicate(EntityKind.CATEGORY, category_id)

    def duplicate_item(self, item_id: str) -> Item:
        return self.duplicate(EntityKind.ITEM, item_id)

    def duplicate_modifier(self, modifier_id: str) -> Modifier:
        return self.duplicate(EntityKind.MODIFIER, modifier_id)

    # Visibility
    def update_visibility(
        self, kind: EntityKind, entity_id: str, visibility_settings: SettingsInput
    ) -> Optional[Union[Category, Item]]:
        """
        Store normalized visibility settings on a category or item.

        Raises:
            InvalidScheduleError: malformed settings
        """
        kind = EntityKind(kind)
        if kind not in (EntityKind.CATEGORY, EntityKind.ITEM):
            raise ValueError(f"{kind.value} entities have no visibility settings")

        normalized = normalize(visibility_settings, self.clock.now())
        collection = self.store.collection(kind)
        entity = collection.get(entity_id)
        if entity is None:
            collection.report_missing(entity_id, "Visibility update")
            return None

        updated = entity.model_copy(update={"visibility_settings": normalized})
        collection.update(updated)
        logger.info(f"Updated visibility of {kind.value} {entity_id} to {normalized.visibility.value}")
        return updated

    def customer_view(self, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        """
        Categories and items a customer sees at ``now``, in display order.

        An item is hidden when its own settings or its category's hide it.
        """
        now = now or self.clock.now()
        view = []
        for category in self.store.categories:
            if not is_visible(category.visibility_settings, now):
                continue
            items = [
                item
                for item in self.store.items_in_category(category.id)
                if is_visible(item.visibility_settings, now)
            ]
            view.append({"category": category, "items": items})
        return view

    # Queries
    def search_items(self, query: str = "", category_id: Optional[str] = None) -> List[Item]:
        """Filter items by category and a case-insensitive name/description match"""
        items = self.store.items.all()
        if category_id:
            items = [item for item in items if item.category == category_id]

        needle = query.strip().lower()
        if needle:
            items = [
                item
                for item in items
                if needle in item.name.lower()
                or (item.description and needle in item.description.lower())
            ]
        return items

    def item_stats(self) -> Dict[str, Any]:
        items = self.store.items.all()
        prices = [effective_price(item.price_options) for item in items]
        prices = [price for price in prices if price is not None]
        return {
            "total": len(items),
            "available": sum(1 for item in items if item.status == ItemStatus.AVAILABLE),
            "unavailable": sum(1 for item in items if item.status == ItemStatus.UNAVAILABLE),
            "featured": sum(1 for item in items if item.is_featured),
            "sold_out": sum(1 for item in items if item.is_sold_out),
            "average_price": round(sum(prices) / len(prices), 2) if prices else None,
        }

    def menu_stats(self) -> Dict[str, Any]:
        return {
            "total_menus": len(self.store.menus),
            "active_menus": len(self.store.menus.filter(lambda m: m.status == MenuStatus.ACTIVE)),
            "total_categories": len(self.store.categories),
            "total_items": len(self.store.items),
            "total_modifiers": len(self.store.modifiers),
            "archived": len(self.store.archived),
        }
