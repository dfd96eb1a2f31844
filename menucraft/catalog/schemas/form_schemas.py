# menucraft/catalog/schemas/form_schemas.py

"""
Edit-form payloads as the UI collaborator sends them.

Form fields are looser than the entity schemas: prices arrive as strings
while the user is typing and any field may still be blank. Validation of
these payloads lives in ``services.form_validation``.
"""

from typing import List, Optional, Union

from pydantic import Field

from .base import CatalogModel
from .catalog_schemas import ModifierType, SelectedModifier

FormNumber = Union[float, str, None]


class MenuFormData(CatalogModel):
    name: Optional[str] = ""
    description: Optional[str] = ""


class CategoryFormData(CatalogModel):
    name: Optional[str] = ""
    description: Optional[str] = ""
    selected_modifiers: List[str] = Field(default_factory=list)
    tax_category: Optional[str] = None


class PriceOptionForm(CatalogModel):
    id: str = "1"
    name: Optional[str] = ""
    price: FormNumber = ""
    unit: Optional[str] = None


class ItemFormData(CatalogModel):
    name: Optional[str] = ""
    description: Optional[str] = ""
    price_options: List[PriceOptionForm] = Field(default_factory=lambda: [PriceOptionForm()])
    labels: List[str] = Field(default_factory=list)
    display_options: List[str] = Field(default_factory=list)
    size: FormNumber = None
    unit: Optional[str] = None
    preparation_time: FormNumber = None
    ingredient_warnings: List[str] = Field(default_factory=list)
    tax_category: Optional[str] = None
    is_sold_out: bool = False
    is_available: bool = True
    is_featured: bool = False
    recommended_items: List[str] = Field(default_factory=list)
    selected_modifiers: List[SelectedModifier] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)


class ModifierOptionForm(CatalogModel):
    id: str = "1"
    name: Optional[str] = ""
    price: FormNumber = ""
    unit: Optional[str] = ""


class ModifierFormData(CatalogModel):
    name: Optional[str] = ""
    type: ModifierType = ModifierType.OPTIONAL
    allow_multiple: bool = False
    options: List[ModifierOptionForm] = Field(default_factory=lambda: [ModifierOptionForm()])
