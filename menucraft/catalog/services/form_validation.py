# menucraft/catalog/services/form_validation.py

"""
Structural validation for the menu, category, item and modifier edit forms.

Every validator is a pure function returning a field->message map; an empty
map means the form can be committed. Nothing here raises for invalid input.

Error keys:
    name, description           basic information
    price                       simple-mode price
    price_options               no complete advanced option
    price_option_<i>            option <i> is named but has no valid price,
                                or its price is not a non-negative number
    price_option_name_<i>       option <i> has a price but no name
    images                      too many images
    options                     no complete modifier option
    option_price_<i>            modifier option <i> price is not a non-negative number
    visibility_settings.<path>  malformed schedule
"""

from typing import Any, Dict, Mapping, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ...core.config import settings
from ..schemas.form_schemas import (
    CategoryFormData,
    ItemFormData,
    MenuFormData,
    ModifierFormData,
)
from ..utils.pricing_utils import is_simple_mode, parse_price
from .visibility_service import validate_visibility

FormT = TypeVar("FormT", bound=BaseModel)
FormInput = Union[BaseModel, Mapping[str, Any]]

ErrorMap = Dict[str, str]


def as_form(form_type: Type[FormT], data: FormInput) -> FormT:
    if isinstance(data, form_type):
        return data
    if isinstance(data, BaseModel):
        data = data.model_dump()
    return form_type.model_validate(dict(data))


def _structure_errors(exc: ValidationError) -> ErrorMap:
    errors = {}
    for error in exc.errors():
        key = "_".join(str(part) for part in error["loc"]) or "form"
        errors[key] = error["msg"]
    return errors


def _text(value) -> str:
    return (value or "").strip()


def _is_invalid_price(value) -> bool:
    """Entered, but not a number or below zero"""
    if value is None or (isinstance(value, str) and not value.strip()):
        return False
    price = parse_price(value)
    return price is None or price < 0


def _basic_information_errors(name, description, label: str) -> ErrorMap:
    errors = {}
    if len(_text(name)) < settings.NAME_MIN_LENGTH:
        errors["name"] = (
            f"{label} name is required (minimum {settings.NAME_MIN_LENGTH} characters)"
        )
    if len(_text(description)) < settings.DESCRIPTION_MIN_LENGTH:
        errors["description"] = (
            f"Description is required (minimum {settings.DESCRIPTION_MIN_LENGTH} characters)"
        )
    return errors


def validate_menu(data: FormInput) -> ErrorMap:
    try:
        form = as_form(MenuFormData, data)
    except ValidationError as exc:
        return _structure_errors(exc)

    errors = {}
    name = _text(form.name)
    description = _text(form.description)

    if not name:
        errors["name"] = "Menu name is required"
    elif len(name) < settings.NAME_MIN_LENGTH:
        errors["name"] = f"Menu name must be at least {settings.NAME_MIN_LENGTH} characters"

    if not description:
        errors["description"] = "Menu description is required"
    elif len(description) < settings.DESCRIPTION_MIN_LENGTH:
        errors["description"] = (
            f"Description must be at least {settings.DESCRIPTION_MIN_LENGTH} characters"
        )

    return errors


def validate_category(data: FormInput) -> ErrorMap:
    try:
        form = as_form(CategoryFormData, data)
    except ValidationError as exc:
        return _structure_errors(exc)

    return _basic_information_errors(form.name, form.description, "Category")


def _price_errors(form: ItemFormData) -> ErrorMap:
    errors = {}
    options = form.price_options

    if not options:
        errors["price_options"] = "At least one price option is required"
        return errors

    if is_simple_mode(options):
        raw_price = options[0].price
        price = parse_price(raw_price)
        if raw_price is None or (isinstance(raw_price, str) and not raw_price.strip()):
            errors["price"] = "Price is required"
        elif price is None:
            errors["price"] = "Price must be a number"
        elif price <= 0:
            errors["price"] = "Price must be greater than 0"
        return errors

    complete = [
        option
        for option in options
        if _text(option.name) and (parse_price(option.price) or 0) > 0
    ]
    if not complete:
        errors["price_options"] = "At least one complete price option is required"

    for index, option in enumerate(options):
        has_name = bool(_text(option.name))
        has_price = (parse_price(option.price) or 0) > 0
        if _is_invalid_price(option.price):
            errors[f"price_option_{index}"] = "Price must be a non-negative number"
        elif has_name and not has_price:
            errors[f"price_option_{index}"] = "Price is required for this option"
        if has_price and not has_name:
            errors[f"price_option_name_{index}"] = "Option name is required"

    return errors


def validate_item(data: FormInput) -> ErrorMap:
    try:
        form = as_form(ItemFormData, data)
    except ValidationError as exc:
        return _structure_errors(exc)

    errors = _basic_information_errors(form.name, form.description, "Item")
    errors.update(_price_errors(form))

    images = [image for image in form.images if _text(image)]
    if len(images) > settings.MAX_ITEM_IMAGES:
        errors["images"] = f"A maximum of {settings.MAX_ITEM_IMAGES} images is allowed"

    return errors


def is_complete_modifier_option(option) -> bool:
    """Modifier options need a name, a price and a unit"""
    price = option.price
    price_text = price.strip() if isinstance(price, str) else ("" if price is None else str(price))
    return bool(_text(option.name) and price_text and _text(option.unit))


def validate_modifier(data: FormInput) -> ErrorMap:
    try:
        form = as_form(ModifierFormData, data)
    except ValidationError as exc:
        return _structure_errors(exc)

    errors = {}
    if not _text(form.name):
        errors["name"] = "Modifier name is required"

    if not any(is_complete_modifier_option(option) for option in form.options):
        errors["options"] = "At least one complete modifier option is required"

    for index, option in enumerate(form.options):
        if _is_invalid_price(option.price):
            errors[f"option_price_{index}"] = "Price must be a non-negative number"

    return errors


def validate_visibility_form(data: Mapping[str, Any]) -> ErrorMap:
    """Schedule problems keyed under ``visibility_settings``"""
    return {
        f"visibility_settings.{key}": message
        for key, message in validate_visibility(data).items()
    }
