# menucraft/catalog/tests/test_form_validation.py

from ..schemas.form_schemas import ItemFormData, PriceOptionForm
from ..services.form_validation import (
    validate_category,
    validate_item,
    validate_menu,
    validate_modifier,
)

VALID_DESCRIPTION = "Freshly made every morning"


def item_form(**overrides):
    data = {
        "name": "Margherita",
        "description": VALID_DESCRIPTION,
        "price_options": [{"id": "1", "name": "", "price": "12.50"}],
    }
    data.update(overrides)
    return data


class TestMenuAndCategoryValidation:
    """Basic information checks"""

    def test_valid_menu(self):
        assert validate_menu({"name": "Lunch", "description": VALID_DESCRIPTION}) == {}

    def test_menu_messages(self):
        assert validate_menu({}) == {
            "name": "Menu name is required",
            "description": "Menu description is required",
        }
        assert validate_menu({"name": "L", "description": "short"}) == {
            "name": "Menu name must be at least 2 characters",
            "description": "Description must be at least 10 characters",
        }

    def test_short_category_description(self):
        """A two character name passes, a five character description does not"""
        errors = validate_category({"name": "Ap", "description": "short"})

        assert set(errors) == {"description"}
        assert "minimum 10 characters" in errors["description"]

    def test_category_name_is_trimmed(self):
        errors = validate_category({"name": "  A  ", "description": VALID_DESCRIPTION})

        assert errors == {"name": "Category name is required (minimum 2 characters)"}

    def test_validation_is_idempotent(self):
        data = {"name": "", "description": ""}

        assert validate_category(data) == validate_category(data)
        assert data == {"name": "", "description": ""}


class TestItemValidation:
    """Item form: basic information, pricing and images"""

    def test_valid_simple_item(self):
        assert validate_item(item_form()) == {}

    def test_accepts_form_model(self):
        form = ItemFormData(
            name="Margherita",
            description=VALID_DESCRIPTION,
            price_options=[PriceOptionForm(id="1", name="", price=12.5)],
        )

        assert validate_item(form) == {}

    def test_zero_price_in_simple_mode(self):
        errors = validate_item(item_form(price_options=[{"id": "1", "name": "", "price": 0}]))

        assert errors == {"price": "Price must be greater than 0"}

    def test_simple_mode_price_messages(self):
        blank = validate_item(item_form(price_options=[{"id": "1", "name": "", "price": ""}]))
        text = validate_item(item_form(price_options=[{"id": "1", "name": "", "price": "abc"}]))

        assert blank["price"] == "Price is required"
        assert text["price"] == "Price must be a number"

    def test_comma_decimal_price(self):
        assert validate_item(item_form(price_options=[{"id": "1", "price": "4,50"}])) == {}

    def test_advanced_mode_requires_a_complete_option(self):
        errors = validate_item(
            item_form(
                price_options=[
                    {"id": "1", "name": "Small", "price": ""},
                    {"id": "2", "name": "", "price": "9"},
                ]
            )
        )

        assert errors == {
            "price_options": "At least one complete price option is required",
            "price_option_0": "Price is required for this option",
            "price_option_name_1": "Option name is required",
        }

    def test_advanced_mode_partial_options(self):
        """One complete option is enough, incomplete ones are still flagged"""
        errors = validate_item(
            item_form(
                price_options=[
                    {"id": "1", "name": "Small", "price": "8"},
                    {"id": "2", "name": "Large", "price": "0"},
                ]
            )
        )

        assert errors == {"price_option_1": "Price is required for this option"}

    def test_too_many_images(self):
        errors = validate_item(item_form(images=["a.png", "b.png", "c.png", "d.png"]))

        assert errors == {"images": "A maximum of 3 images is allowed"}

    def test_basic_information_errors(self):
        errors = validate_item(item_form(name="", description="tiny"))

        assert errors["name"] == "Item name is required (minimum 2 characters)"
        assert errors["description"] == "Description is required (minimum 10 characters)"

    def test_structural_errors_are_reported(self):
        errors = validate_item(item_form(labels="not-a-list"))

        assert errors


class TestModifierValidation:
    """Modifier options must be complete: name, price and unit"""

    def test_valid_modifier(self):
        data = {
            "name": "Sauces",
            "options": [{"id": "1", "name": "Mayo", "price": "0", "unit": "cup"}],
        }

        assert validate_modifier(data) == {}

    def test_name_has_no_minimum_length(self):
        data = {"name": "X", "options": [{"id": "1", "name": "Mayo", "price": 0.5, "unit": "cup"}]}

        assert validate_modifier(data) == {}

    def test_incomplete_options(self):
        data = {
            "name": "",
            "options": [
                {"id": "1", "name": "Mayo", "price": "0.5", "unit": ""},
                {"id": "2", "name": "", "price": "0.5", "unit": "cup"},
            ],
        }

        assert validate_modifier(data) == {
            "name": "Modifier name is required",
            "options": "At least one complete modifier option is required",
        }


class TestInvalidPrices:
    """Prices that cannot become a stored option are reported, not raised"""

    def test_unnamed_negative_option_in_advanced_mode(self):
        errors = validate_item(
            item_form(
                price_options=[
                    {"id": "1", "name": "Small", "price": "8"},
                    {"id": "2", "name": "", "price": "-3"},
                ]
            )
        )

        assert errors == {"price_option_1": "Price must be a non-negative number"}

    def test_unparseable_option_price(self):
        errors = validate_item(
            item_form(
                price_options=[
                    {"id": "1", "name": "Small", "price": "8"},
                    {"id": "2", "name": "Large", "price": "lots"},
                ]
            )
        )

        assert errors == {"price_option_1": "Price must be a non-negative number"}

    def test_non_finite_price(self):
        errors = validate_item(item_form(price_options=[{"id": "1", "name": "", "price": "nan"}]))

        assert errors == {"price": "Price must be a number"}

    def test_negative_modifier_option_price(self):
        data = {
            "name": "Sauces",
            "options": [{"id": "1", "name": "Mayo", "price": "-1", "unit": "cup"}],
        }

        assert validate_modifier(data) == {"option_price_0": "Price must be a non-negative number"}

    def test_unparseable_modifier_option_price(self):
        data = {
            "name": "Sauces",
            "options": [
                {"id": "1", "name": "Mayo", "price": "0.5", "unit": "cup"},
                {"id": "2", "name": "Ketchup", "price": "abc", "unit": "cup"},
            ],
        }

        assert validate_modifier(data) == {"option_price_1": "Price must be a non-negative number"}
