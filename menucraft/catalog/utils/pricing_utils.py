# menucraft/catalog/utils/pricing_utils.py

"""
Price option helpers shared by the item form and the catalog service.

An item is in *simple mode* when it has exactly one price option and that
option has no name; the form then shows a single price field. Anything else
is *advanced mode*, a list of named size/variant prices.
"""

import math
from typing import List, Optional, Sequence, TypeVar, Union

from ...core.config import settings
from ..schemas.catalog_schemas import PriceOption
from ..schemas.form_schemas import PriceOptionForm

OptionT = TypeVar("OptionT", PriceOption, PriceOptionForm)


def parse_price(value: Union[float, int, str, None]) -> Optional[float]:
    """Convert a form price to a number; blank or unparseable input gives None"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        price = float(value)
    else:
        text = value.strip()
        if not text:
            return None
        try:
            price = float(text.replace(",", "."))
        except ValueError:
            return None
    # nan and inf are not prices
    return price if math.isfinite(price) else None


def is_simple_mode(options: Sequence[Union[PriceOption, PriceOptionForm]]) -> bool:
    return len(options) == 1 and not (options[0].name or "").strip()


def add_price_option(options: Sequence[OptionT], new_id: str) -> List[OptionT]:
    """
    Add a price option.

    From simple mode the existing option is named instead (it becomes the
    first advanced option), so the entered price is kept.
    """
    if is_simple_mode(options):
        first = options[0]
        return [first.model_copy(update={"name": settings.SIMPLE_TO_ADVANCED_OPTION_NAME})]

    option_type = type(options[0]) if options else PriceOptionForm
    if option_type is PriceOption:
        blank = PriceOption(id=new_id, name="", price=0)
    else:
        blank = PriceOptionForm(id=new_id, name="", price="")
    return list(options) + [blank]


def remove_price_option(
    options: Sequence[OptionT], option_id: str, new_id: str
) -> List[OptionT]:
    """
    Remove a price option without ever leaving the list empty.

    - no options left: a fresh simple-mode option carrying the old first price
    - one named option left: its name is cleared (back to simple mode)
    """
    remaining = [option for option in options if option.id != option_id]

    if not remaining:
        first_price = options[0].price if options else 0
        option_type = type(options[0]) if options else PriceOption
        return [option_type(id=new_id, name="", price=first_price)]

    if len(remaining) == 1 and (remaining[0].name or "").strip():
        return [remaining[0].model_copy(update={"name": ""})]

    return remaining


def effective_price(options: Sequence[PriceOption]) -> Optional[float]:
    """Lowest positive price, the "from" price shown on item cards"""
    prices = [option.price for option in options if option.price > 0]
    return min(prices) if prices else None
