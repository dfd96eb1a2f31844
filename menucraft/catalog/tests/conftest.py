# menucraft/catalog/tests/conftest.py

"""
Pytest configuration for catalog tests.
Provides a pinned clock, deterministic ids and a small seeded catalog.
"""

from datetime import datetime, timezone

import pytest

from ...core.clock import FixedClock, SequentialIdGenerator
from ..services.catalog_service import CatalogService
from ..services.catalog_store import CatalogStore
from .factories import CategoryFactory, ItemFactory, MenuFactory, ModifierFactory


@pytest.fixture
def clock() -> FixedClock:
    """Monday 1 January 2024, 10:00 UTC"""
    return FixedClock(datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc))


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    return SequentialIdGenerator(start=100)


@pytest.fixture
def store() -> CatalogStore:
    """
    Two categories and four items:

        catA: i1, i2, i3
        catB: i4
    """
    return CatalogStore(
        menus=[MenuFactory(id="menu1", item_count=4), MenuFactory(id="menu2", item_count=7)],
        categories=[
            CategoryFactory(id="catA", name="Starters", selected_modifiers=["mod1"]),
            CategoryFactory(id="catB", name="Mains"),
        ],
        items=[
            ItemFactory(id="i1", name="Bruschetta", category="catA"),
            ItemFactory(id="i2", name="Garlic Bread", category="catA"),
            ItemFactory(id="i3", name="Soup of the Day", category="catA"),
            ItemFactory(id="i4", name="Lasagne", category="catB"),
        ],
        modifiers=[ModifierFactory(id="mod1"), ModifierFactory(id="mod2")],
        active_menu_id="menu1",
        strict_not_found=False,
    )


@pytest.fixture
def service(store, clock, id_generator) -> CatalogService:
    return CatalogService(store=store, clock=clock, id_generator=id_generator)
