# menucraft/__init__.py

"""Restaurant menu catalog core: menus, categories, items, modifiers."""

__version__ = "0.1.0"
