# menucraft/catalog/services/__init__.py

from .bulk_operations import BulkOperationsService
from .catalog_service import CatalogService
from .catalog_store import CatalogStore, CategoryCollection, EntityCollection, ItemCollection
from .lifecycle_service import DeletionPolicy, LifecycleService

__all__ = [
    "BulkOperationsService",
    "CatalogService",
    "CatalogStore",
    "CategoryCollection",
    "DeletionPolicy",
    "EntityCollection",
    "ItemCollection",
    "LifecycleService",
]
