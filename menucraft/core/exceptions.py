# menucraft/core/exceptions.py

"""
Exception classes for the catalog core with structured error payloads.

Every exception carries an error code and a ``to_dict()`` payload so the
UI collaborator can map failures without parsing messages. Form validation
never raises; it returns field->message maps instead.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class CatalogErrorCode(str, Enum):
    """Catalog error codes for frontend mapping"""

    # Lookup errors
    NOT_FOUND = "CAT001"
    CONFLICT = "CAT002"

    # Ordering errors
    INVALID_REORDER = "CAT100"

    # Scheduling errors
    INVALID_SCHEDULE = "CAT200"

    # Lifecycle errors
    ARCHIVE_NOT_ALLOWED = "CAT300"


class CatalogException(Exception):
    """Base exception for catalog errors with enhanced payload"""

    def __init__(
        self,
        error_code: CatalogErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.error_code.value,
                "message": self.message,
                "timestamp": self.timestamp.isoformat(),
                "details": self.details,
            }
        }


class NotFoundError(CatalogException):
    """Entity not found"""

    def __init__(self, entity_type: str, entity_id: str):
        super().__init__(
            error_code=CatalogErrorCode.NOT_FOUND,
            message=f"{entity_type.capitalize()} not found",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class ConflictError(CatalogException):
    """Entity id already present in the target collection"""

    def __init__(self, entity_type: str, entity_id: str):
        super().__init__(
            error_code=CatalogErrorCode.CONFLICT,
            message=f"{entity_type.capitalize()} with id '{entity_id}' already exists",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )
        self.entity_type = entity_type
        self.entity_id = entity_id


class InvalidReorderError(CatalogException):
    """Reorder payload is not a permutation of the current collection"""

    def __init__(
        self,
        entity_type: str,
        missing_ids: List[str],
        unexpected_ids: List[str],
        duplicate_ids: List[str],
    ):
        super().__init__(
            error_code=CatalogErrorCode.INVALID_REORDER,
            message=f"New {entity_type} order must contain exactly the current {entity_type} ids",
            details={
                "entity_type": entity_type,
                "missing_ids": missing_ids,
                "unexpected_ids": unexpected_ids,
                "duplicate_ids": duplicate_ids,
            },
        )


class InvalidScheduleError(CatalogException):
    """Malformed visibility settings"""

    def __init__(self, message: str, field_errors: Optional[Dict[str, str]] = None):
        super().__init__(
            error_code=CatalogErrorCode.INVALID_SCHEDULE,
            message=message,
            details={"field_errors": field_errors or {}},
        )
        self.field_errors = field_errors or {}


class ArchivePolicyError(CatalogException):
    """Entity kind does not pass through the archive stage"""

    def __init__(self, entity_type: str):
        super().__init__(
            error_code=CatalogErrorCode.ARCHIVE_NOT_ALLOWED,
            message=f"{entity_type.capitalize()} entities are deleted immediately and cannot be archived",
            details={"entity_type": entity_type},
        )
        self.entity_type = entity_type
