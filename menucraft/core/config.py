# menucraft/core/config.py

"""
Catalog configuration.

Every setting can be overridden through environment variables prefixed
with ``MENUCRAFT_`` (for example ``MENUCRAFT_STRICT_NOT_FOUND=true``).
"""

from functools import lru_cache
from typing import Optional, Tuple

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogSettings(BaseSettings):
    """Settings for the catalog store and its services"""

    model_config = SettingsConfigDict(
        env_prefix="MENUCRAFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Store behaviour
    # False = update/remove on unknown ids are silent no-ops
    # True = they raise NotFoundError
    STRICT_NOT_FOUND: bool = False

    # Item constraints
    MAX_ITEM_IMAGES: int = 3
    NAME_MIN_LENGTH: int = 2
    DESCRIPTION_MIN_LENGTH: int = 10

    # Visibility scheduling
    DEFAULT_TIME_RANGE: Tuple[int, int] = (9, 17)
    SCHEDULE_TIMEZONE: Optional[str] = None  # e.g. "Europe/Istanbul"; None keeps the zone of `now`

    # Presentation of derived values
    LAST_MODIFIED_FORMAT: str = "%d.%m.%Y"
    COPY_NAME_SUFFIX: str = " (Copy)"
    SIMPLE_TO_ADVANCED_OPTION_NAME: str = "Regular"

    @field_validator("DEFAULT_TIME_RANGE")
    def validate_default_time_range(cls, v):
        start, end = v
        if not (0 <= start <= 23 and 0 <= end <= 23):
            raise ValueError("DEFAULT_TIME_RANGE hours must be within 0-23")
        return v


@lru_cache()
def get_settings() -> CatalogSettings:
    """
    Get catalog settings (cached).

    Returns:
        CatalogSettings instance with environment variables loaded
    """
    return CatalogSettings()


settings = get_settings()
