# menucraft/catalog/schemas/visibility_schemas.py

from datetime import date, datetime
from enum import Enum
from typing import List, Optional, Tuple

from pydantic import Field, StrictInt, field_validator

from ...core.config import settings
from .base import CatalogModel


class Visibility(str, Enum):
    VISIBLE = "visible"
    HIDDEN = "hidden"
    HIDE_UNTIL = "hideUntil"
    SHOW_ONLY_WITHIN = "showOnlyWithin"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        # date.weekday(): Monday == 0
        return list(cls)[value.weekday()]


def _default_time_range() -> Tuple[int, int]:
    start, end = settings.DEFAULT_TIME_RANGE
    return (start, end)


class ShowOnlyWithin(CatalogModel):
    """Recurring visibility window"""

    days: List[Weekday] = Field(default_factory=list)
    # [start_hour, end_hour), wraps past midnight when start > end
    time_range: Tuple[StrictInt, StrictInt] = Field(default_factory=_default_time_range)

    @field_validator("days", mode="before")
    def lowercase_days(cls, v):
        if isinstance(v, (list, tuple, set)):
            return [day.strip().lower() if isinstance(day, str) else day for day in v]
        return v

    @field_validator("days")
    def unique_days(cls, v):
        seen = []
        for day in v:
            if day not in seen:
                seen.append(day)
        return seen

    @field_validator("time_range")
    def validate_hours(cls, v):
        for hour in v:
            if not 0 <= hour <= 23:
                raise ValueError("Hours must be between 0 and 23")
        return v


class VisibilitySettings(CatalogModel):
    visibility: Visibility = Visibility.VISIBLE
    hide_until_date: Optional[datetime] = None
    show_only_within: Optional[ShowOnlyWithin] = None
