# menucraft/catalog/services/visibility_service.py

"""
Visibility scheduling: decide whether a category or item is shown to
customers at a given instant.

States:
    visible         always shown
    hidden          never shown
    hideUntil       shown from ``hide_until_date`` onwards
    showOnlyWithin  shown on the listed weekdays inside [start_hour, end_hour)

A window whose start hour is greater than its end hour runs past midnight:
22 -> 2 on Monday covers Monday 22:00 to Tuesday 01:59. A window whose start
equals its end is empty. A window without days is never open.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, TypeVar, Union
from zoneinfo import ZoneInfo

from pydantic import ValidationError

from ...core.config import settings
from ...core.exceptions import InvalidScheduleError
from ..schemas.visibility_schemas import (
    ShowOnlyWithin,
    Visibility,
    VisibilitySettings,
    Weekday,
)

logger = logging.getLogger(__name__)

SettingsInput = Union[VisibilitySettings, Mapping[str, Any], None]
EntityT = TypeVar("EntityT")


def _comparable(value: datetime) -> datetime:
    # Naive datetimes are read as UTC so they can be compared with aware ones
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _schedule_time(now: datetime) -> datetime:
    if settings.SCHEDULE_TIMEZONE and now.tzinfo is not None:
        return now.astimezone(ZoneInfo(settings.SCHEDULE_TIMEZONE))
    return now


def is_within_window(window: ShowOnlyWithin, now: datetime) -> bool:
    """Check the weekday/hour window against ``now``"""
    if not window.days:
        return False

    local = _schedule_time(now)
    start_hour, end_hour = window.time_range
    hour = local.hour

    if start_hour < end_hour:
        return start_hour <= hour < end_hour and Weekday.from_date(local) in window.days

    if start_hour > end_hour:
        # Overnight: the part after midnight belongs to the previous day's window
        if hour >= start_hour:
            return Weekday.from_date(local) in window.days
        if hour < end_hour:
            return Weekday.from_date(local - timedelta(days=1)) in window.days
        return False

    return False


def is_visible(visibility_settings: Optional[VisibilitySettings], now: datetime) -> bool:
    """Return True when an entity with these settings is customer-visible at ``now``"""
    if visibility_settings is None:
        return True

    state = visibility_settings.visibility

    if state == Visibility.VISIBLE:
        return True

    if state == Visibility.HIDDEN:
        return False

    if state == Visibility.HIDE_UNTIL:
        if visibility_settings.hide_until_date is None:
            # normalize() would default the date to now
            return True
        return _comparable(now) >= _comparable(visibility_settings.hide_until_date)

    window = visibility_settings.show_only_within or ShowOnlyWithin()
    within = is_within_window(window, now)
    logger.debug(f"Window {window.days} {window.time_range} at {now.isoformat()}: {within}")
    return within


def _field_errors(exc: ValidationError) -> Dict[str, str]:
    errors = {}
    for error in exc.errors():
        location = [str(part) for part in error["loc"] if not isinstance(part, int)]
        errors[".".join(location) or "visibility"] = error["msg"]
    return errors


def _parse(settings_input: SettingsInput) -> VisibilitySettings:
    if not isinstance(settings_input, (VisibilitySettings, Mapping)):
        field_errors = {"visibility": "Visibility settings must be an object"}
        logger.warning(f"Rejected visibility settings: {field_errors}")
        raise InvalidScheduleError("Invalid visibility settings", field_errors)

    try:
        if isinstance(settings_input, VisibilitySettings):
            return VisibilitySettings.model_validate(settings_input.model_dump())
        return VisibilitySettings.model_validate(dict(settings_input))
    except ValidationError as exc:
        field_errors = _field_errors(exc)
        logger.warning(f"Rejected visibility settings: {field_errors}")
        raise InvalidScheduleError("Invalid visibility settings", field_errors) from exc


def normalize(settings_input: SettingsInput, now: datetime) -> VisibilitySettings:
    """
    Fill the defaults a partially edited form may leave out.

    - missing settings become ``visible``
    - ``hideUntil`` without a date hides until ``now``
    - ``showOnlyWithin`` without a window gets no days and the default hours

    Raises:
        InvalidScheduleError: hours outside 0-23, non-integer hours or an
            unknown state/weekday
    """
    if settings_input is None:
        return VisibilitySettings()

    parsed = _parse(settings_input)

    updates: Dict[str, Any] = {}
    if parsed.visibility == Visibility.HIDE_UNTIL and parsed.hide_until_date is None:
        updates["hide_until_date"] = now
    if parsed.visibility == Visibility.SHOW_ONLY_WITHIN and parsed.show_only_within is None:
        updates["show_only_within"] = ShowOnlyWithin()

    return parsed.model_copy(update=updates) if updates else parsed


def validate_visibility(settings_input: SettingsInput) -> Dict[str, str]:
    """Same checks as ``normalize`` reported as a field->message map"""
    if settings_input is None:
        return {}
    try:
        _parse(settings_input)
    except InvalidScheduleError as exc:
        return exc.field_errors
    return {}


def visible_entities(entities: Sequence[EntityT], now: datetime) -> List[EntityT]:
    """Keep entities (anything with ``visibility_settings``) visible at ``now``"""
    return [
        entity
        for entity in entities
        if is_visible(getattr(entity, "visibility_settings", None), now)
    ]


def _format_hour(hour: int) -> str:
    return f"{hour:02d}:00"


def describe_visibility(visibility_settings: Optional[VisibilitySettings]) -> str:
    """One-line summary shown next to the visibility icon"""
    if visibility_settings is None or visibility_settings.visibility == Visibility.VISIBLE:
        return "Visible"

    if visibility_settings.visibility == Visibility.HIDDEN:
        return "Hidden"

    if visibility_settings.visibility == Visibility.HIDE_UNTIL:
        if visibility_settings.hide_until_date is None:
            return "Visible"
        return f"Will be visible from: {visibility_settings.hide_until_date.strftime('%d.%m.%Y %H:%M')}"

    window = visibility_settings.show_only_within or ShowOnlyWithin()
    if not window.days:
        return "No days selected"
    days = ", ".join(day.value for day in window.days)
    start_hour, end_hour = window.time_range
    return f"Available on {days} from {_format_hour(start_hour)} to {_format_hour(end_hour)}"
