"""Pure booking logic: slot catalog and availability calculation."""

from .availability import (
    DayAvailability,
    SlotAvailability,
    compute_window,
    merge_availability,
    parse_day,
    today_utc,
)
from .slots import SlotCatalog, SlotDefinition

__all__ = [
    "DayAvailability",
    "SlotAvailability",
    "SlotCatalog",
    "SlotDefinition",
    "compute_window",
    "merge_availability",
    "parse_day",
    "today_utc",
]
