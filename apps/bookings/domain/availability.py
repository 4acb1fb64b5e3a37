"""
Availability Calculator

Pure functions behind ``GET /availability`` and the server-side date check
in booking creation:

- ``compute_window`` turns a start day and a day count into the ordered
  weekdays a client may book.
- ``merge_availability`` folds booking and override rows into the
  per-date, per-slot open/booked view.

All day-boundary math is done on ``datetime.date`` values anchored at UTC
midnight, so weekday classification never depends on the server timezone.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .slots import SlotCatalog

SATURDAY = 5

SlotKey = Tuple[date, str]


def today_utc() -> date:
    """Current calendar day at UTC midnight granularity."""
    return datetime.now(timezone.utc).date()


def parse_day(value: Union[str, date, None]) -> Optional[date]:
    """Parse ``YYYY-MM-DD``; returns None for anything else."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value:
        return None
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        return None


def is_weekday(day: date) -> bool:
    return day.weekday() < SATURDAY


def compute_window(
    start: Union[str, date, None] = None,
    num_days: int = 14,
    max_days: Optional[int] = None,
) -> List[date]:
    """
    Bookable dates for a rolling window.

    Scans exactly ``num_days`` raw calendar days beginning at ``start``
    (clamped to ``max_days``) and drops Saturdays and Sundays. The result
    is therefore usually shorter than ``num_days``.

    A missing or malformed ``start`` falls back to today (UTC).
    """
    first = parse_day(start) or today_utc()
    if max_days is not None:
        num_days = min(num_days, max_days)

    window = []
    for offset in range(max(num_days, 0)):
        day = first + timedelta(days=offset)
        if is_weekday(day):
            window.append(day)
    return window


@dataclass(frozen=True)
class SlotAvailability:
    open: bool
    booked: bool
    label: str

    def as_dict(self) -> dict:
        return {"open": self.open, "booked": self.booked, "label": self.label}


@dataclass(frozen=True)
class DayAvailability:
    """Availability of every displayed slot on one date."""

    date: date
    slots: Tuple[Tuple[str, SlotAvailability], ...]

    def slot(self, code: str) -> SlotAvailability:
        return dict(self.slots)[code]

    def as_dict(self) -> dict:
        payload: dict = {"date": self.date.isoformat()}
        for code, availability in self.slots:
            payload[code] = availability.as_dict()
        return payload


def merge_availability(
    dates: Iterable[date],
    bookings: Iterable[SlotKey],
    overrides: Iterable[Tuple[date, str, bool]],
    catalog: SlotCatalog,
) -> List[DayAvailability]:
    """
    Merge persisted state into the availability view.

    ``bookings`` yields ``(date, slot)`` pairs, ``overrides`` yields
    ``(date, slot, is_open)``. A booked slot is never reported open,
    whatever the override says; without an override an unbooked slot is
    open.
    """
    booked = set(bookings)
    override_map: Dict[SlotKey, bool] = {
        (day, slot): is_open for day, slot, is_open in overrides
    }

    view = []
    for day in dates:
        slots = []
        for definition in catalog.ordered():
            key = (day, definition.code)
            is_booked = key in booked
            is_open = not is_booked
            if key in override_map:
                is_open = override_map[key] and not is_booked
            slots.append(
                (
                    definition.code,
                    SlotAvailability(open=is_open, booked=is_booked, label=definition.label),
                )
            )
        view.append(DayAvailability(date=day, slots=tuple(slots)))
    return view
