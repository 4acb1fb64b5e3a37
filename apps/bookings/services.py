"""Domain services for booking workflows.

Every write that decides who owns a ``(date, slot)`` pair goes through this
module. The rules:

1. Input is validated before a transaction is opened.
2. Inside ``transaction.atomic()`` the pair is read with
   ``select_for_update`` so concurrent attempts on PostgreSQL queue behind
   the first one; different pairs never block each other.
3. The ``booking_unique_date_slot`` constraint is the backstop for backends
   where the locking read does not lock (no row yet, or SQLite). An
   ``IntegrityError`` on insert is reported as a conflict.
4. Any exception raised inside the block rolls back every write of that
   transaction before it reaches the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from django.conf import settings  # type: ignore
from django.db import DatabaseError, IntegrityError, transaction  # type: ignore

from .domain.availability import compute_window, merge_availability, parse_day, today_utc
from .domain.slots import SlotCatalog
from .models import (
    ADMIN_BLOCK_INSTAGRAM,
    ADMIN_BLOCK_NAME,
    ADMIN_BLOCK_PHONE,
    Booking,
    SlotOverride,
)

logger = logging.getLogger(__name__)


class BookingError(Exception):
    """Base class for booking failures surfaced to API clients."""

    status_code = 400
    default_message = "Booking request failed."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class BookingValidationError(BookingError):
    """Missing or malformed input; nothing was written."""

    status_code = 400
    default_message = "Incomplete booking data."


class BookingConflictError(BookingError):
    """The requested slot cannot be taken; the transaction was rolled back."""

    status_code = 409
    default_message = "This slot is not available."


class SlotAlreadyBookedError(BookingConflictError):
    default_message = "This slot is already booked."


class SlotClosedError(BookingConflictError):
    default_message = "This slot is closed."


class BookingNotFoundError(BookingError):
    status_code = 404
    default_message = "Booking not found."


class BookingPersistenceError(BookingError):
    """The database failed; the transaction was rolled back."""

    status_code = 500
    default_message = "Could not complete the booking operation."


@dataclass(frozen=True)
class ContactDetails:
    full_name: str = ""
    phone: str = ""
    instagram: str = ""
    email: Optional[str] = None

    def missing_fields(self) -> list[str]:
        return [
            name
            for name in ("full_name", "phone", "instagram")
            if not (getattr(self, name) or "").strip()
        ]


@dataclass(frozen=True)
class OverrideResult:
    date: date
    slot: str
    is_open: bool
    removed_admin_block: bool = False
    created_admin_block: bool = False
    admin_block_id: Optional[int] = None

    def as_dict(self) -> dict:
        if self.is_open:
            return {"opened": True, "removed_admin_block": self.removed_admin_block}
        payload = {"closed": True, "created_admin_block": self.created_admin_block}
        if self.admin_block_id is not None:
            payload["id"] = self.admin_block_id
        return payload


def _lock_queryset_if_possible(queryset):
    """Apply select_for_update when inside transaction.atomic()."""

    if not transaction.get_connection().in_atomic_block:
        return queryset
    return queryset.select_for_update()


def _catalog(catalog: Optional[SlotCatalog]) -> SlotCatalog:
    return catalog if catalog is not None else SlotCatalog.from_settings()


def _is_slot(slot, catalog: SlotCatalog) -> bool:
    return isinstance(slot, str) and slot in catalog


def default_booking_window(today: Optional[date] = None) -> list[date]:
    """Dates a client may book right now."""

    return compute_window(today or today_utc(), settings.BOOKING_WINDOW_DAYS)


def get_availability(
    start=None,
    days=None,
    *,
    catalog: Optional[SlotCatalog] = None,
):
    """Availability view for ``days`` raw calendar days from ``start``."""

    catalog = _catalog(catalog)
    if days is None:
        days = settings.BOOKING_WINDOW_DAYS
    dates = compute_window(start, days, settings.BOOKING_MAX_WINDOW_DAYS)
    if not dates:
        return []

    first, last = dates[0], dates[-1]
    bookings = Booking.objects.between(first, last).values_list("date", "slot")
    overrides = SlotOverride.objects.filter(date__gte=first, date__lte=last).values_list(
        "date", "slot", "is_open"
    )
    return merge_availability(dates, bookings, overrides, catalog)


def create_booking(
    contact: ContactDetails,
    booking_date,
    slot,
    *,
    catalog: Optional[SlotCatalog] = None,
    today: Optional[date] = None,
) -> Booking:
    """
    Reserve ``slot`` on ``booking_date`` for ``contact``.

    Returns the committed booking with its generated ``id`` and
    ``created_at``. Raises ``BookingValidationError`` before touching the
    database, ``SlotAlreadyBookedError`` / ``SlotClosedError`` after a
    rollback, ``BookingPersistenceError`` on database failure.
    """

    catalog = _catalog(catalog)
    missing = contact.missing_fields()
    day = parse_day(booking_date)
    if missing or day is None or not _is_slot(slot, catalog):
        raise BookingValidationError()
    if day not in default_booking_window(today):
        raise BookingValidationError("Date is outside the booking window or not a weekday.")

    try:
        with transaction.atomic():
            existing = _lock_queryset_if_possible(Booking.objects.for_slot(day, slot))
            if existing.exists():
                raise SlotAlreadyBookedError()

            override = SlotOverride.objects.filter(date=day, slot=slot).first()
            if override is not None and not override.is_open:
                raise SlotClosedError()

            booking = Booking.objects.create(
                full_name=contact.full_name.strip(),
                phone=contact.phone.strip(),
                instagram=contact.instagram.strip(),
                email=(contact.email or "").strip() or None,
                date=day,
                slot=slot,
            )
    except BookingConflictError as exc:
        logger.info(f"Booking rejected for {day} {slot}: {exc.message}")
        raise
    except IntegrityError as exc:
        logger.info(f"Booking for {day} {slot} lost the race on the unique constraint")
        raise SlotAlreadyBookedError() from exc
    except DatabaseError as exc:
        logger.error(f"Database error while booking {day} {slot}: {exc}", exc_info=True)
        raise BookingPersistenceError() from exc

    logger.info(f"Booking {booking.pk} created for {day} {slot}")
    return booking


def set_slot_override(
    override_date,
    slot,
    is_open,
    *,
    catalog: Optional[SlotCatalog] = None,
) -> OverrideResult:
    """
    Force a slot open or closed.

    Closing an empty slot inserts an admin block booking; reopening removes
    an admin block but never a customer booking. The override upsert and
    the block insert/delete commit or roll back together.
    """

    catalog = _catalog(catalog)
    day = parse_day(override_date)
    if day is None or not _is_slot(slot, catalog) or not isinstance(is_open, bool):
        raise BookingValidationError("Invalid slot override data.")

    try:
        with transaction.atomic():
            SlotOverride.objects.update_or_create(
                date=day,
                slot=slot,
                defaults={"is_open": is_open},
            )

            if is_open:
                removed, _ = Booking.objects.for_slot(day, slot).admin_blocks().delete()
                result = OverrideResult(
                    date=day,
                    slot=slot,
                    is_open=True,
                    removed_admin_block=removed > 0,
                )
            else:
                existing = _lock_queryset_if_possible(Booking.objects.for_slot(day, slot))
                if existing.exists():
                    result = OverrideResult(date=day, slot=slot, is_open=False)
                else:
                    try:
                        with transaction.atomic():
                            block = Booking.objects.create(
                                full_name=ADMIN_BLOCK_NAME,
                                phone=ADMIN_BLOCK_PHONE,
                                instagram=ADMIN_BLOCK_INSTAGRAM,
                                email=None,
                                date=day,
                                slot=slot,
                            )
                    except IntegrityError:
                        # Taken by a concurrent booking or close; the slot is blocked either way.
                        result = OverrideResult(date=day, slot=slot, is_open=False)
                    else:
                        result = OverrideResult(
                            date=day,
                            slot=slot,
                            is_open=False,
                            created_admin_block=True,
                            admin_block_id=block.pk,
                        )
    except DatabaseError as exc:
        logger.error(f"Database error while overriding {day} {slot}: {exc}", exc_info=True)
        raise BookingPersistenceError("Could not update the slot.") from exc

    logger.info(f"Slot {day} {slot} set {'open' if is_open else 'closed'}: {result.as_dict()}")
    return result


def cancel_booking(booking_id: int) -> None:
    """Delete a booking by id; raises ``BookingNotFoundError`` if absent."""

    try:
        deleted, _ = Booking.objects.filter(pk=booking_id).delete()
    except DatabaseError as exc:
        logger.error(f"Database error while cancelling booking {booking_id}: {exc}", exc_info=True)
        raise BookingPersistenceError("Could not cancel the booking.") from exc

    if not deleted:
        raise BookingNotFoundError()
    logger.info(f"Booking {booking_id} cancelled")


def list_bookings(date_from=None, date_to=None):
    """Bookings ordered by date and slot, admin blocks included."""

    return Booking.objects.between(date_from, date_to).order_by("date", "slot")
