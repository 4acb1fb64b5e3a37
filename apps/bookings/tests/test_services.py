"""Tests for the booking transaction services."""

from __future__ import annotations

from datetime import date, timedelta
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase, override_settings

from apps.bookings.models import Booking, SlotOverride
from apps.bookings.services import (
    BookingNotFoundError,
    BookingPersistenceError,
    BookingValidationError,
    ContactDetails,
    SlotAlreadyBookedError,
    SlotClosedError,
    cancel_booking,
    create_booking,
    get_availability,
    list_bookings,
    set_slot_override,
)

MONDAY = date(2024, 6, 3)
CONTACT = ContactDetails(
    full_name="Ana Pérez",
    phone="+5491155550000",
    instagram="@ana",
    email="ana@example.com",
)


@override_settings(BOOKING_WINDOW_DAYS=14, BOOKING_MAX_WINDOW_DAYS=31)
class CreateBookingTests(TestCase):
    def _book(self, day=MONDAY, slot="A", contact=CONTACT):
        return create_booking(contact, day, slot, today=MONDAY)

    def test_creates_booking_with_generated_fields(self) -> None:
        booking = self._book()

        self.assertIsNotNone(booking.pk)
        self.assertIsNotNone(booking.created_at)
        self.assertEqual(booking.date, MONDAY)
        self.assertEqual(booking.slot, "A")
        self.assertEqual(booking.email, "ana@example.com")
        self.assertEqual(Booking.objects.count(), 1)

    def test_accepts_iso_string_date(self) -> None:
        booking = self._book(day="2024-06-04")

        self.assertEqual(booking.date, date(2024, 6, 4))

    def test_blank_email_is_stored_as_null(self) -> None:
        booking = self._book(contact=ContactDetails("Ana", "1", "@ana", ""))

        self.assertIsNone(booking.email)

    def test_second_booking_for_same_pair_is_already_booked(self) -> None:
        self._book()

        with self.assertRaises(SlotAlreadyBookedError) as ctx:
            self._book(contact=ContactDetails("Luis", "2", "@luis"))

        self.assertIn("already booked", str(ctx.exception))
        self.assertEqual(Booking.objects.count(), 1)

    def test_other_pairs_are_independent(self) -> None:
        self._book(slot="A")
        self._book(slot="B")
        self._book(day=MONDAY + timedelta(days=1), slot="A")

        self.assertEqual(Booking.objects.count(), 3)

    def test_closed_override_rejects_booking(self) -> None:
        SlotOverride.objects.create(date=MONDAY, slot="A", is_open=False)

        with self.assertRaises(SlotClosedError):
            self._book()

        self.assertFalse(Booking.objects.exists())

    def test_open_override_allows_booking(self) -> None:
        SlotOverride.objects.create(date=MONDAY, slot="A", is_open=True)

        self._book()

        self.assertEqual(Booking.objects.count(), 1)

    def test_missing_contact_field_is_validation_error(self) -> None:
        for contact in (
            ContactDetails("", "1", "@a"),
            ContactDetails("Ana", "  ", "@a"),
            ContactDetails("Ana", "1", ""),
        ):
            with self.subTest(contact=contact), self.assertRaises(BookingValidationError):
                self._book(contact=contact)

        self.assertFalse(Booking.objects.exists())

    def test_unknown_slot_or_missing_date_is_validation_error(self) -> None:
        with self.assertRaises(BookingValidationError):
            self._book(slot="Z")
        with self.assertRaises(BookingValidationError):
            self._book(slot=None)
        with self.assertRaises(BookingValidationError):
            self._book(day=None)
        with self.assertRaises(BookingValidationError):
            self._book(day="tomorrow")

    def test_weekend_date_is_rejected(self) -> None:
        with self.assertRaises(BookingValidationError) as ctx:
            self._book(day=date(2024, 6, 8))

        self.assertIn("window", ctx.exception.message)

    def test_date_outside_default_window_is_rejected(self) -> None:
        for day in (MONDAY - timedelta(days=1), MONDAY + timedelta(days=14)):
            with self.subTest(day=day), self.assertRaises(BookingValidationError):
                self._book(day=day)

    def test_last_weekday_of_window_is_bookable(self) -> None:
        booking = self._book(day=date(2024, 6, 14))

        self.assertEqual(booking.date, date(2024, 6, 14))

    def test_unique_constraint_backstops_a_lost_race(self) -> None:
        Booking.objects.create(
            full_name="Luis", phone="2", instagram="@luis", date=MONDAY, slot="A"
        )

        # The locking read sees nothing, as when a concurrent insert lands
        # between the read and our own insert.
        with mock.patch(
            "apps.bookings.services._lock_queryset_if_possible",
            return_value=Booking.objects.none(),
        ):
            with self.assertRaises(SlotAlreadyBookedError):
                self._book()

        self.assertEqual(Booking.objects.count(), 1)
        self.assertEqual(Booking.objects.get().full_name, "Luis")

    def test_database_failure_is_persistence_error(self) -> None:
        with mock.patch.object(Booking.objects, "create", side_effect=DatabaseError("down")):
            with self.assertRaises(BookingPersistenceError):
                self._book()

        self.assertFalse(Booking.objects.exists())


class SlotOverrideTests(TestCase):
    def test_close_empty_slot_creates_admin_block(self) -> None:
        result = set_slot_override(MONDAY, "A", False)

        self.assertTrue(result.created_admin_block)
        block = Booking.objects.get()
        self.assertEqual(result.admin_block_id, block.pk)
        self.assertTrue(block.is_admin_block)
        self.assertFalse(SlotOverride.objects.get(date=MONDAY, slot="A").is_open)
        self.assertEqual(
            result.as_dict(), {"closed": True, "created_admin_block": True, "id": block.pk}
        )

    def test_closing_twice_keeps_a_single_admin_block(self) -> None:
        set_slot_override(MONDAY, "A", False)
        second = set_slot_override(MONDAY, "A", False)

        self.assertFalse(second.created_admin_block)
        self.assertEqual(Booking.objects.admin_blocks().count(), 1)
        self.assertEqual(SlotOverride.objects.count(), 1)

    def test_closing_booked_slot_leaves_customer_booking(self) -> None:
        customer = Booking.objects.create(
            full_name="Ana", phone="1", instagram="@ana", date=MONDAY, slot="A"
        )

        result = set_slot_override(MONDAY, "A", False)

        self.assertFalse(result.created_admin_block)
        self.assertEqual(list(Booking.objects.all()), [customer])

    def test_reopen_removes_admin_block(self) -> None:
        set_slot_override(MONDAY, "A", False)

        result = set_slot_override(MONDAY, "A", True)

        self.assertTrue(result.removed_admin_block)
        self.assertFalse(Booking.objects.exists())
        self.assertTrue(SlotOverride.objects.get(date=MONDAY, slot="A").is_open)
        self.assertEqual(result.as_dict(), {"opened": True, "removed_admin_block": True})

        day = get_availability(MONDAY, 1)[0]
        self.assertTrue(day.slot("A").open)
        self.assertFalse(day.slot("A").booked)

    def test_reopen_never_deletes_customer_booking(self) -> None:
        Booking.objects.create(full_name="Ana", phone="0", instagram="admin", date=MONDAY, slot="A")

        result = set_slot_override(MONDAY, "A", True)

        self.assertFalse(result.removed_admin_block)
        self.assertEqual(Booking.objects.count(), 1)

    def test_invalid_input_is_rejected(self) -> None:
        for args in ((None, "A", True), (MONDAY, "Z", True), (MONDAY, "A", "false"), (MONDAY, "A", 1)):
            with self.subTest(args=args), self.assertRaises(BookingValidationError):
                set_slot_override(*args)

        self.assertFalse(SlotOverride.objects.exists())

    def test_failure_rolls_back_override_upsert(self) -> None:
        with mock.patch.object(Booking.objects, "create", side_effect=DatabaseError("down")):
            with self.assertRaises(BookingPersistenceError):
                set_slot_override(MONDAY, "A", False)

        self.assertFalse(SlotOverride.objects.exists())
        self.assertFalse(Booking.objects.exists())


@override_settings(BOOKING_WINDOW_DAYS=14, BOOKING_MAX_WINDOW_DAYS=31)
class CancelAndListTests(TestCase):
    def test_cancel_restores_availability(self) -> None:
        booking = create_booking(CONTACT, MONDAY, "B", today=MONDAY)
        self.assertTrue(get_availability(MONDAY, 1)[0].slot("B").booked)

        cancel_booking(booking.pk)

        slot = get_availability(MONDAY, 1)[0].slot("B")
        self.assertTrue(slot.open)
        self.assertFalse(slot.booked)

    def test_cancel_unknown_booking(self) -> None:
        with self.assertRaises(BookingNotFoundError):
            cancel_booking(9999)

    def test_list_orders_by_date_and_slot_and_filters_range(self) -> None:
        create_booking(CONTACT, MONDAY + timedelta(days=1), "A", today=MONDAY)
        create_booking(CONTACT, MONDAY, "B", today=MONDAY)
        create_booking(CONTACT, MONDAY, "A", today=MONDAY)
        set_slot_override(MONDAY + timedelta(days=2), "C", False)

        everything = list(list_bookings())
        self.assertEqual(
            [(b.date, b.slot) for b in everything],
            [
                (MONDAY, "A"),
                (MONDAY, "B"),
                (MONDAY + timedelta(days=1), "A"),
                (MONDAY + timedelta(days=2), "C"),
            ],
        )
        self.assertEqual(list_bookings(MONDAY + timedelta(days=1), MONDAY + timedelta(days=1)).count(), 1)

    def test_availability_merges_bookings_and_overrides(self) -> None:
        create_booking(CONTACT, MONDAY, "A", today=MONDAY)
        SlotOverride.objects.create(date=MONDAY, slot="B", is_open=False)
        SlotOverride.objects.create(date=MONDAY, slot="A", is_open=True)

        day = get_availability("2024-06-03", 5)[0]

        self.assertEqual((day.slot("A").open, day.slot("A").booked), (False, True))
        self.assertEqual((day.slot("B").open, day.slot("B").booked), (False, False))
        self.assertEqual((day.slot("C").open, day.slot("C").booked), (True, False))

    def test_availability_outside_bounds_is_not_reported(self) -> None:
        self.assertEqual(get_availability(MONDAY, 0), [])
        self.assertEqual(len(get_availability(MONDAY, 100)), 23)
