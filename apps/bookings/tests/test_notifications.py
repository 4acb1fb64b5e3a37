"""Tests for the booking notification task and email helpers."""

from __future__ import annotations

from datetime import date
from unittest import mock

from django.core import mail
from django.test import TestCase, override_settings

from apps.bookings.models import ADMIN_BLOCK_INSTAGRAM, ADMIN_BLOCK_NAME, ADMIN_BLOCK_PHONE, Booking
from apps.bookings.tasks import notify_booking_created
from apps.notifications.services import send_admin_booking_email, send_client_booking_email


class NotifyBookingCreatedTests(TestCase):
    def setUp(self) -> None:
        self.booking = Booking.objects.create(
            full_name="Ana <b>Pérez</b>",
            phone="+5491155550000",
            instagram="@ana",
            email="ana@example.com",
            date=date(2024, 6, 3),
            slot="C",
        )

    def test_sends_admin_and_client_emails(self) -> None:
        self.assertTrue(notify_booking_created(self.booking.pk))

        self.assertEqual([m.to for m in mail.outbox], [["owner@example.com"], ["ana@example.com"]])
        admin_message = mail.outbox[0]
        self.assertIn("2024-06-03", admin_message.subject)
        self.assertIn("10:00–12:00", admin_message.body)
        html = admin_message.alternatives[0][0]
        self.assertIn("&lt;b&gt;Pérez&lt;/b&gt;", html)

    def test_missing_booking_is_skipped(self) -> None:
        self.assertFalse(notify_booking_created(424242))
        self.assertEqual(mail.outbox, [])

    def test_admin_block_sends_nothing(self) -> None:
        block = Booking.objects.create(
            full_name=ADMIN_BLOCK_NAME,
            phone=ADMIN_BLOCK_PHONE,
            instagram=ADMIN_BLOCK_INSTAGRAM,
            date=date(2024, 6, 3),
            slot="A",
        )

        self.assertFalse(notify_booking_created(block.pk))
        self.assertEqual(mail.outbox, [])

    def test_smtp_failure_is_reported_not_raised(self) -> None:
        with mock.patch("apps.notifications.services.send_mail", side_effect=OSError("no route")):
            self.assertFalse(send_admin_booking_email(self.booking))
            self.assertFalse(send_client_booking_email(self.booking))

    def test_client_email_requires_an_address(self) -> None:
        self.booking.email = None

        self.assertFalse(send_client_booking_email(self.booking))
        self.assertEqual(mail.outbox, [])

    @override_settings(BOOKING_EMAIL_ENABLED=False)
    def test_disabled_emails(self) -> None:
        self.assertFalse(notify_booking_created(self.booking.pk))
        self.assertEqual(mail.outbox, [])
