"""Notification services for booking emails."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.conf import settings  # type: ignore
from django.core.mail import send_mail  # type: ignore
from django.utils.html import escape, strip_tags  # type: ignore

from apps.bookings.domain.slots import SlotCatalog

if TYPE_CHECKING:  # pragma: no cover
    from apps.bookings.models import Booking

logger = logging.getLogger(__name__)


def emails_enabled() -> bool:
    return bool(getattr(settings, "BOOKING_EMAIL_ENABLED", True))


def send_email_notification(
    recipient_email: str,
    subject: str,
    *,
    html_message: str,
) -> bool:
    """
    Send one HTML email with a plain-text fallback.

    Never raises: delivery failures are logged and reported as False so a
    broken mail server cannot affect a committed booking.
    """
    try:
        send_mail(
            subject=subject,
            message=strip_tags(html_message),
            from_email=f"Booking <{settings.DEFAULT_FROM_EMAIL}>",
            recipient_list=[recipient_email],
            html_message=html_message,
            fail_silently=False,
        )

        logger.info(f"Email sent successfully to {recipient_email}: {subject}")
        return True

    except Exception as e:
        logger.error(f"Failed to send email to {recipient_email}: {e}", exc_info=True)
        return False


def _slot_range(booking: "Booking") -> str:
    catalog = SlotCatalog.from_settings()
    if booking.slot not in catalog:
        return booking.slot
    definition = catalog.get(booking.slot)
    return f"{definition.start}–{definition.end}"


def send_admin_booking_email(booking: "Booking") -> bool:
    """New-booking notice for the business owner."""
    if not emails_enabled():
        return False

    subject = f"New booking – {booking.full_name} ({booking.date} {booking.slot})"
    html_message = f"""
    <h2>New booking confirmed</h2>
    <p><b>Name:</b> {escape(booking.full_name)}</p>
    <p><b>Email:</b> {escape(booking.email or '-')}</p>
    <p><b>Phone:</b> {escape(booking.phone)}</p>
    <p><b>Instagram:</b> {escape(booking.instagram)}</p>
    <p><b>Date:</b> {booking.date} — <b>Time:</b> {_slot_range(booking)}</p>
    <p><b>ID:</b> {booking.pk}</p>
    """

    return send_email_notification(
        recipient_email=settings.BOOKING_ADMIN_EMAIL,
        subject=subject,
        html_message=html_message,
    )


def send_client_booking_email(booking: "Booking") -> bool:
    """Confirmation for the client; skipped when no email was given."""
    if not emails_enabled() or not booking.email:
        return False

    subject = f"Booking confirmation – {booking.date}"
    html_message = f"""
    <p>Thank you <b>{escape(booking.full_name)}</b>, your appointment is booked.</p>
    <p><b>Date:</b> {booking.date}<br>
       <b>Time:</b> {_slot_range(booking)}</p>
    <p>Contact details: {escape(booking.email)} · {escape(booking.phone)} · {escape(booking.instagram)}</p>
    """

    return send_email_notification(
        recipient_email=booking.email,
        subject=subject,
        html_message=html_message,
    )
