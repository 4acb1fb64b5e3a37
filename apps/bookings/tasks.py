"""Celery tasks for the booking domain."""

from __future__ import annotations

import logging

from celery import shared_task  # type: ignore
from django.db import transaction  # type: ignore

from .models import Booking

logger = logging.getLogger(__name__)


@shared_task(name="bookings.notify_booking_created")
def notify_booking_created(booking_id: int) -> bool:
    """Admin notice plus client confirmation for a committed booking."""
    try:
        booking = Booking.objects.get(id=booking_id)
    except Booking.DoesNotExist:
        # Cancelled before the worker picked the task up.
        logger.warning(f"Booking {booking_id} not found for creation notification")
        return False

    if booking.is_admin_block:
        return False

    from apps.notifications.services import (
        send_admin_booking_email,
        send_client_booking_email,
    )

    admin_sent = send_admin_booking_email(booking)
    client_sent = send_client_booking_email(booking)

    logger.info(
        f"[NOTIFICATION] Booking {booking.pk} notifications: "
        f"admin={admin_sent} client={client_sent}"
    )
    return admin_sent or client_sent


def dispatch_booking_notifications(booking: Booking) -> None:
    """
    Queue notifications once the surrounding transaction commits.

    Broker failures are logged and dropped; the booking response never
    waits on or fails because of notification delivery.
    """

    booking_id = booking.pk

    def _enqueue() -> None:
        try:
            notify_booking_created.delay(booking_id)
        except Exception as e:
            logger.error(f"Could not queue notifications for booking {booking_id}: {e}", exc_info=True)

    transaction.on_commit(_enqueue)
