"""Booking domain models for the slot booking service."""

from __future__ import annotations

from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

# Contact values of the synthetic booking that blocks a slot closed by an
# administrator. Reopening only removes rows matching all three.
ADMIN_BLOCK_NAME = "Administrador"
ADMIN_BLOCK_PHONE = "0"
ADMIN_BLOCK_INSTAGRAM = "admin"


class BookingQuerySet(models.QuerySet):
    def for_slot(self, booking_date, slot: str) -> "BookingQuerySet":
        return self.filter(date=booking_date, slot=slot)

    def between(self, date_from=None, date_to=None) -> "BookingQuerySet":
        qs = self
        if date_from is not None:
            qs = qs.filter(date__gte=date_from)
        if date_to is not None:
            qs = qs.filter(date__lte=date_to)
        return qs

    def admin_blocks(self) -> "BookingQuerySet":
        return self.filter(
            full_name=ADMIN_BLOCK_NAME,
            phone=ADMIN_BLOCK_PHONE,
            instagram=ADMIN_BLOCK_INSTAGRAM,
        )


class Booking(models.Model):
    """A confirmed reservation of one slot on one day."""

    full_name = models.CharField(max_length=255)
    phone = models.CharField(max_length=64)
    instagram = models.CharField(max_length=255)
    email = models.EmailField(null=True, blank=True)
    date = models.DateField()
    slot = models.CharField(max_length=4)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = BookingQuerySet.as_manager()

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["date", "slot"]
        constraints = [
            models.UniqueConstraint(
                fields=["date", "slot"],
                name="booking_unique_date_slot",
            ),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} {self.date} {self.slot}"

    @property
    def is_admin_block(self) -> bool:
        return (
            self.full_name == ADMIN_BLOCK_NAME
            and self.phone == ADMIN_BLOCK_PHONE
            and self.instagram == ADMIN_BLOCK_INSTAGRAM
        )


class SlotOverride(models.Model):
    """Manual open/close directive for a (date, slot) pair."""

    date = models.DateField()
    slot = models.CharField(max_length=4)
    is_open = models.BooleanField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = _("Slot override")
        verbose_name_plural = _("Slot overrides")
        ordering = ["date", "slot"]
        constraints = [
            models.UniqueConstraint(
                fields=["date", "slot"],
                name="slot_override_unique_date_slot",
            ),
        ]

    def __str__(self) -> str:
        state = "open" if self.is_open else "closed"
        return f"{self.date} {self.slot} {state}"
