"""Admin registration for bookings."""

from __future__ import annotations

from django.contrib import admin

from .models import Booking, SlotOverride


@admin.register(Booking)
class BookingAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "date",
        "slot",
        "full_name",
        "phone",
        "instagram",
        "email",
        "created_at",
    )
    list_filter = ("date", "slot")
    search_fields = ("full_name", "phone", "instagram", "email")
    readonly_fields = ("created_at",)
    ordering = ("date", "slot")


@admin.register(SlotOverride)
class SlotOverrideAdmin(admin.ModelAdmin):
    list_display = ("date", "slot", "is_open", "created_at")
    list_filter = ("is_open", "slot", "date")
    readonly_fields = ("created_at",)
