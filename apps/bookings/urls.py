"""URL routing for the booking domain."""

from __future__ import annotations

from django.urls import path  # type: ignore

from .views import (
    AdminBookingCsvView,
    AdminBookingDeleteView,
    AdminBookingListView,
    AdminSlotOverrideView,
    AvailabilityView,
    BookView,
)

urlpatterns = [
    path("availability", AvailabilityView.as_view(), name="availability"),
    path("book", BookView.as_view(), name="book"),
    path("admin/api/bookings", AdminBookingListView.as_view(), name="admin-bookings"),
    path("admin/api/bookings.csv", AdminBookingCsvView.as_view(), name="admin-bookings-csv"),
    path("admin/api/slot", AdminSlotOverrideView.as_view(), name="admin-slot"),
    path(
        "admin/api/booking/<str:booking_id>",
        AdminBookingDeleteView.as_view(),
        name="admin-booking-delete",
    ),
]
