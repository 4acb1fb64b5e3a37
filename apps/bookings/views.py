"""API views for the booking domain."""

from __future__ import annotations

import csv
import json

from django.conf import settings  # type: ignore
from django.http import HttpResponse  # type: ignore
from rest_framework import renderers, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from .filters import BookingFilterSet
from .permissions import AdminTokenAuthentication, IsAdminTokenHolder
from .serializers import BookingCreateSerializer, BookingSerializer, SlotOverrideSerializer
from .services import (
    BookingValidationError,
    cancel_booking,
    create_booking,
    get_availability,
    list_bookings,
    set_slot_override,
)
from .tasks import dispatch_booking_notifications

CSV_COLUMNS = ["id", "full_name", "phone", "instagram", "email", "date", "slot", "created_at"]


def _parse_days(raw) -> int:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return settings.BOOKING_WINDOW_DAYS


class AvailabilityView(APIView):
    """Open/booked state of every slot over a rolling weekday window."""

    def get(self, request):  # type: ignore
        view = get_availability(
            start=request.query_params.get("start"),
            days=_parse_days(request.query_params.get("days")),
        )
        return Response([day.as_dict() for day in view])


class BookView(APIView):
    """Reserve a slot; 409 when somebody else got it first."""

    def post(self, request):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        if not serializer.is_valid():
            raise BookingValidationError()

        booking = create_booking(
            serializer.contact(),
            serializer.validated_data["date"],
            serializer.validated_data["slot"],
        )
        dispatch_booking_notifications(booking)
        return Response(
            {"ok": True, "booking_id": booking.pk, "created_at": booking.created_at},
            status=status.HTTP_200_OK,
        )


class AdminAPIView(APIView):
    authentication_classes = [AdminTokenAuthentication]
    permission_classes = [IsAdminTokenHolder]


class AdminBookingListView(AdminAPIView):
    def get(self, request):  # type: ignore
        filterset = BookingFilterSet.from_query_params(request.query_params, list_bookings())
        if not filterset.is_valid():
            raise BookingValidationError("Invalid date range.")
        return Response(BookingSerializer(filterset.qs, many=True).data)


class AdminSlotOverrideView(AdminAPIView):
    """Open or close a slot by hand."""

    def post(self, request):  # type: ignore
        serializer = SlotOverrideSerializer(data=request.data)
        if not serializer.is_valid():
            raise BookingValidationError("Invalid slot override data.")

        result = set_slot_override(
            serializer.validated_data["date"],
            serializer.validated_data["slot"],
            serializer.validated_data["is_open"],
        )
        return Response({"ok": True, **result.as_dict()})


class CSVRenderer(renderers.BaseRenderer):
    """Lets `Accept: text/csv` negotiate; error payloads still render as JSON."""

    media_type = "text/csv"
    format = "csv"
    charset = "utf-8"

    def render(self, data, accepted_media_type=None, renderer_context=None):  # type: ignore
        return json.dumps(data).encode(self.charset)


class AdminBookingCsvView(AdminAPIView):
    renderer_classes = [renderers.JSONRenderer, CSVRenderer]

    def get(self, request):  # type: ignore
        response = HttpResponse(content_type="text/csv; charset=utf-8")
        response["Content-Disposition"] = 'attachment; filename="bookings.csv"'

        writer = csv.writer(response)
        writer.writerow(CSV_COLUMNS)
        for booking in list_bookings():
            writer.writerow(
                [
                    booking.pk,
                    booking.full_name,
                    booking.phone,
                    booking.instagram,
                    booking.email or "",
                    booking.date.isoformat(),
                    booking.slot,
                    booking.created_at.isoformat(),
                ]
            )
        return response


class AdminBookingDeleteView(AdminAPIView):
    def delete(self, request, booking_id: str):  # type: ignore
        try:
            pk = int(booking_id)
        except (TypeError, ValueError):
            pk = 0
        if pk <= 0:
            raise BookingValidationError("Invalid booking id.")

        cancel_booking(pk)
        return Response({"ok": True})
