"""FilterSet definitions for the admin booking listing."""

from __future__ import annotations

import django_filters  # type: ignore

from .models import Booking


class BookingFilterSet(django_filters.FilterSet):
    """Inclusive date range; the API exposes it as ``?from=&to=``."""

    date_from = django_filters.DateFilter(field_name="date", lookup_expr="gte")
    date_to = django_filters.DateFilter(field_name="date", lookup_expr="lte")
    slot = django_filters.CharFilter(field_name="slot", lookup_expr="exact")

    class Meta:
        model = Booking
        fields = ["slot"]

    @classmethod
    def from_query_params(cls, query_params, queryset):
        data = {
            "date_from": query_params.get("from"),
            "date_to": query_params.get("to"),
            "slot": query_params.get("slot"),
        }
        return cls(data={k: v for k, v in data.items() if v}, queryset=queryset)
