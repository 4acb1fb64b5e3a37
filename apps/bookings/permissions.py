"""Shared-secret authentication for the admin API."""

from __future__ import annotations

import hmac

from django.conf import settings  # type: ignore
from rest_framework import authentication, exceptions, permissions  # type: ignore


class AdminPrincipal:
    """Stands in for ``request.user`` once the admin token matched."""

    is_authenticated = True
    is_staff = True

    def __str__(self) -> str:
        return "admin"


class AdminTokenAuthentication(authentication.BaseAuthentication):
    """
    ``Authorization: Bearer <token>`` compared against
    ``BOOKING_ADMIN_TOKEN``. No sessions; an unset token locks the API.
    """

    keyword = "Bearer"

    def authenticate(self, request):  # type: ignore
        header = request.META.get("HTTP_AUTHORIZATION", "")
        token = header.replace(f"{self.keyword} ", "", 1).strip()
        if not token:
            return None

        expected = getattr(settings, "BOOKING_ADMIN_TOKEN", "") or ""
        if not expected or not hmac.compare_digest(token.encode(), expected.encode()):
            raise exceptions.AuthenticationFailed("Unauthorized")
        return (AdminPrincipal(), token)

    def authenticate_header(self, request):  # type: ignore
        return self.keyword


class IsAdminTokenHolder(permissions.BasePermission):
    def has_permission(self, request, view) -> bool:  # type: ignore
        return isinstance(request.user, AdminPrincipal)
