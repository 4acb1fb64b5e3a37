"""DRF exception handler rendering every error as ``{"error": message}``."""

from __future__ import annotations

import logging

from rest_framework import exceptions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from .services import BookingError

logger = logging.getLogger(__name__)


def booking_exception_handler(exc, context):  # type: ignore
    path = getattr(context.get("request"), "path", "")

    if isinstance(exc, BookingError):
        if exc.status_code >= 500:
            logger.error(f"[BookingError] {exc.message} | Path={path}", exc_info=exc)
        else:
            logger.warning(f"[BookingError] {exc.message} | Path={path}")
        return Response({"error": exc.message}, status=exc.status_code)

    if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed)):
        response = exception_handler(exc, context)
        response.data = {"error": "Unauthorized"}
        response.status_code = status.HTTP_401_UNAUTHORIZED
        return response

    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, exceptions.ValidationError):
        response.data = {"error": "Invalid request data", "details": response.data}
    elif isinstance(response.data, dict) and "detail" in response.data:
        response.data = {"error": response.data["detail"]}
    logger.warning(f"[HTTPException] {response.data} | Path={path}")
    return response
