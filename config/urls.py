"""URL configuration for the slot booking service.

Public booking endpoints and the admin API live at the root, the way the
existing web clients call them. The Django admin site is mounted under
``django-admin/`` so it does not shadow ``admin/api/``.
"""
from django.contrib import admin  # type: ignore
from django.http import HttpResponse  # type: ignore
from django.urls import path, include  # type: ignore
from drf_spectacular.views import SpectacularAPIView  # type: ignore


def healthz(request):
    return HttpResponse("ok", content_type="text/plain")


urlpatterns = [
    path('django-admin/', admin.site.urls),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('healthz', healthz, name='healthz'),
    path('', include('apps.bookings.urls')),
]
