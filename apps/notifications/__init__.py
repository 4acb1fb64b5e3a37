"""Notifications package.

Email delivery for booking confirmations. Called from the Celery task in
``apps.bookings.tasks`` after the booking transaction commits.
"""
