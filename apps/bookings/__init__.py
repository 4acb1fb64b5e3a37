"""Bookings app package.

This app encapsulates the slot booking domain: the booking and slot
override models, the availability calculator and the services that create,
close and cancel bookings. Double bookings are prevented with row locks
taken inside database transactions, backed by a unique constraint on
``(date, slot)``.
"""
