"""Bookings app package.

Owns the booking lifecycle: availability checks against live bookings,
pending bookings backed by gateway orders, signature-verified payment
confirmation and owner cancellation.
"""
