"""Booking domain: aggregates, events and the reservation calendar."""
