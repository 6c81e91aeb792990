"""Booking use cases and reactions to booking events."""
