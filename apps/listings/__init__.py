"""Listings app: rental places published by hosts."""
