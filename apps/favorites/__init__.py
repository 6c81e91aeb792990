"""Favorites app: a traveler's wishlist of listings."""
