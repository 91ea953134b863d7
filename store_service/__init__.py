"""Marketplace backend: users, catalog, cart, checkout, reviews and wishlists."""

__version__ = "0.1.0"
