"""Vintage storefront: cart and wishlist state with persistent storage."""

__version__ = "1.0.0"
