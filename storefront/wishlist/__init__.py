"""Wishlist package: models, pure transitions, and the persistent store."""
from .models import WishlistItem, WishlistState
from .service import WishlistStore

__all__ = [
    "WishlistItem",
    "WishlistState",
    "WishlistStore",
]
