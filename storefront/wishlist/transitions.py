"""
Pure wishlist transitions.

The wishlist never holds two items for the same product: adding a product
that is already saved returns the state untouched.
"""
from datetime import datetime
from typing import Iterable

from .models import WishlistItem, WishlistState


def add_item(state: WishlistState, item: WishlistItem, now: datetime) -> WishlistState:
    if state.contains(item.product_id):
        return state
    return WishlistState(items=(*state.items, item), last_updated=now)


def remove_item(state: WishlistState, product_id: int, now: datetime) -> WishlistState:
    return WishlistState(
        items=tuple(item for item in state.items if item.product_id != product_id),
        last_updated=now,
    )


def toggle_item(state: WishlistState, item: WishlistItem, now: datetime) -> WishlistState:
    if state.contains(item.product_id):
        return remove_item(state, item.product_id, now)
    return add_item(state, item, now)


def clear_wishlist(state: WishlistState, now: datetime) -> WishlistState:
    return WishlistState(items=(), last_updated=now)


def load_wishlist(state: WishlistState, items: Iterable[WishlistItem], now: datetime) -> WishlistState:
    """Replace all items, keeping only the first entry per product."""
    seen: set[int] = set()
    unique = []
    for item in items:
        if item.product_id in seen:
            continue
        seen.add(item.product_id)
        unique.append(item)
    return WishlistState(items=tuple(unique), last_updated=now)
