"""
Pure cart transitions.

Every function takes the current ``CartState`` and returns a new one; the
input is never modified. All transitions finish by dropping lines whose
quantity is not positive, so bad quantities are absorbed instead of raised.
"""
from dataclasses import replace
from datetime import datetime
from typing import Iterable

from .models import CartLineItem, CartState


def _settle(items: Iterable[CartLineItem], now: datetime) -> CartState:
    return CartState(
        items=tuple(item for item in items if item.quantity > 0),
        last_updated=now,
    )


def add_item(state: CartState, line: CartLineItem, now: datetime) -> CartState:
    """Merge into the line for the same product, or append ``line``."""
    existing = next(
        (item for item in state.items if item.product_id == line.product_id),
        None,
    )

    if existing is None:
        return _settle((*state.items, line), now)

    return _settle(
        (
            replace(item, quantity=item.quantity + line.quantity)
            if item is existing else item
            for item in state.items
        ),
        now,
    )


def remove_item(state: CartState, line_id: str, now: datetime) -> CartState:
    return _settle((item for item in state.items if item.id != line_id), now)


def update_quantity(state: CartState, line_id: str, quantity: int, now: datetime) -> CartState:
    """Set the quantity of one line; zero or less removes it."""
    return _settle(
        (
            replace(item, quantity=quantity) if item.id == line_id else item
            for item in state.items
        ),
        now,
    )


def clear_cart(state: CartState, now: datetime) -> CartState:
    return CartState(items=(), last_updated=now)


def load_cart(state: CartState, items: Iterable[CartLineItem], now: datetime) -> CartState:
    """
    Replace all lines with ``items``.

    Lines sharing a product id are folded into the first one so that
    lookups by product id stay exact.
    """
    merged: list[CartLineItem] = []
    index_by_product: dict[int, int] = {}

    for item in items:
        if item.quantity <= 0:
            continue
        position = index_by_product.get(item.product_id)
        if position is None:
            index_by_product[item.product_id] = len(merged)
            merged.append(item)
        else:
            first = merged[position]
            merged[position] = replace(first, quantity=first.quantity + item.quantity)

    return _settle(merged, now)
