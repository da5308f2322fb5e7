"""Cart package: models, pure transitions, and the persistent store."""
from .models import CartLineItem, CartState
from .service import CartStore

__all__ = [
    "CartLineItem",
    "CartState",
    "CartStore",
]
