"""Cart store: pure transitions plus persistence after every mutation."""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from storefront.config import StorageKeys
from storefront.logging import get_logger
from storefront.services.clock import Clock, epoch_ms, format_timestamp, utc_now
from storefront.services.money import Price, to_float
from storefront.storage import PersistentStorage

from . import transitions
from .models import CartLineItem, CartState

logger = get_logger(__name__)


def decode_lines(raw_items: list) -> list[CartLineItem]:
    """Decode persisted entries, skipping the ones that are not valid lines."""
    lines = []
    for raw in raw_items:
        try:
            lines.append(CartLineItem.from_dict(raw))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Skipping unreadable cart entry %r: %s", raw, e)
    return lines


class CartStore:
    """
    Shopping cart held in memory and mirrored to persistent storage.

    The store is seeded from storage when constructed. Each mutating
    operation applies one pure transition and then writes the full line
    list back. A failed write is logged by the storage adapter and the
    in-memory cart keeps working.

    Lookups by product id (``get_item_quantity``, ``is_in_cart``) are exact:
    adding a product that is already in the cart always merges into its line.
    """

    def __init__(
        self,
        storage: PersistentStorage,
        key: str = StorageKeys.CART,
        clock: Clock = utc_now,
    ):
        self.storage = storage
        self.key = key
        self._clock = clock
        self._state = CartState(last_updated=clock())
        self._load()

    # ==================== PERSISTENCE ====================

    def _load(self) -> None:
        lines = decode_lines(self.storage.load(self.key))
        self._state = transitions.load_cart(self._state, lines, self._clock())
        logger.debug("Cart loaded with %d lines", len(self._state.items))

    def _commit(self, new_state: CartState) -> None:
        self._state = new_state
        self.storage.save(self.key, new_state.to_list())

    def reload(self) -> None:
        """Re-seed from storage, discarding the in-memory view (last write wins)."""
        self._load()

    # ==================== OPERATIONS ====================

    def add_item(
        self,
        product_id: int,
        name: str,
        price: Price,
        image: str = "",
        quantity: int = 1,
        max_quantity: Optional[int] = None,
    ) -> Optional[CartLineItem]:
        """
        Add ``quantity`` units of a product.

        Returns the resulting line, or None if the product ended up with no
        line (non-positive quantity).
        """
        now = self._clock()
        line = CartLineItem(
            id=f"{product_id}-{epoch_ms(now)}",
            product_id=int(product_id),
            name=name,
            price=price,
            quantity=quantity,
            image=image or "",
            max_quantity=max_quantity,
        )
        self._commit(transitions.add_item(self._state, line, now))
        return self.get_line(line.product_id)

    def remove_item(self, line_id: str) -> None:
        self._commit(transitions.remove_item(self._state, line_id, self._clock()))

    def update_quantity(self, line_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        self._commit(
            transitions.update_quantity(self._state, line_id, quantity, self._clock())
        )

    def clear_cart(self) -> None:
        self._commit(transitions.clear_cart(self._state, self._clock()))

    # ==================== DERIVED VALUES ====================

    @property
    def state(self) -> CartState:
        return self._state

    @property
    def items(self) -> tuple[CartLineItem, ...]:
        return self._state.items

    @property
    def last_updated(self) -> datetime:
        return self._state.last_updated

    @property
    def item_count(self) -> int:
        return self._state.item_count

    @property
    def subtotal(self) -> Decimal:
        return self._state.subtotal

    def get_line(self, product_id: int) -> Optional[CartLineItem]:
        return next((item for item in self._state.items if item.product_id == product_id), None)

    def find_line(self, line_id: str) -> Optional[CartLineItem]:
        return next((item for item in self._state.items if item.id == line_id), None)

    def get_item_quantity(self, product_id: int) -> int:
        line = self.get_line(product_id)
        return line.quantity if line else 0

    def is_in_cart(self, product_id: int) -> bool:
        return self.get_line(product_id) is not None

    def to_dict(self) -> dict:
        """Snapshot for API responses."""
        return {
            "items": self._state.to_list(),
            "item_count": self.item_count,
            "subtotal": to_float(self.subtotal),
            "last_updated": format_timestamp(self.last_updated),
        }
