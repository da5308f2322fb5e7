"""Wishlist store backed by persistent storage."""
from datetime import datetime
from typing import Optional

from storefront.config import StorageKeys
from storefront.logging import get_logger
from storefront.services.clock import Clock, epoch_ms, format_timestamp, utc_now
from storefront.services.money import Price
from storefront.storage import PersistentStorage

from . import transitions
from .models import WishlistItem, WishlistState

logger = get_logger(__name__)


def decode_items(raw_items: list) -> list[WishlistItem]:
    items = []
    for raw in raw_items:
        try:
            items.append(WishlistItem.from_dict(raw))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning("Skipping unreadable wishlist entry %r: %s", raw, e)
    return items


class WishlistStore:
    """
    Saved products, at most one entry per product id.

    Same shape as ``CartStore``: seeded from storage on construction and
    written back after every mutation.
    """

    def __init__(
        self,
        storage: PersistentStorage,
        key: str = StorageKeys.WISHLIST,
        clock: Clock = utc_now,
    ):
        self.storage = storage
        self.key = key
        self._clock = clock
        self._state = WishlistState(last_updated=clock())
        self._load()

    def _load(self) -> None:
        items = decode_items(self.storage.load(self.key))
        self._state = transitions.load_wishlist(self._state, items, self._clock())
        logger.debug("Wishlist loaded with %d items", len(self._state.items))

    def _commit(self, new_state: WishlistState) -> None:
        self._state = new_state
        self.storage.save(self.key, new_state.to_list())

    def reload(self) -> None:
        """Re-seed from storage, discarding the in-memory view (last write wins)."""
        self._load()

    def _new_item(self, product_id: int, name: str, price: Price, image: str, now: datetime) -> WishlistItem:
        return WishlistItem(
            id=f"wishlist-{product_id}-{epoch_ms(now)}",
            product_id=int(product_id),
            name=name,
            price=price,
            image=image or "",
            added_at=now,
        )

    def add_item(self, product_id: int, name: str, price: Price, image: str = "") -> None:
        """Save a product. Ignored if the product is already saved."""
        now = self._clock()
        item = self._new_item(product_id, name, price, image, now)
        self._commit(transitions.add_item(self._state, item, now))

    def remove_item(self, product_id: int) -> None:
        self._commit(transitions.remove_item(self._state, product_id, self._clock()))

    def toggle_item(self, product_id: int, name: str, price: Price, image: str = "") -> bool:
        """Add if missing, remove if present. Returns True if now saved."""
        now = self._clock()
        item = self._new_item(product_id, name, price, image, now)
        self._commit(transitions.toggle_item(self._state, item, now))
        return self.is_in_wishlist(item.product_id)

    def clear_wishlist(self) -> None:
        self._commit(transitions.clear_wishlist(self._state, self._clock()))

    @property
    def state(self) -> WishlistState:
        return self._state

    @property
    def items(self) -> tuple[WishlistItem, ...]:
        return self._state.items

    @property
    def last_updated(self) -> datetime:
        return self._state.last_updated

    @property
    def item_count(self) -> int:
        return self._state.item_count

    def get_item(self, product_id: int) -> Optional[WishlistItem]:
        return next((item for item in self._state.items if item.product_id == product_id), None)

    def is_in_wishlist(self, product_id: int) -> bool:
        return self._state.contains(product_id)

    def to_dict(self) -> dict:
        return {
            "items": self._state.to_list(),
            "item_count": self.item_count,
            "last_updated": format_timestamp(self.last_updated),
        }
