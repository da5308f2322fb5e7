"""Wishlist models."""
from dataclasses import dataclass, field
from datetime import datetime

from storefront.services.clock import format_timestamp, parse_timestamp, utc_now
from storefront.services.money import Price, to_price


@dataclass(frozen=True)
class WishlistItem:
    """Saved product. ``product_id`` is unique within a wishlist."""
    id: str
    product_id: int
    name: str
    price: Price
    image: str
    added_at: datetime

    def __post_init__(self):
        object.__setattr__(self, "price", to_price(self.price))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "productId": self.product_id,
            "name": self.name,
            "price": self.price,
            "image": self.image,
            "addedAt": format_timestamp(self.added_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WishlistItem":
        return cls(
            id=str(data["id"]),
            product_id=int(data["productId"]),
            name=str(data["name"]),
            price=to_price(data["price"]),
            image=str(data.get("image") or ""),
            added_at=parse_timestamp(data["addedAt"]),
        )


@dataclass(frozen=True)
class WishlistState:
    items: tuple[WishlistItem, ...] = ()
    last_updated: datetime = field(default_factory=utc_now)

    @property
    def item_count(self) -> int:
        return len(self.items)

    def contains(self, product_id: int) -> bool:
        return any(item.product_id == product_id for item in self.items)

    def to_list(self) -> list[dict]:
        return [item.to_dict() for item in self.items]
