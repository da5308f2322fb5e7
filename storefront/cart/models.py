"""Cart models: line items and the store envelope."""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from storefront.services.clock import utc_now
from storefront.services.money import Price, line_total, to_price


@dataclass(frozen=True)
class CartLineItem:
    """
    One product in the cart with its quantity.

    ``name``, ``price`` and ``image`` are a snapshot of the catalog taken
    when the line was added; they are never refreshed.
    """
    id: str
    product_id: int
    name: str
    price: Price
    quantity: int
    image: str = ""
    max_quantity: Optional[int] = None  # advisory stock limit, not enforced

    def __post_init__(self):
        # Normalize numeric fields so the line always serializes to JSON numbers
        object.__setattr__(self, "price", to_price(self.price))
        object.__setattr__(self, "quantity", int(self.quantity))
        if self.max_quantity is not None:
            object.__setattr__(self, "max_quantity", int(self.max_quantity))

    @property
    def total_price(self) -> Decimal:
        """Unit price times quantity."""
        return line_total(self.price, self.quantity)

    def to_dict(self) -> dict:
        """Serialize to the persisted camelCase layout."""
        data = {
            "id": self.id,
            "productId": self.product_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "image": self.image,
        }
        if self.max_quantity is not None:
            data["maxQuantity"] = self.max_quantity
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "CartLineItem":
        """
        Create from the persisted layout.

        Raises:
            KeyError, TypeError, ValueError: the entry is not a valid line
        """
        max_quantity = data.get("maxQuantity")
        return cls(
            id=str(data["id"]),
            product_id=int(data["productId"]),
            name=str(data["name"]),
            price=to_price(data["price"]),
            quantity=int(data["quantity"]),
            image=str(data.get("image") or ""),
            max_quantity=int(max_quantity) if max_quantity is not None else None,
        )


@dataclass(frozen=True)
class CartState:
    """Store envelope: ordered lines plus the time of the last transition."""
    items: tuple[CartLineItem, ...] = ()
    last_updated: datetime = field(default_factory=utc_now)

    @property
    def item_count(self) -> int:
        """Total number of units across all lines."""
        return sum(item.quantity for item in self.items)

    @property
    def subtotal(self) -> Decimal:
        """Sum of price * quantity over all lines."""
        return sum((item.total_price for item in self.items), Decimal("0"))

    def to_list(self) -> list[dict]:
        return [item.to_dict() for item in self.items]
