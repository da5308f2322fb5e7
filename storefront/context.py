"""
Storefront context - the single shared handle to the cart and wishlist.

One context is built per running application and handed to consumers
explicitly. With FastAPI it lives on ``app.state`` for the lifetime of the
app and endpoints receive it through ``Depends``:

    @router.get("/cart")
    async def get_cart_view(cart: CartStore = Depends(get_cart)):
        return cart.to_dict()
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import FastAPI, Request

from storefront.cart import CartLineItem, CartStore
from storefront.logging import get_logger
from storefront.services.clock import Clock, utc_now
from storefront.storage import PersistentStorage, create_storage
from storefront.wishlist import WishlistStore

logger = get_logger(__name__)


@dataclass
class StorefrontContext:
    """Cart and wishlist stores sharing one storage medium under separate keys."""

    cart: CartStore
    wishlist: WishlistStore

    @classmethod
    def create(
        cls,
        storage: Optional[PersistentStorage] = None,
        clock: Clock = utc_now,
    ) -> "StorefrontContext":
        """Build both stores, seeding them from ``storage`` (configured backend if omitted)."""
        storage = storage or create_storage()
        context = cls(
            cart=CartStore(storage, clock=clock),
            wishlist=WishlistStore(storage, clock=clock),
        )
        logger.info(
            "Storefront context ready: %d cart lines, %d wishlist items",
            len(context.cart.items), context.wishlist.item_count,
        )
        return context

    def move_to_cart(self, product_id: int) -> Optional[CartLineItem]:
        """
        Move a saved product into the cart (one unit) and drop it from the wishlist.

        Returns the cart line, or None if the product is not in the wishlist.
        """
        item = self.wishlist.get_item(product_id)
        if item is None:
            return None

        line = self.cart.add_item(
            product_id=item.product_id,
            name=item.name,
            price=item.price,
            image=item.image,
            quantity=1,
        )
        self.wishlist.remove_item(item.product_id)
        return line

    def reload(self) -> None:
        """Pick up whatever another process last wrote to the shared medium."""
        self.cart.reload()
        self.wishlist.reload()


# ==================== FASTAPI DEPENDENCIES ====================

def install_storefront(app: FastAPI, context: StorefrontContext) -> StorefrontContext:
    """Attach ``context`` to ``app`` as its single storefront instance."""
    app.state.storefront = context
    return context


def get_storefront(request: Request) -> StorefrontContext:
    """Dependency: the app's storefront context."""
    context = getattr(request.app.state, "storefront", None)
    if context is None:
        raise RuntimeError("Storefront context is not installed on this app")
    return context


def get_cart(request: Request) -> CartStore:
    return get_storefront(request).cart


def get_wishlist(request: Request) -> WishlistStore:
    return get_storefront(request).wishlist
