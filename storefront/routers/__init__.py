"""HTTP routers exposing the storefront context to UI consumers."""
from .cart import router as cart_router
from .checkout import router as checkout_router
from .wishlist import router as wishlist_router

__all__ = [
    "cart_router",
    "checkout_router",
    "wishlist_router",
]
