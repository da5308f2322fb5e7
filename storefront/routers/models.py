"""
Storefront API Pydantic Models

Request bodies shared by the cart, wishlist and checkout routers.
"""
from typing import Optional
from pydantic import BaseModel, Field


# ==================== CART MODELS ====================

class AddToCartRequest(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int  # 0 or less removes the line


# ==================== WISHLIST MODELS ====================

class WishlistItemRequest(BaseModel):
    product_id: int


# ==================== CHECKOUT MODELS ====================

class CheckoutRequest(BaseModel):
    customer_email: Optional[str] = None
