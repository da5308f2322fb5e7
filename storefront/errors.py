"""
Common Error Constants

Centralized error messages shared by routers and services.
"""

# Product errors
ERROR_PRODUCT_NOT_FOUND = "Product not found"
ERROR_PRODUCT_OUT_OF_STOCK = "Product out of stock"

# Cart / wishlist errors
ERROR_CART_EMPTY = "No items in cart"
ERROR_LINE_NOT_FOUND = "Cart line not found"
ERROR_NOT_IN_WISHLIST = "Product is not in wishlist"

# Checkout errors
ERROR_CHECKOUT_NOT_CONFIGURED = (
    "Stripe is not configured. Please set STRIPE_SECRET_KEY environment variable."
)
ERROR_CHECKOUT_FAILED = "Failed to create checkout session"


class CheckoutError(Exception):
    """Raised when a checkout session cannot be created.

    ``status_code`` is the HTTP status the API layer should answer with.
    """

    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
