"""Checkout Router"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.cart import CartStore
from storefront.checkout import StripeCheckoutClient, build_summary, complete_checkout
from storefront.context import StorefrontContext, get_cart, get_storefront
from storefront.errors import CheckoutError
from storefront.logging import get_logger, mask_email_for_logging
from .deps import get_checkout_client
from .models import CheckoutRequest

logger = get_logger(__name__)

router = APIRouter(tags=["checkout"])


@router.get("/checkout/summary")
async def checkout_summary(cart: CartStore = Depends(get_cart)):
    """Subtotal, VAT and total for the current cart."""
    return build_summary(cart).to_dict()


@router.post("/checkout")
async def create_checkout_session(
    request: CheckoutRequest,
    cart: CartStore = Depends(get_cart),
    stripe: StripeCheckoutClient = Depends(get_checkout_client),
):
    """Create a hosted Stripe Checkout session for the cart."""
    logger.info(
        "Checkout requested: %d lines, customer %s",
        len(cart.items), mask_email_for_logging(request.customer_email),
    )
    try:
        return await stripe.create_session(cart.items, request.customer_email)
    except CheckoutError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/checkout/success")
async def checkout_success(storefront: StorefrontContext = Depends(get_storefront)):
    """Called after Stripe redirects back on success."""
    complete_checkout(storefront)
    return storefront.cart.to_dict()
