"""
Shared Dependencies for Routers

Store access comes from ``storefront.context``; this module adds the
external clients, which are created once in the app lifespan.
"""
from fastapi import Request

from storefront.checkout import StripeCheckoutClient


def get_checkout_client(request: Request) -> StripeCheckoutClient:
    """Stripe client installed on ``app.state`` (created lazily if missing)."""
    client = getattr(request.app.state, "checkout_client", None)
    if client is None:
        client = StripeCheckoutClient()
        request.app.state.checkout_client = client
    return client
