"""
Checkout - order summary and Stripe Checkout sessions for the cart.

Sessions are created with the ``stripe`` SDK. Its calls block, so they run
in a worker thread to keep the event loop free.
"""
import asyncio
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, Optional

import stripe

from storefront import config
from storefront.cart import CartLineItem, CartStore
from storefront.context import StorefrontContext
from storefront.errors import (
    ERROR_CART_EMPTY,
    ERROR_CHECKOUT_FAILED,
    ERROR_CHECKOUT_NOT_CONFIGURED,
    CheckoutError,
)
from storefront.logging import get_logger, sanitize_string_for_logging
from storefront.services.money import format_money, multiply, round_money, to_float, to_minor_units

logger = get_logger(__name__)



@dataclass(frozen=True)
class CheckoutSummary:
    """Totals shown on the checkout page. Prices include no VAT; ``tax`` is added on top."""
    item_count: int
    subtotal: Decimal
    tax: Decimal
    total: Decimal
    currency: str

    def to_dict(self) -> dict:
        return {
            "item_count": self.item_count,
            "subtotal": to_float(self.subtotal),
            "tax": to_float(self.tax),
            "total": to_float(self.total),
            "currency": self.currency,
            "display_total": format_money(self.total, self.currency),
        }


def build_summary(
    cart: CartStore,
    tax_rate: Decimal = config.TAX_RATE,
    currency: str = config.CHECKOUT_CURRENCY,
) -> CheckoutSummary:
    subtotal = round_money(cart.subtotal)
    tax = round_money(multiply(subtotal, tax_rate))
    return CheckoutSummary(
        item_count=cart.item_count,
        subtotal=subtotal,
        tax=tax,
        total=subtotal + tax,
        currency=currency,
    )


def build_line_items(items: Iterable[CartLineItem], currency: str = config.CHECKOUT_CURRENCY) -> list[dict]:
    """Stripe ``line_items`` for the cart lines, amounts in minor units (öre)."""
    return [
        {
            "price_data": {
                "currency": currency,
                "product_data": {
                    "name": item.name,
                    "images": [item.image] if item.image else [],
                },
                "unit_amount": to_minor_units(item.price),
            },
            "quantity": item.quantity,
        }
        for item in items
    ]


class StripeCheckoutClient:
    """Creates hosted Stripe Checkout sessions."""

    def __init__(
        self,
        secret_key: Optional[str] = None,
        public_url: Optional[str] = None,
        currency: Optional[str] = None,
    ):
        self.secret_key = secret_key if secret_key is not None else config.STRIPE_SECRET_KEY
        self.public_url = (public_url or config.PUBLIC_URL).rstrip("/")
        self.currency = currency or config.CHECKOUT_CURRENCY

        if not self.secret_key:
            logger.warning("STRIPE_SECRET_KEY is not set. Stripe checkout will not work.")

    def build_session_params(self, items: Iterable[CartLineItem], customer_email: Optional[str]) -> dict:
        params: dict[str, Any] = {
            "payment_method_types": ["card"],
            "line_items": build_line_items(items, self.currency),
            "mode": "payment",
            "success_url": f"{self.public_url}/checkout/success?session_id={{CHECKOUT_SESSION_ID}}",
            "cancel_url": f"{self.public_url}/checkout?canceled=true",
            "shipping_address_collection": {
                "allowed_countries": list(config.SHIPPING_COUNTRIES),
            },
        }
        if customer_email:
            params["customer_email"] = customer_email
            params["metadata"] = {"customerEmail": customer_email}
        return params

    async def create_session(
        self,
        items: Iterable[CartLineItem],
        customer_email: Optional[str] = None,
    ) -> dict[str, str]:
        """
        Create a Checkout Session for ``items``.

        Returns:
            ``{"session_id": ..., "url": ...}``

        Raises:
            CheckoutError: not configured (500), empty cart (400),
                Stripe rejected the request or was unreachable (502)
        """
        if not self.secret_key:
            raise CheckoutError(ERROR_CHECKOUT_NOT_CONFIGURED, status_code=500)

        items = list(items)
        if not items:
            raise CheckoutError(ERROR_CART_EMPTY, status_code=400)

        params = self.build_session_params(items, customer_email)

        try:
            session = await asyncio.to_thread(
                lambda: stripe.checkout.Session.create(api_key=self.secret_key, **params)
            )
        except stripe.APIConnectionError as e:
            logger.exception("Stripe network error")
            raise CheckoutError(f"Failed to connect to Stripe: {e.user_message or e!s}") from e
        except stripe.StripeError as e:
            error_detail = e.user_message or str(e)
            logger.error(
                "Stripe API error %s: %s",
                e.http_status, sanitize_string_for_logging(error_detail, 200),
            )
            raise CheckoutError(f"{ERROR_CHECKOUT_FAILED}: {error_detail}") from e

        session_id = getattr(session, "id", None)
        url = getattr(session, "url", None)
        if not session_id or not url:
            logger.error("Stripe: session id or url missing")
            raise CheckoutError(ERROR_CHECKOUT_FAILED)

        logger.info("Stripe checkout session created: %s (%d lines)", session_id, len(items))
        return {"session_id": session_id, "url": url}


def complete_checkout(context: StorefrontContext) -> None:
    """Payment went through: empty the cart."""
    context.cart.clear_cart()
    logger.info("Checkout completed, cart cleared")
