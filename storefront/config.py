"""
Storefront configuration.

All settings come from environment variables; a local ``.env`` file is
loaded first when present.
"""

import os
from decimal import Decimal
from pathlib import Path

from dotenv import load_dotenv

_env_path = Path(__file__).resolve().parent.parent / ".env"
if _env_path.exists():
    load_dotenv(_env_path)


# Storage for cart / wishlist state
STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "file").strip().lower()  # memory | file | redis
STORAGE_DIR = os.environ.get("STORAGE_DIR", str(Path.home() / ".storefront"))

# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")

# Catalog (Supabase)
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")

# Checkout (Stripe)
STRIPE_SECRET_KEY = os.environ.get("STRIPE_SECRET_KEY", "")
PUBLIC_URL = os.environ.get("PUBLIC_URL", "http://localhost:3000")
CHECKOUT_CURRENCY = os.environ.get("CHECKOUT_CURRENCY", "sek").strip().lower()
TAX_RATE = Decimal(os.environ.get("TAX_RATE", "0.25"))  # Swedish VAT
SHIPPING_COUNTRIES = ("SE", "NO", "DK", "FI", "US", "CA", "GB")


class StorageKeys:
    """Keys reserved in the shared storage medium, one per store."""

    CART = "shopping-cart"
    WISHLIST = "product-wishlist"
