"""Pytest configuration and fixtures"""
import os
from datetime import datetime, timedelta, timezone
from unittest.mock import Mock

import pytest

# Set test environment variables
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test_key")
os.environ.setdefault("PUBLIC_URL", "http://localhost:3000")

from storefront.cart import CartStore
from storefront.context import StorefrontContext
from storefront.storage import MemoryBackend, PersistentStorage
from storefront.wishlist import WishlistStore


class TickingClock:
    """Deterministic clock advancing one millisecond per call."""

    def __init__(self, start: datetime | None = None):
        self.current = start or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        self.current += timedelta(milliseconds=1)
        return self.current


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def storage(backend):
    return PersistentStorage(backend)


@pytest.fixture
def cart(storage, clock):
    return CartStore(storage, clock=clock)


@pytest.fixture
def wishlist(storage, clock):
    return WishlistStore(storage, clock=clock)


@pytest.fixture
def storefront(storage, clock):
    return StorefrontContext.create(storage, clock=clock)


@pytest.fixture
def sample_article():
    """Article row as returned by Supabase"""
    return {
        "id": 42,
        "created_at": "2025-01-01T00:00:00Z",
        "title": "Levi's 501 Jeans",
        "description": "Vintage 90s denim",
        "price": 450,
        "in_stock": True,
        "for_sale": True,
        "img_url": "https://res.cloudinary.com/demo/legacy.jpg",
        "category_id": 3,
        "images": [
            {"image_url": "https://res.cloudinary.com/demo/back.jpg", "display_order": 2, "is_primary": False},
            {"image_url": "https://res.cloudinary.com/demo/front.jpg", "display_order": 1, "is_primary": True},
        ],
    }


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client"""
    client = Mock()

    table_mock = Mock()
    table_mock.select.return_value = table_mock
    table_mock.eq.return_value = table_mock
    table_mock.limit.return_value = table_mock
    table_mock.order.return_value = table_mock
    table_mock.execute.return_value = Mock(data=[])

    client.table.return_value = table_mock

    return client
