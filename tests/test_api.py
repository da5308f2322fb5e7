"""Tests for API endpoints"""
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from api.index import create_app
from storefront.catalog import CatalogProduct, get_catalog
from storefront.errors import CheckoutError
from storefront.routers.deps import get_checkout_client


@pytest.fixture
def catalog(sample_article):
    """Catalog repository resolving product 42 and out-of-stock product 43"""
    products = {
        42: CatalogProduct(**sample_article),
        43: CatalogProduct(**{**sample_article, "id": 43, "title": "Sold Out Boots", "in_stock": False}),
    }
    repo = Mock()
    repo.get_by_id = AsyncMock(side_effect=lambda product_id: products.get(product_id))
    return repo


@pytest.fixture
def stripe_client():
    client = Mock()
    client.create_session = AsyncMock(
        return_value={"session_id": "cs_test_1", "url": "https://checkout.stripe.com/c/cs_test_1"}
    )
    return client


@pytest.fixture
def app(storefront, catalog, stripe_client):
    app = create_app(storefront)
    app.dependency_overrides[get_catalog] = lambda: catalog
    app.dependency_overrides[get_checkout_client] = lambda: stripe_client
    return app


@pytest.fixture
def client(app):
    """Test client"""
    return TestClient(app)


def test_health_check(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestCartEndpoints:

    def test_empty_cart(self, client):
        response = client.get("/api/cart")

        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.json()["item_count"] == 0

    def test_add_snapshots_catalog_data(self, client):
        response = client.post("/api/cart/items", json={"product_id": 42, "quantity": 2})

        assert response.status_code == 200
        data = response.json()
        assert data["item_count"] == 2
        assert data["subtotal"] == 900.0
        assert data["items"][0]["name"] == "Levi's 501 Jeans"
        assert data["items"][0]["image"] == "https://res.cloudinary.com/demo/front.jpg"

    def test_add_unknown_product(self, client):
        response = client.post("/api/cart/items", json={"product_id": 999})
        assert response.status_code == 404

    def test_add_out_of_stock(self, client):
        response = client.post("/api/cart/items", json={"product_id": 43})
        assert response.status_code == 400

    def test_add_rejects_zero_quantity(self, client):
        response = client.post("/api/cart/items", json={"product_id": 42, "quantity": 0})
        assert response.status_code == 422

    def test_update_to_zero_removes_line(self, client):
        line_id = client.post("/api/cart/items", json={"product_id": 42}).json()["items"][0]["id"]

        response = client.patch(f"/api/cart/items/{line_id}", json={"quantity": 0})

        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_update_unknown_line(self, client):
        response = client.patch("/api/cart/items/nope", json={"quantity": 2})
        assert response.status_code == 404

    def test_remove_and_clear(self, client, storefront):
        line_id = client.post("/api/cart/items", json={"product_id": 42}).json()["items"][0]["id"]

        assert client.delete(f"/api/cart/items/{line_id}").json()["item_count"] == 0

        client.post("/api/cart/items", json={"product_id": 42})
        assert client.delete("/api/cart").json()["items"] == []
        assert storefront.cart.items == ()


class TestWishlistEndpoints:

    def test_add_and_membership(self, client):
        response = client.post("/api/wishlist/items", json={"product_id": 42})

        assert response.status_code == 200
        assert response.json()["in_wishlist"] is True
        assert client.get("/api/wishlist/items/42").json()["in_wishlist"] is True

    def test_add_unknown_product(self, client):
        assert client.post("/api/wishlist/items", json={"product_id": 999}).status_code == 404

    def test_toggle(self, client):
        assert client.post("/api/wishlist/toggle", json={"product_id": 42}).json()["in_wishlist"] is True

        response = client.post("/api/wishlist/toggle", json={"product_id": 42})

        assert response.json()["in_wishlist"] is False
        assert response.json()["item_count"] == 0

    def test_out_of_stock_can_be_saved(self, client):
        assert client.post("/api/wishlist/items", json={"product_id": 43}).json()["in_wishlist"] is True

    def test_move_to_cart(self, client):
        client.post("/api/wishlist/items", json={"product_id": 42})

        response = client.post("/api/wishlist/items/42/move-to-cart")

        assert response.status_code == 200
        assert response.json()["cart"]["item_count"] == 1
        assert response.json()["wishlist"]["in_wishlist"] is False

    def test_move_to_cart_not_saved(self, client):
        assert client.post("/api/wishlist/items/42/move-to-cart").status_code == 404

    def test_remove_and_clear(self, client):
        client.post("/api/wishlist/items", json={"product_id": 42})

        assert client.delete("/api/wishlist/items/42").json()["item_count"] == 0

        client.post("/api/wishlist/items", json={"product_id": 42})
        assert client.delete("/api/wishlist").json()["items"] == []


class TestCheckoutEndpoints:

    def test_summary(self, client):
        client.post("/api/cart/items", json={"product_id": 42, "quantity": 2})

        data = client.get("/api/checkout/summary").json()

        assert data["subtotal"] == 900.0
        assert data["tax"] == 225.0
        assert data["total"] == 1125.0

    def test_create_session(self, client, stripe_client, storefront):
        client.post("/api/cart/items", json={"product_id": 42})

        response = client.post("/api/checkout", json={"customer_email": "shopper@example.com"})

        assert response.status_code == 200
        assert response.json()["url"].startswith("https://checkout.stripe.com/")
        stripe_client.create_session.assert_awaited_once_with(storefront.cart.items, "shopper@example.com")

    def test_create_session_error(self, client, stripe_client):
        stripe_client.create_session.side_effect = CheckoutError("No items in cart", status_code=400)

        response = client.post("/api/checkout", json={})

        assert response.status_code == 400
        assert response.json()["detail"] == "No items in cart"

    def test_success_clears_cart(self, client, storefront):
        client.post("/api/cart/items", json={"product_id": 42})

        response = client.post("/api/checkout/success")

        assert response.status_code == 200
        assert response.json()["items"] == []
        assert storefront.cart.items == ()
