"""Tests for catalog lookups"""
import pytest

from storefront.catalog import CatalogProduct, CatalogRepository


@pytest.mark.asyncio
async def test_get_by_id(mock_supabase_client, sample_article):
    mock_supabase_client.table.return_value.execute.return_value.data = [sample_article]
    repo = CatalogRepository(mock_supabase_client)

    product = await repo.get_by_id(42)

    assert product is not None
    assert product.id == 42
    assert product.display_name == "Levi's 501 Jeans"
    mock_supabase_client.table.assert_called_with("article")
    mock_supabase_client.table.return_value.eq.assert_called_with("id", 42)


@pytest.mark.asyncio
async def test_get_by_id_not_found(mock_supabase_client):
    repo = CatalogRepository(mock_supabase_client)

    assert await repo.get_by_id(999) is None


def test_primary_image_prefers_flagged_image(sample_article):
    product = CatalogProduct(**sample_article)

    assert product.primary_image == "https://res.cloudinary.com/demo/front.jpg"


def test_primary_image_falls_back_to_display_order(sample_article):
    for image in sample_article["images"]:
        image["is_primary"] = False

    assert CatalogProduct(**sample_article).primary_image == "https://res.cloudinary.com/demo/front.jpg"


def test_primary_image_falls_back_to_legacy_url(sample_article):
    sample_article["images"] = []

    assert CatalogProduct(**sample_article).primary_image == "https://res.cloudinary.com/demo/legacy.jpg"


def test_snapshot_defaults_for_sparse_article():
    product = CatalogProduct(id=5)

    assert product.display_name == "Product"
    assert product.display_price == 0
    assert product.primary_image == ""


def test_display_price_keeps_whole_numbers_integral(sample_article):
    assert CatalogProduct(**sample_article).display_price == 450
    assert isinstance(CatalogProduct(**sample_article).display_price, int)
