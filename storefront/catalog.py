"""
Catalog Repository - product lookups against the Supabase ``article`` table.

Only used when an item is added to the cart or wishlist; the stores keep a
snapshot and never query the catalog again.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict
from supabase import Client, create_client

from storefront import config
from storefront.logging import get_logger

logger = get_logger(__name__)

ARTICLE_COLUMNS = "*, images:product_images(image_url, display_order, is_primary)"


class ProductImage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    image_url: str
    display_order: int = 0
    is_primary: bool = False


class CatalogProduct(BaseModel):
    """Catalog article as stored in Supabase."""
    model_config = ConfigDict(extra="ignore")  # Ignore unknown fields from DB

    id: int
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None  # whole SEK
    in_stock: bool = True
    for_sale: bool = True  # false = rental
    img_url: Optional[str] = None  # legacy single image
    images: list[ProductImage] = []

    @property
    def display_name(self) -> str:
        return self.title or "Product"

    @property
    def display_price(self) -> int | float:
        if self.price is None:
            return 0
        return int(self.price) if float(self.price).is_integer() else self.price

    @property
    def primary_image(self) -> str:
        """Primary image, else the first by display order, else the legacy ``img_url``."""
        if self.images:
            primary = next((img for img in self.images if img.is_primary), None)
            if primary is None:
                primary = min(self.images, key=lambda img: img.display_order)
            return primary.image_url
        return self.img_url or ""


class CatalogRepository:
    """Read-only access to catalog articles."""

    def __init__(self, client: Client) -> None:
        self.client = client

    async def get_by_id(self, product_id: int) -> Optional[CatalogProduct]:
        """Get article with its images, or None if it does not exist."""
        result = (
            self.client.table("article")
            .select(ARTICLE_COLUMNS)
            .eq("id", product_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return CatalogProduct(**result.data[0])


_catalog: Optional[CatalogRepository] = None


def get_catalog() -> CatalogRepository:
    """Catalog repository on a lazily created Supabase client."""
    global _catalog
    if _catalog is None:
        if not config.SUPABASE_URL or not config.SUPABASE_ANON_KEY:
            raise ValueError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
        _catalog = CatalogRepository(create_client(config.SUPABASE_URL, config.SUPABASE_ANON_KEY))
    return _catalog
