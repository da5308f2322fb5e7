"""
Cart Router

Every response is the full cart snapshot: lines plus the derived
``item_count`` and ``subtotal``, so consumers never recompute them.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.cart import CartStore
from storefront.catalog import CatalogRepository, get_catalog
from storefront.context import get_cart
from storefront.errors import ERROR_LINE_NOT_FOUND, ERROR_PRODUCT_NOT_FOUND, ERROR_PRODUCT_OUT_OF_STOCK
from storefront.logging import get_logger
from .models import AddToCartRequest, UpdateCartItemRequest

logger = get_logger(__name__)

router = APIRouter(tags=["cart"])


@router.get("/cart")
async def get_cart_view(cart: CartStore = Depends(get_cart)):
    """Current cart with derived totals."""
    return cart.to_dict()


@router.post("/cart/items")
async def add_to_cart(
    request: AddToCartRequest,
    cart: CartStore = Depends(get_cart),
    catalog: CatalogRepository = Depends(get_catalog),
):
    """Add a product, snapshotting its current catalog name, price and image."""
    product = await catalog.get_by_id(request.product_id)
    if not product:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)
    if not product.in_stock:
        raise HTTPException(status_code=400, detail=ERROR_PRODUCT_OUT_OF_STOCK)

    cart.add_item(
        product_id=product.id,
        name=product.display_name,
        price=product.display_price,
        image=product.primary_image,
        quantity=request.quantity,
    )
    logger.info("Added product %s x%d to cart", product.id, request.quantity)
    return cart.to_dict()


@router.patch("/cart/items/{line_id}")
async def update_cart_item(
    line_id: str,
    request: UpdateCartItemRequest,
    cart: CartStore = Depends(get_cart),
):
    """Update line quantity (0 = remove)."""
    if cart.find_line(line_id) is None:
        raise HTTPException(status_code=404, detail=ERROR_LINE_NOT_FOUND)
    cart.update_quantity(line_id, request.quantity)
    return cart.to_dict()


@router.delete("/cart/items/{line_id}")
async def remove_cart_item(line_id: str, cart: CartStore = Depends(get_cart)):
    """Remove a line. Unknown ids are ignored."""
    cart.remove_item(line_id)
    return cart.to_dict()


@router.delete("/cart")
async def clear_cart(cart: CartStore = Depends(get_cart)):
    cart.clear_cart()
    return cart.to_dict()
