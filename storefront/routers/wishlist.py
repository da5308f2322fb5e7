"""Wishlist Router"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.catalog import CatalogRepository, get_catalog
from storefront.context import StorefrontContext, get_storefront, get_wishlist
from storefront.errors import ERROR_NOT_IN_WISHLIST, ERROR_PRODUCT_NOT_FOUND
from storefront.logging import get_logger
from storefront.wishlist import WishlistStore
from .models import WishlistItemRequest

logger = get_logger(__name__)

router = APIRouter(tags=["wishlist"])


def _wishlist_response(wishlist: WishlistStore, product_id: int | None = None) -> dict:
    data = wishlist.to_dict()
    if product_id is not None:
        data["in_wishlist"] = wishlist.is_in_wishlist(product_id)
    return data


@router.get("/wishlist")
async def get_wishlist_view(wishlist: WishlistStore = Depends(get_wishlist)):
    return _wishlist_response(wishlist)


@router.get("/wishlist/items/{product_id}")
async def get_wishlist_membership(product_id: int, wishlist: WishlistStore = Depends(get_wishlist)):
    """Whether a product is saved."""
    return {"product_id": product_id, "in_wishlist": wishlist.is_in_wishlist(product_id)}


@router.post("/wishlist/items")
async def add_to_wishlist(
    request: WishlistItemRequest,
    wishlist: WishlistStore = Depends(get_wishlist),
    catalog: CatalogRepository = Depends(get_catalog),
):
    """Save a product. Saving an already saved product changes nothing."""
    if wishlist.is_in_wishlist(request.product_id):
        return _wishlist_response(wishlist, request.product_id)

    product = await catalog.get_by_id(request.product_id)
    if not product:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)

    wishlist.add_item(
        product_id=product.id,
        name=product.display_name,
        price=product.display_price,
        image=product.primary_image,
    )
    return _wishlist_response(wishlist, product.id)


@router.post("/wishlist/toggle")
async def toggle_wishlist_item(
    request: WishlistItemRequest,
    wishlist: WishlistStore = Depends(get_wishlist),
    catalog: CatalogRepository = Depends(get_catalog),
):
    """Save the product if missing, otherwise remove it."""
    if wishlist.is_in_wishlist(request.product_id):
        wishlist.remove_item(request.product_id)
        return _wishlist_response(wishlist, request.product_id)

    product = await catalog.get_by_id(request.product_id)
    if not product:
        raise HTTPException(status_code=404, detail=ERROR_PRODUCT_NOT_FOUND)

    wishlist.toggle_item(
        product_id=product.id,
        name=product.display_name,
        price=product.display_price,
        image=product.primary_image,
    )
    return _wishlist_response(wishlist, product.id)


@router.delete("/wishlist/items/{product_id}")
async def remove_from_wishlist(product_id: int, wishlist: WishlistStore = Depends(get_wishlist)):
    wishlist.remove_item(product_id)
    return _wishlist_response(wishlist, product_id)


@router.post("/wishlist/items/{product_id}/move-to-cart")
async def move_to_cart(product_id: int, storefront: StorefrontContext = Depends(get_storefront)):
    """Put one unit of a saved product in the cart and unsave it."""
    line = storefront.move_to_cart(product_id)
    if line is None:
        raise HTTPException(status_code=404, detail=ERROR_NOT_IN_WISHLIST)
    logger.info("Moved product %s from wishlist to cart", product_id)
    return {
        "cart": storefront.cart.to_dict(),
        "wishlist": _wishlist_response(storefront.wishlist, product_id),
    }


@router.delete("/wishlist")
async def clear_wishlist(wishlist: WishlistStore = Depends(get_wishlist)):
    wishlist.clear_wishlist()
    return _wishlist_response(wishlist)
