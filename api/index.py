"""
Vintage Storefront - Main FastAPI Application

Single entry point for the cart, wishlist and checkout API.
"""
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront import __version__, config
from storefront.checkout import StripeCheckoutClient
from storefront.context import StorefrontContext, install_storefront
from storefront.logging import get_logger
from storefront.routers import cart_router, checkout_router, wishlist_router

logger = get_logger(__name__)


def create_app(context: Optional[StorefrontContext] = None) -> FastAPI:
    """
    Build the API around one storefront context.

    Without ``context`` the stores are created at startup from the
    configured storage backend.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler"""
        # Startup
        if getattr(app.state, "storefront", None) is None:
            install_storefront(app, StorefrontContext.create())
        if getattr(app.state, "checkout_client", None) is None:
            app.state.checkout_client = StripeCheckoutClient()
        yield
        # Shutdown
        logger.info("Storefront shutting down")

    app = FastAPI(
        title="Vintage Storefront",
        description="Cart, wishlist and checkout API",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.PUBLIC_URL],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if context is not None:
        install_storefront(app, context)

    app.include_router(cart_router, prefix="/api")
    app.include_router(wishlist_router, prefix="/api")
    app.include_router(checkout_router, prefix="/api")

    @app.get("/api/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "ok", "service": "storefront"}

    return app


app = create_app()
