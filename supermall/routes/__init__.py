"""API routes."""

from fastapi import APIRouter

from supermall.routes import banners, categories, health, offers, products, shops

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router, prefix="/health", tags=["health"])

# Directory
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(shops.router, prefix="/shops", tags=["shops"])
api_router.include_router(products.router, prefix="/products", tags=["products"])

# Promotions
api_router.include_router(offers.router, prefix="/offers", tags=["offers"])
api_router.include_router(banners.router, prefix="/banners", tags=["banners"])
