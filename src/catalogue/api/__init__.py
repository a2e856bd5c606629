"""Catalogue domain API package."""

from catalogue.api.admin import admin_brand_router, admin_category_router, admin_product_router
from catalogue.api.routes import brand_router, category_router, product_router

__all__ = [
    "product_router",
    "category_router",
    "brand_router",
    "admin_product_router",
    "admin_category_router",
    "admin_brand_router",
]
