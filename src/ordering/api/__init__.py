"""Ordering domain API package."""

from ordering.api.admin import admin_order_router
from ordering.api.routes import cart_router, order_router

__all__ = ["cart_router", "order_router", "admin_order_router"]
