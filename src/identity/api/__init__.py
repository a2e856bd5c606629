"""Identity domain API package."""

from identity.api.admin import admin_user_router
from identity.api.routes import router as auth_router

__all__ = ["auth_router", "admin_user_router"]
