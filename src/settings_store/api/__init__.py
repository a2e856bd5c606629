"""Settings API package."""

from settings_store.api.admin import admin_setting_router

__all__ = ["admin_setting_router"]
