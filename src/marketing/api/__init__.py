"""Marketing domain API package."""

from marketing.api.admin import admin_banner_router, admin_campaign_router, admin_flash_deal_router
from marketing.api.routes import banner_router, campaign_router, flash_deal_router

__all__ = [
    "flash_deal_router",
    "banner_router",
    "campaign_router",
    "admin_flash_deal_router",
    "admin_banner_router",
    "admin_campaign_router",
]
