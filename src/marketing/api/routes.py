"""FastAPI endpoints for storefront promotions."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from marketing.api.schemas import BannerResponse, CampaignResponse, FlashDealWithProductResponse
from marketing.banner.repository import BannerRepository
from marketing.campaign.repository import CampaignRepository
from marketing.flash_deal.repository import FlashDealRepository
from shared.clock import utcnow
from shared.database import get_session

flash_deal_router = APIRouter(prefix="/flash-deals", tags=["flash deals"])
banner_router = APIRouter(prefix="/banners", tags=["banners"])
campaign_router = APIRouter(prefix="/campaigns", tags=["campaigns"])


@flash_deal_router.get("", response_model=list[FlashDealWithProductResponse])
def list_flash_deals(session: Session = Depends(get_session)) -> list[FlashDealWithProductResponse]:
    deals = FlashDealRepository(session).active(utcnow())
    return [FlashDealWithProductResponse.model_validate(d) for d in deals]


@flash_deal_router.get("/{flash_deal_id}", response_model=FlashDealWithProductResponse)
def get_flash_deal(flash_deal_id: int, session: Session = Depends(get_session)) -> FlashDealWithProductResponse:
    return FlashDealWithProductResponse.model_validate(FlashDealRepository(session).get(flash_deal_id))


@banner_router.get("", response_model=list[BannerResponse])
def list_banners(
    is_active: bool | None = Query(None, alias="isActive"),
    session: Session = Depends(get_session),
) -> list[BannerResponse]:
    banners = BannerRepository(session).list(is_active=is_active, now=utcnow())
    return [BannerResponse.model_validate(b) for b in banners]


@campaign_router.get("/active", response_model=list[CampaignResponse])
def active_campaigns(session: Session = Depends(get_session)) -> list[CampaignResponse]:
    return [CampaignResponse.model_validate(c) for c in CampaignRepository(session).active(utcnow())]
