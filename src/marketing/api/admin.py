"""Back-office endpoints for flash deals, banners and campaigns."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from marketing.api.schemas import (
    BannerResponse,
    CampaignResponse,
    CampaignTypeName,
    CreateBannerRequest,
    CreateCampaignRequest,
    CreateFlashDealRequest,
    FlashDealResponse,
    FlashDealWithProductResponse,
    SoldCountRequest,
    UpdateBannerRequest,
    UpdateCampaignRequest,
    UpdateFlashDealRequest,
)
from marketing.banner.management import create_banner, delete_banner, update_banner
from marketing.banner.repository import BannerRepository
from marketing.campaign.management import create_campaign, delete_campaign, update_campaign
from marketing.campaign.repository import CampaignRepository
from marketing.flash_deal.management import (
    create_flash_deal,
    delete_flash_deal,
    increment_sold_count,
    update_flash_deal,
)
from marketing.flash_deal.repository import FlashDealRepository
from shared.clock import utcnow
from shared.database import get_session
from shared.schemas import StatusResponse

admin_flash_deal_router = APIRouter(prefix="/flash-deals", tags=["admin: flash deals"])
admin_banner_router = APIRouter(prefix="/banners", tags=["admin: banners"])
admin_campaign_router = APIRouter(tags=["admin: campaigns"])


# --- Flash deal endpoints ---


@admin_flash_deal_router.get("", response_model=list[FlashDealWithProductResponse])
def list_flash_deals(session: Session = Depends(get_session)) -> list[FlashDealWithProductResponse]:
    return [FlashDealWithProductResponse.model_validate(d) for d in FlashDealRepository(session).list()]


@admin_flash_deal_router.get("/{flash_deal_id}", response_model=FlashDealWithProductResponse)
def get_flash_deal(flash_deal_id: int, session: Session = Depends(get_session)) -> FlashDealWithProductResponse:
    return FlashDealWithProductResponse.model_validate(FlashDealRepository(session).get(flash_deal_id))


@admin_flash_deal_router.post("", status_code=201, response_model=FlashDealResponse)
def create_flash_deal_endpoint(
    body: CreateFlashDealRequest, session: Session = Depends(get_session)
) -> FlashDealResponse:
    return FlashDealResponse.model_validate(create_flash_deal(session, **body.model_dump()))


@admin_flash_deal_router.put("/{flash_deal_id}", response_model=FlashDealResponse)
def update_flash_deal_endpoint(
    flash_deal_id: int, body: UpdateFlashDealRequest, session: Session = Depends(get_session)
) -> FlashDealResponse:
    deal = update_flash_deal(session, flash_deal_id, **body.model_dump(exclude_unset=True))
    return FlashDealResponse.model_validate(deal)


@admin_flash_deal_router.put("/{flash_deal_id}/sold-count", response_model=FlashDealResponse)
def update_sold_count(
    flash_deal_id: int, body: SoldCountRequest, session: Session = Depends(get_session)
) -> FlashDealResponse:
    return FlashDealResponse.model_validate(increment_sold_count(session, flash_deal_id, body.increment))


@admin_flash_deal_router.delete("/{flash_deal_id}", response_model=StatusResponse)
def delete_flash_deal_endpoint(flash_deal_id: int, session: Session = Depends(get_session)) -> StatusResponse:
    delete_flash_deal(session, flash_deal_id)
    return StatusResponse()


# --- Banner endpoints ---


@admin_banner_router.get("", response_model=list[BannerResponse])
def list_banners(session: Session = Depends(get_session)) -> list[BannerResponse]:
    return [BannerResponse.model_validate(b) for b in BannerRepository(session).list()]


@admin_banner_router.get("/{banner_id}", response_model=BannerResponse)
def get_banner(banner_id: int, session: Session = Depends(get_session)) -> BannerResponse:
    return BannerResponse.model_validate(BannerRepository(session).get(banner_id))


@admin_banner_router.post("", status_code=201, response_model=BannerResponse)
def create_banner_endpoint(body: CreateBannerRequest, session: Session = Depends(get_session)) -> BannerResponse:
    return BannerResponse.model_validate(create_banner(session, **body.model_dump()))


@admin_banner_router.put("/{banner_id}", response_model=BannerResponse)
def update_banner_endpoint(
    banner_id: int, body: UpdateBannerRequest, session: Session = Depends(get_session)
) -> BannerResponse:
    return BannerResponse.model_validate(update_banner(session, banner_id, **body.model_dump(exclude_unset=True)))


@admin_banner_router.delete("/{banner_id}", response_model=StatusResponse)
def delete_banner_endpoint(banner_id: int, session: Session = Depends(get_session)) -> StatusResponse:
    delete_banner(session, banner_id)
    return StatusResponse()


# --- Campaign endpoints ---


@admin_campaign_router.get("/campaigns", response_model=list[CampaignResponse])
def list_campaigns(
    type: CampaignTypeName | None = None,
    status: str | None = None,
    search: str | None = None,
    session: Session = Depends(get_session),
) -> list[CampaignResponse]:
    campaigns = CampaignRepository(session).list(type=type, status=status, search=search)
    return [CampaignResponse.model_validate(c) for c in campaigns]


@admin_campaign_router.get("/campaigns/{campaign_id}", response_model=CampaignResponse)
def get_campaign(campaign_id: int, session: Session = Depends(get_session)) -> CampaignResponse:
    return CampaignResponse.model_validate(CampaignRepository(session).get(campaign_id))


@admin_campaign_router.post("/campaigns", status_code=201, response_model=CampaignResponse)
def create_campaign_endpoint(
    body: CreateCampaignRequest, session: Session = Depends(get_session)
) -> CampaignResponse:
    return CampaignResponse.model_validate(create_campaign(session, **body.model_dump()))


@admin_campaign_router.put("/campaigns/{campaign_id}", response_model=CampaignResponse)
def update_campaign_endpoint(
    campaign_id: int, body: UpdateCampaignRequest, session: Session = Depends(get_session)
) -> CampaignResponse:
    campaign = update_campaign(session, campaign_id, **body.model_dump(exclude_unset=True))
    return CampaignResponse.model_validate(campaign)


@admin_campaign_router.delete("/campaigns/{campaign_id}", response_model=StatusResponse)
def delete_campaign_endpoint(campaign_id: int, session: Session = Depends(get_session)) -> StatusResponse:
    delete_campaign(session, campaign_id)
    return StatusResponse(message="Campaign deleted successfully")


@admin_campaign_router.get("/active-campaigns", response_model=list[CampaignResponse])
def active_campaigns(session: Session = Depends(get_session)) -> list[CampaignResponse]:
    return [CampaignResponse.model_validate(c) for c in CampaignRepository(session).active(utcnow())]
