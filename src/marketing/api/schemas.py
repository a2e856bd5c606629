"""Pydantic request/response schemas for the Marketing API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from catalogue.api.schemas import ProductResponse
from shared.schemas import CamelModel, UtcDatetime

CampaignTypeName = Literal["discount", "flash_sale", "free_shipping", "voucher", "bundle"]

# --- Request Schemas ---


class CreateFlashDealRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "productId": 1,
                    "startDate": "2026-11-11T00:00:00Z",
                    "endDate": "2026-11-11T23:59:59Z",
                    "totalStock": 200,
                }
            ]
        }
    }

    product_id: int
    start_date: UtcDatetime
    end_date: UtcDatetime
    total_stock: int = Field(..., ge=0)
    sold_count: int = Field(0, ge=0)


class UpdateFlashDealRequest(CamelModel):
    product_id: int | None = None
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None
    total_stock: int | None = Field(None, ge=0)
    sold_count: int | None = Field(None, ge=0)


class SoldCountRequest(CamelModel):
    increment: int


class CreateBannerRequest(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    title_en: str | None = Field(None, max_length=255)
    title_zh: str | None = Field(None, max_length=255)
    description: str | None = None
    description_en: str | None = None
    description_zh: str | None = None
    image_url: str = Field(..., min_length=1, max_length=500)
    link_url: str | None = Field(None, max_length=500)
    is_active: bool = True
    position: int = 0
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None


class UpdateBannerRequest(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    title_en: str | None = Field(None, max_length=255)
    title_zh: str | None = Field(None, max_length=255)
    description: str | None = None
    description_en: str | None = None
    description_zh: str | None = None
    image_url: str | None = Field(None, min_length=1, max_length=500)
    link_url: str | None = Field(None, max_length=500)
    is_active: bool | None = None
    position: int | None = None
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None


class CreateCampaignRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    type: CampaignTypeName
    discount_value: float | None = Field(None, ge=0)
    is_active: bool = True
    start_date: UtcDatetime
    end_date: UtcDatetime


class UpdateCampaignRequest(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    type: CampaignTypeName | None = None
    discount_value: float | None = Field(None, ge=0)
    is_active: bool | None = None
    start_date: UtcDatetime | None = None
    end_date: UtcDatetime | None = None


# --- Response Schemas ---


class FlashDealResponse(CamelModel):
    id: int
    product_id: int
    start_date: datetime
    end_date: datetime
    total_stock: int
    sold_count: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FlashDealWithProductResponse(FlashDealResponse):
    product: ProductResponse


class BannerResponse(CamelModel):
    id: int
    title: str
    title_en: str | None = None
    title_zh: str | None = None
    description: str | None = None
    description_en: str | None = None
    description_zh: str | None = None
    image_url: str
    link_url: str | None = None
    is_active: bool
    position: int
    start_date: datetime | None = None
    end_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CampaignResponse(CamelModel):
    id: int
    name: str
    description: str | None = None
    type: str
    discount_value: float | None = None
    is_active: bool
    start_date: datetime
    end_date: datetime
    created_at: datetime | None = None
    updated_at: datetime | None = None
