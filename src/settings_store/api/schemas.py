"""Pydantic request/response schemas for the Settings API."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from shared.schemas import CamelModel


class UpsertSettingRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"value": "Yapee", "group": "general", "description": "Store name shown in the header"}]
        }
    }

    value: str | None = None
    group: str | None = Field(None, max_length=50)
    description: str | None = None


class SettingEntry(CamelModel):
    key: str | None = Field(None, max_length=100)
    value: str | None = None
    group: str | None = Field(None, max_length=50)
    description: str | None = None


class BatchSettingsRequest(CamelModel):
    settings: list[SettingEntry]


class SettingResponse(CamelModel):
    id: str
    key: str
    value: str
    group: str
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
