"""Back-office endpoints for store settings."""

from fastapi import APIRouter, Response

from settings_store.api.schemas import BatchSettingsRequest, SettingResponse, UpsertSettingRequest
from settings_store.setting.management import (
    batch_upsert,
    delete_setting,
    get_setting,
    grouped_settings,
    upsert_setting,
)
from shared.schemas import StatusResponse

admin_setting_router = APIRouter(prefix="/settings", tags=["admin: settings"])


@admin_setting_router.get("", response_model=dict[str, list[SettingResponse]])
def list_settings(group: str | None = None) -> dict[str, list[SettingResponse]]:
    return {
        name: [SettingResponse.model_validate(s) for s in settings]
        for name, settings in grouped_settings(group=group).items()
    }


@admin_setting_router.post("/batch", response_model=list[SettingResponse])
def batch_update_settings(body: BatchSettingsRequest) -> list[SettingResponse]:
    settings = batch_upsert([entry.model_dump() for entry in body.settings])
    return [SettingResponse.model_validate(s) for s in settings]


@admin_setting_router.get("/{key}", response_model=SettingResponse)
def read_setting(key: str) -> SettingResponse:
    return SettingResponse.model_validate(get_setting(key))


@admin_setting_router.put("/{key}", response_model=SettingResponse)
def put_setting(key: str, body: UpsertSettingRequest, response: Response) -> SettingResponse:
    setting, created = upsert_setting(key, body.value, group=body.group, description=body.description)
    if created:
        response.status_code = 201
    return SettingResponse.model_validate(setting)


@admin_setting_router.delete("/{key}", response_model=StatusResponse)
def remove_setting(key: str) -> StatusResponse:
    delete_setting(key)
    return StatusResponse(message="Setting deleted successfully")
