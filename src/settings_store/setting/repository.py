from __future__ import annotations

from settings_store.setting.setting import Setting
from shared.domain import yapee

# Upper bound on one listing; the store keeps a few dozen settings at most
MAX_SETTINGS = 1000


@yapee.repository(part_of=Setting)
class SettingRepository:
    def get_by_key(self, key: str) -> Setting | None:
        settings = self._dao.query.filter(key=key).all().items
        return settings[0] if settings else None

    def list(self, group: str | None = None) -> list[Setting]:
        query = self._dao.query
        if group:
            query = query.filter(group=group)
        settings = query.limit(MAX_SETTINGS).all().items
        return sorted(settings, key=lambda setting: (setting.group, setting.key))

    def remove(self, setting: Setting) -> None:
        self._dao.delete(setting)
