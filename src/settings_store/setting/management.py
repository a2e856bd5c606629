"""Setting management: grouped reads, upsert by key, delete and batch upsert."""

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from settings_store.setting.setting import Setting, check_entry
from shared.logging import get_logger

logger = get_logger(__name__)


def grouped_settings(group: str | None = None) -> dict[str, list[Setting]]:
    grouped: dict[str, list[Setting]] = {}
    for setting in current_domain.repository_for(Setting).list(group=group):
        grouped.setdefault(setting.group, []).append(setting)
    return grouped


def get_setting(key: str) -> Setting:
    setting = current_domain.repository_for(Setting).get_by_key(key)
    if setting is None:
        raise ObjectNotFoundError({"_entity": "Setting not found"})
    return setting


def upsert_setting(key: str, value, group=None, description=None) -> tuple[Setting, bool]:
    """Create or update the setting stored under ``key``.

    Returns the setting and whether it was newly created.
    """
    repo = current_domain.repository_for(Setting)
    setting = repo.get_by_key(key)

    if setting is None:
        setting = Setting.create(key=key, value=value, group=group, description=description)
        repo.add(setting)
        logger.info("setting_created", key=key, group=setting.group)
        return setting, True

    setting.change(value=value, group=group, description=description)
    repo.add(setting)
    logger.info("setting_updated", key=key, group=setting.group)
    return setting, False


def delete_setting(key: str) -> None:
    setting = get_setting(key)
    current_domain.repository_for(Setting).remove(setting)
    logger.info("setting_deleted", key=key)


def batch_upsert(entries) -> list[Setting]:
    """Upsert every entry that carries both a key and a value; skip the rest.

    All applicable entries are validated before any of them is stored.
    """
    if not isinstance(entries, list) or not entries:
        raise ValidationError({"settings": ["Invalid settings data"]})

    applicable = [entry for entry in entries if entry.get("key") and entry.get("value")]
    for entry in applicable:
        check_entry(entry["key"], entry["value"], entry.get("group"))

    results = []
    for entry in applicable:
        setting, _ = upsert_setting(
            entry["key"],
            entry["value"],
            group=entry.get("group"),
            description=entry.get("description"),
        )
        results.append(setting)

    logger.info("settings_batch_applied", applied=len(results), skipped=len(entries) - len(applicable))
    return results
