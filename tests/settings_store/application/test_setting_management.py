import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from settings_store.setting.management import (
    batch_upsert,
    delete_setting,
    get_setting,
    grouped_settings,
    upsert_setting,
)
from settings_store.setting.setting import Setting


def _stored_keys():
    return [setting.key for setting in current_domain.repository_for(Setting).list()]


class TestUpsertSetting:
    def test_creates_then_updates(self):
        created, was_created = upsert_setting("store_name", "Yapee", description="Header name")
        updated, was_created_again = upsert_setting("store_name", "Yapee Mall")

        assert was_created is True
        assert was_created_again is False
        assert created.id == updated.id
        assert get_setting("store_name").value == "Yapee Mall"
        assert get_setting("store_name").description == "Header name"

    def test_invalid_group(self):
        with pytest.raises(ValidationError):
            upsert_setting("store_name", "Yapee", group="misc")

        assert _stored_keys() == []

    def test_missing_setting(self):
        with pytest.raises(ObjectNotFoundError) as exc:
            get_setting("nope")

        assert "Setting not found" in str(exc.value)


class TestGroupedSettings:
    def test_groups_sorted_by_key(self):
        upsert_setting("store_name", "Yapee")
        upsert_setting("currency", "VND")
        upsert_setting("cod_fee", "15000", group="payment")

        grouped = grouped_settings()

        assert list(grouped) == ["general", "payment"]
        assert [s.key for s in grouped["general"]] == ["currency", "store_name"]

    def test_single_group(self):
        upsert_setting("store_name", "Yapee")
        upsert_setting("cod_fee", "15000", group="payment")

        assert list(grouped_settings(group="payment")) == ["payment"]

    def test_empty(self):
        assert grouped_settings() == {}


class TestDeleteSetting:
    def test_delete(self):
        upsert_setting("store_name", "Yapee")

        delete_setting("store_name")

        with pytest.raises(ObjectNotFoundError):
            get_setting("store_name")

    def test_delete_missing(self):
        with pytest.raises(ObjectNotFoundError):
            delete_setting("store_name")


class TestBatchUpsert:
    def test_applies_complete_entries_and_skips_the_rest(self):
        upsert_setting("currency", "USD")

        results = batch_upsert(
            [
                {"key": "currency", "value": "VND"},
                {"key": "cod_fee", "value": "15000", "group": "payment"},
                {"key": "no_value"},
                {"value": "no key"},
                {"key": "blank", "value": ""},
            ],
        )

        assert [s.key for s in results] == ["currency", "cod_fee"]
        assert get_setting("currency").value == "VND"
        assert sorted(_stored_keys()) == ["cod_fee", "currency"]

    def test_invalid_entry_stores_nothing(self):
        with pytest.raises(ValidationError):
            batch_upsert(
                [
                    {"key": "store_name", "value": "Yapee"},
                    {"key": "cod_fee", "value": "15000", "group": "billing"},
                ]
            )

        assert _stored_keys() == []

    @pytest.mark.parametrize("entries", [[], None, {"key": "currency"}])
    def test_rejects_anything_but_a_non_empty_list(self, entries):
        with pytest.raises(ValidationError) as exc:
            batch_upsert(entries)

        assert exc.value.messages == {"settings": ["Invalid settings data"]}
