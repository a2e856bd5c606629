"""Integration tests for schema management and the Protean-backed stores."""

from catalogue.category.repository import CategoryRepository
from protean.utils.globals import current_domain
from settings_store.setting.management import upsert_setting
from settings_store.setting.repository import SettingRepository
from settings_store.setting.setting import Setting
from shared.database import db, reset_db


class TestResetDb:
    def test_clears_a_category_hierarchy(self, persisted, make_category):
        root = persisted(make_category, name="Electronics")
        phones = persisted(make_category, name="Phones", parent_id=root.id)
        persisted(make_category, name="Smartphones", parent_id=phones.id)

        reset_db(db)

        with db.session_scope() as session:
            assert CategoryRepository(session).count() == 0

    def test_clears_settings(self):
        upsert_setting("store_name", "Yapee")

        reset_db(db)

        assert current_domain.repository_for(Setting).list() == []


class TestSettingsDomain:
    def test_repository_is_registered_with_the_domain(self):
        assert isinstance(current_domain.repository_for(Setting), SettingRepository)

    def test_settings_round_trip_through_the_repository(self):
        setting, _ = upsert_setting("cod_fee", "15000", group="payment")

        stored = current_domain.repository_for(Setting).get(setting.id)

        assert stored.key == "cod_fee"
        assert stored.value == "15000"
        assert stored.group == "payment"

    def test_health_reports_the_domain(self):
        from app import app
        from fastapi.testclient import TestClient

        response = TestClient(app).get("/health")

        assert response.json()["domain"] == {"name": "yapee"}
