"""去广告开关测试：匿名读取全局设置，登录用户读取自身标记。"""
from goal_tracker.models import AppSetting, User
from goal_tracker.models.setting import ADS_REMOVED_KEY


def _set_global_flag(db, value: str):
    db.get(AppSetting, ADS_REMOVED_KEY).value = value
    db.commit()


class TestSettings:
    """去广告设置测试类"""

    def test_singleton_is_seeded(self, db):
        setting = db.get(AppSetting, ADS_REMOVED_KEY)
        assert setting is not None
        assert setting.value == "false"

    def test_anonymous_reads_global_flag(self, anonymous_client, db, make_user):
        make_user("premium", ads_removed=True)
        assert anonymous_client.get("/api/settings").json() == {"adsRemoved": False}

        _set_global_flag(db, "true")
        assert anonymous_client.get("/api/settings").json() == {"adsRemoved": True}

    def test_authenticated_reads_own_flag(self, alice_client, db):
        _set_global_flag(db, "true")
        assert alice_client.get("/api/settings").json() == {"adsRemoved": False}

    def test_remove_ads_is_idempotent(self, alice_client, bob_client, db):
        for _ in range(2):
            response = alice_client.post("/api/settings/remove-ads")
            assert response.status_code == 200
            assert response.json() == {"success": True}
            assert alice_client.get("/api/settings").json() == {"adsRemoved": True}

        # 其他用户与全局设置不受影响
        assert bob_client.get("/api/settings").json() == {"adsRemoved": False}
        db.expire_all()
        assert db.get(User, "google-alice").ads_removed is True
        assert db.get(AppSetting, ADS_REMOVED_KEY).value == "false"

    def test_remove_ads_requires_login(self, anonymous_client):
        assert anonymous_client.post("/api/settings/remove-ads").status_code == 401

    def test_seeding_keeps_existing_value(self, db, engine):
        from goal_tracker.database import init_db

        _set_global_flag(db, "true")
        init_db(bind=engine)

        db.expire_all()
        assert db.get(AppSetting, ADS_REMOVED_KEY).value == "true"
