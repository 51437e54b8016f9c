"""
来場者API（登録・庭・統計）のテスト
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from app.api.v1.endpoints import users as users_endpoint
from app.db import query
from app.main import app
from app.services import checkin_service

from conftest import (
    DAY_IDS,
    MARKET_ID,
    PAST_DAY_ID,
    PAST_SEASON_ID,
    SEASON_ID,
    VISITOR_UID,
    add_past_check_ins,
    auth_headers,
    make_qr,
)


class TestRegistration:

    def test_create_user_with_default_garden(self, client):
        res = client.post("/api/v1/users/", json={"displayName": "  Dana Field "},
                          headers=auth_headers("uid_new", " Dana@Example.com"))
        assert res.status_code == 200
        body = res.json()
        assert body["id"] == "uid_new"
        assert body["displayName"] == "Dana Field"
        assert body["email"] == "dana@example.com"
        assert body["garden"]["plants"] == []
        assert body["garden"]["gridSize"] == {"width": 4, "height": 4}
        assert body["garden"]["unlockedBackgrounds"] == ["default"]

    def test_create_is_idempotent(self, client):
        res = client.post("/api/v1/users/", json={"displayName": "Someone Else"},
                          headers=auth_headers(VISITOR_UID))
        assert res.json()["displayName"] == "Alice Green"

    def test_requires_auth(self, client):
        res = client.post("/api/v1/users/", json={})
        assert res.status_code == 401

    def test_concurrent_registration_returns_existing(self, client, monkeypatch):
        real_find_one = query.find_one
        calls = []

        def find_one_missing_first(*args, **kwargs):
            calls.append(1)
            if len(calls) == 1:
                return None
            return real_find_one(*args, **kwargs)

        monkeypatch.setattr(query, "find_one", find_one_missing_first)
        res = client.post("/api/v1/users/", json={"displayName": "Someone Else"},
                          headers=auth_headers(VISITOR_UID))
        assert res.status_code == 200
        assert res.json()["displayName"] == "Alice Green"


class TestMe:

    def test_me(self, client):
        res = client.get("/api/v1/users/me", headers=auth_headers(VISITOR_UID))
        assert res.status_code == 200
        assert res.json()["id"] == VISITOR_UID

    def test_unknown_user(self, client):
        res = client.get("/api/v1/users/me", headers=auth_headers("uid_nobody"))
        assert res.status_code == 404

    def test_garden_display(self, client):
        client.post("/api/v1/checkin/", json={"qrPayload": make_qr()},
                    headers=auth_headers(VISITOR_UID))
        res = client.get("/api/v1/users/me/garden", headers=auth_headers(VISITOR_UID))
        plants = res.json()["plants"]
        assert len(plants) == 1
        assert plants[0]["display"] in ("🌱", "🌸")

    def test_stats(self, client):
        for day_id in DAY_IDS[:3]:
            client.post("/api/v1/checkin/", json={"qrPayload": make_qr(day_id=day_id)},
                        headers=auth_headers(VISITOR_UID))
        res = client.get("/api/v1/users/me/stats",
                         params={"marketId": MARKET_ID, "seasonId": SEASON_ID},
                         headers=auth_headers(VISITOR_UID))
        assert res.status_code == 200
        body = res.json()
        assert body["visitCount"] == 3
        assert len(body["visits"]) == 3
        assert [r["rewardId"] for r in body["earnedRewards"]] == [
            "first-harvest", "getting-started",
        ]
        assert body["progress"]["required"] == 5
        assert body["progress"]["nextReward"]["id"] == "regular"

    def test_stats_requires_market(self, client):
        res = client.get("/api/v1/users/me/stats", headers=auth_headers(VISITOR_UID))
        assert res.status_code == 400

    def test_stats_default_to_current_season(self, client, seeded, monkeypatch):
        monkeypatch.setattr(checkin_service, "get_market_today", lambda *a: DAY_IDS[5])
        add_past_check_ins(seeded, VISITOR_UID, [PAST_DAY_ID])
        checked_in = client.post("/api/v1/checkin/", json={"qrPayload": make_qr()},
                                 headers=auth_headers(VISITOR_UID)).json()
        assert checked_in["visitCount"] == 1

        res = client.get("/api/v1/users/me/stats", params={"marketId": MARKET_ID},
                         headers=auth_headers(VISITOR_UID))
        body = res.json()
        assert body["seasonId"] == SEASON_ID
        assert body["visitCount"] == 1
        assert body["progress"]["current"] == 1
        assert len(body["visits"]) == 2

    def test_stats_before_first_event_day(self, client, seeded, monkeypatch):
        monkeypatch.setattr(checkin_service, "get_market_today", lambda *a: "2025-01-01")
        add_past_check_ins(seeded, VISITOR_UID, [PAST_DAY_ID])
        res = client.get("/api/v1/users/me/stats", params={"marketId": MARKET_ID},
                         headers=auth_headers(VISITOR_UID))
        assert res.json()["seasonId"] == PAST_SEASON_ID
        assert res.json()["visitCount"] == 1


class TestRewardsCatalog:

    def test_catalog(self, client):
        tiers = client.get("/api/v1/rewards/").json()["tiers"]
        assert [t["threshold"] for t in tiers] == [1, 3, 5, 8, 12, 13]
        assert tiers[0]["physicalToken"] == "Welcome sticker"

    def test_progress(self, client):
        body = client.get("/api/v1/rewards/progress", params={"visitCount": 6}).json()
        assert body["percentage"] == 33
        assert body["nextReward"]["title"] == "Community Builder"


def test_unexpected_error_is_internal(client, monkeypatch):
    def broken(raw):
        raise RuntimeError("garden column unreadable")

    monkeypatch.setattr(users_endpoint, "load_garden", broken)
    res = TestClient(app, raise_server_exceptions=False).get(
        "/api/v1/users/me", headers=auth_headers(VISITOR_UID)
    )
    assert res.status_code == 500
    assert res.json()["code"] == "internal"
