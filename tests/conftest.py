"""
テスト共通設定

app をインポートする前に環境変数を差し替え、SQLite のインメモリDBを使う。
"""

from __future__ import annotations

import os
import time

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-for-market-passport-checkin-0123456789"
os.environ["SEASON_SCOPED_VISITS"] = "true"

import pytest
from fastapi.testclient import TestClient

from app.db import models
from app.db.database import Base, SessionLocal, engine
from app.main import app
from app.services.garden_service import default_garden, dump_garden
from app.services.token_service import create_qr_payload, encode_checkin_token

MARKET_ID = "kinderhook"
OTHER_MARKET_ID = "hudson"
SEASON_ID = "kinderhook-2026"
PAST_SEASON_ID = "kinderhook-2025"
# 2026年シーズンのイベント日 15回
DAY_IDS = [f"2026-06-{d:02d}" for d in range(1, 16)]
PAST_DAY_ID = "2025-09-06"
OTHER_MARKET_DAY_ID = "hudson-2026-06-01"

VISITOR_UID = "uid_visitor"
SECOND_VISITOR_UID = "uid_second"
ADMIN_UID = "uid_admin"
ADMIN_EMAIL = "admin@example.com"
STAFF_UID = "uid_staff"
STAFF_EMAIL = "booth@example.com"
OTHER_STAFF_EMAIL = "hudson-booth@example.com"


def auth_headers(uid: str, email: str | None = None) -> dict:
    headers = {"X-Firebase-Uid": uid}
    if email:
        headers["X-Firebase-Email"] = email
    return headers


def make_qr(market_id: str = MARKET_ID, day_id: str = DAY_IDS[0], ttl: int = 3600) -> str:
    now = int(time.time())
    token = encode_checkin_token(market_id, day_id, expires_at=now + ttl, issued_at=now)
    return create_qr_payload(token)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def seeded(db_session):
    db = db_session
    db.add(models.Market(id=MARKET_ID, name="Kinderhook", timezone="America/New_York"))
    db.add(models.Market(id=OTHER_MARKET_ID, name="Hudson", timezone="America/New_York"))
    db.add(models.Season(id=SEASON_ID, market_id=MARKET_ID, name="2026",
                         start_date="2026-05-01", end_date="2026-10-31"))
    db.add(models.Season(id=PAST_SEASON_ID, market_id=MARKET_ID, name="2025",
                         start_date="2025-05-01", end_date="2025-10-31"))
    for day_id in DAY_IDS:
        db.add(models.EventDay(id=day_id, market_id=MARKET_ID, season_id=SEASON_ID, date=day_id))
    db.add(models.EventDay(id=PAST_DAY_ID, market_id=MARKET_ID, season_id=PAST_SEASON_ID,
                           date=PAST_DAY_ID))
    db.add(models.EventDay(id=OTHER_MARKET_DAY_ID, market_id=OTHER_MARKET_ID, date="2026-06-01"))

    db.add(models.Admin(email=ADMIN_EMAIL))
    db.add(models.Staff(email=STAFF_EMAIL, market_id=MARKET_ID))
    db.add(models.Staff(email=OTHER_STAFF_EMAIL, market_id=OTHER_MARKET_ID))

    db.add(models.User(firebase_uid=VISITOR_UID, display_name="Alice Green",
                       email="alice@example.com", garden_state=dump_garden(default_garden())))
    db.add(models.User(firebase_uid=SECOND_VISITOR_UID, display_name="Albert Stone",
                       email="albert@example.com"))
    db.commit()
    return db


@pytest.fixture
def client(seeded):
    return TestClient(app)


def add_past_check_ins(db, user_id: str, day_ids, market_id: str = MARKET_ID):
    """過去のチェックインを直接作る（来場回数の準備用）"""
    for day_id in day_ids:
        db.add(models.CheckIn(market_id=market_id, event_day_id=day_id, user_id=user_id,
                              categories=["browsing"], operator_id=user_id, source="self"))
    db.commit()
