# market-passport-backend/seed.py

import os
from datetime import date, timedelta
from dotenv import load_dotenv
from sqlalchemy.orm import Session

load_dotenv()

from app.db.database import SessionLocal, engine, Base
from app.db.models import Admin, EventDay, Market, Season, Staff, User
from app.api.deps import normalize_email
from app.services.garden_service import default_garden, dump_garden

# --- 定数定義 ---
MARKET_ID = "kinderhook"
MARKET_NAME = "Kinderhook Farmers Market"
MARKET_TIMEZONE = "America/New_York"
SEASON_ID = "kinderhook-2026"
# 毎週土曜開催、シーズンは20回
NUM_EVENT_DAYS = 20
SEASON_START = date(2026, 5, 2)

ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com")
STAFF_EMAIL = os.getenv("SEED_STAFF_EMAIL", "booth@example.com")


def seed_data():
    print("Seeding database...")
    db: Session = SessionLocal()

    try:
        # テーブル再作成（既存データはリセットされます）
        print("Dropping & Creating tables...")
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)

        # ---------------------------
        # 1. マーケット・シーズン・イベント日の投入
        # ---------------------------
        print("Creating Market, Season, Event Days...")
        db.add(
            Market(
                id=MARKET_ID,
                name=MARKET_NAME,
                timezone=MARKET_TIMEZONE,
                location="Kinderhook, NY",
            )
        )
        season_end = SEASON_START + timedelta(weeks=NUM_EVENT_DAYS - 1)
        db.add(
            Season(
                id=SEASON_ID,
                market_id=MARKET_ID,
                name="Summer 2026",
                start_date=SEASON_START.isoformat(),
                end_date=season_end.isoformat(),
            )
        )
        day_ids = []
        for week in range(NUM_EVENT_DAYS):
            day = SEASON_START + timedelta(weeks=week)
            day_ids.append(day.isoformat())
            db.add(
                EventDay(
                    id=day.isoformat(),
                    market_id=MARKET_ID,
                    season_id=SEASON_ID,
                    date=day.isoformat(),
                )
            )
        db.commit()

        # ---------------------------
        # 2. 管理者・スタッフの投入
        # ---------------------------
        print("Creating Admin & Staff...")
        db.add(Admin(email=normalize_email(ADMIN_EMAIL)))
        db.add(
            Staff(
                email=normalize_email(STAFF_EMAIL),
                market_id=MARKET_ID,
                display_name="Booth Volunteer",
            )
        )
        db.commit()

        # ---------------------------
        # 3. デモ用の来場者の投入
        # ---------------------------
        print("Creating Demo Visitors...")
        for i, name in enumerate(["Alice Demo", "Bob Demo", "Carol Demo"]):
            db.add(
                User(
                    firebase_uid=f"demo_uid_{i + 1}",
                    display_name=name,
                    email=f"demo{i + 1}@example.com",
                    garden_state=dump_garden(default_garden()),
                )
            )
        db.commit()
        print("Seeding complete! ✅")

    except Exception as e:
        print(f"Error: {e}")
        db.rollback()
    finally:
        db.close()


if __name__ == "__main__":
    seed_data()
