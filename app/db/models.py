import uuid
from sqlalchemy import (
    JSON,
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.db.database import Base


def _new_id() -> str:
    return uuid.uuid4().hex


# --- 1. Market / Season / EventDay ---
class Market(Base):
    __tablename__ = "markets"

    id = Column(String(64), primary_key=True)
    name = Column(String(255))
    # 「今日」の判定に使うマーケットのタイムゾーン (例: America/New_York)
    timezone = Column(String(64), default="America/New_York")
    location = Column(String(255), nullable=True)

    seasons = relationship("Season", back_populates="market")
    event_days = relationship("EventDay", back_populates="market")


class Season(Base):
    __tablename__ = "seasons"

    id = Column(String(64), primary_key=True)
    market_id = Column(String(64), ForeignKey("markets.id"), index=True)
    name = Column(String(255))
    start_date = Column(String(10))  # YYYY-MM-DD
    end_date = Column(String(10))

    market = relationship("Market", back_populates="seasons")


class EventDay(Base):
    __tablename__ = "event_days"

    id = Column(String(64), primary_key=True)
    market_id = Column(String(64), ForeignKey("markets.id"), index=True)
    season_id = Column(String(64), ForeignKey("seasons.id"), nullable=True, index=True)
    date = Column(String(10))  # YYYY-MM-DD

    # 最後に発行したQRトークンの短い参照（監査用。失効チャネルではない）
    qr_token_id = Column(String(64), nullable=True)

    market = relationship("Market", back_populates="event_days")
    season = relationship("Season")


# --- 2. User Model ---
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    # MySQLではStringに長さ指定が必須 (特にindex/uniqueをつける場合)
    firebase_uid = Column(String(255), unique=True, index=True)
    display_name = Column(String(255), nullable=True, index=True)
    email = Column(String(255), nullable=True)

    # 庭の状態 (GardenState を JSON で埋め込む)
    garden_state = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    check_ins = relationship("CheckIn", back_populates="user")
    rewards = relationship("UserReward", back_populates="user")


# --- 3. CheckIn Model ---
class CheckIn(Base):
    __tablename__ = "check_ins"
    # 同一ユーザー・同一イベント日のチェックインは1件まで
    __table_args__ = (
        UniqueConstraint("user_id", "event_day_id", name="uq_check_in_user_day"),
    )

    id = Column(String(64), primary_key=True, default=_new_id)
    market_id = Column(String(64), ForeignKey("markets.id"), index=True)
    event_day_id = Column(String(64), ForeignKey("event_days.id"), index=True)
    user_id = Column(String(255), ForeignKey("users.firebase_uid"), index=True)
    timestamp = Column(DateTime(timezone=True), server_default=func.now())
    categories = Column(JSON, default=list)
    operator_id = Column(String(255))
    # 'booth' (スタッフ操作) or 'self' (来場者のQRスキャン)
    source = Column(String(16), default="self")

    user = relationship("User", back_populates="check_ins")
    event_day = relationship("EventDay")


# --- 4. UserReward Model ---
class UserReward(Base):
    __tablename__ = "user_rewards"

    id = Column(String(64), primary_key=True, default=_new_id)
    user_id = Column(String(255), ForeignKey("users.firebase_uid"), index=True)
    reward_id = Column(String(64))
    season_id = Column(String(64), nullable=True)
    achieved_at = Column(DateTime(timezone=True), server_default=func.now())
    # 現物（ステッカー・ピンなど）を受け取った時刻
    redeemed_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="rewards")


# --- 5. Admin / Staff ---
class Admin(Base):
    __tablename__ = "admins"

    # 正規化済み (小文字・前後空白なし)
    email = Column(String(255), primary_key=True)
    added_at = Column(DateTime(timezone=True), server_default=func.now())


class Staff(Base):
    __tablename__ = "staff"

    email = Column(String(255), primary_key=True)
    market_id = Column(String(64), ForeignKey("markets.id"), index=True)
    display_name = Column(String(255), nullable=True)
    added_at = Column(DateTime(timezone=True), server_default=func.now())
