# market-passport-backend/app/services/checkin_service.py
"""
チェックインのビジネスロジック

QRスキャン → トークン検証 → 二重チェックイン確認 → 庭に植える → 報酬判定 → 保存

二重チェックインの確認は「読んでから書く」ので、同じユーザーがほぼ同時に
2回スキャンすると両方が確認を通り抜けうる。書き込み直前にも再確認し、
最終的には check_ins の (user_id, event_day_id) ユニーク制約で弾く。
"""

import random
from typing import List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import AuthContext
from app.core.config import settings
from app.core.errors import (
    AlreadyExists,
    FailedPrecondition,
    Internal,
    InvalidArgument,
    NotFound,
    Unauthenticated,
)
from app.db import models
from app.db import query
from app.db.data.garden import DEFAULT_CATEGORY
from app.schemas.checkin import CheckInResponse
from app.services.garden_service import add_plant, dump_garden, load_garden
from app.services.reward_service import (
    garden_variant_for,
    get_newly_earned_reward,
    has_physical_reward,
)
from app.services.token_service import (
    TokenExpiredError,
    InvalidTokenError,
    decode_checkin_token,
    extract_jwt_from_qr,
)
from app.utils.time_utils import get_market_today


def require_auth(auth: Optional[AuthContext]) -> AuthContext:
    if auth is None:
        raise Unauthenticated("Must be signed in")
    return auth


def has_checked_in(db: Session, user_id: str, day_id: str) -> bool:
    """このイベント日にチェックイン済みか"""
    return query.exists(
        db, models.CheckIn, equals={"user_id": user_id, "event_day_id": day_id}
    )


def count_visits(
    db: Session, user_id: str, market_id: str, season_id: Optional[str] = None
) -> int:
    """
    来場回数。
    SEASON_SCOPED_VISITS が有効でシーズンが分かる場合は、そのシーズンのイベント日だけを数える。
    それ以外はマーケットの全チェックイン。
    """
    equals = {"user_id": user_id, "market_id": market_id}
    if not (settings.SEASON_SCOPED_VISITS and season_id):
        return query.count(db, models.CheckIn, equals=equals)

    season_day_ids = {
        day.id
        for day in query.find(db, models.EventDay, equals={"season_id": season_id})
    }
    return sum(
        1
        for row in query.find(db, models.CheckIn, equals=equals)
        if row.event_day_id in season_day_ids
    )


def current_season_id(db: Session, market_id: str) -> Optional[str]:
    """
    マーケットの今のシーズン。
    今日以前で最新のイベント日のシーズン（まだ開催前なら最初のイベント日のシーズン）
    """
    market = db.get(models.Market, market_id)
    today = get_market_today(market.timezone if market else None)
    equals = {"market_id": market_id}

    days = query.find(
        db, models.EventDay, equals=equals, ranges={"date": (None, today)},
        order_by="date", descending=True, limit=1,
    )
    if not days:
        days = query.find(db, models.EventDay, equals=equals, order_by="date", limit=1)
    return days[0].season_id if days else None


def get_user(db: Session, user_id: str) -> models.User:
    user = query.find_one(db, models.User, equals={"firebase_uid": user_id})
    if user is None:
        raise NotFound("User not found")
    return user


def get_event_day(db: Session, day_id: str) -> models.EventDay:
    event_day = db.get(models.EventDay, day_id)
    if event_day is None:
        raise NotFound("Event day not found")
    return event_day


def record_check_in(
    db: Session,
    user: models.User,
    event_day: models.EventDay,
    categories: List[str],
    operator_id: str,
    source: str,
    rng: Optional[random.Random] = None,
) -> CheckInResponse:
    """
    チェックインを記録し、庭と報酬を更新する（1回のコミット）。
    呼び出し前に認証・トークン・二重チェックの確認は済んでいること。
    """
    categories = list(categories) or [DEFAULT_CATEGORY]

    # 今回の来場を含めた回数
    visit_count = (
        count_visits(db, user.firebase_uid, event_day.market_id, event_day.season_id) + 1
    )
    new_reward = get_newly_earned_reward(visit_count)
    physical = has_physical_reward(visit_count)

    garden = load_garden(user.garden_state)
    new_garden = add_plant(
        garden,
        event_day.id,
        categories,
        variant=garden_variant_for(new_reward),
        rng=rng,
    )

    # 書き込み直前にもう一度確認（競合の窓を狭めるだけで、なくなりはしない）
    if has_checked_in(db, user.firebase_uid, event_day.id):
        raise AlreadyExists("Already checked in today")

    check_in = models.CheckIn(
        market_id=event_day.market_id,
        event_day_id=event_day.id,
        user_id=user.firebase_uid,
        categories=categories,
        operator_id=operator_id,
        source=source,
    )
    db.add(check_in)
    user.garden_state = dump_garden(new_garden)

    if new_reward:
        db.add(
            models.UserReward(
                user_id=user.firebase_uid,
                reward_id=new_reward.id,
                season_id=event_day.season_id,
            )
        )

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise AlreadyExists("Already checked in today") from e
    except SQLAlchemyError as e:
        db.rollback()
        print(f"⚠️ Check-in write failed: {e}")
        raise Internal("Failed to save check-in") from e

    print(
        f"✅ Check-in recorded: user={user.firebase_uid} day={event_day.id} "
        f"visit={visit_count} source={source}"
    )
    return CheckInResponse(
        success=True,
        check_in_id=check_in.id,
        visit_count=visit_count,
        new_reward=new_reward,
        physical_reward=physical.physical_token if physical else None,
        plant=new_garden.plants[-1],
    )


def check_in(
    db: Session,
    auth: Optional[AuthContext],
    qr_payload: str,
    categories: Optional[List[str]] = None,
    rng: Optional[random.Random] = None,
) -> CheckInResponse:
    """来場者自身のQRスキャンによるチェックイン"""
    auth = require_auth(auth)

    token = extract_jwt_from_qr(qr_payload)
    if not token:
        raise InvalidArgument("Invalid QR code format")

    try:
        claims = decode_checkin_token(token)
    except TokenExpiredError as e:
        raise FailedPrecondition("QR code expired") from e
    except InvalidTokenError as e:
        raise InvalidArgument("Invalid QR code") from e

    if has_checked_in(db, auth.uid, claims.eid):
        raise AlreadyExists("Already checked in today")

    event_day = get_event_day(db, claims.eid)
    if event_day.market_id != claims.mid:
        raise InvalidArgument("Market ID mismatch")

    user = get_user(db, auth.uid)

    return record_check_in(
        db,
        user,
        event_day,
        categories or [],
        operator_id=auth.uid,
        source="self",
        rng=rng,
    )
