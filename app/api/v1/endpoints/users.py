# market-passport-backend/app/api/v1/endpoints/users.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import Optional

from app.api.deps import AuthContext, normalize_email, require_auth_context
from app.core.config import settings
from app.db.database import get_db
from app.db import models
from app.db import query
from app.db.data.rewards import REWARD_TIERS
from app.schemas import user as user_schema
from app.schemas.checkin import CheckInRecord
from app.schemas.garden import GardenPlantDisplay, GardenResponse
from app.services.checkin_service import count_visits, current_season_id, get_user
from app.services.garden_service import (
    default_garden,
    dump_garden,
    get_plant_display,
    load_garden,
)
from app.services.reward_service import get_reward_progress

router = APIRouter()


def get_current_user(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth_context),
) -> models.User:
    """
    リクエストヘッダーのUIDを元に、現在のユーザーを特定する。
    """
    return get_user(db, auth.uid)


def _to_user_base(user: models.User) -> user_schema.UserBase:
    return user_schema.UserBase(
        id=user.firebase_uid,
        display_name=user.display_name,
        email=user.email,
        created_at=user.created_at,
        garden=load_garden(user.garden_state),
    )


@router.post("/", response_model=user_schema.UserBase)
def create_user(
    user: user_schema.UserCreate,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth_context),
):
    """
    来場者を登録します。すでに存在する場合は既存のユーザー情報を返します。
    """
    # すでに登録済みかチェック
    db_user = query.find_one(db, models.User, equals={"firebase_uid": auth.uid})
    if db_user:  # すでに存在する場合はそのまま返す
        return _to_user_base(db_user)

    new_user = models.User(
        firebase_uid=auth.uid,
        display_name=(user.display_name or "").strip() or None,
        email=normalize_email(user.email or auth.email) or None,
        garden_state=dump_garden(default_garden()),
    )
    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # 同じ uid の登録が同時に走った場合は、先に登録された方を返す
        db.rollback()
        db_user = query.find_one(db, models.User, equals={"firebase_uid": auth.uid})
        if db_user is None:
            raise
        return _to_user_base(db_user)

    db.refresh(new_user)
    return _to_user_base(new_user)


@router.get("/me", response_model=user_schema.UserBase)
def read_users_me(current_user: models.User = Depends(get_current_user)):
    """
    現在のユーザー情報を取得します。
    """
    return _to_user_base(current_user)


@router.get("/me/garden", response_model=GardenResponse)
def read_own_garden(current_user: models.User = Depends(get_current_user)):
    """
    自分の庭を表示用の絵文字つきで取得
    """
    garden = load_garden(current_user.garden_state)
    return GardenResponse(
        plants=[
            GardenPlantDisplay(**plant.model_dump(), display=get_plant_display(plant))
            for plant in garden.plants
        ],
        unlocked_backgrounds=garden.unlocked_backgrounds,
        grid_size=garden.grid_size,
    )


@router.get("/me/stats", response_model=user_schema.UserStats)
def read_own_stats(
    market_id: str = Query(..., alias="marketId", min_length=1),
    season_id: Optional[str] = Query(None, alias="seasonId"),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    """
    マーケットでの来場履歴（新しい順）・獲得済み報酬・次の報酬までの進捗
    seasonId 省略時は、チェックインと同じく今のシーズンで来場回数を数える
    """
    if season_id is None and settings.SEASON_SCOPED_VISITS:
        season_id = current_season_id(db, market_id)

    visits = query.find(
        db,
        models.CheckIn,
        equals={"user_id": current_user.firebase_uid, "market_id": market_id},
        order_by="timestamp",
        descending=True,
    )
    # 獲得済み報酬はカタログ順に並べる
    tier_order = {tier.id: i for i, tier in enumerate(REWARD_TIERS)}
    rewards = sorted(
        query.find(db, models.UserReward, equals={"user_id": current_user.firebase_uid}),
        key=lambda r: tier_order.get(r.reward_id, len(tier_order)),
    )
    visit_count = count_visits(db, current_user.firebase_uid, market_id, season_id)

    return user_schema.UserStats(
        season_id=season_id,
        visit_count=visit_count,
        visits=[CheckInRecord.model_validate(v) for v in visits],
        earned_rewards=[user_schema.EarnedReward.model_validate(r) for r in rewards],
        progress=get_reward_progress(visit_count),
    )
