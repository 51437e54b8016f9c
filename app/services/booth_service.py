# market-passport-backend/app/services/booth_service.py
"""
ブース（受付）向けのビジネスロジック
スタッフが来場者を名前で探し、購入カテゴリを選んで代理チェックインする
"""

import random
from typing import List, Optional

from sqlalchemy.orm import Session

from app.api.deps import AuthContext
from app.core.config import settings
from app.core.errors import AlreadyExists, PermissionDenied
from app.db import models
from app.db import query
from app.schemas.checkin import BoothVisitor, CheckInResponse
from app.services.admin_service import get_staff, is_admin
from app.services.checkin_service import (
    count_visits,
    get_event_day,
    get_user,
    has_checked_in,
    record_check_in,
    require_auth,
)


def require_operator(
    db: Session, auth: Optional[AuthContext], market_id: Optional[str] = None
) -> AuthContext:
    """
    管理者、またはそのマーケットのスタッフであること。
    market_id が None ならどこかのマーケットのスタッフであればよい。
    """
    auth = require_auth(auth)
    if is_admin(db, auth.email):
        return auth

    staff = get_staff(db, auth.email)
    if staff is None:
        raise PermissionDenied("Must be staff")
    if market_id is not None and staff.market_id != market_id:
        raise PermissionDenied("Not staff for this market")
    return auth


def booth_check_in(
    db: Session,
    auth: Optional[AuthContext],
    user_id: str,
    day_id: str,
    categories: List[str],
    rng: Optional[random.Random] = None,
) -> CheckInResponse:
    operator = require_operator(db, auth)
    event_day = get_event_day(db, day_id)
    require_operator(db, operator, market_id=event_day.market_id)

    visitor = get_user(db, user_id)
    if has_checked_in(db, visitor.firebase_uid, event_day.id):
        raise AlreadyExists("Already checked in today")

    return record_check_in(
        db,
        visitor,
        event_day,
        categories,
        operator_id=operator.uid,
        source="booth",
        rng=rng,
    )


def search_visitors(
    db: Session,
    auth: Optional[AuthContext],
    name_prefix: str,
    day_id: str,
    limit: Optional[int] = None,
) -> List[BoothVisitor]:
    """表示名の前方一致で来場者を探す"""
    operator = require_operator(db, auth)
    event_day = get_event_day(db, day_id)
    require_operator(db, operator, market_id=event_day.market_id)

    name_prefix = name_prefix.strip()
    if not name_prefix:
        return []

    users = query.find(
        db,
        models.User,
        ranges={"display_name": query.prefix_range(name_prefix)},
        order_by="display_name",
        limit=limit or settings.BOOTH_LOOKUP_LIMIT,
    )
    return [
        BoothVisitor(
            user_id=user.firebase_uid,
            display_name=user.display_name,
            email=user.email,
            visit_count=count_visits(
                db, user.firebase_uid, event_day.market_id, event_day.season_id
            ),
            already_checked_in=has_checked_in(db, user.firebase_uid, event_day.id),
        )
        for user in users
    ]
