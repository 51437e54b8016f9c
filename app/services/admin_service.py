# market-passport-backend/app/services/admin_service.py
"""
管理者向けのビジネスロジック
- チェックインQRの発行
- 当日の集計
"""

from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.deps import AuthContext, normalize_email
from app.core.errors import Internal, InvalidArgument, PermissionDenied
from app.db import models
from app.db import query
from app.schemas.admin import AdminStats, QrTokenResponse
from app.services.checkin_service import get_event_day, require_auth
from app.services.token_service import (
    create_qr_payload,
    encode_checkin_token,
    token_reference,
)
from app.utils.time_utils import get_market_today, now_unix, start_of_market_day


def is_admin(db: Session, email: Optional[str]) -> bool:
    """管理者リストに含まれるか（メールは正規化して照合）"""
    key = normalize_email(email)
    if not key:
        return False
    return db.get(models.Admin, key) is not None


def get_staff(db: Session, email: Optional[str]) -> Optional[models.Staff]:
    key = normalize_email(email)
    if not key:
        return None
    return db.get(models.Staff, key)


def require_admin(db: Session, auth: Optional[AuthContext]) -> AuthContext:
    auth = require_auth(auth)
    if not is_admin(db, auth.email):
        raise PermissionDenied("Must be an admin")
    return auth


def issue_qr_token(
    db: Session,
    auth: Optional[AuthContext],
    market_id: str,
    day_id: str,
    expires_at: int,
) -> QrTokenResponse:
    """
    指定マーケット・イベント日のチェックインQRを発行する。
    イベント日には短いトークン参照だけを残す（監査用。失効の仕組みはない）。
    """
    require_admin(db, auth)

    issued_at = now_unix()
    if expires_at <= issued_at:
        raise InvalidArgument("expiresAt must be in the future")

    event_day = get_event_day(db, day_id)
    if event_day.market_id != market_id:
        raise InvalidArgument("Market ID mismatch")

    token = encode_checkin_token(
        market_id, day_id, expires_at=expires_at, issued_at=issued_at
    )
    qr_payload = create_qr_payload(token)

    event_day.qr_token_id = token_reference(token)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        print(f"⚠️ Failed to store QR token reference: {e}")
        raise Internal("Failed to issue QR code") from e

    print(f"✅ QR token issued: market={market_id} day={day_id} exp={expires_at}")
    return QrTokenResponse(qr_payload=qr_payload)


def get_admin_stats(
    db: Session, auth: Optional[AuthContext], day_id: Optional[str] = None
) -> AdminStats:
    """
    イベント日のチェックイン数・全体の来場者数・今日の新規登録数
    day_id 省略時は今日の日付（イベント日IDは YYYY-MM-DD）
    """
    require_admin(db, auth)
    day_id = day_id or get_market_today()
    event_day = get_event_day(db, day_id)

    all_check_ins = query.find(db, models.CheckIn)
    market = db.get(models.Market, event_day.market_id)
    day_start = start_of_market_day(market.timezone if market else None)

    return AdminStats(
        day_id=day_id,
        today_check_ins=query.count(
            db, models.CheckIn, equals={"event_day_id": day_id}
        ),
        total_check_ins=len(all_check_ins),
        unique_visitors=len({row.user_id for row in all_check_ins}),
        new_visitors_today=query.count(
            db, models.User, ranges={"created_at": (day_start, None)}
        ),
    )
