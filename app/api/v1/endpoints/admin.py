# market-passport-backend/app/api/v1/endpoints/admin.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.api.deps import AuthContext, require_auth_context
from app.db.database import get_db
from app.schemas.admin import AdminStats, QrTokenRequest, QrTokenResponse
from app.services import admin_service

router = APIRouter()


def require_admin_context(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth_context),
) -> AuthContext:
    """管理者でなければ permission-denied（ボディの検証より先に判定）"""
    return admin_service.require_admin(db, auth)


@router.post("/qr-token", response_model=QrTokenResponse)
def generate_qr_token(
    req: QrTokenRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin_context),
):
    """チェックイン用QRの文字列を発行（管理者のみ）"""
    return admin_service.issue_qr_token(
        db, auth, req.market_id, req.day_id, req.expires_at
    )


@router.get("/stats", response_model=AdminStats)
def read_stats(
    day_id: Optional[str] = Query(None, alias="dayId", min_length=1),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_admin_context),
):
    return admin_service.get_admin_stats(db, auth, day_id)
