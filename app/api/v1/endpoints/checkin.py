# market-passport-backend/app/api/v1/endpoints/checkin.py
"""
チェックイン API エンドポイント
- 来場者がQRを読み取ってチェックインする
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import AuthContext, require_auth_context
from app.db.database import get_db
from app.schemas.checkin import CheckInRequest, CheckInResponse
from app.services import checkin_service

router = APIRouter()


@router.post("/", response_model=CheckInResponse, response_model_exclude_none=True)
def check_in(
    req: CheckInRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth_context),
):
    """
    スキャンしたQR文字列 (mp1:<JWT>) でチェックイン。
    失敗時は code で理由を返す (invalid-argument / failed-precondition / already-exists など)
    """
    return checkin_service.check_in(
        db, auth, req.qr_payload, categories=list(req.categories)
    )
