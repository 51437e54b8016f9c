# market-passport-backend/app/api/v1/endpoints/booth.py
"""
ブース（受付）API エンドポイント
- 来場者検索（表示名の前方一致）
- スタッフによる代理チェックイン
- 購入カテゴリの一覧
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.api.deps import AuthContext, require_auth_context
from app.db.database import get_db
from app.db.data.garden import CATEGORY_LABELS, PURCHASE_CATEGORIES
from app.schemas.checkin import (
    BoothCheckInRequest,
    BoothVisitor,
    CategoryOption,
    CheckInResponse,
)
from app.services import booth_service

router = APIRouter()


def require_operator_context(
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_auth_context),
) -> AuthContext:
    """スタッフか管理者であること（マーケットの一致はサービス側で確認）"""
    return booth_service.require_operator(db, auth)


@router.get("/users", response_model=List[BoothVisitor])
def lookup_visitors(
    q: str = Query(..., min_length=1, description="表示名の先頭"),
    day_id: str = Query(..., alias="dayId", min_length=1),
    limit: Optional[int] = Query(None, ge=1, le=50),
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_operator_context),
):
    return booth_service.search_visitors(db, auth, q, day_id, limit=limit)


@router.post("/checkin", response_model=CheckInResponse, response_model_exclude_none=True)
def booth_check_in(
    req: BoothCheckInRequest,
    db: Session = Depends(get_db),
    auth: AuthContext = Depends(require_operator_context),
):
    """購入カテゴリを選んで代理チェックイン（未選択なら browsing）"""
    return booth_service.booth_check_in(
        db, auth, req.user_id, req.day_id, list(req.categories)
    )


@router.get("/categories", response_model=List[CategoryOption])
def list_categories():
    """購入カテゴリの選択肢（表示ラベルつき）"""
    return [
        CategoryOption(id=category, label=CATEGORY_LABELS[category])
        for category in PURCHASE_CATEGORIES
    ]
