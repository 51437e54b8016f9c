# market-passport-backend/app/db/query.py
"""
汎用クエリヘルパー

ストレージへの問い合わせは {equals, range, order, limit} の4種類だけで表現する。
特定のDBエンジンの機能（全文検索など）には依存しない。
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

# 前方一致検索で使う上限文字（Firestore の範囲検索と同じ考え方）
PREFIX_RANGE_END = "\uf8ff"


def prefix_range(prefix: str) -> Tuple[str, str]:
    """前方一致を範囲条件 [prefix, prefix + PREFIX_RANGE_END] に変換する"""
    return prefix, prefix + PREFIX_RANGE_END


def _build(
    db: Session,
    model,
    equals: Optional[Dict[str, Any]] = None,
    ranges: Optional[Dict[str, Tuple[Any, Any]]] = None,
):
    q = db.query(model)
    for field, value in (equals or {}).items():
        q = q.filter(getattr(model, field) == value)
    for field, (low, high) in (ranges or {}).items():
        column = getattr(model, field)
        if low is not None:
            q = q.filter(column >= low)
        if high is not None:
            q = q.filter(column <= high)
    return q


def find(
    db: Session,
    model,
    equals: Optional[Dict[str, Any]] = None,
    ranges: Optional[Dict[str, Tuple[Any, Any]]] = None,
    order_by: Optional[str] = None,
    descending: bool = False,
    limit: Optional[int] = None,
) -> List[Any]:
    q = _build(db, model, equals, ranges)
    if order_by:
        column = getattr(model, order_by)
        q = q.order_by(column.desc() if descending else column.asc())
    if limit:
        q = q.limit(int(limit))
    return q.all()


def find_one(
    db: Session,
    model,
    equals: Optional[Dict[str, Any]] = None,
    ranges: Optional[Dict[str, Tuple[Any, Any]]] = None,
):
    rows = find(db, model, equals=equals, ranges=ranges, limit=1)
    return rows[0] if rows else None


def exists(db: Session, model, equals: Dict[str, Any]) -> bool:
    return find_one(db, model, equals=equals) is not None


def count(
    db: Session,
    model,
    equals: Optional[Dict[str, Any]] = None,
    ranges: Optional[Dict[str, Tuple[Any, Any]]] = None,
) -> int:
    return _build(db, model, equals, ranges).count()
