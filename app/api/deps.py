# market-passport-backend/app/api/deps.py
"""
認証コンテキスト

認証自体は Firebase Auth 側で済んでおり、フロントエンドから
"X-Firebase-Uid" / "X-Firebase-Email" ヘッダーで uid とメールを受け取る。
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header

from app.core.errors import Unauthenticated


@dataclass(frozen=True)
class AuthContext:
    uid: str
    email: Optional[str] = None


def normalize_email(email: Optional[str]) -> str:
    """小文字化・前後の空白除去"""
    return (email or "").strip().lower()


def get_auth_context(
    x_firebase_uid: Optional[str] = Header(default=None),
    x_firebase_email: Optional[str] = Header(default=None),
) -> Optional[AuthContext]:
    """
    ヘッダーから認証情報を取り出す。未認証なら None。
    未認証をどう扱うかは各サービスが決める（unauthenticated を返す）。
    """
    if not x_firebase_uid or not x_firebase_uid.strip():
        return None
    return AuthContext(uid=x_firebase_uid.strip(), email=x_firebase_email)


def require_auth_context(
    auth: Optional[AuthContext] = Depends(get_auth_context),
) -> AuthContext:
    """
    未認証なら unauthenticated。
    依存関係はリクエストボディの検証より先に解決されるので、
    ボディが不正でも未認証の呼び出しには unauthenticated を返す。
    """
    if auth is None:
        raise Unauthenticated("Must be signed in")
    return auth
