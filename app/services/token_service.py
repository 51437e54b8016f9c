# market-passport-backend/app/services/token_service.py
"""
チェックインQRのトークン

QRの中身は "mp1:<JWT>"。mp1 = market passport version 1。
JWT はサーバー側で HS256 署名する。形式を変えるときはプレフィックスも変えること。
"""

import time
from typing import Any, Dict, Optional

import jwt
from pydantic import ValidationError

from app.core.config import settings
from app.core.errors import Internal
from app.schemas.token import CHECKIN_AUDIENCE, CHECKIN_ISSUER, CheckInTokenClaims

QR_VERSION_PREFIX = "mp1:"
ALGORITHM = "HS256"


class TokenError(Exception):
    pass


class TokenExpiredError(TokenError):
    """署名は正しいが期限切れ"""


class InvalidTokenError(TokenError):
    """署名・アルゴリズム・形式・クレームのいずれかが不正"""


def create_qr_payload(token: str) -> str:
    """JWT を QR 用の文字列にする（中身は検証しない）"""
    return f"{QR_VERSION_PREFIX}{token}"


def extract_jwt_from_qr(payload: str) -> Optional[str]:
    """スキャンした文字列から JWT を取り出す。チェックイン用QRでなければ None"""
    if not isinstance(payload, str) or not payload.startswith(QR_VERSION_PREFIX):
        return None
    return payload[len(QR_VERSION_PREFIX):]


def _get_secret(secret: Optional[str] = None) -> str:
    secret = secret or settings.JWT_SECRET
    if not secret:
        raise Internal("JWT_SECRET environment variable not set")
    return secret


def encode_checkin_token(
    market_id: str,
    day_id: str,
    expires_at: int,
    issued_at: Optional[int] = None,
    token_id: Optional[str] = None,
    secret: Optional[str] = None,
) -> str:
    payload: Dict[str, Any] = {
        "iss": CHECKIN_ISSUER,
        "aud": CHECKIN_AUDIENCE,
        "mid": market_id,
        "eid": day_id,
        "iat": int(issued_at if issued_at is not None else time.time()),
        "exp": int(expires_at),
    }
    if token_id:
        payload["jti"] = token_id
    return jwt.encode(payload, _get_secret(secret), algorithm=ALGORITHM)


def decode_checkin_token(token: str, secret: Optional[str] = None) -> CheckInTokenClaims:
    """
    2段階で検証する。
    1. 署名・アルゴリズム(HS256のみ)・発行者・対象・期限
    2. クレームの形
    期限切れだけは TokenExpiredError、それ以外はすべて InvalidTokenError。
    """
    key = _get_secret(secret)
    try:
        decoded = jwt.decode(
            token,
            key,
            algorithms=[ALGORITHM],
            audience=CHECKIN_AUDIENCE,
            issuer=CHECKIN_ISSUER,
            options={"require": ["iss", "aud", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError("QR code expired") from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(f"Invalid QR code: {e}") from e

    try:
        return CheckInTokenClaims.model_validate(decoded)
    except ValidationError as e:
        raise InvalidTokenError("Invalid claims") from e


def token_reference(token: str) -> str:
    """イベント日に残す短い参照"""
    return token[: settings.QR_TOKEN_ID_LENGTH]
