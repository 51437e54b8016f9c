# market-passport-backend/app/core/errors.py
"""
エラー分類

サービス層はここの例外を投げ、main.py の例外ハンドラが
{"code": ..., "detail": ...} とHTTPステータスに変換する。
UI側は code を見てメッセージを出し分ける（"already-exists" → 本日チェックイン済み など）。
"""

from fastapi import status


class PassportError(Exception):
    code: str = "internal"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str = ""):
        super().__init__(detail)
        self.detail = detail or self.code


class Unauthenticated(PassportError):
    code = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDenied(PassportError):
    code = "permission-denied"
    status_code = status.HTTP_403_FORBIDDEN


class InvalidArgument(PassportError):
    code = "invalid-argument"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFound(PassportError):
    code = "not-found"
    status_code = status.HTTP_404_NOT_FOUND


class FailedPrecondition(PassportError):
    code = "failed-precondition"
    status_code = status.HTTP_400_BAD_REQUEST


class AlreadyExists(PassportError):
    code = "already-exists"
    status_code = status.HTTP_409_CONFLICT


class Internal(PassportError):
    code = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
