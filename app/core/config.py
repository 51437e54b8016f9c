# market-passport-backend/app/core/config.py

import os
from dotenv import load_dotenv

# .envファイルを読み込む（ローカル開発用）
# 本番環境（Cloud Runなど）ではファイルがないため無視されます
load_dotenv()


class Settings:
    # API設定
    API_V1_STR: str = "/api/v1"

    # DB設定
    # DATABASE_URL があればそちらを優先（テスト・ローカルのSQLiteなど）
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")

    DB_USER: str = os.getenv("DB_USER", "postgres")

    # .envではDB_PASSとなっているため、ここで名前を合わせて読み込みます
    DB_PASSWORD: str = os.getenv("DB_PASS", "password")

    # Cloud SQL接続名、またはローカルホスト
    DB_HOST: str = os.getenv("INSTANCE_CONNECTION_NAME", "localhost")
    DB_NAME: str = os.getenv("DB_NAME", "market_passport")

    # チェックインQRの署名鍵 (HS256)
    JWT_SECRET: str = os.getenv("JWT_SECRET", "")

    # イベント日に残すトークン参照の長さ（監査用、失効には使わない）
    QR_TOKEN_ID_LENGTH: int = int(os.getenv("QR_TOKEN_ID_LENGTH", "16"))

    # ブース検索の最大件数
    BOOTH_LOOKUP_LIMIT: int = int(os.getenv("BOOTH_LOOKUP_LIMIT", "10"))

    # 来場回数をシーズン単位で数えるか（false ならマーケット全期間）
    SEASON_SCOPED_VISITS: bool = (
        os.getenv("SEASON_SCOPED_VISITS", "true").lower() == "true"
    )

    DEFAULT_MARKET_TIMEZONE: str = os.getenv(
        "DEFAULT_MARKET_TIMEZONE", "America/New_York"
    )

    # CORS設定
    CORS_ORIGINS: list = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173").split(",")
        if origin.strip()
    ]

    # DEBUG mode
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"


# 設定インスタンスを作成してエクスポート
settings = Settings()
