# market-passport-backend/app/utils/time_utils.py
"""
時刻関連のユーティリティ関数
「今日」はマーケットのタイムゾーン基準で判定する
"""

import time
from datetime import datetime, timezone
from typing import Optional
from pytz import timezone as tz

from app.core.config import settings


def now_unix() -> int:
    """現在のUnix時刻（秒）"""
    return int(time.time())


def get_market_tz(tz_name: Optional[str] = None):
    return tz(tz_name or settings.DEFAULT_MARKET_TIMEZONE)


def get_market_now(tz_name: Optional[str] = None) -> datetime:
    """マーケット現地の現在時刻を取得"""
    return datetime.now(get_market_tz(tz_name))


def get_market_today(tz_name: Optional[str] = None) -> str:
    """マーケット現地の今日の日付 (YYYY-MM-DD)"""
    return get_market_now(tz_name).date().isoformat()


def start_of_market_day(tz_name: Optional[str] = None) -> datetime:
    """マーケット現地の今日0時をUTCで返す"""
    market_tz = get_market_tz(tz_name)
    today = get_market_now(tz_name).date()
    local_midnight = market_tz.localize(datetime(today.year, today.month, today.day))
    return local_midnight.astimezone(timezone.utc)

