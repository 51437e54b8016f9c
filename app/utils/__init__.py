# market-passport-backend/app/utils/__init__.py
"""
ユーティリティモジュール
"""

from .time_utils import (
    now_unix,
    get_market_tz,
    get_market_now,
    get_market_today,
    start_of_market_day,
)
