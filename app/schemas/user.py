from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime

from app.schemas.checkin import CheckInRecord
from app.schemas.garden import GardenState
from app.schemas.reward import RewardProgress


class UserCreate(BaseModel):
    """
    APIがユーザー作成時にリクエストボディとして受け取るスキーマ
    uid はヘッダーから取るのでここには含めない
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    display_name: Optional[str] = None
    email: Optional[str] = None


class UserBase(BaseModel):
    """
    APIでユーザー情報を返すときの基本スキーマ
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str  # firebase_uid
    display_name: Optional[str] = None
    email: Optional[str] = None
    created_at: Optional[datetime] = None
    garden: GardenState


class EarnedReward(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    reward_id: str
    season_id: Optional[str] = None
    achieved_at: Optional[datetime] = None
    redeemed_at: Optional[datetime] = None


class UserStats(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    season_id: Optional[str] = None  # 来場回数を数えたシーズン
    visit_count: int
    visits: List[CheckInRecord]
    earned_rewards: List[EarnedReward]
    progress: RewardProgress
