from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional
from datetime import datetime

from app.schemas.garden import GardenPlant, PurchaseCategory
from app.schemas.reward import RewardTier


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- リクエストスキーマ ---
class CheckInRequest(_CamelModel):
    """来場者のQRスキャンによるチェックイン"""

    qr_payload: str = Field(min_length=1)
    categories: List[PurchaseCategory] = Field(default_factory=list)


class BoothCheckInRequest(_CamelModel):
    """ブースでスタッフが代理でチェックインする"""

    user_id: str = Field(min_length=1)
    day_id: str = Field(min_length=1)
    categories: List[PurchaseCategory] = Field(default_factory=list)


# --- レスポンススキーマ ---
class CheckInResponse(_CamelModel):
    success: bool = True
    check_in_id: str
    visit_count: int
    new_reward: Optional[RewardTier] = None
    physical_reward: Optional[str] = None  # この来場で受け取れる景品
    plant: Optional[GardenPlant] = None


class CheckInRecord(_CamelModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: str
    market_id: str
    event_day_id: str
    user_id: str
    timestamp: Optional[datetime] = None
    categories: List[str] = Field(default_factory=list)
    operator_id: str
    source: str


class BoothVisitor(_CamelModel):
    user_id: str
    display_name: Optional[str] = None
    email: Optional[str] = None
    visit_count: int
    already_checked_in: bool


class CategoryOption(_CamelModel):
    """ブースで選ぶ購入カテゴリ"""

    id: PurchaseCategory
    label: str
