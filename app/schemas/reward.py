from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import List, Optional


class RewardTier(BaseModel):
    """報酬ティア（カタログの1行）。生成後は変更不可"""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    threshold: int  # 必要な来場回数
    title: str
    description: str
    physical_token: Optional[str] = None  # 現地で受け取れる物
    garden_unlock: Optional[str] = None  # 庭で解放されるもの


class RewardProgress(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current: int
    required: int
    percentage: int
    next_reward: Optional[RewardTier] = None


class RewardCatalogResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    tiers: List[RewardTier]
