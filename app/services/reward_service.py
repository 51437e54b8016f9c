# market-passport-backend/app/services/reward_service.py
"""
報酬ティアの計算ロジック

来場回数だけを入力にとる純粋関数。負の回数は0として扱う。
"""

from typing import List, Optional

from app.db.data.rewards import REWARD_TIERS
from app.schemas.reward import RewardProgress, RewardTier


def _clamp(visit_count: int) -> int:
    return max(int(visit_count), 0)


def get_next_reward(visit_count: int) -> Optional[RewardTier]:
    """次に狙えるティア。全部獲得済みなら None"""
    visit_count = _clamp(visit_count)
    for tier in REWARD_TIERS:
        if visit_count < tier.threshold:
            return tier
    return None


def get_earned_rewards(visit_count: int) -> List[RewardTier]:
    """獲得済みのティア（カタログ順）"""
    visit_count = _clamp(visit_count)
    return [tier for tier in REWARD_TIERS if visit_count >= tier.threshold]


def get_newly_earned_reward(visit_count: int) -> Optional[RewardTier]:
    """
    この来場でちょうど到達したティア。
    「条件を満たしているか」ではなく「この回でしきい値を跨いだか」を見る。
    """
    visit_count = _clamp(visit_count)
    for tier in REWARD_TIERS:
        if tier.threshold == visit_count:
            return tier
    return None


def has_physical_reward(visit_count: int) -> Optional[RewardTier]:
    """この来場で現物の景品がもらえる場合、そのティアを返す"""
    reward = get_newly_earned_reward(visit_count)
    if reward and reward.physical_token:
        return reward
    return None


def get_reward_progress(visit_count: int) -> RewardProgress:
    """次のティアまでの進捗"""
    visit_count = _clamp(visit_count)
    next_reward = get_next_reward(visit_count)

    if next_reward is None:
        return RewardProgress(
            current=visit_count,
            required=visit_count,
            percentage=100,
            next_reward=None,
        )

    # 1つ前のティアのしきい値（最初のティアなら0）
    tier_index = REWARD_TIERS.index(next_reward)
    previous_threshold = REWARD_TIERS[tier_index - 1].threshold if tier_index > 0 else 0

    progress_in_tier = visit_count - previous_threshold
    tier_size = next_reward.threshold - previous_threshold

    return RewardProgress(
        current=visit_count,
        required=next_reward.threshold,
        percentage=_round_half_up(progress_in_tier * 100 / tier_size),
        next_reward=next_reward,
    )


def garden_variant_for(tier: Optional[RewardTier]) -> Optional[str]:
    """ティアの庭アンロック内容から、記念の植物のバリアントを決める"""
    if tier is None or not tier.garden_unlock:
        return None
    unlock = tier.garden_unlock.lower()
    if "golden" in unlock:
        return "golden"
    if "animated" in unlock:
        return "animated"
    return None


def _round_half_up(value: float) -> int:
    # 0.5 は切り上げ (2.5 -> 3)。round() の偶数丸めとは異なる
    return int(value + 0.5)
