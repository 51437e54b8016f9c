"""
報酬ティア計算のテスト
"""

from __future__ import annotations

import pytest

from app.db.data.rewards import REWARD_TIERS, REWARD_TIERS_DATA, load_reward_tiers
from app.services.reward_service import (
    garden_variant_for,
    get_earned_rewards,
    get_newly_earned_reward,
    get_next_reward,
    get_reward_progress,
    has_physical_reward,
)

MAX_THRESHOLD = REWARD_TIERS[-1].threshold


class TestCatalog:

    def test_thresholds_strictly_increasing(self):
        thresholds = [t.threshold for t in REWARD_TIERS]
        assert thresholds == sorted(set(thresholds))
        assert thresholds[0] >= 1

    def test_rejects_non_increasing_thresholds(self):
        rows = [dict(REWARD_TIERS_DATA[0]), dict(REWARD_TIERS_DATA[1], threshold=1)]
        with pytest.raises(ValueError):
            load_reward_tiers(rows)

    def test_rejects_duplicate_ids(self):
        rows = [dict(REWARD_TIERS_DATA[0]), dict(REWARD_TIERS_DATA[1], id="first-harvest")]
        with pytest.raises(ValueError):
            load_reward_tiers(rows)

    def test_tiers_are_immutable(self):
        with pytest.raises(Exception):
            REWARD_TIERS[0].threshold = 99


class TestNextReward:

    def test_zero_visits_points_at_first_tier(self):
        assert get_next_reward(0).id == "first-harvest"

    def test_between_tiers(self):
        assert get_next_reward(3).id == "regular"
        assert get_next_reward(4).id == "regular"

    def test_none_after_last_tier(self):
        assert get_next_reward(MAX_THRESHOLD) is None
        assert get_next_reward(MAX_THRESHOLD + 10) is None


class TestEarnedRewards:

    def test_monotonic_and_bounded(self):
        previous = set()
        for count in range(0, MAX_THRESHOLD + 3):
            earned = get_earned_rewards(count)
            ids = {t.id for t in earned}
            assert previous <= ids
            assert all(t.threshold <= count for t in earned)
            previous = ids

    def test_catalog_order(self):
        earned = get_earned_rewards(8)
        assert [t.id for t in earned] == [
            "first-harvest", "getting-started", "regular", "community-builder",
        ]


class TestNewlyEarnedReward:

    @pytest.mark.parametrize("count,title", [
        (1, "First Harvest"),
        (3, "Getting Started"),
        (5, "Regular"),
        (8, "Community Builder"),
        (12, "Season Finisher"),
    ])
    def test_milestones(self, count, title):
        assert get_newly_earned_reward(count).title == title

    def test_no_milestone_on_second_visit(self):
        assert get_newly_earned_reward(2) is None

    def test_matches_exactly_one_threshold(self):
        thresholds = {t.threshold for t in REWARD_TIERS}
        for count in range(0, MAX_THRESHOLD + 5):
            reward = get_newly_earned_reward(count)
            assert (reward is not None) == (count in thresholds)

    def test_physical_reward_only_when_token(self):
        assert has_physical_reward(1).physical_token == "Welcome sticker"
        # getting-started has no physical token
        assert has_physical_reward(3) is None
        assert has_physical_reward(2) is None


class TestRewardProgress:

    def test_percentage_always_in_range(self):
        for count in range(0, MAX_THRESHOLD + 5):
            progress = get_reward_progress(count)
            assert 0 <= progress.percentage <= 100
            assert (progress.percentage == 100) == (progress.next_reward is None)

    def test_first_tier_uses_zero_as_previous(self):
        progress = get_reward_progress(0)
        assert progress.required == 1
        assert progress.percentage == 0

    def test_mid_tier(self):
        # 5 → 8: (6 - 5) / (8 - 5) = 33%
        progress = get_reward_progress(6)
        assert progress.current == 6
        assert progress.required == 8
        assert progress.percentage == 33
        assert progress.next_reward.id == "community-builder"

    def test_half_rounds_up(self):
        # 1 → 3: (2 - 1) / (3 - 1) = 50%
        assert get_reward_progress(2).percentage == 50

    def test_all_earned(self):
        progress = get_reward_progress(20)
        assert progress.current == 20
        assert progress.required == 20
        assert progress.percentage == 100
        assert progress.next_reward is None

    def test_negative_count_is_clamped(self):
        progress = get_reward_progress(-3)
        assert progress.current == 0
        assert get_earned_rewards(-1) == []
        assert get_newly_earned_reward(-1) is None


class TestGardenVariant:

    def test_golden_and_animated(self):
        assert garden_variant_for(get_newly_earned_reward(12)) == "golden"
        assert garden_variant_for(get_newly_earned_reward(13)) == "animated"

    def test_plain_tiers(self):
        assert garden_variant_for(get_newly_earned_reward(1)) is None
        assert garden_variant_for(None) is None
