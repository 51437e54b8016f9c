# app/db/data/rewards.py
# 報酬ティアの正本。しきい値はシーズン中の来場回数。

from app.schemas.reward import RewardTier

REWARD_TIERS_DATA = [
    {
        "id": "first-harvest",
        "threshold": 1,
        "title": "First Harvest",
        "description": "Welcome to the market family!",
        "physical_token": "Welcome sticker",
        "garden_unlock": "First plant",
    },
    {
        "id": "getting-started",
        "threshold": 3,
        "title": "Getting Started",
        "description": "You know where to find the good stuff.",
        "garden_unlock": "New plant variety",
    },
    {
        "id": "regular",
        "threshold": 5,
        "title": "Regular",
        "description": "A familiar face at the market.",
        "physical_token": "Enamel pin",
        "garden_unlock": "Garden expansion",
    },
    {
        "id": "community-builder",
        "threshold": 8,
        "title": "Community Builder",
        "description": "You help make this market special.",
        "physical_token": "Limited tote bag",
        "garden_unlock": "Seasonal background",
    },
    {
        "id": "season-finisher",
        "threshold": 12,
        "title": "Season Finisher",
        "description": "You made it the whole season!",
        "physical_token": "Market mug",
        "garden_unlock": "Golden plant variant",
    },
    {
        "id": "perennial",
        "threshold": 13,  # 12回以降の来場はすべてここ
        "title": "Perennial",
        "description": "A true friend of the market.",
        "physical_token": "$5 gift certificate",
        "garden_unlock": "Special animated plant",
    },
]


def load_reward_tiers(rows):
    """
    カタログを検証してタプルにする。
    しきい値は1以上の整数で狭義単調増加、IDは重複不可。
    """
    tiers = tuple(RewardTier(**row) for row in rows)
    previous = 0
    seen = set()
    for tier in tiers:
        if tier.threshold < 1 or tier.threshold <= previous:
            raise ValueError(
                f"Reward tier '{tier.id}' threshold {tier.threshold} must be >= 1 "
                f"and greater than {previous}"
            )
        if tier.id in seen:
            raise ValueError(f"Duplicate reward tier id '{tier.id}'")
        seen.add(tier.id)
        previous = tier.threshold
    return tiers


REWARD_TIERS = load_reward_tiers(REWARD_TIERS_DATA)
