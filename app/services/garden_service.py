# market-passport-backend/app/services/garden_service.py
"""
庭（ガーデン）のロジック - 植物の選択と配置

どの関数も入力の GardenState を書き換えず、新しい GardenState を返す。
同じ庭への同時更新の直列化は呼び出し側（チェックイン処理）の責任。
"""

import random
import time
import uuid
from typing import Any, Dict, List, Optional

from app.db.data.garden import (
    CATEGORY_PLANT_MAP,
    DEFAULT_BACKGROUND,
    DEFAULT_CATEGORY,
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_WIDTH,
    GOLDEN_DECORATION,
    PLANT_EMOJI,
)
from app.schemas.garden import GardenPlant, GardenState, GridPosition, GridSize


def select_plant_type(categories: List[str], rng: Optional[random.Random] = None) -> str:
    """
    購入カテゴリから植物の種類を選ぶ。
    複数カテゴリなら先頭のもの、空なら browsing 扱い。
    """
    rng = rng or random
    category = categories[0] if categories else DEFAULT_CATEGORY
    options = CATEGORY_PLANT_MAP[category]
    return rng.choice(options)


def find_next_position(garden: GardenState) -> GridPosition:
    """上の行から、左から順に最初の空きマスを探す"""
    occupied = {(p.position.x, p.position.y) for p in garden.plants}

    for y in range(garden.grid_size.height):
        for x in range(garden.grid_size.width):
            if (x, y) not in occupied:
                return GridPosition(x=x, y=y)

    # 満杯 → グリッドの下に新しい行を始める
    return GridPosition(x=0, y=garden.grid_size.height)


def _new_plant_id(now_ms: int) -> str:
    return f"plant-{now_ms}-{uuid.uuid4().hex[:8]}"


def add_plant(
    garden: GardenState,
    day_id: str,
    categories: List[str],
    variant: Optional[str] = None,
    rng: Optional[random.Random] = None,
    now: Optional[float] = None,
) -> GardenState:
    """植物を1本植えた新しい庭を返す"""
    plant_type = select_plant_type(categories, rng=rng)
    position = find_next_position(garden)
    planted_at = int((now if now is not None else time.time()) * 1000)

    new_plant = GardenPlant(
        id=_new_plant_id(planted_at),
        type=plant_type,
        planted_at=planted_at,
        day_id=day_id,
        position=position,
        variant=variant,
    )

    # 必要ならグリッドを広げる（縮めることはない）
    new_grid_size = GridSize(
        width=max(garden.grid_size.width, position.x + 1),
        height=max(garden.grid_size.height, position.y + 1),
    )

    return garden.model_copy(
        update={
            "plants": [*garden.plants, new_plant],
            "grid_size": new_grid_size,
        }
    )


def default_garden() -> GardenState:
    return GardenState(
        plants=[],
        unlocked_backgrounds=[DEFAULT_BACKGROUND],
        grid_size=GridSize(width=DEFAULT_GRID_WIDTH, height=DEFAULT_GRID_HEIGHT),
    )


def ensure_garden(garden: Optional[GardenState] = None) -> GardenState:
    """既存の庭があればそれを、なければ空の庭を返す"""
    return garden if garden is not None else default_garden()


def load_garden(raw: Optional[Dict[str, Any]]) -> GardenState:
    """DBに保存されたJSONから庭を復元する（未作成なら空の庭）"""
    if not raw:
        return default_garden()
    return GardenState.model_validate(raw)


def dump_garden(garden: GardenState) -> Dict[str, Any]:
    return garden.model_dump(mode="json", by_alias=True)


def get_plant_display(plant: GardenPlant) -> str:
    """表示用の絵文字（golden は飾りつき）"""
    base = PLANT_EMOJI[plant.type]
    if plant.variant == "golden":
        return f"{GOLDEN_DECORATION}{base}{GOLDEN_DECORATION}"
    return base
