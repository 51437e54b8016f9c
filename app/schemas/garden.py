from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Literal, Optional

PlantType = Literal[
    "seedling",
    "tomato",
    "sunflower",
    "corn",
    "pumpkin",
    "carrot",
    "pepper",
    "lettuce",
    "strawberry",
    "flower",
]

PlantVariant = Literal["golden", "animated"]

PurchaseCategory = Literal[
    "produce",
    "baked",
    "meat_dairy",
    "prepared",
    "crafts",
    "flowers",
    "browsing",
]


class GridPosition(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: int
    y: int


class GridSize(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int
    height: int


class GardenPlant(BaseModel):
    """庭に植えた1本。作成後は変更も削除もしない"""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    type: PlantType
    planted_at: int  # Unix timestamp (ミリ秒)
    day_id: str  # どのイベント日のチェックインで植えたか
    position: GridPosition
    variant: Optional[PlantVariant] = None


class GardenState(BaseModel):
    """
    ユーザーの庭。plants は植えた順。
    grid_size は常に「埋まっている最大座標 + 1」以上。
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    plants: List[GardenPlant] = Field(default_factory=list)
    unlocked_backgrounds: List[str] = Field(default_factory=list)
    grid_size: GridSize


class GardenPlantDisplay(GardenPlant):
    display: str


class GardenResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    plants: List[GardenPlantDisplay]
    unlocked_backgrounds: List[str]
    grid_size: GridSize
