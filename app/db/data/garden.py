# app/db/data/garden.py

from typing import get_args

from app.schemas.garden import PurchaseCategory

PURCHASE_CATEGORIES = list(get_args(PurchaseCategory))

CATEGORY_LABELS = {
    "produce": "Produce",
    "baked": "Baked goods",
    "meat_dairy": "Meat & dairy",
    "prepared": "Prepared food",
    "crafts": "Crafts & goods",
    "flowers": "Flowers & plants",
    "browsing": "Just browsing",
}

# 何も買っていない場合のカテゴリ
DEFAULT_CATEGORY = "browsing"

# カテゴリ → 植物の候補（この中からランダムに1つ）
CATEGORY_PLANT_MAP = {
    "produce": ["tomato", "carrot", "lettuce", "pepper"],
    "baked": ["corn", "sunflower"],
    "meat_dairy": ["sunflower", "corn"],
    "prepared": ["tomato", "pepper"],
    "crafts": ["flower", "sunflower"],
    "flowers": ["flower", "sunflower", "strawberry"],
    "browsing": ["seedling", "flower"],
}

# 表示用の絵文字（アートに差し替えるまでの仮）
PLANT_EMOJI = {
    "seedling": "🌱",
    "tomato": "🍅",
    "sunflower": "🌻",
    "corn": "🌽",
    "pumpkin": "🎃",
    "carrot": "🥕",
    "pepper": "🌶️",
    "lettuce": "🥬",
    "strawberry": "🍓",
    "flower": "🌸",
}

GOLDEN_DECORATION = "✨"

DEFAULT_BACKGROUND = "default"
DEFAULT_GRID_WIDTH = 4
DEFAULT_GRID_HEIGHT = 4
