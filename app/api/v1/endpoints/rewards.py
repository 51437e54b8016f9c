from fastapi import APIRouter, Query

from app.db.data.rewards import REWARD_TIERS
from app.schemas.reward import RewardCatalogResponse, RewardProgress
from app.services.reward_service import get_reward_progress


router = APIRouter()


@router.get("/", response_model=RewardCatalogResponse)
def read_reward_catalog():
    return RewardCatalogResponse(tiers=list(REWARD_TIERS))


@router.get("/progress", response_model=RewardProgress)
def read_reward_progress(visit_count: int = Query(..., alias="visitCount", ge=0)):
    return get_reward_progress(visit_count)
