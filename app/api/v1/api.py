from fastapi import APIRouter
from .endpoints import (
    users,
    checkin,
    booth,
    admin,
    rewards,
)

api_router = APIRouter()

api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(checkin.router, prefix="/checkin", tags=["CheckIn"])
api_router.include_router(booth.router, prefix="/booth", tags=["Booth"])
api_router.include_router(admin.router, prefix="/admin", tags=["Admin"])
api_router.include_router(
    rewards.router,
    prefix="/rewards",
    tags=["Rewards"],
)
