from fastapi import APIRouter

from .endpoints.health import router as health_router
from .endpoints.mood import router as mood_router

api_router = APIRouter()


@api_router.get("/")
async def root():
    return {"message": "Moodmatch API is running"}


api_router.include_router(health_router)
api_router.include_router(mood_router)
