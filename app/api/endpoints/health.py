from fastapi import APIRouter

from app.services.mood.repository import profile_repository

router = APIRouter(tags=["health"])


@router.get("/health", summary="Readiness check with catalog size")
async def health_check() -> dict:
    return {"status": "ok", "profiles": len(profile_repository)}
