import random

from fastapi import APIRouter, HTTPException
from loguru import logger

from app.models.match import CandidateSummary, MatchRequest, MatchResponse
from app.models.mood_profile import MoodProfile
from app.services.mood.content import content_selector
from app.services.mood.engine import match_engine
from app.services.mood.repository import profile_repository

router = APIRouter(prefix="/api/mood", tags=["mood"])


@router.post("/match", response_model=MatchResponse)
async def match_mood(request: MatchRequest) -> MatchResponse:
    """
    Match an emotion vector to a mood profile and pick a quote for it.

    The profile is a pure function of the vector; only the quote is random
    unless ``seed`` or ``quote_index`` is given.
    """
    try:
        outcome = match_engine.match_details(request.emotions)
        rng = random.Random(request.seed) if request.seed is not None else None
        quote = content_selector.pick_quote(outcome.profile, index=request.quote_index, rng=rng)

        candidates = []
        if request.include_candidates:
            candidates = [
                CandidateSummary(label=c.profile.label, score=round(c.score, 4), index=c.index)
                for c in outcome.candidates
            ]

        return MatchResponse(
            profile=outcome.profile,
            quote=quote,
            dominant_emotion=outcome.dominant_emotion,
            is_fallback=outcome.is_fallback,
            candidates=candidates,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Error matching mood for {list(request.emotions)}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/profiles", response_model=list[MoodProfile])
async def list_profiles() -> list[MoodProfile]:
    return list(profile_repository.get_catalog())


@router.post("/reload")
async def reload_profiles() -> dict:
    """Reload the catalog from disk. The current catalog stays in place if loading fails."""
    try:
        catalog = profile_repository.load_default()
    except (OSError, ValueError) as e:
        logger.error(f"Failed to reload mood profiles: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to reload mood profiles: {e}")
    return {"profiles": len(catalog), "fallback": profile_repository.fallback.label}
