from pydantic import BaseModel, Field

from app.models.mood_profile import MoodProfile


class MatchRequest(BaseModel):
    emotions: dict[str, float] = Field(default_factory=dict, description="Emotion name → confidence (0-100)")
    seed: int | None = Field(default=None, description="Seed for reproducible quote selection")
    quote_index: int | None = Field(default=None, ge=0, description="Pick this quote instead of a random one")
    include_candidates: bool = False


class CandidateSummary(BaseModel):
    label: str
    score: float
    index: int


class MatchResponse(BaseModel):
    profile: MoodProfile
    quote: str
    dominant_emotion: str | None = None
    is_fallback: bool = False
    candidates: list[CandidateSummary] = Field(default_factory=list)
