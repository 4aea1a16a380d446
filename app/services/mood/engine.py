import math
from collections.abc import Mapping
from typing import Any, NamedTuple

from loguru import logger

from app.core.config import settings
from app.models.mood_profile import MoodProfile
from app.services.mood.evaluator import ConditionEvaluator
from app.services.mood.parser import ProfileParser
from app.services.mood.repository import ProfileRepository, profile_repository


class ScoredCandidate(NamedTuple):
    profile: MoodProfile
    score: float
    index: int  # position in the catalog, used for tie-breaks


class MatchOutcome(NamedTuple):
    profile: MoodProfile
    candidates: list[ScoredCandidate]
    is_fallback: bool
    dominant_emotion: str | None


class MatchEngine:
    """
    Picks exactly one mood profile for an emotion vector.

    Ranking: highest margin score wins, ties go to the profile listed first in
    the catalog. When nothing qualifies the repository's fallback profile is
    returned (or, with drift fallback enabled, a profile built around the
    dominant emotion). Matching never performs I/O once the catalog is loaded.
    """

    def __init__(
        self,
        repository: ProfileRepository | None = None,
        noise_threshold: float | None = None,
        drift_fallback: bool | None = None,
    ):
        self.repository = repository or profile_repository
        self.noise_threshold = settings.EMOTION_NOISE_THRESHOLD if noise_threshold is None else noise_threshold
        self.drift_fallback = settings.DRIFT_FALLBACK_ENABLED if drift_fallback is None else drift_fallback

    @staticmethod
    def normalize(emotions: Mapping[str, Any] | None, noise_threshold: float = 0.0) -> dict[str, float]:
        """
        Lowercase and trim emotion names, drop non-numeric and sub-noise scores.

        Names that collapse to the same key keep the larger score.
        """
        normalized: dict[str, float] = {}
        for name, value in (emotions or {}).items():
            key = str(name).strip().lower()
            if not key:
                continue
            try:
                score = float(value)
            except (TypeError, ValueError):
                continue
            if math.isnan(score):
                continue
            if noise_threshold > 0 and score < noise_threshold:
                continue
            if key not in normalized or score > normalized[key]:
                normalized[key] = score
        return normalized

    @staticmethod
    def dominant_emotion(emotions: Mapping[str, float]) -> str | None:
        """Highest-scoring emotion; ties resolved alphabetically."""
        if not emotions:
            return None
        return min(emotions.items(), key=lambda kv: (-kv[1], kv[0]))[0]

    def rank(self, emotions: Mapping[str, Any] | None) -> list[ScoredCandidate]:
        """All qualifying profiles, best first."""
        normalized = self.normalize(emotions, self.noise_threshold)
        return self._rank_normalized(normalized, self.repository.get_catalog())

    def match(self, emotions: Mapping[str, Any] | None) -> MoodProfile:
        """Return the best matching profile. Never returns None."""
        return self.match_details(emotions).profile

    def match_details(self, emotions: Mapping[str, Any] | None) -> MatchOutcome:
        normalized = self.normalize(emotions, self.noise_threshold)
        dominant = self.dominant_emotion(normalized)
        snapshot = self.repository.snapshot()
        candidates = self._rank_normalized(normalized, snapshot.catalog)

        if candidates:
            best = candidates[0]
            logger.debug(f"Best mood profile: '{best.profile.label}' (score {best.score:.2f})")
            return MatchOutcome(best.profile, candidates, False, dominant)

        if self.drift_fallback and dominant is not None:
            profile = ProfileParser.drift_profile(dominant, normalized[dominant])
        else:
            profile = snapshot.fallback
        logger.debug(f"No mood profile qualified, falling back to '{profile.label}'")
        return MatchOutcome(profile, [], True, dominant)

    def _rank_normalized(
        self, normalized: Mapping[str, float], catalog: tuple[MoodProfile, ...]
    ) -> list[ScoredCandidate]:
        candidates = []
        for index, profile in enumerate(catalog):
            score = ConditionEvaluator.evaluate(profile, normalized)
            if score is None:
                continue
            logger.debug(f"Profile '{profile.label}' qualifies with score {score:.2f}")
            candidates.append(ScoredCandidate(profile, score, index))

        candidates.sort(key=lambda c: (-c.score, c.index))
        return candidates


match_engine = MatchEngine()
