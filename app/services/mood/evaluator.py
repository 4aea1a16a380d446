from collections.abc import Mapping

from app.models.mood_profile import MoodProfile


class ConditionEvaluator:
    """
    Scores a profile against an emotion vector.

    All of a profile's thresholds must be strictly exceeded. The score of a
    qualifying profile is its total margin over those thresholds.
    """

    @staticmethod
    def is_satisfied(emotions: Mapping[str, float], emotion: str, min_pct: float) -> bool:
        return emotions.get(emotion, 0.0) > min_pct

    @staticmethod
    def evaluate(profile: MoodProfile, emotions: Mapping[str, float]) -> float | None:
        """
        Score a profile.

        Args:
            profile: Profile whose conditions are checked
            emotions: Normalized emotion vector (lowercased names)

        Returns:
            Sum of margins if every condition holds, None if the profile is not a candidate
        """
        if not profile.percent_conditions:
            return None

        margin = 0.0
        for emotion, min_pct in profile.percent_conditions.items():
            if not ConditionEvaluator.is_satisfied(emotions, emotion, min_pct):
                return None
            margin += emotions.get(emotion, 0.0) - min_pct
        return margin
