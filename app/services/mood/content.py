import hashlib
import random
from collections.abc import Mapping

from app.models.mood_profile import MoodProfile
from app.services.mood.constants import EMPTY_PROFILE_QUOTE


class ContentSelector:
    """
    Chooses the quote shown with a matched profile.

    pick_quote() is the only random step in the pipeline; pass an index or a
    seeded Random to make it reproducible.
    """

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def pick_quote(self, profile: MoodProfile, index: int | None = None, rng: random.Random | None = None) -> str:
        if not profile.quotes:
            return EMPTY_PROFILE_QUOTE
        if index is not None:
            return profile.quotes[index % len(profile.quotes)]
        return (rng or self.rng).choice(profile.quotes)

    @staticmethod
    def stable_quote(profile: MoodProfile, emotions: Mapping[str, float]) -> str:
        """Pick a quote from a hash of the emotion vector, so equal inputs get the same quote."""
        if not profile.quotes:
            return EMPTY_PROFILE_QUOTE
        seed = ",".join(f"{name}:{score:.4f}" for name, score in sorted(emotions.items()))
        h = hashlib.md5(f"{profile.label}|{seed}".encode()).hexdigest()
        return profile.quotes[int(h[-8:], 16) % len(profile.quotes)]


content_selector = ContentSelector()
