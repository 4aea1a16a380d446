from enum import Enum
from typing import Final, NamedTuple

DEFAULT_QUOTE: Final[str] = "Stay strong, emotions are temporary."
EMPTY_PROFILE_QUOTE: Final[str] = "Take a moment to breathe and feel your emotions."

# Separator between quotes inside the bracketed pseudo-list: ['a', 'b']
QUOTE_LIST_SEPARATOR: Final[str] = "', '"
QUOTE_CHARS: Final[str] = "'\""

# Drift fallback keeps 80% of the dominant score as its condition
DRIFT_CONDITION_FACTOR: Final[float] = 0.8


class PatternType(str, Enum):
    CONTRAST_BLEND = "contrast blend"
    SUBTLE_TENSION = "subtle tension"
    UPLIFTED = "uplifted"
    FOG_STATE = "fog state"
    DISORIENTED_STATE = "disoriented state"
    REFLECTIVE_BLEND = "reflective blend"
    MELANCHOLIC_PEACE = "melancholic peace"
    BLENDED_TRIAD = "blended (triad)"
    DOMINANT_SHADOW = "dominant + shadow"
    BALANCED = "balanced"
    ADAPTIVE = "adaptive"

    @classmethod
    def from_label(cls, raw: str | None) -> "PatternType | None":
        """Case-insensitive lookup. Returns None for unknown pattern types."""
        if not raw:
            return None
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return None


class PatternContent(NamedTuple):
    music_tags: tuple[str, ...]
    suggestion_note: str


DEFAULT_PATTERN_CONTENT: Final[PatternContent] = PatternContent(
    ("chill", "versatile", "adaptive"),
    "Your emotional state is unique - exploring diverse music might help you discover what resonates.",
)

PATTERN_CONTENT: Final[dict[PatternType, PatternContent]] = {
    PatternType.CONTRAST_BLEND: PatternContent(
        ("alternative", "indie rock", "experimental", "art rock"),
        "Your emotions are creating an interesting contrast - music that embraces complexity might resonate "
        "with you.",
    ),
    PatternType.SUBTLE_TENSION: PatternContent(
        ("ambient", "post-rock", "minimal", "atmospheric"),
        "There's an underlying tension in your emotional state - atmospheric music might help you process "
        "these feelings.",
    ),
    PatternType.UPLIFTED: PatternContent(
        ("pop", "upbeat", "indie pop", "feel-good"),
        "You're experiencing positive emotional energy - upbeat music can amplify these good vibes.",
    ),
    PatternType.FOG_STATE: PatternContent(
        ("dream pop", "ethereal", "shoegaze", "ambient"),
        "Your emotions are in a dreamy, unclear state - ethereal music might match your current headspace.",
    ),
    PatternType.DISORIENTED_STATE: PatternContent(
        ("experimental", "electronic", "glitch", "industrial"),
        "You're feeling emotionally scattered - experimental music might help you explore these complex "
        "feelings.",
    ),
    PatternType.REFLECTIVE_BLEND: PatternContent(
        ("singer-songwriter", "folk", "acoustic", "contemplative"),
        "You're in a contemplative mood - thoughtful, introspective music could complement your state.",
    ),
    PatternType.MELANCHOLIC_PEACE: PatternContent(
        ("neo-classical", "ambient", "melancholic", "peaceful"),
        "You're experiencing bittersweet emotions - music that balances sadness and beauty might resonate.",
    ),
    PatternType.BLENDED_TRIAD: PatternContent(
        ("progressive", "complex", "multi-genre", "eclectic"),
        "You have multiple strong emotions - complex, layered music might match your emotional richness.",
    ),
    PatternType.DOMINANT_SHADOW: PatternContent(
        ("dynamic", "orchestral", "cinematic", "dramatic"),
        "You have a strong primary emotion with subtle undertones - dynamic music with depth might suit you.",
    ),
    # Same content as the built-in neutral and drift profiles
    PatternType.BALANCED: PatternContent(
        ("ambient", "peaceful", "neutral"),
        "You're in a balanced state - gentle, ambient music might complement your calm energy.",
    ),
    PatternType.ADAPTIVE: PatternContent(
        ("adaptive", "introspective", "unique"),
        DEFAULT_PATTERN_CONTENT.suggestion_note,
    ),
}


def content_for_pattern(pattern_type: str | None) -> PatternContent:
    """Music tags and suggestion note for a raw pattern type, with the default arm for unknown types."""
    pattern = PatternType.from_label(pattern_type)
    if pattern is None:
        return DEFAULT_PATTERN_CONTENT
    return PATTERN_CONTENT[pattern]


# Neutral profile synthesized in code so a fallback always exists
NEUTRAL_PROFILE_LABEL: Final[str] = "Neutral Balance"
NEUTRAL_PROFILE_DESCRIPTION: Final[str] = "A balanced emotional state with no dominant feelings."
NEUTRAL_PROFILE_TRIGGERS: Final[tuple[str, ...]] = ("calm",)
NEUTRAL_PROFILE_QUOTES: Final[tuple[str, ...]] = (
    "In stillness, we find our center.",
    "Peace is not the absence of emotion, but the presence of balance.",
    "Sometimes the best state is simply being present.",
)

DRIFT_PROFILE_LABEL: Final[str] = "Emotion Drift"
DRIFT_PROFILE_QUOTES: Final[tuple[str, ...]] = (
    "Every emotion is temporary, but each one teaches us something.",
    "Your feelings are valid, even when they're hard to categorize.",
    "Sometimes the most interesting emotions are the ones that don't fit into boxes.",
)
