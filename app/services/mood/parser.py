import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from loguru import logger
from pydantic import ValidationError

from app.core.constants import PROFILE_ROW_MIN_FIELDS
from app.models.mood_profile import MoodProfile, ProfileSource
from app.services.mood.constants import (
    DEFAULT_QUOTE,
    DRIFT_CONDITION_FACTOR,
    DRIFT_PROFILE_LABEL,
    DRIFT_PROFILE_QUOTES,
    NEUTRAL_PROFILE_DESCRIPTION,
    NEUTRAL_PROFILE_LABEL,
    NEUTRAL_PROFILE_QUOTES,
    NEUTRAL_PROFILE_TRIGGERS,
    QUOTE_CHARS,
    QUOTE_LIST_SEPARATOR,
    PatternType,
    content_for_pattern,
)
from app.services.mood.errors import SourceFormatError


class ProfileParser:
    """
    Turns raw catalog rows (or structured records) into MoodProfile objects.

    Row layout, by position:
        0 label, 1 triggers, 2 conditions, 3 pattern type, 4 description, 5 quotes

    Malformed condition clauses and quote fragments are dropped. Only a row
    that is too short to read raises SourceFormatError.
    """

    @staticmethod
    def parse_triggers(text: str | None) -> tuple[str, ...]:
        """Split a comma-separated trigger list, dropping blanks."""
        if not text:
            return ()
        return tuple(part.strip() for part in text.split(",") if part.strip())

    @staticmethod
    def merge_condition(conditions: dict[str, float], emotion: str, threshold: float) -> None:
        """Record a threshold, keeping the highest one per emotion."""
        existing = conditions.get(emotion)
        if existing is None or threshold > existing:
            conditions[emotion] = threshold

    @staticmethod
    def parse_conditions(text: str | None) -> dict[str, float]:
        """
        Parse clauses like ``"Sad > 21%, Surprised > 15%"``.

        Returns:
            Lowercased emotion → minimum percentage
        """
        conditions: dict[str, float] = {}
        if not text:
            return conditions

        for clause in text.split(","):
            parts = clause.split(">")
            if len(parts) != 2:
                if clause.strip():
                    logger.debug(f"Skipping malformed condition clause: {clause.strip()!r}")
                continue

            emotion = parts[0].strip().lower()
            try:
                threshold = float(parts[1].replace("%", "").strip())
            except ValueError:
                logger.debug(f"Skipping condition with unparseable threshold: {clause.strip()!r}")
                continue

            if not emotion or not math.isfinite(threshold):
                continue
            ProfileParser.merge_condition(conditions, emotion, threshold)

        return conditions

    @staticmethod
    def parse_quotes(text: str | None) -> tuple[str, ...]:
        """
        Parse a bracketed pseudo-list like ``['Quote one', 'Quote two']``.

        Text that is not bracket-delimited yields no quotes.
        """
        if not text:
            return ()
        text = text.strip()
        if not (text.startswith("[") and text.endswith("]")):
            return ()

        quotes = []
        for part in text[1:-1].split(QUOTE_LIST_SEPARATOR):
            clean = part.strip().strip(QUOTE_CHARS).strip()
            if clean:
                quotes.append(clean)
        return tuple(quotes)

    @staticmethod
    def build(
        label: str,
        description: str,
        triggers: Iterable[str],
        conditions: Mapping[str, float],
        pattern_type: str,
        quotes: Iterable[str],
    ) -> MoodProfile:
        """Assemble a profile, deriving music tags and note from the pattern type."""
        content = content_for_pattern(pattern_type)
        quotes = tuple(quotes)
        return MoodProfile(
            label=label,
            description=description,
            emotion_triggers=tuple(triggers),
            percent_conditions=dict(conditions),
            pattern_type=pattern_type,
            quotes=quotes or (DEFAULT_QUOTE,),
            music_tags=content.music_tags,
            suggestion_note=content.suggestion_note,
        )

    @staticmethod
    def from_row(row: Sequence[str], row_number: int | None = None) -> MoodProfile:
        """
        Parse one positional row of raw strings.

        Raises:
            SourceFormatError: if the row has fewer fields than required
        """
        if row is None or len(row) < PROFILE_ROW_MIN_FIELDS:
            found = 0 if row is None else len(row)
            raise SourceFormatError(
                f"Expected at least {PROFILE_ROW_MIN_FIELDS} fields, got {found}",
                row_number=row_number,
            )

        fields = [(field or "") for field in row[:PROFILE_ROW_MIN_FIELDS]]
        return ProfileParser.build(
            label=fields[0].strip(),
            description=fields[4].strip(),
            triggers=ProfileParser.parse_triggers(fields[1]),
            conditions=ProfileParser.parse_conditions(fields[2]),
            pattern_type=fields[3].strip(),
            quotes=ProfileParser.parse_quotes(fields[5]),
        )

    @staticmethod
    def from_record(record: ProfileSource | dict[str, Any], row_number: int | None = None) -> MoodProfile:
        """
        Parse one structured record.

        Raises:
            SourceFormatError: if the record fails validation
        """
        if not isinstance(record, ProfileSource):
            try:
                record = ProfileSource.model_validate(record)
            except ValidationError as e:
                raise SourceFormatError(f"Invalid profile record: {e}", row_number=row_number) from e

        conditions: dict[str, float] = {}
        for condition in record.conditions:
            emotion = condition.emotion.strip().lower()
            if emotion:
                ProfileParser.merge_condition(conditions, emotion, condition.threshold)

        return ProfileParser.build(
            label=record.label.strip(),
            description=record.description.strip(),
            triggers=[t.strip() for t in record.triggers if t.strip()],
            conditions=conditions,
            pattern_type=record.pattern_type.strip(),
            quotes=[q.strip() for q in record.quotes if q.strip()],
        )

    @staticmethod
    def neutral_profile() -> MoodProfile:
        """The built-in fallback used when the catalog has no neutral row."""
        return ProfileParser.build(
            label=NEUTRAL_PROFILE_LABEL,
            description=NEUTRAL_PROFILE_DESCRIPTION,
            triggers=NEUTRAL_PROFILE_TRIGGERS,
            conditions={},
            pattern_type=PatternType.BALANCED.value.title(),
            quotes=NEUTRAL_PROFILE_QUOTES,
        )

    @staticmethod
    def drift_profile(emotion: str, score: float) -> MoodProfile:
        """A one-off profile describing a state dominated by a single emotion."""
        return ProfileParser.build(
            label=DRIFT_PROFILE_LABEL,
            description=f"A unique emotional state dominated by {emotion}.",
            triggers=(emotion,),
            conditions={emotion: score * DRIFT_CONDITION_FACTOR},
            pattern_type=PatternType.ADAPTIVE.value.title(),
            quotes=DRIFT_PROFILE_QUOTES,
        )
