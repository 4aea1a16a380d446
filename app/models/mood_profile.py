from collections.abc import Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class MoodProfile(BaseModel):
    """
    One mood archetype from the catalog.

    Built once at load time and never mutated. ``percent_conditions`` is a
    read-only conjunction of strict minimum thresholds keyed by lowercased
    emotion name. Music tags and the suggestion note are derived from
    ``pattern_type``.
    """

    model_config = ConfigDict(frozen=True)

    label: str
    description: str = ""
    emotion_triggers: tuple[str, ...] = ()
    percent_conditions: Mapping[str, float] = Field(
        default_factory=dict, validate_default=True, description="Emotion → minimum percentage"
    )
    pattern_type: str = ""
    quotes: tuple[str, ...] = ()
    music_tags: tuple[str, ...] = ()
    suggestion_note: str = ""

    @field_validator("percent_conditions", mode="after")
    @classmethod
    def _freeze_conditions(cls, value: Mapping[str, float]) -> Mapping[str, float]:
        return MappingProxyType(dict(value))

    @field_serializer("percent_conditions")
    def _dump_conditions(self, value: Mapping[str, float]) -> dict[str, float]:
        return dict(value)

    @property
    def has_conditions(self) -> bool:
        return bool(self.percent_conditions)


class ConditionSpec(BaseModel):
    """A single ``emotion > threshold`` clause in the structured source format."""

    emotion: str = Field(min_length=1)
    threshold: float = Field(allow_inf_nan=False)


class ProfileSource(BaseModel):
    """
    Structured authoring format for a mood archetype.

    Replaces the delimiter-encoded CSV fields with typed values, validated at load time.
    """

    label: str = Field(min_length=1)
    triggers: list[str] = Field(default_factory=list)
    conditions: list[ConditionSpec] = Field(default_factory=list)
    pattern_type: str = ""
    description: str = ""
    quotes: list[str] = Field(default_factory=list)
