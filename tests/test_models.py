"""
Tests for app/models/mood_profile.py: transport format and immutability.
"""

import pytest
from pydantic import ValidationError

from app.models.mood_profile import MoodProfile
from app.services.mood.parser import ProfileParser


@pytest.fixture
def profile(make_row) -> MoodProfile:
    return ProfileParser.from_row(
        make_row(
            "Bittersweet Surprise",
            conditions="Sad > 21.5%, Surprised > 15%",
            pattern="Contrast Blend",
            triggers="Sad, Surprised",
            description="Mixed.",
            quotes="['One', 'Two']",
        )
    )


class TestTransport:
    def test_json_round_trip(self, profile):
        restored = MoodProfile.model_validate_json(profile.model_dump_json())

        assert restored == profile
        assert restored.label == profile.label
        assert restored.percent_conditions == {"sad": 21.5, "surprised": 15.0}
        assert restored.quotes == ("One", "Two")
        assert restored.music_tags == profile.music_tags
        assert restored.suggestion_note == profile.suggestion_note

    def test_dump_uses_snake_case_keys(self, profile):
        assert set(profile.model_dump()) == {
            "label",
            "description",
            "emotion_triggers",
            "percent_conditions",
            "pattern_type",
            "quotes",
            "music_tags",
            "suggestion_note",
        }

    def test_validate_from_plain_dict(self):
        restored = MoodProfile.model_validate(
            {"label": "X", "quotes": ["a"], "music_tags": ["pop"], "percent_conditions": {"joy": 5}}
        )
        assert restored.quotes == ("a",)
        assert restored.percent_conditions == {"joy": 5.0}


class TestImmutability:
    def test_fields_cannot_be_reassigned(self, profile):
        with pytest.raises(ValidationError):
            profile.label = "Changed"

    def test_conditions_cannot_be_mutated(self, profile):
        with pytest.raises(TypeError):
            profile.percent_conditions["x"] = 1

    def test_default_conditions_are_read_only(self):
        profile = MoodProfile(label="Empty")
        assert not profile.has_conditions
        with pytest.raises(TypeError):
            profile.percent_conditions["happy"] = 1

    def test_conditions_copied_from_source_dict(self):
        conditions = {"happy": 50.0}
        profile = MoodProfile(label="A", percent_conditions=conditions)
        conditions["happy"] = 99.0
        assert profile.percent_conditions["happy"] == 50.0

    def test_dump_returns_plain_dict(self, profile):
        assert type(profile.model_dump()["percent_conditions"]) is dict
