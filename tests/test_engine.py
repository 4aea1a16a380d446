"""
Tests for app/services/mood/engine.py

Covers:
- highest margin wins, ties go to the earlier catalog row
- fallback when nothing qualifies (catalog row or synthesized)
- drift fallback built from the dominant emotion
- input normalization (case, whitespace, duplicates, noise floor, junk values)
- determinism and totality, catalog not alterable through results
"""

import pytest

from app.services.mood.engine import MatchEngine
from app.services.mood.repository import ProfileRepository

# ---------------------------------------------------------------------------
# 1. Ranking
# ---------------------------------------------------------------------------


class TestRanking:
    def test_larger_margin_wins(self, make_row, build_engine):
        engine = build_engine(
            [
                make_row("A", conditions="Happy > 80%"),
                make_row("B", conditions="Happy > 70%, Joy > 60%"),
            ]
        )
        ranked = engine.rank({"happy": 90, "joy": 65})

        assert [c.profile.label for c in ranked] == ["B", "A"]
        assert ranked[0].score == pytest.approx(25.0)
        assert ranked[1].score == pytest.approx(10.0)
        assert engine.match({"happy": 90, "joy": 65}).label == "B"

    def test_single_candidate_returned(self, make_row, build_engine):
        engine = build_engine([make_row("A", conditions="Sad > 50%"), make_row("B", conditions="Happy > 50%")])
        assert engine.match({"happy": 51}).label == "B"

    def test_tie_goes_to_earlier_row(self, make_row, build_engine):
        engine = build_engine(
            [
                make_row("First", conditions="Happy > 50%"),
                make_row("Second", conditions="Happy > 50%"),
            ]
        )
        assert engine.match({"happy": 60}).label == "First"

    def test_tie_across_different_conditions_uses_row_order(self, make_row, build_engine):
        engine = build_engine(
            [
                make_row("Generic", conditions="Happy > 55%, Sad > 0%"),
                make_row("Specific", conditions="Happy > 50%"),
            ]
        )
        ranked = engine.rank({"happy": 60, "sad": 5})
        assert ranked[0].score == ranked[1].score
        assert ranked[0].profile.label == "Generic"

    def test_duplicate_labels_are_tolerated(self, make_row, build_engine):
        engine = build_engine(
            [
                make_row("Twin", conditions="Sad > 50%", description="sad twin"),
                make_row("Twin", conditions="Happy > 50%", description="happy twin"),
            ]
        )
        result = engine.match({"happy": 80})
        assert result.label == "Twin"
        assert result.description == "happy twin"
        assert engine.rank({"happy": 80})[0].index == 1

    def test_profile_without_conditions_never_selected(self, make_row, build_engine):
        engine = build_engine([make_row("Blank"), make_row("Happy", conditions="Happy > 10%")])
        assert engine.match({"happy": 5}).label == "Neutral Balance"
        assert [c.profile.label for c in engine.rank({"happy": 50})] == ["Happy"]


# ---------------------------------------------------------------------------
# 2. Fallback
# ---------------------------------------------------------------------------


class TestFallback:
    def test_empty_vector_returns_catalog_fallback(self, make_row, build_engine):
        engine = build_engine(
            [
                make_row("Happy", conditions="Happy > 10%"),
                make_row("Neutral Balance", pattern="Balanced", description="from the table"),
            ]
        )
        outcome = engine.match_details({})

        assert outcome.is_fallback
        assert outcome.candidates == []
        assert outcome.profile.label == "Neutral Balance"
        assert outcome.profile.description == "from the table"

    def test_fallback_synthesized_when_missing_from_catalog(self, make_row, build_engine):
        engine = build_engine([make_row("Happy", conditions="Happy > 10%")])
        profile = engine.match({})

        assert profile.label == "Neutral Balance"
        assert profile.percent_conditions == {}
        assert profile.music_tags == ("ambient", "peaceful", "neutral")

    def test_empty_catalog_returns_neutral(self, build_engine):
        engine = build_engine([])
        assert engine.match({"happy": 99}).label == "Neutral Balance"

    def test_unreadable_source_still_matches(self, tmp_path):
        repository = ProfileRepository(source_path=tmp_path / "missing.csv")
        engine = MatchEngine(repository, noise_threshold=0.0, drift_fallback=False)

        assert engine.match({"happy": 99}).label == "Neutral Balance"
        assert repository.is_loaded
        assert len(repository) == 0

    def test_drift_fallback_uses_dominant_emotion(self, make_row, build_engine):
        engine = build_engine([make_row("Happy", conditions="Happy > 90%")], drift_fallback=True)
        outcome = engine.match_details({"Sad": 10, "happy": 5})

        assert outcome.is_fallback
        assert outcome.dominant_emotion == "sad"
        assert outcome.profile.label == "Emotion Drift"
        assert outcome.profile.percent_conditions == {"sad": pytest.approx(8.0)}

    def test_drift_fallback_with_empty_vector_is_neutral(self, make_row, build_engine):
        engine = build_engine([make_row("Happy", conditions="Happy > 90%")], drift_fallback=True)
        assert engine.match({}).label == "Neutral Balance"

    def test_drift_not_used_when_candidate_exists(self, make_row, build_engine):
        engine = build_engine([make_row("Happy", conditions="Happy > 50%")], drift_fallback=True)
        assert engine.match({"happy": 60}).label == "Happy"


# ---------------------------------------------------------------------------
# 3. Input normalization
# ---------------------------------------------------------------------------


class TestNormalize:
    def test_keys_lowercased_and_trimmed(self, make_row, build_engine):
        engine = build_engine([make_row("Happy", conditions="Happy > 80%")])
        assert engine.match({"  HAPPY ": 90}).label == "Happy"

    def test_collapsed_keys_keep_larger_score(self):
        assert MatchEngine.normalize({"Happy": 10, "happy": 90, "HAPPY ": 30}) == {"happy": 90.0}

    def test_non_numeric_and_nan_values_dropped(self):
        assert MatchEngine.normalize({"happy": "abc", "sad": None, "calm": float("nan"), "joy": "12"}) == {
            "joy": 12.0
        }

    def test_blank_names_dropped(self):
        assert MatchEngine.normalize({" ": 50, "fear": 5}) == {"fear": 5.0}

    def test_noise_threshold(self, make_row, build_engine):
        rows = [make_row("Calm", conditions="Calm > 0%")]
        assert build_engine(rows, noise_threshold=0.0).match({"calm": 0.5}).label == "Calm"
        assert build_engine(rows, noise_threshold=1.0).match({"calm": 0.5}).label == "Neutral Balance"

    def test_dominant_emotion_ties_alphabetical(self):
        assert MatchEngine.dominant_emotion({"sad": 40.0, "angry": 40.0, "calm": 10.0}) == "angry"
        assert MatchEngine.dominant_emotion({}) is None


# ---------------------------------------------------------------------------
# 4. Determinism and totality
# ---------------------------------------------------------------------------


class TestProperties:
    def test_repeated_calls_return_same_profile(self, make_row, build_engine):
        engine = build_engine(
            [
                make_row("A", conditions="Happy > 40%"),
                make_row("B", conditions="Happy > 30%, Surprised > 10%"),
                make_row("C", conditions="Surprised > 5%"),
            ]
        )
        vector = {"happy": 55.5, "surprised": 20.25}
        labels = {engine.match(vector).label for _ in range(20)}
        assert labels == {"B"}

    @pytest.mark.parametrize(
        "vector",
        [{}, None, {"happy": -10}, {"happy": 1e9}, {"unknown": 50}, {"happy": float("inf")}],
    )
    def test_match_always_returns_a_profile(self, make_row, build_engine, vector):
        engine = build_engine([make_row("Happy", conditions="Happy > 10%")])
        assert engine.match(vector) is not None

    def test_vector_not_mutated(self, make_row, build_engine):
        engine = build_engine([make_row("Happy", conditions="Happy > 10%")])
        vector = {"Happy": 50.0}
        engine.match(vector)
        assert vector == {"Happy": 50.0}

    def test_matched_profile_cannot_alter_catalog(self, make_row, build_engine):
        engine = build_engine([make_row("A", conditions="Happy > 50%"), make_row("Neutral Balance")])
        matched = engine.match({"happy": 60})
        with pytest.raises(TypeError):
            matched.percent_conditions["happy"] = 99
        assert engine.match({"happy": 60}).label == "A"
