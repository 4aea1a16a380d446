"""
Mood profile matching.

Parses the declarative mood catalog, scores emotion vectors against each
profile's thresholds and returns a single profile plus a quote to show.
"""

from app.services.mood.content import ContentSelector, content_selector
from app.services.mood.engine import MatchEngine, MatchOutcome, ScoredCandidate, match_engine
from app.services.mood.errors import SourceFormatError
from app.services.mood.evaluator import ConditionEvaluator
from app.services.mood.parser import ProfileParser
from app.services.mood.repository import CatalogSnapshot, ProfileRepository, profile_repository

__all__ = [
    "CatalogSnapshot",
    "ConditionEvaluator",
    "ContentSelector",
    "MatchEngine",
    "MatchOutcome",
    "ProfileParser",
    "ProfileRepository",
    "ScoredCandidate",
    "SourceFormatError",
    "content_selector",
    "match_engine",
    "profile_repository",
]
