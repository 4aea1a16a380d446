"""
Core constants used across the application. Keep these simple and documented.
"""

# Header row of the bundled mood profile table, in positional order
PROFILE_CSV_COLUMNS: tuple[str, ...] = (
    "Label",
    "Emotion Triggers",
    "Percent Conditions",
    "Pattern Type",
    "Description",
    "Quotes",
)
PROFILE_ROW_MIN_FIELDS: int = len(PROFILE_CSV_COLUMNS)

SUPPORTED_PROFILE_SUFFIXES: tuple[str, ...] = (".csv", ".json")
