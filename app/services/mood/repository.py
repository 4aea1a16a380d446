import csv
import io
import json
import threading
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Any, NamedTuple

from loguru import logger

from app.core.config import settings
from app.core.constants import SUPPORTED_PROFILE_SUFFIXES
from app.models.mood_profile import MoodProfile
from app.services.mood.errors import SourceFormatError
from app.services.mood.parser import ProfileParser


class CatalogSnapshot(NamedTuple):
    catalog: tuple[MoodProfile, ...]
    fallback: MoodProfile


class ProfileRepository:
    """
    Owns the in-memory mood catalog.

    Sources are parsed into an immutable tuple of MoodProfile objects that is
    swapped in whole on success. Rows that fail to parse are logged and
    skipped; a source that cannot be read at all leaves the previous catalog
    in place and the error propagates to the caller.
    """

    def __init__(self, source_path: Path | str | None = None, fallback_label: str | None = None):
        self.source_path = Path(source_path) if source_path else None
        self.fallback_label = fallback_label or settings.FALLBACK_PROFILE_LABEL
        self._snapshot: CatalogSnapshot | None = None
        self._lock = threading.Lock()

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def fallback(self) -> MoodProfile:
        """Profile returned when nothing qualifies. Always present."""
        snapshot = self._snapshot
        return snapshot.fallback if snapshot is not None else ProfileParser.neutral_profile()

    def __len__(self) -> int:
        snapshot = self._snapshot
        return len(snapshot.catalog) if snapshot is not None else 0

    def get_catalog(self) -> tuple[MoodProfile, ...]:
        """
        Return the loaded catalog, loading the default source on first use.

        A default source that cannot be read yields an empty catalog, so
        matching degrades to the fallback profile instead of failing.
        """
        return self.snapshot().catalog

    def snapshot(self) -> CatalogSnapshot:
        """The catalog and its fallback, read together so a concurrent reload cannot mix them."""
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot

        with self._lock:
            if self._snapshot is None:
                try:
                    self.load_default()
                except (OSError, ValueError) as e:
                    logger.error(f"Failed to load mood profiles, using fallback only: {e}")
                    self._install([])
            return self._snapshot

    def load_default(self) -> tuple[MoodProfile, ...]:
        return self.load_file(self.source_path or settings.MOOD_PROFILES_PATH)

    def load_file(self, path: Path | str) -> tuple[MoodProfile, ...]:
        """
        Load profiles from a ``.csv`` table or a ``.json`` array of structured records.

        Raises:
            OSError: if the file cannot be read
            SourceFormatError: for unsupported suffixes or a JSON document that is not a list
        """
        path = Path(path)
        suffix = path.suffix.lower()
        if suffix not in SUPPORTED_PROFILE_SUFFIXES:
            raise SourceFormatError(f"Unsupported profile source '{path.name}'")

        logger.info(f"Loading mood profiles from {path}")
        text = path.read_text(encoding="utf-8-sig")

        if suffix == ".json":
            try:
                data = json.loads(text)
            except json.JSONDecodeError as e:
                raise SourceFormatError(f"Invalid JSON in {path.name}: {e}") from e
            if isinstance(data, dict):
                data = data.get("profiles")
            if not isinstance(data, list):
                raise SourceFormatError(f"Expected a list of profiles in {path.name}")
            return self.load_records(data)

        return self.load_csv(text)

    def load_csv(self, text: str, has_header: bool = True) -> tuple[MoodProfile, ...]:
        """Load a CSV table. Quoted fields may contain commas."""
        reader = csv.reader(io.StringIO(text))
        numbered: list[tuple[int, list[str]]] = []
        for row in reader:
            if has_header and reader.line_num == 1:
                continue
            if not any(field.strip() for field in row):
                continue
            numbered.append((reader.line_num, row))
        return self._load(numbered, ProfileParser.from_row)

    def load_rows(self, rows: Iterable[Sequence[str]]) -> tuple[MoodProfile, ...]:
        """Load already-split rows of raw string fields."""
        return self._load(enumerate(rows, start=1), ProfileParser.from_row)

    def load_records(self, records: Iterable[dict[str, Any]]) -> tuple[MoodProfile, ...]:
        """Load structured records (see ProfileSource)."""
        return self._load(enumerate(records, start=1), ProfileParser.from_record)

    def clear(self) -> None:
        """Drop the catalog; the next get_catalog() reloads the default source."""
        with self._lock:
            self._snapshot = None

    def _load(self, numbered: Iterable[tuple[int, Any]], parse: Callable[..., MoodProfile]) -> tuple[MoodProfile, ...]:
        profiles: list[MoodProfile] = []
        skipped = 0
        for row_number, item in numbered:
            try:
                profiles.append(parse(item, row_number=row_number))
            except SourceFormatError as e:
                skipped += 1
                logger.warning(f"Skipping mood profile row {row_number}: {e}")

        catalog = self._install(profiles)
        logger.info(f"Loaded {len(catalog)} mood profiles ({skipped} skipped)")
        return catalog

    def _install(self, profiles: list[MoodProfile]) -> tuple[MoodProfile, ...]:
        wanted = self.fallback_label.strip().lower()
        fallback = next((p for p in profiles if p.label.strip().lower() == wanted), None)

        for profile in profiles:
            if not profile.has_conditions and profile is not fallback:
                logger.warning(f"Mood profile '{profile.label}' has no usable conditions and can never match")

        snapshot = CatalogSnapshot(tuple(profiles), fallback or ProfileParser.neutral_profile())
        self._snapshot = snapshot
        return snapshot.catalog


profile_repository = ProfileRepository()
