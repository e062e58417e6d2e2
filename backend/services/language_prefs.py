"""
Language preference store.

Provides a simple SQLite-based persistence layer for the visitor's language
choice, read once at startup and written on every change.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional, Tuple, Union

from domain.models import DEFAULT_LANGUAGE, Language, LanguageContext, coerce_language

logger = logging.getLogger(__name__)

LANGUAGE_KEY = "language"


class LanguagePreferenceStore:
    """SQLite key/value store holding the `language` preference.

    By default the DB is placed under the package-local `backend/data/`
    directory (not relative to the current working directory).
    """

    DEFAULT_DB = Path(__file__).resolve().parents[1] / "data" / "preferences.sqlite"

    def __init__(
        self,
        db_path: Optional[Union[str, Path]] = None,
        supported: Tuple[Language, ...] = (Language.ES, Language.EN),
        default: Language = DEFAULT_LANGUAGE,
    ):
        self.db_path = Path(db_path) if db_path else self.DEFAULT_DB
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.supported = tuple(supported)
        self.default = default
        self._init_schema()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def _init_schema(self) -> None:
        conn = self._get_connection()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS preferences (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def get_language(self) -> Language:
        """Stored language, or the default when unset or not supported."""
        conn = self._get_connection()
        try:
            row = conn.execute(
                "SELECT value FROM preferences WHERE key = ?", (LANGUAGE_KEY,)
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            return self.default
        lang = coerce_language(row["value"], self.supported, self.default)
        if lang.value != row["value"]:
            logger.warning("Ignoring stored language %r; using %s", row["value"], lang.value)
        return lang

    def set_language(self, language: Union[Language, str]) -> Language:
        """
        Persist the language choice.

        Raises:
            ValueError: if the language is not one of the supported ones.
        """
        try:
            lang = Language(language)
        except ValueError:
            raise ValueError(f"Unsupported language: {language!r}")
        if lang not in self.supported:
            raise ValueError(f"Unsupported language: {language!r}")
        conn = self._get_connection()
        try:
            conn.execute(
                """
                INSERT INTO preferences (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (LANGUAGE_KEY, lang.value),
            )
            conn.commit()
        finally:
            conn.close()
        return lang


def load_language_context(store: LanguagePreferenceStore) -> LanguageContext:
    """Context initialized from the stored preference that persists every change."""
    context = LanguageContext(store.get_language(), supported=store.supported)
    context.subscribe(store.set_language)
    return context
