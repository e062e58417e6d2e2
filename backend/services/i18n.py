"""
Translation lookup for UI strings.

Tables are nested JSON mappings, one per language, addressed with dotted
keys such as "nav.home". Lookups never fail: a key missing in the active
language is retried in the fallback language, and a key missing there too
comes back unchanged so the gap is visible on the page.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from domain.models import DEFAULT_LANGUAGE, DatasetError, Language, LanguageContext

logger = logging.getLogger(__name__)

TranslationTables = Dict[str, Dict[str, Any]]

_MISSING = object()


def _walk(table: Any, segments: list[str]) -> Any:
    value = table
    for segment in segments:
        if not isinstance(value, Mapping) or segment not in value:
            return _MISSING
        value = value[segment]
    return value


def translate(
    key: str,
    language: Union[Language, str],
    tables: Mapping[str, Mapping[str, Any]],
    fallback: Union[Language, str] = DEFAULT_LANGUAGE,
) -> str:
    """Resolve a dotted key in the language's table, then in the fallback's."""
    segments = key.split(".")
    lang = language.value if isinstance(language, Language) else str(language)
    fallback_lang = fallback.value if isinstance(fallback, Language) else str(fallback)

    value = _walk(tables.get(lang), segments)
    if value is _MISSING:
        value = _walk(tables.get(fallback_lang), segments)
    if value is _MISSING or not value or not isinstance(value, str):
        return key
    return value


class Translator:
    """Translation lookups bound to a language context."""

    def __init__(
        self,
        tables: TranslationTables,
        context: Optional[LanguageContext] = None,
        fallback: Language = DEFAULT_LANGUAGE,
    ):
        self.tables = tables
        self.context = context or LanguageContext()
        self.fallback = fallback

    @property
    def language(self) -> Language:
        return self.context.language

    def t(self, key: str) -> str:
        return translate(key, self.context.language, self.tables, self.fallback)

    __call__ = t


def load_translation_tables(directory: Union[str, Path]) -> TranslationTables:
    """
    Read `<lang>.json` for every known language present in `directory`.

    Unreadable files are skipped with a warning. The fallback language's
    table is required.
    """
    directory = Path(directory)
    tables: TranslationTables = {}
    for lang in Language:
        path = directory / f"{lang.value}.json"
        if not path.exists():
            continue
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError):
            logger.warning("Skipping unreadable translation table %s", path, exc_info=True)
            continue
        if not isinstance(data, dict):
            logger.warning("Skipping translation table %s: top level is not an object", path)
            continue
        tables[lang.value] = data
    if DEFAULT_LANGUAGE.value not in tables:
        raise DatasetError(
            f"Missing fallback translation table {DEFAULT_LANGUAGE.value}.json in {directory}"
        )
    logger.debug("Loaded translation tables: %s", ", ".join(sorted(tables)))
    return tables
