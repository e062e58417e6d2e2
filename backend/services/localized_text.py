"""
Resolution of dataset text fields that may be per-language.
"""
from typing import Union

from domain.models import DEFAULT_LANGUAGE, ByLanguage, Language, Location, LocalizedText, Place, PlainText


def resolve_field(value: LocalizedText, language: Union[Language, str]) -> str:
    """
    Return the text for `language`.

    Plain text is returned as-is for every language. Per-language text falls
    back to Spanish, then to an empty string.
    """
    if isinstance(value, PlainText):
        return value.value
    if isinstance(value, ByLanguage):
        lang = language.value if isinstance(language, Language) else str(language)
        return value.values.get(lang) or value.values.get(DEFAULT_LANGUAGE.value) or ""
    raise TypeError(f"Not a localized text value: {value!r}")


def place_text(place: Place, field: str, language: Union[Language, str]) -> str:
    """Localized `title` or `description` of a place."""
    if field not in ("title", "description"):
        raise ValueError(f"Place has no localized field {field!r}")
    return resolve_field(getattr(place, field), language)


def location_description(location: Location, language: Union[Language, str]) -> str:
    return resolve_field(location.description, language)
