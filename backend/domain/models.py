"""
Core domain models for the local guide.
These are framework-agnostic and can be used across all services.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union


class DatasetError(ValueError):
    """Raised when a bundled dataset document is missing or malformed."""


class Language(str, Enum):
    """Languages the guide can be rendered in."""
    ES = "es"
    EN = "en"
    PT = "pt"


# Universal fallback for both translation tables and localized fields
DEFAULT_LANGUAGE = Language.ES


def coerce_language(
    value: Any,
    supported: Optional[Tuple[Language, ...]] = None,
    default: Language = DEFAULT_LANGUAGE,
) -> Language:
    """Map a raw value (e.g. a stored preference) to a Language, else the default."""
    if isinstance(value, Language):
        lang = value
    else:
        try:
            lang = Language(str(value).strip().lower())
        except ValueError:
            return default
    if supported is not None and lang not in supported:
        return default
    return lang


@dataclass(frozen=True)
class PlainText:
    """Language-invariant text."""
    value: str


@dataclass(frozen=True)
class ByLanguage:
    """Text keyed by language code ("es", "en", "pt")."""
    values: Dict[str, str] = field(default_factory=dict)


LocalizedText = Union[PlainText, ByLanguage]


def localized_text_from_raw(raw: Any) -> LocalizedText:
    """Build the LocalizedText variant from its JSON form."""
    if raw is None:
        return PlainText("")
    if isinstance(raw, str):
        return PlainText(raw)
    if isinstance(raw, dict):
        return ByLanguage({str(k): "" if v is None else str(v) for k, v in raw.items()})
    raise ValueError(f"Unsupported localized text value: {raw!r}")


def localized_text_to_raw(text: LocalizedText) -> Union[str, Dict[str, str]]:
    if isinstance(text, PlainText):
        return text.value
    return dict(text.values)


def _coordinates(raw: Any, what: str) -> Tuple[float, float]:
    try:
        lat, lng = raw
        return float(lat), float(lng)
    except (TypeError, ValueError):
        raise DatasetError(f"{what}: expected [lat, lng], got {raw!r}")


@dataclass(frozen=True)
class Category:
    """Presentation attributes for a place category."""
    icon: str
    color: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        return cls(icon=str(data.get("icon", "")), color=str(data.get("color", "")))

    def to_dict(self) -> Dict[str, str]:
        return {"icon": self.icon, "color": self.color}


@dataclass(frozen=True)
class Location:
    """
    A destination covered by the guide.

    Identity is `id`, unique across the dataset. Locations are loaded once
    from the bundled dataset and never mutated.
    """
    id: str
    name: str
    country: str
    description: LocalizedText
    center: Tuple[float, float]  # (lat, lng)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Location":
        loc_id = data.get("id")
        if not loc_id:
            raise DatasetError(f"Location without id: {data!r}")
        try:
            description = localized_text_from_raw(data.get("description"))
        except ValueError as e:
            raise DatasetError(f"Location {loc_id}: {e}")
        return cls(
            id=str(loc_id),
            name=str(data.get("name", "")),
            country=str(data.get("country", "")),
            description=description,
            center=_coordinates(data.get("center"), f"Location {loc_id}"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "country": self.country,
            "description": localized_text_to_raw(self.description),
            "center": list(self.center),
        }


@dataclass(frozen=True)
class Place:
    """
    A point of interest shown on a location page.

    Places carry no reference to their location; they belong to whichever
    location's places collection they appear in.
    """
    id: str
    title: LocalizedText
    description: LocalizedText
    category: str
    coordinates: Tuple[float, float]  # (lat, lng)
    instagram: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Place":
        place_id = data.get("id")
        if not place_id:
            raise DatasetError(f"Place without id: {data!r}")
        try:
            title = localized_text_from_raw(data.get("title"))
            description = localized_text_from_raw(data.get("description"))
        except ValueError as e:
            raise DatasetError(f"Place {place_id}: {e}")
        instagram = data.get("instagram")
        return cls(
            id=str(place_id),
            title=title,
            description=description,
            category=str(data.get("category", "")),
            coordinates=_coordinates(data.get("coordinates"), f"Place {place_id}"),
            instagram=str(instagram) if instagram else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "title": localized_text_to_raw(self.title),
            "description": localized_text_to_raw(self.description),
            "category": self.category,
            "coordinates": list(self.coordinates),
        }
        if self.instagram:
            data["instagram"] = self.instagram
        return data


class LanguageContext:
    """
    Holds the active language for one rendering session.

    Passed explicitly to the resolvers instead of living in a global.
    Subscribers are called with the new language whenever it changes.
    """

    def __init__(
        self,
        language: Language = DEFAULT_LANGUAGE,
        supported: Tuple[Language, ...] = (Language.ES, Language.EN),
    ):
        self.supported = tuple(supported)
        self._language = coerce_language(language, self.supported)
        self._subscribers: List[Callable[[Language], None]] = []

    @property
    def language(self) -> Language:
        return self._language

    def set_language(self, language: Union[Language, str]) -> Language:
        """Switch the active language. Raises ValueError for unsupported values."""
        try:
            lang = Language(language)
        except ValueError:
            raise ValueError(f"Unsupported language: {language!r}")
        if lang not in self.supported:
            raise ValueError(f"Unsupported language: {language!r}")
        if lang != self._language:
            self._language = lang
            for callback in list(self._subscribers):
                callback(lang)
        return lang

    def subscribe(self, callback: Callable[[Language], None]) -> Callable[[], None]:
        """Register a change callback; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe
