import pytest

from domain.models import ByLanguage, Language, Location, Place, PlainText, localized_text_from_raw
from services.localized_text import location_description, place_text, resolve_field


@pytest.mark.parametrize("lang", [Language.ES, Language.EN, Language.PT, "fr"])
def test_plain_text_is_language_invariant(lang):
    assert resolve_field(PlainText("Argentino Hotel"), lang) == "Argentino Hotel"


def test_by_language_returns_active_language():
    value = ByLanguage({"es": "Playa", "en": "Beach"})
    assert resolve_field(value, Language.EN) == "Beach"
    assert resolve_field(value, "es") == "Playa"


def test_by_language_falls_back_to_spanish():
    value = ByLanguage({"es": "Mirador"})
    assert resolve_field(value, Language.EN) == "Mirador"
    assert resolve_field(value, Language.PT) == "Mirador"


def test_by_language_empty_active_value_falls_back():
    value = ByLanguage({"es": "Mirador", "en": ""})
    assert resolve_field(value, Language.EN) == "Mirador"


def test_by_language_without_spanish_is_empty():
    assert resolve_field(ByLanguage({"en": "Beach"}), Language.PT) == ""
    assert resolve_field(ByLanguage({}), Language.ES) == ""


def test_resolve_field_rejects_other_types():
    with pytest.raises(TypeError):
        resolve_field({"es": "raw dict"}, Language.ES)  # type: ignore[arg-type]


def test_place_and_location_helpers():
    place = Place(
        id="p",
        title=localized_text_from_raw({"es": "Castillo", "en": "Castle"}),
        description=localized_text_from_raw("Siglo XX"),
        category="culture",
        coordinates=(0.0, 0.0),
    )
    assert place_text(place, "title", Language.EN) == "Castle"
    assert place_text(place, "description", Language.EN) == "Siglo XX"
    with pytest.raises(ValueError):
        place_text(place, "category", Language.EN)

    location = Location.from_dict(
        {"id": "x", "name": "X", "country": "UY", "description": {"es": "Hola"}, "center": [1, 2]}
    )
    assert location_description(location, Language.EN) == "Hola"
