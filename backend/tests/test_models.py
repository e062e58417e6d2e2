import pytest

from domain.models import (
    ByLanguage,
    DatasetError,
    Language,
    LanguageContext,
    Location,
    Place,
    PlainText,
    coerce_language,
    localized_text_from_raw,
)


def test_localized_text_from_raw_variants():
    assert localized_text_from_raw("Hola") == PlainText("Hola")
    assert localized_text_from_raw(None) == PlainText("")
    assert localized_text_from_raw({"es": "Hola", "en": None}) == ByLanguage({"es": "Hola", "en": ""})
    with pytest.raises(ValueError):
        localized_text_from_raw(42)


def test_location_round_trips_through_dict():
    raw = {
        "id": "piriapolis",
        "name": "Piriápolis",
        "country": "Uruguay",
        "description": {"es": "Balneario", "en": "Seaside town"},
        "center": [-34.86, -55.27],
    }
    location = Location.from_dict(raw)
    assert location.center == (-34.86, -55.27)
    assert location.to_dict() == raw


def test_place_from_dict_optional_instagram():
    place = Place.from_dict(
        {"id": "p", "title": "T", "description": "D", "category": "cafe", "coordinates": [1, 2]}
    )
    assert place.instagram is None
    assert "instagram" not in place.to_dict()


@pytest.mark.parametrize(
    "raw",
    [
        {"name": "no id", "center": [0, 0]},
        {"id": "x", "center": "nowhere"},
        {"id": "x", "center": [1]},
        {"id": "x", "center": [0, 0], "description": 3},
    ],
)
def test_location_from_dict_rejects_malformed(raw):
    with pytest.raises(DatasetError):
        Location.from_dict(raw)


def test_coerce_language():
    assert coerce_language("EN") == Language.EN
    assert coerce_language("pt", supported=(Language.ES, Language.EN)) == Language.ES
    assert coerce_language("klingon") == Language.ES
    assert coerce_language(None) == Language.ES


def test_language_context_notifies_subscribers_on_change():
    context = LanguageContext(Language.ES)
    seen = []
    unsubscribe = context.subscribe(seen.append)

    context.set_language("en")
    context.set_language(Language.EN)  # no change, no notification
    assert seen == [Language.EN]

    unsubscribe()
    context.set_language(Language.ES)
    assert seen == [Language.EN]
    assert context.language == Language.ES


def test_language_context_rejects_unsupported():
    context = LanguageContext(Language.ES, supported=(Language.ES, Language.EN))
    with pytest.raises(ValueError):
        context.set_language("pt")
    with pytest.raises(ValueError):
        context.set_language("xx")
    assert context.language == Language.ES


def test_language_context_coerces_initial_language():
    context = LanguageContext(Language.PT, supported=(Language.ES, Language.EN))
    assert context.language == Language.ES
