import pytest

from domain.models import Language
from settings import Settings, _as_languages


def test_languages_default_to_spanish_and_english():
    assert _as_languages(None) == (Language.ES, Language.EN)
    assert _as_languages("") == (Language.ES, Language.EN)


def test_languages_always_include_spanish():
    assert _as_languages("en, PT,en") == (Language.ES, Language.EN, Language.PT)


def test_unknown_language_names_the_variable():
    with pytest.raises(ValueError, match="LOCAL_GUIDE_SUPPORTED_LANGUAGES") as exc:
        _as_languages("es,fr")
    assert "'fr'" in str(exc.value)


def test_settings_reads_languages_from_env(monkeypatch):
    monkeypatch.setenv("LOCAL_GUIDE_SUPPORTED_LANGUAGES", "es,pt")
    assert Settings().SUPPORTED_LANGUAGES == (Language.ES, Language.PT)


def test_settings_rejects_unknown_language_in_env(monkeypatch):
    monkeypatch.setenv("LOCAL_GUIDE_SUPPORTED_LANGUAGES", "klingon")
    with pytest.raises(ValueError, match="LOCAL_GUIDE_SUPPORTED_LANGUAGES"):
        Settings()
