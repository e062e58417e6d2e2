import os
from pathlib import Path

from domain.models import DEFAULT_LANGUAGE, Language

# Basic settings helper to read environment configuration.

BACKEND_ROOT = Path(__file__).resolve().parent


def _as_bool(val: str | None, default: bool = False) -> bool:
    if val is None:
        return default
    return val.lower() in ("1", "true", "yes", "on")


def _as_languages(val: str | None) -> tuple[Language, ...]:
    if not val:
        return (Language.ES, Language.EN)
    langs: list[Language] = []
    for part in val.split(","):
        part = part.strip().lower()
        if not part:
            continue
        try:
            lang = Language(part)
        except ValueError:
            supported = ", ".join(known.value for known in Language)
            raise ValueError(
                f"LOCAL_GUIDE_SUPPORTED_LANGUAGES: unknown language {part!r} (expected one of: {supported})"
            ) from None
        if lang not in langs:
            langs.append(lang)
    # The fallback language is always available
    if DEFAULT_LANGUAGE not in langs:
        langs.insert(0, DEFAULT_LANGUAGE)
    return tuple(langs)


class Settings:
    def __init__(self) -> None:
        self.DATA_DIR: Path = Path(os.getenv("LOCAL_GUIDE_DATA_DIR") or BACKEND_ROOT / "data")
        self.OUTPUT_DIR: Path = Path(os.getenv("LOCAL_GUIDE_OUTPUT_DIR") or "build")
        self.BASE_PATH: str = os.getenv("LOCAL_GUIDE_BASE_PATH", "/local-guide/")
        self.GA4_MEASUREMENT_ID: str = os.getenv("PUBLIC_GA4_MEASUREMENT_ID", "")
        self.SUPPORTED_LANGUAGES: tuple[Language, ...] = _as_languages(
            os.getenv("LOCAL_GUIDE_SUPPORTED_LANGUAGES")
        )
        self.PREFS_DB: Path = Path(
            os.getenv("LOCAL_GUIDE_PREFS_DB") or BACKEND_ROOT / "data" / "preferences.sqlite"
        )
        self.ANALYTICS_LOG_ENABLED: bool = _as_bool(os.getenv("LOCAL_GUIDE_ANALYTICS_LOG"), True)


settings = Settings()
