"""
Visitor preference routes.
"""
import logging

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from api.routes import locations as locations_routes
from services.analytics import Analytics, LoggingSink, NullSink
from settings import settings

router = APIRouter()
analytics = Analytics(LoggingSink() if settings.ANALYTICS_LOG_ENABLED else NullSink())
logger = logging.getLogger(__name__)


class LanguagePreference(BaseModel):
    language: str


@router.get("/language", response_model=LanguagePreference)
async def get_language_preference():
    store = locations_routes.prefs_store
    return LanguagePreference(language=store.get_language().value)


@router.put("/language", response_model=LanguagePreference)
async def set_language_preference(data: LanguagePreference):
    """Persist the language choice and report the change."""
    store = locations_routes.prefs_store
    previous = store.get_language()
    try:
        language = store.set_language(data.language)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    if language != previous:
        logger.info("Language preference changed %s -> %s", previous.value, language.value)
        analytics.track_language_change(language.value)
    return LanguagePreference(language=language.value)
