"""
HTML page routes for previewing the guide without a static build.
"""
import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from api.routes import locations as locations_routes
from api.routes import preferences as preferences_routes
from domain.models import Language, LanguageContext
from services.i18n import TranslationTables, Translator, load_translation_tables
from services.render_html import (
    RenderContext,
    page_path,
    render_landing_page,
    render_location_page,
    render_not_found_page,
)
from services.routes import LocationNotFoundError, load_location_page
from settings import settings

router = APIRouter()
logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_translation_tables() -> TranslationTables:
    return load_translation_tables(settings.DATA_DIR / "translations")


def _render_context(language: Language) -> RenderContext:
    supported = locations_routes.prefs_store.supported
    return RenderContext(
        translator=Translator(get_translation_tables(), LanguageContext(language, supported=supported)),
        base_path="/",
        languages=supported,
        ga4_measurement_id=settings.GA4_MEASUREMENT_ID,
        categories=locations_routes.catalog.categories(),
    )


def _prefix_language(segment: str) -> Optional[Language]:
    """Language for a `/<lang>/` path prefix, or None when it is not one."""
    try:
        language = Language(segment)
    except ValueError:
        return None
    if language not in locations_routes.prefs_store.supported:
        return None
    return language


def _landing_response(language: Language) -> HTMLResponse:
    ctx = _render_context(language)
    preferences_routes.analytics.track_page_view(page_path(ctx.base_path, language))
    return HTMLResponse(render_landing_page(ctx, locations_routes.catalog.all_locations()))


def _location_response(location_id: str, language: Language) -> HTMLResponse:
    ctx = _render_context(language)
    try:
        page = load_location_page(locations_routes.catalog, location_id)
    except LocationNotFoundError:
        logger.info("Location page not found: %s", location_id)
        return HTMLResponse(render_not_found_page(ctx), status_code=404)
    preferences_routes.analytics.track_page_view(page_path(ctx.base_path, language, location_id))
    preferences_routes.analytics.track_location_view(page.location.name)
    return HTMLResponse(render_location_page(ctx, page))


@router.get("/", response_class=HTMLResponse)
async def landing_page(lang: Optional[str] = None):
    return _landing_response(locations_routes.resolve_language(lang))


@router.get("/{segment}/", response_class=HTMLResponse)
@router.get("/{segment}", response_class=HTMLResponse)
async def first_level_page(segment: str, lang: Optional[str] = None):
    """
    `/<lang>/` is a translated landing page, anything else a location page.

    Mirrors the static build layout, so links in rendered pages resolve in
    the preview too. Unknown ids get the 404 page.
    """
    language = _prefix_language(segment)
    if language is not None:
        return _landing_response(language)
    return _location_response(segment, locations_routes.resolve_language(lang))


@router.get("/{prefix}/{location_id}/", response_class=HTMLResponse)
@router.get("/{prefix}/{location_id}", response_class=HTMLResponse)
async def translated_location_page(prefix: str, location_id: str):
    language = _prefix_language(prefix)
    if language is None:
        logger.info("Unknown language prefix: %s", prefix)
        ctx = _render_context(locations_routes.prefs_store.get_language())
        return HTMLResponse(render_not_found_page(ctx), status_code=404)
    return _location_response(location_id, language)
