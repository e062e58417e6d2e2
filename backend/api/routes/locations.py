"""
Locations API routes.
"""
from typing import Dict, List, Optional, Tuple

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from domain.models import Language, Location, Place
from services.language_prefs import LanguagePreferenceStore
from services.links import navigation_links
from services.localized_text import location_description, place_text
from services.locations import get_catalog
from services.routes import LocationNotFoundError, load_location_page
from settings import settings

router = APIRouter()
catalog = get_catalog()
prefs_store = LanguagePreferenceStore(settings.PREFS_DB, supported=settings.SUPPORTED_LANGUAGES)


class LocationResponse(BaseModel):
    id: str
    name: str
    country: str
    description: str
    center: Tuple[float, float]


class PlaceResponse(BaseModel):
    id: str
    title: str
    description: str
    category: str
    coordinates: Tuple[float, float]
    links: Dict[str, str] = Field(default_factory=dict)


class LocationDetailResponse(LocationResponse):
    language: str
    places: List[PlaceResponse]


def resolve_language(lang: Optional[str]) -> Language:
    """Requested language, or the stored preference when none is given."""
    if lang is None:
        return prefs_store.get_language()
    try:
        language = Language(lang)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Unsupported language: {lang}")
    if language not in prefs_store.supported:
        raise HTTPException(status_code=422, detail=f"Unsupported language: {lang}")
    return language


def location_to_response(location: Location, language: Language) -> LocationResponse:
    return LocationResponse(
        id=location.id,
        name=location.name,
        country=location.country,
        description=location_description(location, language),
        center=location.center,
    )


def place_to_response(place: Place, language: Language) -> PlaceResponse:
    title = place_text(place, "title", language)
    return PlaceResponse(
        id=place.id,
        title=title,
        description=place_text(place, "description", language),
        category=place.category,
        coordinates=place.coordinates,
        links=navigation_links(place, label=title),
    )


@router.get("", response_model=List[LocationResponse])
async def list_locations(lang: Optional[str] = None):
    """List every location in dataset order."""
    language = resolve_language(lang)
    return [location_to_response(loc, language) for loc in catalog.all_locations()]


@router.get("/{location_id}", response_model=LocationDetailResponse)
async def get_location(location_id: str, lang: Optional[str] = None):
    """A location with its places."""
    language = resolve_language(lang)
    try:
        page = load_location_page(catalog, location_id)
    except LocationNotFoundError:
        raise HTTPException(status_code=404, detail="Location not found")
    location = page.location
    return LocationDetailResponse(
        id=location.id,
        name=location.name,
        country=location.country,
        description=location_description(location, language),
        center=location.center,
        language=language.value,
        places=[place_to_response(p, language) for p in page.places],
    )
