"""
Read-only access to the bundled guide dataset.

Dataset layout (under the data directory):
- locations.json           list of location records
- places/<location_id>.json list of place records for that location
- categories.json          {category_name: {"icon": ..., "color": ...}}

A location without a places file simply has no places.
"""
from __future__ import annotations

import json
import logging
import threading
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from domain.models import Category, DatasetError, Location, Place

logger = logging.getLogger(__name__)

LOCATIONS_FILENAME = "locations.json"
CATEGORIES_FILENAME = "categories.json"
PLACES_DIRNAME = "places"


def _read_json(path: Path) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        raise DatasetError(f"Dataset file not found: {path}")
    except json.JSONDecodeError as e:
        raise DatasetError(f"Invalid JSON in {path}: {e}")


class LocationCatalog:
    """
    In-memory view over the dataset.

    Everything is read on first access and kept for the life of the
    process; callers get copies of the lists, never the backing store.
    """

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)
        self._lock = threading.Lock()
        self._locations: Optional[List[Location]] = None
        self._by_id: Dict[str, Location] = {}
        self._places: Dict[str, List[Place]] = {}
        self._categories: Optional[Dict[str, Category]] = None

    def _ensure_locations(self) -> None:
        with self._lock:
            if self._locations is not None:
                return
            raw = _read_json(self.data_dir / LOCATIONS_FILENAME)
            if not isinstance(raw, list):
                raise DatasetError(f"{LOCATIONS_FILENAME} must contain a list of locations")
            locations: List[Location] = []
            by_id: Dict[str, Location] = {}
            for item in raw:
                if not isinstance(item, dict):
                    raise DatasetError(f"Location record is not an object: {item!r}")
                location = Location.from_dict(item)
                if location.id in by_id:
                    raise DatasetError(f"Duplicate location id: {location.id}")
                by_id[location.id] = location
                locations.append(location)
            self._by_id = by_id
            self._locations = locations
            logger.info("Loaded %s locations from %s", len(locations), self.data_dir)

    def all_locations(self) -> List[Location]:
        """All locations, in dataset order."""
        self._ensure_locations()
        return list(self._locations or [])

    def find_location_by_id(self, location_id: str) -> Optional[Location]:
        self._ensure_locations()
        return self._by_id.get(location_id)

    def places_for(self, location_id: str) -> List[Place]:
        """Places of a location; empty when the dataset has none for it."""
        self._ensure_locations()
        if location_id not in self._by_id:
            return []
        with self._lock:
            if location_id not in self._places:
                self._places[location_id] = self._load_places(location_id)
            return list(self._places[location_id])

    def _load_places(self, location_id: str) -> List[Place]:
        path = self.data_dir / PLACES_DIRNAME / f"{location_id}.json"
        if not path.exists():
            logger.debug("No places file for location %s", location_id)
            return []
        raw = _read_json(path)
        if not isinstance(raw, list):
            raise DatasetError(f"{path} must contain a list of places")
        places: List[Place] = []
        seen: set[str] = set()
        for item in raw:
            if not isinstance(item, dict):
                raise DatasetError(f"Place record in {path} is not an object: {item!r}")
            place = Place.from_dict(item)
            if place.id in seen:
                raise DatasetError(f"Duplicate place id {place.id} in {path}")
            seen.add(place.id)
            places.append(place)
        logger.info("Loaded %s places for location %s", len(places), location_id)
        return places

    def categories(self) -> Dict[str, Category]:
        with self._lock:
            if self._categories is None:
                path = self.data_dir / CATEGORIES_FILENAME
                if not path.exists():
                    self._categories = {}
                else:
                    raw = _read_json(path)
                    if not isinstance(raw, dict):
                        raise DatasetError(f"{CATEGORIES_FILENAME} must contain an object")
                    self._categories = {
                        str(name): Category.from_dict(value or {}) for name, value in raw.items()
                    }
            return dict(self._categories)


@lru_cache(maxsize=None)
def get_catalog(data_dir: Optional[str] = None) -> LocationCatalog:
    """Process-wide catalog for `data_dir` (defaults to the configured one)."""
    if data_dir is None:
        from settings import settings

        data_dir = str(settings.DATA_DIR)
    return LocationCatalog(data_dir)
