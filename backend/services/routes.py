"""
Static route generation.

One page is prerendered per location. `enumerate_route_params` lists the
routes, `load_location_page` assembles the data a page is rendered from.
"""
from dataclasses import dataclass, field
from typing import Dict, List

from domain.models import Location, Place
from services.locations import LocationCatalog


class LocationNotFoundError(LookupError):
    """No location with the requested id exists in the dataset."""
    status_code = 404

    def __init__(self, location_id: str):
        super().__init__(f"Location not found: {location_id}")
        self.location_id = location_id


@dataclass
class LocationPageData:
    location: Location
    places: List[Place] = field(default_factory=list)


def enumerate_route_params(catalog: LocationCatalog) -> List[Dict[str, str]]:
    """Return one {"location": id} entry per location, in dataset order."""
    params: List[Dict[str, str]] = []
    seen: set[str] = set()
    for location in catalog.all_locations():
        if location.id in seen:
            continue
        seen.add(location.id)
        params.append({"location": location.id})
    return params


def load_location_page(catalog: LocationCatalog, location_id: str) -> LocationPageData:
    """
    Resolve a route's data.

    Raises:
        LocationNotFoundError: if the id is not in the dataset.
    """
    location = catalog.find_location_by_id(location_id)
    if location is None:
        raise LocationNotFoundError(location_id)
    return LocationPageData(location=location, places=catalog.places_for(location.id))
