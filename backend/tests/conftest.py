import json
import os
import tempfile
import sys
from pathlib import Path

import pytest

# Ensure the backend package root is on sys.path for direct pytest runs
BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

# Keep the API modules from creating a preferences DB inside the source tree
os.environ.setdefault(
    "LOCAL_GUIDE_PREFS_DB", str(Path(tempfile.gettempdir()) / "local-guide-test-prefs.sqlite")
)


def write_dataset(root: Path, locations, places=None, categories=None) -> Path:
    """Write a minimal dataset layout under `root` and return it."""
    root.mkdir(parents=True, exist_ok=True)
    (root / "locations.json").write_text(json.dumps(locations), encoding="utf-8")
    for location_id, items in (places or {}).items():
        places_dir = root / "places"
        places_dir.mkdir(exist_ok=True)
        (places_dir / f"{location_id}.json").write_text(json.dumps(items), encoding="utf-8")
    if categories is not None:
        (root / "categories.json").write_text(json.dumps(categories), encoding="utf-8")
    return root


SAMPLE_LOCATIONS = [
    {
        "id": "piriapolis",
        "name": "Piriápolis",
        "country": "Uruguay",
        "description": {"es": "Balneario", "en": "Seaside town"},
        "center": [-34.86, -55.27],
    },
    {
        "id": "colonia",
        "name": "Colonia",
        "country": "Uruguay",
        "description": "Barrio Histórico",
        "center": [-34.47, -57.84],
    },
]

SAMPLE_PLACES = {
    "piriapolis": [
        {
            "id": "cerro",
            "title": {"es": "Cerro San Antonio", "en": "San Antonio Hill"},
            "description": {"es": "Vista a la bahía"},
            "category": "viewpoint",
            "coordinates": [-34.87, -55.27],
        },
        {
            "id": "cafe",
            "title": "Café <Rambla>",
            "description": {"es": "Café", "en": "Coffee"},
            "category": "cafe",
            "coordinates": [-34.868, -55.274],
            "instagram": "@cafe.rambla",
        },
    ]
}

SAMPLE_CATEGORIES = {
    "viewpoint": {"icon": "V", "color": "#00ff00"},
    "cafe": {"icon": "C", "color": "#8d6e63"},
}


@pytest.fixture
def dataset_dir(tmp_path):
    return write_dataset(tmp_path / "data", SAMPLE_LOCATIONS, SAMPLE_PLACES, SAMPLE_CATEGORIES)


@pytest.fixture
def translation_tables():
    return {
        "es": {
            "site": {"title": "Guía Local", "tagline": "Lugares"},
            "nav": {"home": "Inicio"},
            "home": {"chooseLocation": "Elegí un destino", "empty": "Sin destinos"},
            "location": {"places": "Lugares", "map": "Mapa", "noPlaces": "Sin lugares"},
            "place": {"links": {"waze": "Waze", "google-maps": "Google Maps",
                                "apple-maps": "Apple Maps", "instagram": "Instagram"}},
            "categories": {"viewpoint": "Mirador"},
            "language": {"label": "Idioma", "es": "Español", "en": "English"},
            "notFound": {"title": "No encontrado", "message": "No existe"},
        },
        "en": {
            "site": {"title": "Local Guide", "tagline": "Places"},
            "nav": {"home": "Home"},
            "location": {"places": "Places"},
            "categories": {"viewpoint": "Viewpoint"},
            "notFound": {"title": "Not found", "message": "Missing"},
        },
    }


@pytest.fixture
def make_dataset(tmp_path):
    """Factory writing a custom dataset under tmp_path."""
    def _make(locations, places=None, categories=None, name="custom"):
        return write_dataset(tmp_path / name, locations, places, categories)

    return _make
