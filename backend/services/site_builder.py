"""
Static site builder.

Prerenders the landing page and one page per location for every enabled
language. A route that fails is logged and reported; the remaining routes
are still built.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from domain.models import DEFAULT_LANGUAGE, DatasetError, Language, LanguageContext
from services.i18n import TranslationTables, Translator
from services.locations import LocationCatalog
from services.render_html import (
    RenderContext,
    render_landing_page,
    render_location_page,
    render_not_found_page,
)
from services.routes import LocationNotFoundError, enumerate_route_params, load_location_page
from storage.site_storage import SiteStorage

logger = logging.getLogger(__name__)


@dataclass
class RouteFailure:
    location_id: str
    language: str
    error: str


@dataclass
class BuildReport:
    output_dir: Path
    pages: List[Path] = field(default_factory=list)
    failures: List[RouteFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def _export_dataset(storage: SiteStorage, catalog: LocationCatalog) -> Path:
    """Write data/locations.json with every location whose places load."""
    payload: List[Dict] = []
    for location in catalog.all_locations():
        try:
            places = catalog.places_for(location.id)
        except DatasetError:
            logger.warning("Leaving %s out of the dataset export", location.id)
            continue
        entry = location.to_dict()
        entry["places"] = [p.to_dict() for p in places]
        payload.append(entry)
    return storage.write_text(
        Path("data") / "locations.json",
        json.dumps(payload, ensure_ascii=False, indent=2),
    )


def build_site(
    output_dir: Path,
    catalog: LocationCatalog,
    tables: TranslationTables,
    languages: Sequence[Language] = (Language.ES, Language.EN),
    base_path: str = "/",
    ga4_measurement_id: str = "",
    route_ids: Optional[Sequence[str]] = None,
) -> BuildReport:
    """
    Build the static site into `output_dir`.

    Args:
        route_ids: location ids to render; defaults to every enumerated route.
            Ids not in the dataset are recorded as failures.

    Returns:
        BuildReport listing the written pages and the failed routes.
    """
    storage = SiteStorage(output_dir)
    report = BuildReport(output_dir=storage.output_root)
    languages = tuple(languages) or (DEFAULT_LANGUAGE,)
    categories = catalog.categories()
    if route_ids is None:
        route_ids = [params["location"] for params in enumerate_route_params(catalog)]

    for lang in languages:
        context = LanguageContext(lang, supported=languages)
        ctx = RenderContext(
            translator=Translator(tables, context),
            base_path=base_path,
            languages=languages,
            ga4_measurement_id=ga4_measurement_id,
            categories=categories,
        )
        report.pages.append(storage.write_page(lang, render_landing_page(ctx, catalog.all_locations())))

        for location_id in route_ids:
            try:
                page = load_location_page(catalog, location_id)
                html = render_location_page(ctx, page)
            except LocationNotFoundError as e:
                logger.error("Skipping route %s (%s): %s", location_id, lang.value, e)
                report.failures.append(RouteFailure(location_id, lang.value, str(e)))
                continue
            except Exception as e:
                logger.exception("Failed to render route %s (%s)", location_id, lang.value)
                report.failures.append(RouteFailure(location_id, lang.value, str(e)))
                continue
            report.pages.append(storage.write_page(lang, html, location_id))

        if lang == DEFAULT_LANGUAGE:
            report.pages.append(storage.write_text("404.html", render_not_found_page(ctx)))

    _export_dataset(storage, catalog)
    logger.info(
        "Built %s pages into %s (%s failed routes)",
        len(report.pages),
        storage.output_root,
        len(report.failures),
    )
    return report
