"""Prerender the guide into a static site.

Usage:
    python -m scripts.build_site --out build

Run from the `backend/` directory (or with it on PYTHONPATH). Settings are
read from the environment and from `backend/.env` when present.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from backend/.env (optional) before importing settings
ROOT = Path(__file__).resolve().parents[1]
load_dotenv(ROOT / ".env")

from services.i18n import load_translation_tables  # noqa: E402
from services.locations import LocationCatalog  # noqa: E402
from services.site_builder import build_site  # noqa: E402
from settings import settings  # noqa: E402
from storage.site_storage import SiteStorage  # noqa: E402

LOG = logging.getLogger("build_site")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build the static local guide site.")
    parser.add_argument("--out", type=Path, default=settings.OUTPUT_DIR, help="output directory")
    parser.add_argument("--data-dir", type=Path, default=settings.DATA_DIR, help="dataset directory")
    parser.add_argument("--base-path", default=settings.BASE_PATH, help="public base path of the site")
    parser.add_argument("--clean", action="store_true", help="empty the output directory first")
    parser.add_argument(
        "--location",
        action="append",
        dest="locations",
        help="only build this location id (repeatable)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.clean:
        if SiteStorage(args.out).clean():
            LOG.info("Cleaned %s", args.out)

    catalog = LocationCatalog(args.data_dir)
    tables = load_translation_tables(args.data_dir / "translations")
    report = build_site(
        args.out,
        catalog,
        tables,
        languages=settings.SUPPORTED_LANGUAGES,
        base_path=args.base_path,
        ga4_measurement_id=settings.GA4_MEASUREMENT_ID,
        route_ids=args.locations,
    )
    for failure in report.failures:
        LOG.error("Route %s [%s] failed: %s", failure.location_id, failure.language, failure.error)
    LOG.info("Wrote %s pages to %s", len(report.pages), report.output_dir)
    return 0 if report.ok else 1


if __name__ == "__main__":
    sys.exit(main())
