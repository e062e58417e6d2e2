"""
HTML rendering service.

Renders the landing page, the per-location pages and the 404 page as
standalone HTML documents. Every piece of dataset or translation text is
escaped here; hrefs to third-party sites only come from `services.links`.
"""
import html
import json
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from domain.models import DEFAULT_LANGUAGE, Category, Language, Location, Place
from services.analytics import ga4_head_snippet
from services.i18n import Translator
from services.links import navigation_links
from services.localized_text import location_description, place_text
from services.routes import LocationPageData


DEFAULT_MAP_ZOOM = 14
FALLBACK_CATEGORY = Category(icon="📍", color="#555555")


@dataclass
class RenderContext:
    """Page-independent inputs shared by every rendered page."""
    translator: Translator
    base_path: str = "/"
    languages: Tuple[Language, ...] = (Language.ES, Language.EN)
    ga4_measurement_id: str = ""
    categories: Optional[Dict[str, Category]] = None

    @property
    def language(self) -> Language:
        return self.translator.language


def _e(value: Any) -> str:
    return html.escape("" if value is None else str(value), quote=True)


def _json_for_script(data: Any) -> str:
    """JSON safe to embed inside a <script> element."""
    return (
        json.dumps(data, ensure_ascii=False)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


def page_path(base_path: str, language: Language, location_id: Optional[str] = None) -> str:
    """
    Public path of a page.

    The default language lives at the site root, other languages under
    `/<lang>/`; location pages are `<prefix><location_id>/`.
    """
    prefix = base_path if base_path.endswith("/") else base_path + "/"
    if language != DEFAULT_LANGUAGE:
        prefix += f"{language.value}/"
    if location_id:
        prefix += f"{location_id}/"
    return prefix


def _category_label(ctx: RenderContext, name: str) -> str:
    key = f"categories.{name}"
    label = ctx.translator.t(key)
    return name if label == key else label


def _language_switcher(ctx: RenderContext, location_id: Optional[str]) -> str:
    if len(ctx.languages) < 2:
        return ""
    items = []
    for lang in ctx.languages:
        label = ctx.translator.t(f"language.{lang.value}")
        if label == f"language.{lang.value}":
            label = lang.value.upper()
        current = ' aria-current="true"' if lang == ctx.language else ""
        items.append(
            f'<a href="{_e(page_path(ctx.base_path, lang, location_id))}" hreflang="{lang.value}"'
            f' data-analytics-event="language_change" data-language="{lang.value}"{current}>{_e(label)}</a>'
        )
    return (
        f'<nav class="language-switcher" aria-label="{_e(ctx.translator.t("language.label"))}">'
        + "".join(items)
        + "</nav>"
    )


def _document(ctx: RenderContext, title: str, body: str, description: str = "") -> str:
    meta_description = f'\n<meta name="description" content="{_e(description)}">' if description else ""
    analytics = ga4_head_snippet(ctx.ga4_measurement_id)
    return f"""<!DOCTYPE html>
<html lang="{ctx.language.value}">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{_e(title)}</title>{meta_description}
{analytics}
</head>
<body>
{body}
</body>
</html>
"""


def render_landing_page(ctx: RenderContext, locations: Iterable[Location]) -> str:
    """The home page listing every location."""
    t = ctx.translator.t
    lang = ctx.language
    cards: List[str] = []
    for location in locations:
        href = page_path(ctx.base_path, lang, location.id)
        cards.append(
            f"""<li class="location-card">
  <a href="{_e(href)}">
    <h2>{_e(location.name)}</h2>
    <p class="location-country">{_e(location.country)}</p>
    <p class="location-description">{_e(location_description(location, lang))}</p>
  </a>
</li>"""
        )
    if cards:
        listing = '<ul class="locations">\n' + "\n".join(cards) + "\n</ul>"
    else:
        listing = f'<p class="empty">{_e(t("home.empty"))}</p>'
    body = f"""<header>
<h1>{_e(t("site.title"))}</h1>
<p class="tagline">{_e(t("site.tagline"))}</p>
{_language_switcher(ctx, None)}
</header>
<main>
<h2>{_e(t("home.chooseLocation"))}</h2>
{listing}
</main>"""
    return _document(ctx, t("site.title"), body, t("site.tagline"))


def _place_marker(ctx: RenderContext, place: Place) -> Dict[str, Any]:
    categories = ctx.categories or {}
    category = categories.get(place.category, FALLBACK_CATEGORY)
    lat, lng = place.coordinates
    return {
        "id": place.id,
        "title": place_text(place, "title", ctx.language),
        "category": place.category,
        "icon": category.icon,
        "color": category.color,
        "lat": lat,
        "lng": lng,
    }


def _render_marker(ctx: RenderContext, place: Place) -> str:
    """Static marker button; the map script positions it from data-lat/data-lng."""
    marker = _place_marker(ctx, place)
    return (
        f'<button type="button" class="map-marker" data-place-id="{_e(place.id)}"'
        f' data-lat="{marker["lat"]}" data-lng="{marker["lng"]}"'
        f' style="color: {_e(marker["color"])}" data-analytics-event="marker_click"'
        f' data-place-name="{_e(marker["title"])}" data-category="{_e(place.category)}"'
        f' aria-controls="place-{_e(place.id)}">{_e(marker["icon"])}</button>'
    )


def _render_place(ctx: RenderContext, place: Place) -> str:
    t = ctx.translator.t
    lang = ctx.language
    categories = ctx.categories or {}
    category = categories.get(place.category, FALLBACK_CATEGORY)
    title = place_text(place, "title", lang)
    description = place_text(place, "description", lang)
    links = navigation_links(place, label=title)

    link_items = []
    for service, url in links.items():
        label = t(f"place.links.{service}")
        link_items.append(
            f'<a href="{_e(url)}" target="_blank" rel="noopener noreferrer"'
            f' data-analytics-event="navigation_click" data-service="{_e(service)}"'
            f' data-place-name="{_e(title)}">{_e(label)}</a>'
        )
    description_html = f'\n  <p class="place-description">{_e(description)}</p>' if description else ""
    return f"""<li class="place" id="place-{_e(place.id)}" data-category="{_e(place.category)}"
    data-analytics-event="list_expand" data-place-name="{_e(title)}">
  <details>
  <summary><span class="place-icon" style="color: {_e(category.color)}">{_e(category.icon)}</span>
  <span class="place-title">{_e(title)}</span>
  <span class="place-category">{_e(_category_label(ctx, place.category))}</span></summary>{description_html}
  <p class="place-links">{" ".join(link_items)}</p>
  </details>
</li>"""


def render_location_page(ctx: RenderContext, page: LocationPageData) -> str:
    """A location's map page with one entry per place."""
    t = ctx.translator.t
    lang = ctx.language
    location = page.location
    description = location_description(location, lang)
    lat, lng = location.center
    markers = [_place_marker(ctx, place) for place in page.places]
    marker_html = "".join(_render_marker(ctx, place) for place in page.places)

    if page.places:
        places_html = '<ul class="places">\n' + "\n".join(_render_place(ctx, p) for p in page.places) + "\n</ul>"
    else:
        places_html = f'<p class="empty">{_e(t("location.noPlaces"))}</p>'

    body = f"""<header>
<a class="back" href="{_e(page_path(ctx.base_path, lang))}">{_e(t("nav.home"))}</a>
<h1>{_e(location.name)}</h1>
<p class="location-country">{_e(location.country)}</p>
{_language_switcher(ctx, location.id)}
</header>
<main data-analytics-event="location_view" data-location-name="{_e(location.name)}">
<p class="location-description">{_e(description)}</p>
<div id="map" class="map" data-center="{lat},{lng}" data-zoom="{DEFAULT_MAP_ZOOM}"
     aria-label="{_e(t("location.map"))}">{marker_html}</div>
<script type="application/json" id="places-data">{_json_for_script(markers)}</script>
<section class="place-list">
<h2>{_e(t("location.places"))}</h2>
{places_html}
</section>
</main>"""
    title = f"{location.name} | {t('site.title')}"
    return _document(ctx, title, body, description)


def render_not_found_page(ctx: RenderContext) -> str:
    t = ctx.translator.t
    body = f"""<main class="not-found">
<h1>{_e(t("notFound.title"))}</h1>
<p>{_e(t("notFound.message"))}</p>
<a href="{_e(page_path(ctx.base_path, ctx.language))}">{_e(t("nav.home"))}</a>
</main>"""
    return _document(ctx, t("notFound.title"), body)
