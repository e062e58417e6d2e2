"""
External link helpers for place popups.

`normalize_instagram_url` is the only gate between dataset/user supplied
social references and the hrefs written into rendered pages: anything it
returns is safe to emit, and None means the link must be omitted.
"""
from __future__ import annotations

import re
from typing import Dict, Optional
from urllib.parse import quote, urlencode, urlsplit

from domain.models import Place

INSTAGRAM_DOMAIN = "instagram.com"
INSTAGRAM_PROFILE_URL = "https://www.instagram.com/{handle}/"

NAVIGATION_SERVICES = ("waze", "google-maps", "apple-maps", "instagram")

_URL_PREFIX_RE = re.compile(r"^https?://", re.IGNORECASE)
_HANDLE_RE = re.compile(r"[A-Za-z0-9._]+")
# Browsers read "\" as "/" and drop tabs and newlines inside URLs, so the
# host they resolve can differ from the one urlsplit reports
_UNSAFE_URL_CHARS_RE = re.compile(r"[\\\s\x00-\x1f\x7f]")


def _is_instagram_host(hostname: str) -> bool:
    host = hostname.lower()
    return host == INSTAGRAM_DOMAIN or host.endswith("." + INSTAGRAM_DOMAIN)


def normalize_instagram_url(value: Optional[str]) -> Optional[str]:
    """
    Canonicalize an Instagram reference, or reject it with None.

    Accepts either a full http(s) URL on instagram.com (or a subdomain of
    it), returned unchanged, or a bare handle such as "@my.place" or
    "myplace/", returned as https://www.instagram.com/<handle>/.
    """
    if value is None:
        return None
    raw = value.strip()
    if not raw:
        return None

    if _URL_PREFIX_RE.match(raw):
        if _UNSAFE_URL_CHARS_RE.search(raw):
            return None
        try:
            parts = urlsplit(raw)
            hostname = parts.hostname
            # Accessing the port validates it
            parts.port
        except ValueError:
            return None
        if not hostname or not _is_instagram_host(hostname):
            return None
        return parts.geturl()

    handle = raw[1:] if raw.startswith("@") else raw
    handle = handle.rstrip("/")
    if not handle:
        return None
    if not _HANDLE_RE.fullmatch(handle):
        return None
    return INSTAGRAM_PROFILE_URL.format(handle=handle)


def waze_url(lat: float, lng: float) -> str:
    return "https://waze.com/ul?" + urlencode({"ll": f"{lat},{lng}", "navigate": "yes"})


def google_maps_url(lat: float, lng: float) -> str:
    return "https://www.google.com/maps/dir/?" + urlencode({"api": "1", "destination": f"{lat},{lng}"})


def apple_maps_url(lat: float, lng: float, label: Optional[str] = None) -> str:
    params = {"daddr": f"{lat},{lng}"}
    if label:
        params["q"] = label
    return "https://maps.apple.com/?" + urlencode(params, quote_via=quote)


def navigation_links(place: Place, label: Optional[str] = None) -> Dict[str, str]:
    """
    Build the external navigation links shown in a place popup.

    Keys are service names from NAVIGATION_SERVICES; "instagram" is present
    only when the place carries a reference that normalizes.
    """
    lat, lng = place.coordinates
    links = {
        "waze": waze_url(lat, lng),
        "google-maps": google_maps_url(lat, lng),
        "apple-maps": apple_maps_url(lat, lng, label),
    }
    instagram = normalize_instagram_url(place.instagram)
    if instagram:
        links["instagram"] = instagram
    return links
