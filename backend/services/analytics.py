"""
Analytics boundary.

The guide reports named events (place viewed, navigation link clicked,
language changed, ...) with a small payload to a tracking sink. Delivery is
best effort: a failing sink is logged and otherwise ignored.

On the generated pages the events go to Google Analytics 4 through gtag;
`ga4_head_snippet` renders the loader for that, plus a listener that reports
clicks and toggles on elements tagged with `data-analytics-event`.
"""
from __future__ import annotations

import html
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from services.links import NAVIGATION_SERVICES

logger = logging.getLogger(__name__)

GTAG_SCRIPT_URL = "https://www.googletagmanager.com/gtag/js?id={measurement_id}"

# Privacy-friendly gtag config
GA4_CONFIG = {
    "anonymize_ip": True,
    "allow_google_signals": False,
    "allow_ad_personalization_signals": False,
}

# Delegated listener turning data-analytics-event attributes on rendered
# pages into gtag events; payloads match the Analytics track_* methods
GA4_EVENT_LISTENER_JS = """(function () {
  function send(name, params) { gtag('event', name, params); }
  function placeParams(el) {
    return {
      place_name: el.getAttribute('data-place-name') || 'unknown',
      category: el.getAttribute('data-category') || ''
    };
  }
  document.addEventListener('click', function (e) {
    var el = e.target.closest ? e.target.closest('[data-analytics-event]') : null;
    if (!el) { return; }
    var name = el.getAttribute('data-analytics-event');
    if (name === 'navigation_click') {
      send('navigation_click', {
        service: el.getAttribute('data-service'),
        place_name: el.getAttribute('data-place-name') || 'unknown',
        transport_type: 'beacon'
      });
    } else if (name === 'marker_click') {
      var place = placeParams(el);
      send('marker_click', {place_name: place.place_name, category: place.category, interaction_type: 'map'});
      send('place_view', place);
    } else if (name === 'language_change') {
      send('language_change', {language: el.getAttribute('data-language')});
    }
  });
  document.addEventListener('toggle', function (e) {
    var details = e.target;
    if (!details.open || !details.closest) { return; }
    var el = details.closest('[data-analytics-event="list_expand"]');
    if (!el) { return; }
    var place = placeParams(el);
    send('list_expand', {place_name: place.place_name, category: place.category, interaction_type: 'list'});
    send('place_view', place);
  }, true);
  document.addEventListener('DOMContentLoaded', function () {
    var main = document.querySelector('[data-analytics-event="location_view"]');
    if (main) { send('location_view', {location_name: main.getAttribute('data-location-name')}); }
  });
})();"""


@dataclass(frozen=True)
class AnalyticsEvent:
    name: str
    params: Dict[str, Any] = field(default_factory=dict)


class AnalyticsSink(Protocol):
    def send(self, event: AnalyticsEvent) -> None:
        ...


class NullSink:
    def send(self, event: AnalyticsEvent) -> None:
        return None


class LoggingSink:
    """Writes events to the `analytics` logger."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logging.getLogger("analytics")

    def send(self, event: AnalyticsEvent) -> None:
        self.log.info("event=%s params=%s", event.name, json.dumps(event.params, sort_keys=True))


class RecordingSink:
    """Keeps events in memory, e.g. for the build report or tests."""

    def __init__(self) -> None:
        self.events: List[AnalyticsEvent] = []

    def send(self, event: AnalyticsEvent) -> None:
        self.events.append(event)

    def names(self) -> List[str]:
        return [e.name for e in self.events]


class Analytics:
    def __init__(self, sink: Optional[AnalyticsSink] = None):
        self.sink = sink or LoggingSink()

    def track_event(self, name: str, params: Optional[Dict[str, Any]] = None) -> None:
        event = AnalyticsEvent(name=name, params=dict(params or {}))
        try:
            self.sink.send(event)
        except Exception:
            logger.exception("Analytics sink failed for event %s", name)

    def track_page_view(self, path: str) -> None:
        self.track_event("page_view", {"page_path": path})

    def track_location_view(self, location_name: str) -> None:
        self.track_event("location_view", {"location_name": location_name})

    def track_place_view(self, place_name: str, category: str) -> None:
        self.track_event("place_view", {"place_name": place_name, "category": category})

    def track_marker_click(self, place_name: str, category: str) -> None:
        self.track_event(
            "marker_click",
            {"place_name": place_name, "category": category, "interaction_type": "map"},
        )

    def track_list_expand(self, place_name: str, category: str) -> None:
        self.track_event(
            "list_expand",
            {"place_name": place_name, "category": category, "interaction_type": "list"},
        )

    def track_language_change(self, language: str) -> None:
        self.track_event("language_change", {"language": language})

    def track_navigation_click(self, service: str, place_name: Optional[str] = None) -> None:
        """Outbound navigation link; sent with beacon transport on the pages."""
        if service not in NAVIGATION_SERVICES:
            raise ValueError(f"Unknown navigation service: {service!r}")
        self.track_event(
            "navigation_click",
            {
                "service": service,
                "place_name": place_name or "unknown",
                "transport_type": "beacon",
            },
        )


def ga4_head_snippet(measurement_id: str) -> str:
    """gtag loader and config for the page <head>; empty when no id is configured."""
    measurement_id = (measurement_id or "").strip()
    if not measurement_id:
        return ""
    src = html.escape(GTAG_SCRIPT_URL.format(measurement_id=measurement_id), quote=True)
    # json.dumps output is embedded in a <script>; "</" must not close the tag
    mid = json.dumps(measurement_id).replace("</", "<\\/")
    config = json.dumps(GA4_CONFIG)
    return f"""<script async src="{src}"></script>
<script>
window.dataLayer = window.dataLayer || [];
function gtag(){{dataLayer.push(arguments);}}
gtag('js', new Date());
gtag('config', {mid}, {config});
</script>
<script>
{GA4_EVENT_LISTENER_JS}
</script>"""
