"""Leaflet map hosted in a QWebEngineView.

Implements the `MapRenderer` protocol by calling small JavaScript helpers in
the hosted page. Calls made before the page has loaded are queued and flushed
in order once it has.
"""

from __future__ import annotations

from PySide6.QtCore import QUrl, Signal
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import QWidget
from app.views.widgets.script_queue import ScriptQueue, js_call
from core.models import TileSource

LEAFLET_VERSION = "1.9.4"

_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<link rel="stylesheet" href="https://unpkg.com/leaflet@{version}/dist/leaflet.css">
<script src="https://unpkg.com/leaflet@{version}/dist/leaflet.js"></script>
<style>
  html, body, #map {{ height: 100%; margin: 0; background: #e5e7eb; }}
  .location-dot {{ position: relative; width: 24px; height: 24px; }}
  .location-dot .ping {{
    position: absolute; left: 4px; top: 4px; width: 16px; height: 16px;
    border-radius: 50%; background: #3b82f6; opacity: 0.6;
    animation: ping 1.5s cubic-bezier(0, 0, 0.2, 1) infinite;
  }}
  .location-dot .dot {{
    position: absolute; left: 4px; top: 4px; width: 16px; height: 16px;
    border-radius: 50%; background: #2563eb; border: 2px solid #fff; box-sizing: border-box;
  }}
  @keyframes ping {{ 75%, 100% {{ transform: scale(2); opacity: 0; }} }}
</style>
</head>
<body>
<div id="map"></div>
<script>
var map = null, tiles = null, marker = null;

function createMap(lat, lon, zoom) {{
  if (map) {{ return; }}
  map = L.map('map').setView([lat, lon], zoom);
}}

function setTiles(url, attribution, maxZoom) {{
  if (!map) {{ return; }}
  var layer = L.tileLayer(url, {{ attribution: attribution, maxZoom: maxZoom }});
  if (tiles) {{ map.removeLayer(tiles); }}
  layer.addTo(map);
  tiles = layer;
}}

function setView(lat, lon, zoom, animate, duration) {{
  if (!map) {{ return; }}
  map.setView([lat, lon], zoom, {{ animate: animate, duration: duration }});
}}

function placeMarker(lat, lon) {{
  if (!map) {{ return; }}
  if (marker) {{ marker.setLatLng([lat, lon]); return; }}
  var icon = L.divIcon({{
    className: '',
    html: '<div class="location-dot"><div class="ping"></div><div class="dot"></div></div>',
    iconSize: [24, 24],
    iconAnchor: [12, 12]
  }});
  marker = L.marker([lat, lon], {{ icon: icon }}).addTo(map);
}}

function removeMap() {{
  if (map) {{ map.remove(); }}
  map = null; tiles = null; marker = null;
}}
</script>
</body>
</html>
"""


class LeafletMapView(QWebEngineView):
    """Interactive map widget backed by Leaflet.

    Emits `loadFailed` when the hosted page cannot be loaded; map calls made
    after that are dropped.
    """

    loadFailed = Signal(str)

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._scripts = ScriptQueue(self._run_now)
        self.loadFinished.connect(self._on_load_finished)
        # A web origin is needed for tile servers that check the referrer.
        self.setHtml(_PAGE.format(version=LEAFLET_VERSION), QUrl("https://localhost/"))

    # MapRenderer
    def create_map(self, center: tuple[float, float], zoom: int) -> None:
        self._run(js_call("createMap", center[0], center[1], int(zoom)))

    def set_tile_source(self, source: TileSource) -> None:
        self._run(
            js_call("setTiles", source.url_template, source.attribution, int(source.max_zoom))
        )

    def set_view(
        self, center: tuple[float, float], zoom: int, animate: bool, duration_s: float
    ) -> None:
        self._run(
            js_call("setView", center[0], center[1], int(zoom), bool(animate), float(duration_s))
        )

    def add_marker(self, position: tuple[float, float]) -> None:
        self._run(js_call("placeMarker", position[0], position[1]))

    def move_marker(self, position: tuple[float, float]) -> None:
        self._run(js_call("placeMarker", position[0], position[1]))

    def remove_map(self) -> None:
        self._run(js_call("removeMap"))

    # Internals
    def _run(self, script: str) -> None:
        self._scripts.run(script)

    def _run_now(self, script: str) -> None:
        self.page().runJavaScript(script)

    def _on_load_finished(self, ok: bool) -> None:
        self._scripts.page_loaded(ok)
        if not ok:
            self.loadFailed.emit("The map could not be loaded. Check your internet connection.")
