"""
HTML-шаблоны страниц карты (Leaflet + OpenStreetMap).

Данные для карты передаются в страницу одним JSON-объектом через фильтр tojson,
вся интерактивность — на стороне браузера.
"""
from jinja2 import Environment, select_autoescape

_env = Environment(autoescape=select_autoescape(default=True, default_for_string=True))

_HEAD = """
<meta charset="utf-8">
<meta name="viewport" content="width=device-width,initial-scale=1">
<link rel="stylesheet" href="https://unpkg.com/leaflet@1.9.4/dist/leaflet.css">
<script src="https://unpkg.com/leaflet@1.9.4/dist/leaflet.js"></script>
<style>
  body { font-family: Arial, sans-serif; margin: 2rem auto; max-width: 900px; padding: 0 1rem; color: #333; }
  #map { height: 400px; width: 100%; border: 1px solid #ccc; border-radius: 8px; }
  .hint { color: #666; font-size: 0.9rem; margin: 0.75rem 0; }
  .grid { display: grid; grid-template-columns: 1fr 1fr; gap: 1rem; }
  label { display: block; font-size: 0.9rem; font-weight: 600; margin-bottom: 0.25rem; }
  input[type="number"] { width: 100%; padding: 0.5rem; border: 1px solid #ccc; border-radius: 6px; box-sizing: border-box; }
  button { margin-top: 1rem; padding: 0.5rem 1rem; font-size: 1rem; }
  .notice { background: #eef9f0; border: 1px solid #b7e1c1; padding: 0.5rem 1rem; border-radius: 6px; }
</style>
"""

_TILES = """
L.tileLayer('https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png', {
  attribution: '&copy; <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'
}).addTo(map);
"""

CAMPUS_MAP_PAGE = _env.from_string("""<!doctype html>
<html>
<head>
  <title>{{ title }}</title>
  {{ head | safe }}
</head>
<body>
  <h1>{{ title }}</h1>
  <div id="map"></div>
  <p class="hint">{{ view.markers | length }} buildings, {{ view.boundaries | length }} boundary points</p>
  <script>
    const view = {{ view | tojson }};
    const map = L.map('map').setView([view.center.lat, view.center.lng], view.zoom);
    {{ tiles | safe }}
    if (view.boundaries.length >= 3) {
      const polygon = L.polygon(view.boundaries, { color: '#2e7d32', weight: 2, fillOpacity: 0.05 }).addTo(map);
      map.fitBounds(polygon.getBounds());
    }
    view.markers.forEach(function (m) {
      L.marker([m.lat, m.lng], { opacity: m.opacity, interactive: m.interactive, title: m.key }).addTo(map);
    });
  </script>
</body>
</html>
""")

LOCATION_PICKER_PAGE = _env.from_string("""<!doctype html>
<html>
<head>
  <title>{{ title }}</title>
  {{ head | safe }}
</head>
<body>
  <h1>{{ title }}</h1>
  {% if saved %}<p class="notice">Location saved.</p>{% endif %}
  <div id="map"></div>
  <p class="hint">Click on the map to set the building location</p>
  <form method="post" action="{{ action }}">
    <div class="grid">
      <div>
        <label for="lat">Latitude</label>
        <input id="lat" name="lat" type="number" step="0.000001" value="{{ view.selected.lat }}">
      </div>
      <div>
        <label for="lng">Longitude</label>
        <input id="lng" name="lng" type="number" step="0.000001" value="{{ view.selected.lng }}">
      </div>
    </div>
    <button type="submit">Save location</button>
  </form>
  <script>
    const view = {{ view | tojson }};
    const map = L.map('map', { scrollWheelZoom: false }).setView([view.center.lat, view.center.lng], view.zoom);
    {{ tiles | safe }}
    view.markers.forEach(function (m) {
      L.marker([m.lat, m.lng], { opacity: m.opacity, interactive: m.interactive, title: m.key }).addTo(map);
    });
    let selected = { lat: view.selected.lat, lng: view.selected.lng };
    const pin = L.marker([selected.lat, selected.lng]).addTo(map);
    const latInput = document.getElementById('lat');
    const lngInput = document.getElementById('lng');

    function select(pos) {
      selected = pos;
      pin.setLatLng([pos.lat, pos.lng]);
      latInput.value = pos.lat;
      lngInput.value = pos.lng;
    }
    map.on('click', function (e) { select({ lat: e.latlng.lat, lng: e.latlng.lng }); });
    latInput.addEventListener('change', function () {
      const v = parseFloat(latInput.value);
      if (!isNaN(v)) { select({ lat: v, lng: selected.lng }); }
    });
    lngInput.addEventListener('change', function () {
      const v = parseFloat(lngInput.value);
      if (!isNaN(v)) { select({ lat: selected.lat, lng: v }); }
    });
  </script>
</body>
</html>
""")


def render_campus_map(title: str, view: dict) -> str:
    return CAMPUS_MAP_PAGE.render(title=title, view=view, head=_HEAD, tiles=_TILES)


def render_location_picker(title: str, view: dict, action: str, saved: bool = False) -> str:
    return LOCATION_PICKER_PAGE.render(
        title=title, view=view, action=action, saved=saved, head=_HEAD, tiles=_TILES
    )
