"""Basemap for the walk time planner using free OpenStreetMap tiles.

Uses the Mapbox GL style specification to define a raster basemap. This is
the deck.gl approach for XYZ raster tiles: pydeck's TileLayer only fetches
tiles and needs a renderSubLayers callback that pydeck doesn't expose to
Python.

The style dict defines:
- sources: Where to fetch tiles (OpenStreetMap a/b/c subdomains)
- layers: How to render them (as raster with zoom limits)

Requires map_provider="mapbox" in pdk.Deck() (works without API key for raster).
"""

OSM_TILES_ABC = [
    "https://a.tile.openstreetmap.org/{z}/{x}/{y}.png",
    "https://b.tile.openstreetmap.org/{z}/{x}/{y}.png",
    "https://c.tile.openstreetmap.org/{z}/{x}/{y}.png",
]

OSM_ATTRIBUTION = '© <a href="https://www.openstreetmap.org/copyright">OpenStreetMap</a> contributors'

OSM_STYLE: dict[str, object] = {
    "version": 8,
    "sources": {
        "osm": {
            "type": "raster",
            "tiles": OSM_TILES_ABC,
            "tileSize": 256,
            "attribution": OSM_ATTRIBUTION,
        }
    },
    "layers": [
        {
            "id": "osm",
            "type": "raster",
            "source": "osm",
            "minzoom": 0,
            "maxzoom": 19,  # OSM tiles stop at z19, deck.gl overzooms above
        }
    ],
}
