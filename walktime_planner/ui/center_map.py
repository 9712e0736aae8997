"""MapRenderer - Pydeck map rendering for the walk time planner.

Renders everything on a 2D deck.gl map over an OpenStreetMap basemap:
- Finished paths as colored polylines (PathLayer)
- Segment and total time labels with the path color as background (TextLayer)
- Vertex handles while editing (ScatterplotLayer)
- The in-progress sketch with its vertices (PathLayer + ScatterplotLayer)

Conventions:
- Uses [lon, lat] coordinate order (GeoJSON standard)
- Colors as RGBA lists [R, G, B, A] (0-255)
- Data prepared as list[dict] for GPU streaming
- Every pickable row carries a "type" field for ClickDetector
"""

import logging
from dataclasses import dataclass, field

import pydeck as pdk

from walktime_planner.constants import ClickConfig, LabelConfig, MapConfig, StyleConfig
from walktime_planner.core.lat_lng import LatLng
from walktime_planner.ui.basemap import OSM_STYLE
from walktime_planner.ui.context import DrawContext, RemovalContext
from walktime_planner.ui.map_surface import MapSurface

logger = logging.getLogger(__name__)


@dataclass
class LayerCollection:
    """Manages Pydeck layers with correct z-ordering.

    Z-order (back to front): paths → labels → vertices → sketch

    Vertex handles and the sketch are placed last so they get click
    priority over the path lines below them.
    """

    paths: list[pdk.Layer] = field(default_factory=list)
    labels: list[pdk.Layer] = field(default_factory=list)
    vertices: list[pdk.Layer] = field(default_factory=list)
    sketch: list[pdk.Layer] = field(default_factory=list)

    def get_ordered_layers(self) -> list[pdk.Layer]:
        """Return all layers in correct z-order (back to front)."""
        return self.paths + self.labels + self.vertices + self.sketch


class MapRenderer:
    """Renders the map surface and draw tool state on a Pydeck map.

    Example:
        renderer = MapRenderer()
        deck = renderer.render(surface=surface, ctx=ctx)
        render_pydeck_map(deck=deck, key="main_map")
    """

    def __init__(
        self,
        center_lat: float = MapConfig.START_CENTER_LAT,
        center_lon: float = MapConfig.START_CENTER_LON,
        zoom: int = MapConfig.DEFAULT_ZOOM,
        pitch: float = MapConfig.DEFAULT_PITCH,
        bearing: float = MapConfig.DEFAULT_BEARING,
    ) -> None:
        self.center_lat = center_lat
        self.center_lon = center_lon
        self.zoom = zoom
        self.pitch = pitch
        self.bearing = bearing

    def get_view_state(self) -> pdk.ViewState:
        """Create Pydeck ViewState from current settings."""
        return pdk.ViewState(
            latitude=self.center_lat,
            longitude=self.center_lon,
            zoom=self.zoom,
            pitch=self.pitch,
            bearing=self.bearing,
            max_zoom=MapConfig.MAX_ZOOM,
        )

    def update_view(
        self,
        lat: float | None = None,
        lon: float | None = None,
        zoom: int | None = None,
        pitch: float | None = None,
        bearing: float | None = None,
    ) -> None:
        """Update view state parameters."""
        if lat is not None:
            self.center_lat = lat
        if lon is not None:
            self.center_lon = lon
        if zoom is not None:
            self.zoom = zoom
        if pitch is not None:
            self.pitch = pitch
        if bearing is not None:
            self.bearing = bearing

    def render(
        self,
        surface: MapSurface,
        ctx: DrawContext,
        layer_names: dict[str, str] | None = None,
        highlight_handle: str | None = None,
        show_vertex_handles: bool = False,
    ) -> pdk.Deck:
        """Render complete map with all layers.

        Args:
            surface: Rendered polylines and labels
            ctx: Draw tool context (sketch, edit selection, removal marks)
            layer_names: Display name per layer handle for tooltips
            highlight_handle: Layer drawn wider (path shown in the chart)
            show_vertex_handles: Show clickable vertex handles (editing)

        Returns:
            pdk.Deck object ready for display.
        """
        layer_collection = LayerCollection()

        if surface.layers:
            layer_collection.paths.append(
                self._create_path_layer(
                    surface=surface,
                    layer_names=layer_names or {},
                    removal=ctx.removal,
                    highlight_handle=highlight_handle,
                )
            )
        if surface.rendered_labels:
            layer_collection.labels.extend(self._create_label_layers(surface=surface))
        if show_vertex_handles and ctx.edit.working:
            layer_collection.vertices.append(
                self._create_vertex_handle_layer(
                    working=ctx.edit.working,
                    selected_handle=ctx.edit.selected_handle,
                    selected_index=ctx.edit.selected_index,
                )
            )
        if ctx.sketch.vertices:
            layer_collection.sketch.extend(self._create_sketch_layers(ctx=ctx))

        return pdk.Deck(
            map_style=OSM_STYLE,
            map_provider="mapbox",  # Required when map_style is a dict
            initial_view_state=self.get_view_state(),
            layers=layer_collection.get_ordered_layers(),
            tooltip=self._create_tooltip_config(),
            parameters={"pickingRadius": ClickConfig.PICKING_RADIUS_PX},
        )

    # =========================================================================
    # PATH LAYERS
    # =========================================================================

    def _create_path_layer(
        self,
        surface: MapSurface,
        layer_names: dict[str, str],
        removal: RemovalContext,
        highlight_handle: str | None,
    ) -> pdk.Layer:
        """Create the polyline layer for every finished path."""
        alpha = int(StyleConfig.PATH_OPACITY * 255)
        path_data = []
        for handle, layer in surface.layers.items():
            if removal.is_marked(handle=handle):
                color = list(StyleConfig.REMOVAL_MARK_COLOR)
            else:
                color = StyleConfig.hex_to_rgba(hex_color=layer.color, alpha=alpha)
            width = StyleConfig.PATH_WIDTH_PX * (2 if handle == highlight_handle else 1)
            path_data.append(
                {
                    "type": ClickConfig.TYPE_PATH,
                    "layer_handle": handle,
                    "path": [v.lon_lat for v in layer.vertices],
                    "color": color,
                    "width": width,
                    "name": layer_names.get(handle, handle),
                }
            )

        return pdk.Layer(
            "PathLayer",
            path_data,
            get_path="path",
            get_color="color",
            get_width="width",
            width_units="pixels",
            cap_rounded=True,
            joint_rounded=True,
            pickable=True,
            auto_highlight=True,
            highlight_color=[255, 255, 255, 80],
            id="paths",
        )

    # =========================================================================
    # LABEL LAYERS
    # =========================================================================

    def _create_label_layers(self, surface: MapSurface) -> list[pdk.Layer]:
        """Create text layers: small segment labels and bold total labels."""
        segment_rows = []
        total_rows = []
        for rendered in surface.rendered_labels.values():
            row = {
                "type": ClickConfig.TYPE_LABEL,
                "position": rendered.label.position.lon_lat,
                "text": rendered.label.text,
                "background": StyleConfig.hex_to_rgba(hex_color=rendered.color),
                "name": rendered.label.text,
            }
            (total_rows if rendered.label.is_total else segment_rows).append(row)

        layers = []
        for rows, size, weight, layer_id in (
            (segment_rows, LabelConfig.SEGMENT_FONT_SIZE, "normal", "labels_segment"),
            (total_rows, LabelConfig.TOTAL_FONT_SIZE, "bold", "labels_total"),
        ):
            if not rows:
                continue
            layers.append(
                pdk.Layer(
                    "TextLayer",
                    rows,
                    get_position="position",
                    get_text="text",
                    get_size=size,
                    get_color=LabelConfig.TEXT_COLOR,
                    font_weight=weight,
                    background=True,
                    get_background_color="background",
                    get_border_color=LabelConfig.BORDER_COLOR,
                    get_border_width=1,
                    background_padding=[4, 2],
                    get_text_anchor="'middle'",
                    get_alignment_baseline="'center'",
                    pickable=False,
                    id=layer_id,
                )
            )
        return layers

    # =========================================================================
    # EDITING AND SKETCH LAYERS
    # =========================================================================

    def _create_vertex_handle_layer(
        self,
        working: dict[str, list[LatLng]],
        selected_handle: str | None,
        selected_index: int | None,
    ) -> pdk.Layer:
        """Create clickable vertex handles for every edited layer."""
        handle_data = []
        for handle, vertices in working.items():
            for index, vertex in enumerate(vertices):
                selected = handle == selected_handle and index == selected_index
                handle_data.append(
                    {
                        "type": ClickConfig.TYPE_VERTEX,
                        "layer_handle": handle,
                        "vertex_index": index,
                        "position": vertex.lon_lat,
                        "color": StyleConfig.SELECTED_VERTEX_COLOR if selected else StyleConfig.VERTEX_MARKER_COLOR,
                        "name": f"Vertex {index + 1}",
                    }
                )

        return pdk.Layer(
            "ScatterplotLayer",
            handle_data,
            get_position="position",
            get_fill_color="color",
            get_line_color=StyleConfig.VERTEX_MARKER_BORDER,
            get_radius=ClickConfig.VERTEX_MARKER_RADIUS,
            radius_units="pixels",
            stroked=True,
            line_width_min_pixels=2,
            pickable=True,
            id="vertex_handles",
        )

    def _create_sketch_layers(self, ctx: DrawContext) -> list[pdk.Layer]:
        """Create the in-progress sketch line and its vertex markers."""
        vertices = ctx.sketch.vertices
        color = StyleConfig.hex_to_rgba(hex_color=StyleConfig.SKETCH_COLOR)
        layers = []

        if len(vertices) >= 2:
            layers.append(
                pdk.Layer(
                    "PathLayer",
                    [{"path": [v.lon_lat for v in vertices], "color": color, "name": "New path"}],
                    get_path="path",
                    get_color="color",
                    get_width=StyleConfig.PATH_WIDTH_PX,
                    width_units="pixels",
                    pickable=False,
                    id="sketch_line",
                )
            )

        last_index = len(vertices) - 1
        vertex_data = [
            {
                "type": ClickConfig.TYPE_SKETCH_VERTEX,
                "vertex_index": index,
                "position": vertex.lon_lat,
                "radius": ClickConfig.VERTEX_MARKER_RADIUS * (1.5 if index == last_index else 1),
                "name": "Click to finish" if index == last_index else f"Point {index + 1}",
            }
            for index, vertex in enumerate(vertices)
        ]
        layers.append(
            pdk.Layer(
                "ScatterplotLayer",
                vertex_data,
                get_position="position",
                get_fill_color=StyleConfig.VERTEX_MARKER_COLOR,
                get_line_color=color,
                get_radius="radius",
                radius_units="pixels",
                stroked=True,
                line_width_min_pixels=2,
                pickable=True,
                id="sketch_vertices",
            )
        )
        return layers

    @staticmethod
    def _create_tooltip_config() -> dict[str, str | dict[str, str]]:
        """Create Pydeck tooltip configuration - name only."""
        return {
            "html": "<b>{name}</b>",
            "style": {
                "backgroundColor": "rgba(255, 255, 255, 0.95)",
                "color": "#333",
                "padding": "6px 10px",
                "borderRadius": "4px",
            },
        }
