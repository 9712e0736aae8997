"""WalkTimeChart - Plotly walking time charts.

Renders:
- Per-segment walking minutes of one path as bars, with the cumulative
  walking time as a line on a second axis
- An overview bar chart comparing the total time of every path
"""

import logging
from typing import Optional, Sequence

import numpy as np
import plotly.graph_objects as go

from walktime_planner.constants import ChartConfig, WalkConfig
from walktime_planner.core.geo_calculator import GeoCalculator
from walktime_planner.core.walk_time import format_long
from walktime_planner.model.aggregator import PathRow
from walktime_planner.model.drawn_path import DrawnPath

logger = logging.getLogger(__name__)


class WalkTimeChart:
    """Renders walking time charts using Plotly.

    Example:
        chart = WalkTimeChart()
        fig = chart.render_path(path=path)
        st.plotly_chart(fig)
    """

    def __init__(self, width: int = ChartConfig.CHART_WIDTH, height: int = ChartConfig.CHART_HEIGHT) -> None:
        self.width = width
        self.height = height

    @staticmethod
    def segment_minutes(path: DrawnPath) -> np.ndarray:
        """Unrounded walking minutes per segment."""
        feet = GeoCalculator.to_feet(GeoCalculator.segment_lengths_m(path.vertices))
        return feet / WalkConfig.WALKING_SPEED_FT_PER_SEC / 60

    def render_path(self, path: DrawnPath, title: Optional[str] = None) -> go.Figure:
        """Render per-segment and cumulative walking time for one path.

        Args:
            path: Path with at least 2 vertices
            title: Optional chart title

        Returns:
            Plotly Figure object.
        """
        if path.segment_count == 0:
            raise ValueError(f"{path.id} has no segments to chart")

        minutes = self.segment_minutes(path=path)
        cumulative = np.cumsum(minutes)
        labels = [f"Segment {i + 1}" for i in range(len(minutes))]

        fig = go.Figure()
        fig.add_trace(
            go.Bar(
                x=labels,
                y=minutes,
                marker_color=path.color,
                opacity=ChartConfig.BAR_OPACITY,
                name="Segment",
                hovertemplate="%{x}: %{y:.1f} min<extra></extra>",
            )
        )
        fig.add_trace(
            go.Scatter(
                x=labels,
                y=cumulative,
                mode="lines+markers",
                line=dict(color=ChartConfig.CUMULATIVE_LINE_COLOR, width=2),
                name="Cumulative",
                yaxis="y2",
                hovertemplate="After %{x}: %{y:.1f} min<extra></extra>",
            )
        )

        fig.update_layout(
            title=title or f"{path.name} · {format_long(path.walking_seconds)}",
            width=self.width,
            height=self.height,
            yaxis=dict(title="Minutes", rangemode="tozero"),
            yaxis2=dict(title="Cumulative minutes", overlaying="y", side="right", rangemode="tozero"),
            legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
            margin=dict(l=50, r=50, t=60, b=40),
            plot_bgcolor="white",
        )
        return fig

    def render_overview(self, rows: Sequence[PathRow]) -> go.Figure:
        """Render total walking minutes of every path side by side."""
        if not rows:
            raise ValueError("No paths to chart")

        minutes = [row.length_feet / WalkConfig.WALKING_SPEED_FT_PER_SEC / 60 for row in rows]
        fig = go.Figure(
            go.Bar(
                x=[row.name for row in rows],
                y=minutes,
                marker_color=[row.color for row in rows],
                opacity=ChartConfig.BAR_OPACITY,
                text=[row.time_label for row in rows],
                textposition="outside",
                hovertemplate="%{x}: %{y:.1f} min<extra></extra>",
            )
        )
        fig.update_layout(
            title="Walking time per path",
            width=self.width,
            height=self.height,
            yaxis=dict(title="Minutes", rangemode="tozero"),
            margin=dict(l=50, r=20, t=60, b=40),
            plot_bgcolor="white",
            showlegend=False,
        )
        return fig
