"""PathAggregator - Read-only totals for the sidebar and summary panel."""

from dataclasses import dataclass

from walktime_planner.constants import LabelConfig
from walktime_planner.core.walk_time import format_distance, format_long, round_half_up, walking_seconds
from walktime_planner.model.path_registry import PathRegistry


@dataclass(frozen=True)
class PathRow:
    """One sidebar row describing a drawn path."""

    id: str
    sequence_number: int
    name: str
    color: str
    length_feet: float
    time_label: str

    @property
    def stats_label(self) -> str:
        """Row subtitle, e.g. '1,250 ft · 7 min'."""
        return f"{round_half_up(self.length_feet):,} ft · {self.time_label}"


@dataclass(frozen=True)
class SummaryText:
    """Summary panel text for all paths combined."""

    distance: str
    time: str


class PathAggregator:
    """Computes cross-path totals from the registry (never writes to it)."""

    def __init__(self, registry: PathRegistry) -> None:
        self.registry = registry

    def total_distance_feet(self) -> float:
        return sum(path.length_feet for path in self.registry.all_paths())

    @staticmethod
    def summary_text(total_feet: float) -> SummaryText:
        """Placeholders when nothing is drawn, otherwise distance and long time."""
        if total_feet <= 0:
            return SummaryText(distance=LabelConfig.PLACEHOLDER, time=LabelConfig.PLACEHOLDER)
        return SummaryText(
            distance=format_distance(total_feet),
            time=format_long(walking_seconds(total_feet)),
        )

    def summary(self) -> SummaryText:
        return self.summary_text(self.total_distance_feet())

    def path_rows(self) -> list[PathRow]:
        rows = []
        for path in self.registry.all_paths():
            length_feet = path.length_feet
            rows.append(
                PathRow(
                    id=path.id,
                    sequence_number=path.sequence_number,
                    name=path.name,
                    color=path.color,
                    length_feet=length_feet,
                    time_label=format_long(walking_seconds(length_feet)),
                )
            )
        return rows
