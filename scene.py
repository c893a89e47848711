from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from constants import (
    CATEGORY_PALETTE,
    LEGEND_HEIGHT,
    LEGEND_OFFSET,
    LEGEND_WIDTH,
    MARGIN,
    SURFACE_HEIGHT,
    SURFACE_WIDTH,
)
from dataset import Dataset, Observation
from scales import BandScale, LinearScale, OrdinalScale, TimeScale
from utils.time import format_year

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartLayout:
    width: int = SURFACE_WIDTH
    height: int = SURFACE_HEIGHT
    margin_top: int = MARGIN["top"]
    margin_right: int = MARGIN["right"]
    margin_bottom: int = MARGIN["bottom"]
    margin_left: int = MARGIN["left"]
    legend_width: int = LEGEND_WIDTH
    legend_height: int = LEGEND_HEIGHT
    legend_offset: int = LEGEND_OFFSET

    @property
    def plot_width(self) -> int:
        return self.width - self.margin_left - self.margin_right

    @property
    def plot_height(self) -> int:
        return self.height - self.margin_top - self.margin_bottom


DEFAULT_LAYOUT = ChartLayout()


@dataclass(frozen=True)
class AxisTick:
    position: float
    label: str


@dataclass(frozen=True)
class Axis:
    id: str
    orient: str  # "bottom" or "left"
    ticks: tuple[AxisTick, ...]


@dataclass(frozen=True)
class Cell:
    x: float
    y: float
    width: float
    height: float
    fill: str
    month: int  # zero-based
    year: str
    temperature: float
    observation: Observation
    classification: str = "cell"


@dataclass(frozen=True)
class Swatch:
    x: float
    width: float
    height: float
    fill: str
    value: float


@dataclass(frozen=True)
class Legend:
    x: float
    y: float
    width: float
    height: float
    swatches: tuple[Swatch, ...]
    axis: Axis


@dataclass(frozen=True)
class Scene:
    """Everything needed to draw the heatmap, in plot-area pixel coordinates."""

    layout: ChartLayout
    base_temperature: float
    x_domain: Optional[tuple[datetime, datetime]]
    y_domain: tuple[str, ...]
    color_domain: tuple[float, ...]
    x_axis: Axis
    y_axis: Axis
    cells: tuple[Cell, ...]
    legend: Legend

    def cell_at(self, index: int) -> Cell:
        return self.cells[index]


def _x_axis(x_scale: Optional[TimeScale]) -> Axis:
    if x_scale is None:
        return Axis(id="x-axis", orient="bottom", ticks=())
    ticks = tuple(AxisTick(position=x_scale(t), label=format_year(t)) for t in x_scale.ticks())
    return Axis(id="x-axis", orient="bottom", ticks=ticks)


def _y_axis(y_scale: BandScale) -> Axis:
    half = y_scale.bandwidth / 2
    ticks = tuple(
        AxisTick(position=y_scale(label) + half, label=label) for label in y_scale.domain
    )
    return Axis(id="y-axis", orient="left", ticks=ticks)


def _legend(color_scale: OrdinalScale, layout: ChartLayout) -> Legend:
    domain = color_scale.domain
    swatch_width = layout.legend_width / len(domain) if domain else 0.0
    swatches = tuple(
        Swatch(
            x=i * swatch_width,
            width=swatch_width,
            height=layout.legend_height,
            fill=color_scale(value),
            value=value,
        )
        for i, value in enumerate(domain)
    )
    # ordinal domain values reused as a numeric domain
    legend_scale = LinearScale(domain, (0, layout.legend_width))
    fmt = legend_scale.tick_format()
    axis_ticks = tuple(
        AxisTick(position=legend_scale(value), label=fmt(value)) for value in legend_scale.ticks()
    )
    return Legend(
        x=layout.plot_width / 2 - layout.legend_width / 2,
        y=layout.plot_height + layout.legend_offset,
        width=layout.legend_width,
        height=layout.legend_height,
        swatches=swatches,
        axis=Axis(id="legend-axis", orient="bottom", ticks=axis_ticks),
    )


def build_scene(dataset: Dataset, layout: ChartLayout = DEFAULT_LAYOUT) -> Scene:
    """
    Compute the heatmap geometry for ``dataset``: scales, axes, one cell per
    observation and the color legend. Pure; the dataset is not modified.
    """
    observations = dataset.monthly_variance
    plot_width, plot_height = layout.plot_width, layout.plot_height

    instants = [o.instant for o in observations]
    x_scale = None
    if instants:
        x_scale = TimeScale((min(instants), max(instants)), (0, plot_width))
    y_scale = BandScale((o.month_label for o in observations), (0, plot_height))
    color_scale = OrdinalScale(CATEGORY_PALETTE)

    cells = []
    if observations:
        cell_width = plot_width / (len(observations) / 12)
        cell_height = plot_height / 12
        for observation, instant in zip(observations, instants):
            cells.append(
                Cell(
                    x=x_scale(instant),
                    y=y_scale(observation.month_label),
                    width=cell_width,
                    height=cell_height,
                    fill=color_scale(observation.variance),
                    month=observation.month - 1,
                    year=format_year(instant),
                    temperature=dataset.temperature_of(observation),
                    observation=observation,
                )
            )

    scene = Scene(
        layout=layout,
        base_temperature=dataset.base_temperature,
        x_domain=x_scale.domain if x_scale is not None else None,
        y_domain=y_scale.domain,
        color_domain=color_scale.domain,
        x_axis=_x_axis(x_scale),
        y_axis=_y_axis(y_scale),
        cells=tuple(cells),
        legend=_legend(color_scale, layout),
    )
    logger.debug("Built heatmap scene", extra={"cell_count": len(scene.cells)})
    return scene
