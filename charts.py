from __future__ import annotations

import logging

import plotly.graph_objects as go

from scene import Scene
from tooltip import tooltip_lines

logger = logging.getLogger(__name__)

CELLS_TRACE = "cells"
LEGEND_TRACE = "legend"


def _cells_trace(scene: Scene) -> go.Bar:
    cells = scene.cells
    customdata = [
        [c.month, c.year, c.temperature, *tooltip_lines(c.observation, scene.base_temperature)]
        for c in cells
    ]
    # Not go.Heatmap: a heatmap snaps values onto a regular year x month grid,
    # while cells here keep their own x (month offsets shift them within the
    # year), a width of plot_width / (count / 12) and per-cell ordinal fills.
    # Horizontal bars in pixel space: base/x give the left edge and width,
    # y is the band centre and width the band height.
    return go.Bar(
        name=CELLS_TRACE,
        orientation="h",
        base=[c.x for c in cells],
        x=[c.width for c in cells],
        y=[c.y + c.height / 2 for c in cells],
        width=[c.height for c in cells],
        marker=dict(color=[c.fill for c in cells], line=dict(width=0)),
        customdata=customdata,
        hovertemplate="%{customdata[3]}<br>%{customdata[4]}<br>%{customdata[5]}<extra></extra>",
        showlegend=False,
        xaxis="x",
        yaxis="y",
    )


def _legend_trace(scene: Scene) -> go.Bar:
    legend = scene.legend
    return go.Bar(
        name=LEGEND_TRACE,
        orientation="h",
        base=[legend.x + s.x for s in legend.swatches],
        x=[s.width for s in legend.swatches],
        y=[s.height / 2 for s in legend.swatches],
        width=[s.height for s in legend.swatches],
        marker=dict(color=[s.fill for s in legend.swatches], line=dict(width=0)),
        hoverinfo="skip",
        showlegend=False,
        xaxis="x2",
        yaxis="y2",
    )


def build_heatmap_figure(scene: Scene) -> go.Figure:
    layout = scene.layout
    legend = scene.legend
    plot_w, plot_h = layout.plot_width, layout.plot_height
    # Plot area stacked above the legend strip, all measured in pixels
    total_h = legend.y + legend.height
    legend_frac = legend.height / total_h
    plot_frac = (total_h - plot_h) / total_h

    fig = go.Figure()
    fig.add_trace(_cells_trace(scene))
    fig.add_trace(_legend_trace(scene))

    fig.update_layout(
        template="simple_white",
        width=layout.width,
        height=layout.margin_top + total_h + layout.margin_bottom,
        margin=dict(
            l=layout.margin_left,
            r=layout.margin_right,
            t=layout.margin_top,
            b=layout.margin_bottom,
        ),
        bargap=0,
        xaxis=dict(
            range=[0, plot_w],
            anchor="y",
            tickmode="array",
            tickvals=[t.position for t in scene.x_axis.ticks],
            ticktext=[t.label for t in scene.x_axis.ticks],
            showgrid=False,
            zeroline=False,
        ),
        yaxis=dict(
            range=[plot_h, 0],
            domain=[plot_frac, 1],
            tickmode="array",
            tickvals=[t.position for t in scene.y_axis.ticks],
            ticktext=[t.label for t in scene.y_axis.ticks],
            showgrid=False,
            zeroline=False,
        ),
        xaxis2=dict(
            range=[0, plot_w],
            anchor="y2",
            tickmode="array",
            tickvals=[legend.x + t.position for t in legend.axis.ticks],
            ticktext=[t.label for t in legend.axis.ticks],
            showline=False,
            showgrid=False,
            zeroline=False,
        ),
        yaxis2=dict(
            range=[legend.height, 0],
            domain=[0, legend_frac],
            visible=False,
        ),
    )
    return fig


class HeatmapSurface:
    """Holds the currently drawn figure; every draw starts from an empty surface."""

    def __init__(self) -> None:
        self.figure = go.Figure()

    def clear(self) -> None:
        self.figure = go.Figure()

    def draw(self, scene: Scene) -> go.Figure:
        self.figure = build_heatmap_figure(scene)
        logger.debug("Drew heatmap", extra={"cell_count": len(scene.cells)})
        return self.figure

    @property
    def cell_count(self) -> int:
        for trace in self.figure.data:
            if trace.name == CELLS_TRACE:
                return len(trace.x or ())
        return 0
