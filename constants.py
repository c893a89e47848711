from __future__ import annotations

from plotly.colors import qualitative

DATA_URL: str = (
    "https://raw.githubusercontent.com/freeCodeCamp/ProjectReferenceData/master/global-temperature.json"
)
TITLE: str = "Monthly Global Land-Surface Temperature"

# Drawing surface in pixels; the plot area is what remains inside the margins.
SURFACE_WIDTH: int = 800
SURFACE_HEIGHT: int = 500
MARGIN: dict[str, int] = {"top": 80, "right": 25, "bottom": 30, "left": 60}

LEGEND_WIDTH: int = 300
LEGEND_HEIGHT: int = 20
LEGEND_OFFSET: int = 40  # gap between plot bottom and legend top

# Same ten colors as d3.schemeCategory10
CATEGORY_PALETTE: tuple[str, ...] = tuple(qualitative.D3)

TOOLTIP_OFFSET: int = 10
