from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from constants import TOOLTIP_OFFSET
from dataset import Observation
from utils.time import format_fixed, format_year


@dataclass(frozen=True)
class HoverEvent:
    pointer_x: float
    pointer_y: float
    observation: Observation


def tooltip_lines(observation: Observation, base_temperature: float) -> tuple[str, str, str]:
    """Month and year, absolute temperature and variance to 2 decimals, ties away from zero."""
    instant = observation.instant
    temperature = base_temperature + observation.variance
    return (
        f"{observation.month_label} {format_year(instant)}",
        f"Temperature: {format_fixed(temperature)}°C",
        f"Variance: {format_fixed(observation.variance)}°C",
    )


@dataclass
class Tooltip:
    visible: bool = False
    left: Optional[float] = None
    top: Optional[float] = None
    data_year: Optional[str] = None
    lines: tuple[str, ...] = ()

    @property
    def html(self) -> str:
        return "<br/>".join(self.lines)

    def show(self, event: HoverEvent, base_temperature: float) -> None:
        self.visible = True
        self.left = event.pointer_x + TOOLTIP_OFFSET
        self.top = event.pointer_y + TOOLTIP_OFFSET
        self.data_year = format_year(event.observation.instant)
        self.lines = tooltip_lines(event.observation, base_temperature)

    def hide(self) -> None:
        # content is left in place, only visibility toggles
        self.visible = False
