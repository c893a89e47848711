from __future__ import annotations

import logging
from typing import Callable, Optional

from dataset import Dataset
from loader import LoadOutcome, LoadSuccess
from scene import Scene, build_scene
from tooltip import HoverEvent, Tooltip
from utils.time import format_number

logger = logging.getLogger(__name__)


class ViewModel:
    """
    Page state: the dataset once loaded, the tooltip, and whether the page
    is still mounted. The loader runs at most once per mount.
    """

    def __init__(self) -> None:
        self.dataset: Optional[Dataset] = None
        self.tooltip = Tooltip()
        self.mounted = False
        self.load_attempted = False
        self._scene: Optional[Scene] = None

    def mount(self, load: Callable[[], LoadOutcome]) -> Optional[LoadOutcome]:
        self.mounted = True
        if self.load_attempted:
            return None
        self.load_attempted = True
        outcome = load()
        if not self.mounted:
            logger.info("View unmounted before the dataset arrived; discarding it")
            return outcome
        if isinstance(outcome, LoadSuccess):
            self.set_dataset(outcome.dataset)
        return outcome

    def unmount(self) -> None:
        self.mounted = False
        # a later mount loads again unless a dataset is already held
        if self.dataset is None:
            self.load_attempted = False

    def set_dataset(self, dataset: Dataset) -> None:
        self.dataset = dataset
        self._scene = None
        self.tooltip.hide()

    @property
    def description(self) -> str:
        base = self.dataset.base_temperature if self.dataset is not None else None
        return f"Base temperature: {format_number(base)}°C"

    def scene(self) -> Optional[Scene]:
        if self.dataset is None:
            return None
        if self._scene is None:
            self._scene = build_scene(self.dataset)
        return self._scene

    def hover(self, event: HoverEvent) -> None:
        if self.dataset is None:
            return
        self.tooltip.show(event, self.dataset.base_temperature)

    def leave(self) -> None:
        self.tooltip.hide()
