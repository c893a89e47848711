from __future__ import annotations

from functools import partial
from typing import Any, Optional

import streamlit as st

from charts import HeatmapSurface
from constants import TITLE
from loader import fetch_dataset
from logging_config import configure_logging
from scene import Scene
from settings import get_settings
from tooltip import HoverEvent
from view import ViewModel

_VIEW_KEY = "heatmap_view"


def _get_view_model() -> ViewModel:
    if _VIEW_KEY not in st.session_state:
        st.session_state[_VIEW_KEY] = ViewModel()
    return st.session_state[_VIEW_KEY]


def _selected_cell_index(event: Any) -> Optional[int]:
    """Index of the first selected heatmap cell, if any."""
    if not event:
        return None
    points = event.get("selection", {}).get("points", [])
    for point in points:
        if point.get("curve_number") == 0 and point.get("point_index") is not None:
            return int(point["point_index"])
    return None


def _render_tooltip(view: ViewModel, scene: Scene, event: Any) -> None:
    index = _selected_cell_index(event)
    if index is None or index >= len(scene.cells):
        view.leave()
    else:
        cell = scene.cell_at(index)
        layout = scene.layout
        view.hover(
            HoverEvent(
                pointer_x=layout.margin_left + cell.x,
                pointer_y=layout.margin_top + cell.y,
                observation=cell.observation,
            )
        )
    tooltip = view.tooltip
    if tooltip.visible:
        st.markdown(tooltip.html, unsafe_allow_html=True)


def _render_heatmap(view: ViewModel) -> None:
    scene = view.scene()
    if scene is None:
        st.info("No data loaded. Check the logs for the load error.")
        return
    surface = HeatmapSurface()
    fig = surface.draw(scene)
    event = st.plotly_chart(
        fig,
        use_container_width=False,
        on_select="rerun",
        selection_mode="points",
        key="heatmap",
    )
    _render_tooltip(view, scene, event)


def _render_data_tab(view: ViewModel) -> None:
    if view.dataset is None:
        st.info("No observations to show.")
        return
    frame = view.dataset.to_frame()
    st.dataframe(frame, use_container_width=True, hide_index=True)
    st.download_button(
        "Download CSV",
        data=frame.to_csv(index=False),
        file_name="global-temperature.csv",
        mime="text/csv",
    )


def main() -> None:
    configure_logging()
    settings = get_settings()
    st.set_page_config(page_title=TITLE, layout="wide")
    st.title(TITLE)

    view = _get_view_model()
    if not view.load_attempted:
        with st.spinner("Loading temperature dataset..."):
            view.mount(
                partial(fetch_dataset, settings.data_url, timeout=settings.request_timeout)
            )
    st.caption(view.description)

    tabs = st.tabs(["Heatmap", "Data"])
    with tabs[0]:
        _render_heatmap(view)
    with tabs[1]:
        _render_data_tab(view)


if __name__ == "__main__":
    main()
