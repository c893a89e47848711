from datetime import datetime

import pytest

from constants import CATEGORY_PALETTE
from dataset import Dataset, Observation
from scene import DEFAULT_LAYOUT, ChartLayout, build_scene


def test_one_cell_per_observation_with_attributes(sample_dataset):
    scene = build_scene(sample_dataset)
    assert len(scene.cells) == len(sample_dataset) == 24
    for cell, obs in zip(scene.cells, sample_dataset.monthly_variance):
        assert 0 <= cell.month <= 11
        assert cell.month == obs.month - 1
        assert cell.year == str(obs.year)
        assert cell.temperature == sample_dataset.base_temperature + obs.variance
        assert cell.classification == "cell"


def test_cell_geometry_follows_layout(sample_dataset):
    scene = build_scene(sample_dataset)
    plot_w, plot_h = DEFAULT_LAYOUT.plot_width, DEFAULT_LAYOUT.plot_height
    assert (plot_w, plot_h) == (715, 390)
    first, last = scene.cells[0], scene.cells[-1]
    assert first.x == 0
    assert last.x == plot_w
    assert first.y == 0
    assert last.y == pytest.approx(plot_h * 11 / 12)
    assert first.width == pytest.approx(plot_w / 2)
    assert first.height == pytest.approx(plot_h / 12)


def test_x_domain_is_extent_of_instants(dataset_factory):
    dataset = dataset_factory(years=(1901, 1900, 1902))
    scene = build_scene(dataset)
    instants = [o.instant for o in dataset.monthly_variance]
    assert scene.x_domain == (min(instants), max(instants))
    assert scene.x_domain == (datetime(1900, 1, 1), datetime(1902, 12, 1))


def test_y_domain_is_twelve_months_in_first_seen_order():
    months = [4, 5, 6, 7, 8, 9, 10, 11, 12, 1, 2, 3]
    dataset = Dataset(
        base_temperature=8.0,
        monthly_variance=tuple(Observation(1900, m, 0.1 * m) for m in months),
    )
    scene = build_scene(dataset)
    assert len(scene.y_domain) == 12
    assert scene.y_domain[0] == "April"
    assert scene.y_domain[-1] == "March"
    assert [t.label for t in scene.y_axis.ticks] == list(scene.y_domain)
    assert scene.y_axis.ticks[0].position == pytest.approx(390 / 24)


def test_fill_colors_follow_ordinal_variance_order():
    dataset = Dataset(
        base_temperature=8.0,
        monthly_variance=tuple(
            Observation(1900, m, v) for m, v in zip(range(1, 13), [0.1, 0.2, 0.1] + [0.3 + i for i in range(9)])
        ),
    )
    scene = build_scene(dataset)
    fills = [c.fill for c in scene.cells]
    assert fills[0] == fills[2] == CATEGORY_PALETTE[0]
    assert fills[1] == CATEGORY_PALETTE[1]
    # 11 distinct values, so the palette wraps around once
    assert len(scene.color_domain) == 11
    assert fills[-1] == CATEGORY_PALETTE[0]


def test_legend_has_swatch_per_color_domain_value(sample_dataset):
    scene = build_scene(sample_dataset)
    legend = scene.legend
    assert len(legend.swatches) == len(scene.color_domain)
    assert legend.x == pytest.approx(715 / 2 - 150)
    assert legend.y == 390 + 40
    assert sum(s.width for s in legend.swatches) == pytest.approx(300)
    assert [s.fill for s in legend.swatches][:10] == list(CATEGORY_PALETTE)
    assert legend.axis.id == "legend-axis"
    assert legend.axis.ticks


def test_x_axis_ticks_are_years(sample_dataset):
    scene = build_scene(sample_dataset)
    assert scene.x_axis.id == "x-axis"
    labels = [t.label for t in scene.x_axis.ticks]
    assert labels[0] == "1900"
    assert set(labels) == {"1900", "1901"}
    assert all(0 <= t.position <= 715 for t in scene.x_axis.ticks)


def test_empty_dataset_gives_blank_scene():
    scene = build_scene(Dataset(base_temperature=8.66, monthly_variance=()))
    assert scene.cells == ()
    assert scene.x_domain is None
    assert scene.y_domain == ()
    assert scene.legend.swatches == ()
    assert scene.x_axis.ticks == ()
    assert scene.legend.axis.ticks == ()


def test_build_scene_is_deterministic_and_layout_aware(sample_dataset):
    assert build_scene(sample_dataset) == build_scene(sample_dataset)
    wide = build_scene(sample_dataset, ChartLayout(width=1085))
    assert wide.cells[-1].x == 1000
