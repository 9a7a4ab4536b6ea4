from __future__ import annotations

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.axes import Axes
from matplotlib.ticker import FixedLocator, FuncFormatter

from .reference import series_response_db
from .response import (
    DEFAULT_SAMPLE_COUNT,
    Curve,
    FilterSet,
    PlotGeometry,
    format_frequency,
    grid_positions,
    render_curve,
)

logger = logging.getLogger(__name__)

CURVE_COLOR = "#f59b0a"
REFERENCE_COLOR = "#1f77b4"
GRID_COLOR = "#2a2a2a"
BACKGROUND_COLOR = "#111111"


def draw_curve(
    ax: Axes,
    curve: Curve,
    geometry: PlotGeometry | None = None,
    reference_db: np.ndarray | None = None,
    title: str | None = None,
) -> None:
    """Draw a rendered curve in its own pixel space (y grows downwards)."""
    geometry = geometry or PlotGeometry()
    ax.clear()
    ax.set_facecolor(BACKGROUND_COLOR)
    ax.set_xlim(0.0, geometry.width)
    ax.set_ylim(geometry.height, 0.0)

    grid = grid_positions(geometry)
    for _, x in grid:
        ax.vlines(x, geometry.padding, geometry.baseline, colors=GRID_COLOR, linestyles=":", linewidth=0.8)
    ax.hlines(geometry.center, geometry.padding, geometry.width - geometry.padding, colors="#333333", linewidth=0.8)
    ax.xaxis.set_major_locator(FixedLocator([x for _, x in grid]))
    labels = {round(x, 6): format_frequency(freq) for freq, x in grid}
    ax.xaxis.set_major_formatter(FuncFormatter(lambda value, _: labels.get(round(value, 6), "")))
    ax.set_yticks([geometry.y_for_db(db) for db in (12.0, 6.0, 0.0, -6.0, -12.0)])
    ax.set_yticklabels(["+12", "+6", "0", "-6", "-12"])
    ax.tick_params(colors="#777777", labelsize=8)

    area_x, area_y = zip(*curve.area)
    ax.fill(area_x, area_y, color=CURVE_COLOR, alpha=0.2, linewidth=0)
    line_x, line_y = zip(*curve.points)
    ax.plot(line_x, line_y, color=CURVE_COLOR, linewidth=2.0, solid_capstyle="round", label="Teaching curve")

    if reference_db is not None:
        ref_y = [geometry.y_for_db(float(db)) for db in reference_db]
        ax.plot(line_x, ref_y, color=REFERENCE_COLOR, linewidth=1.2, linestyle="--", label="Series biquads")
        ax.legend(loc="lower center", fontsize=8)

    if title:
        ax.set_title(title)


def reference_for_curve(filter_set: FilterSet, curve: Curve, geometry: PlotGeometry | None = None) -> np.ndarray:
    axis = (geometry or PlotGeometry()).axis
    freqs = np.array([axis.frequency(x) for x, _ in curve.points])
    return series_response_db(filter_set, freqs)


def plot_curve(
    filter_set: FilterSet,
    save_path: Path | None,
    show_plot: bool = True,
    sample_count: int | None = None,
    compare: bool = False,
    title: str | None = None,
) -> Curve:
    geometry = PlotGeometry()
    curve = render_curve(filter_set, sample_count or DEFAULT_SAMPLE_COUNT, geometry)
    reference = reference_for_curve(filter_set, curve, geometry) if compare else None

    fig, ax = plt.subplots(figsize=(geometry.width / 60.0, geometry.height / 60.0 + 0.6))
    draw_curve(ax, curve, geometry, reference_db=reference, title=title)
    ax.set_xlabel("Frequency [Hz]")
    ax.set_ylabel("Gain [dB]")
    fig.tight_layout()

    if save_path is not None:
        save_path.parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150)
        logger.info("Saved plot to %s", save_path)

    if show_plot:
        plt.show()
    else:
        plt.close(fig)
    return curve
