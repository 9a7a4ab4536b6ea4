"""Core helpers for the EQ trainer: response curves and tone playback."""

from .audio import SoundDeviceOutput, ToneEngine, ToneState
from .config import AppConfig, load_config
from .export import curve_to_svg, write_svg
from .plotting import draw_curve, plot_curve
from .recipes import TRAINER_OPTIONS, Recipe, find_recipe, load_recipes
from .response import (
    Band,
    Curve,
    FilterSet,
    FrequencyAxis,
    PlotGeometry,
    magnitude_db,
    magnitude_db_array,
    render_curve,
)

__all__ = [
    "AppConfig",
    "Band",
    "Curve",
    "FilterSet",
    "FrequencyAxis",
    "PlotGeometry",
    "Recipe",
    "SoundDeviceOutput",
    "TRAINER_OPTIONS",
    "ToneEngine",
    "ToneState",
    "curve_to_svg",
    "draw_curve",
    "find_recipe",
    "load_config",
    "load_recipes",
    "magnitude_db",
    "magnitude_db_array",
    "plot_curve",
    "render_curve",
    "write_svg",
]
