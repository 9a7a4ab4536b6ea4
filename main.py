from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from eq_trainer import (
    AppConfig,
    Band,
    FilterSet,
    SoundDeviceOutput,
    ToneEngine,
    find_recipe,
    load_config,
    load_recipes,
    plot_curve,
    render_curve,
    write_svg,
)
from eq_trainer.config import determine_config_path, determine_recipes_path

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="EQ trainer: guitar EQ curves and ear-training tones")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the JSON app config. When omitted, ./eq_trainer.json is loaded if it exists.",
    )
    parser.add_argument(
        "--recipes",
        type=Path,
        default=None,
        help="Path to a JSON recipe catalog; defaults to recipes.json in the working directory or the built-in set.",
    )
    parser.add_argument("--recipe", type=str, default=None, help="Name (or unique part of it) of the recipe to render")
    parser.add_argument("--list-recipes", action="store_true", help="Print the available recipes and exit")
    parser.add_argument("--hp", type=float, default=None, help="High-pass corner in Hz (overrides the recipe)")
    parser.add_argument("--lp", type=float, default=None, help="Low-pass corner in Hz (overrides the recipe)")
    parser.add_argument(
        "--band",
        action="append",
        default=[],
        metavar="HZ:DB",
        help="Bell band as center:gain, e.g. 720:4 or 4000:-3. Repeat for more bands.",
    )
    parser.add_argument("--points", type=int, default=None, help="Number of curve samples across the plot width")
    parser.add_argument("--save", type=Path, default=None, help="Optional path to save the curve as PNG")
    parser.add_argument("--svg", type=Path, default=None, help="Optional path to save the curve as SVG")
    parser.add_argument("--compare", action="store_true", help="Overlay the series biquad response on the PNG plot")
    parser.add_argument("--no-show", action="store_true", help="Skip showing the Matplotlib window (headless mode)")
    parser.add_argument("--play", type=float, default=None, metavar="HZ", help="Play a sine tone at this frequency")
    parser.add_argument("--seconds", type=float, default=2.0, help="Duration of --play in seconds")
    parser.add_argument("--gui", action="store_true", help="Launch the desktop application")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def run_cli(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        config = load_config(determine_config_path(args.config))
        recipes = load_recipes(determine_recipes_path(args.recipes, config))

        if args.list_recipes:
            for recipe in recipes:
                print(f"{recipe.name}  [{recipe.category}]")
            return 0
        if args.gui:
            from eq_trainer.gui.app import launch_gui

            launch_gui(config, recipes)
            return 0
        if args.play is not None:
            play_tone(config, args.play, args.seconds)
            return 0

        filter_set, title = build_filter_set(args, recipes)
        points = args.points or config.curve_points
        if args.svg is not None:
            write_svg(render_curve(filter_set, points), args.svg)
        if args.save is not None or not args.no_show:
            plot_curve(
                filter_set,
                args.save,
                show_plot=not args.no_show,
                sample_count=points,
                compare=args.compare,
                title=title,
            )
    except (ValueError, FileNotFoundError) as exc:
        logger.error("Error: %s", exc)
        return 1
    return 0


def build_filter_set(args: argparse.Namespace, recipes: list) -> tuple[FilterSet, str]:
    if args.recipe:
        recipe = find_recipe(recipes, args.recipe)
        base, title = recipe.filter_set, recipe.name
    else:
        base, title = FilterSet(), "Custom curve"

    bands = [parse_band(value) for value in args.band]
    return (
        FilterSet(
            high_pass_hz=base.high_pass_hz if args.hp is None else args.hp,
            low_pass_hz=base.low_pass_hz if args.lp is None else args.lp,
            bands=base.bands + tuple(bands),
        ),
        title,
    )


def parse_band(value: str) -> Band:
    center, sep, gain = value.partition(":")
    if not sep:
        raise ValueError(f"Band '{value}' must use the form HZ:DB")
    try:
        return Band(center_hz=float(center), gain_db=float(gain))
    except ValueError as exc:
        raise ValueError(f"Invalid band '{value}': {exc}") from exc


def play_tone(config: AppConfig, frequency_hz: float, seconds: float) -> None:
    output = SoundDeviceOutput(sample_rate=config.sample_rate, blocksize=config.blocksize, device=config.device)
    engine = ToneEngine(
        output,
        level=config.tone_level,
        attack_seconds=config.attack_seconds,
        release_seconds=config.release_seconds,
    )
    try:
        with engine.scoped():
            engine.play(frequency_hz)
            if not engine.is_playing:
                logger.warning("No audio output; nothing was played")
                return
            logger.info("Playing %.1f Hz for %.1f s", frequency_hz, seconds)
            time.sleep(max(seconds, 0.0))
        # Let the release ramp finish before the stream closes.
        time.sleep(config.release_seconds)
    finally:
        output.teardown()


if __name__ == "__main__":
    sys.exit(run_cli())
