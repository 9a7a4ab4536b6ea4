from __future__ import annotations

import logging
from pathlib import Path

from .response import Curve, PlotGeometry, format_frequency, grid_positions

logger = logging.getLogger(__name__)

_STROKE = "#f59b0a"


def curve_to_svg(curve: Curve, geometry: PlotGeometry | None = None) -> str:
    """Standalone SVG document: grid, zero line, shaded area and stroke."""
    geometry = geometry or PlotGeometry()
    width = f"{geometry.width:g}"
    height = f"{geometry.height:g}"
    lines = [
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width} {height}">',
        "  <defs>",
        '    <linearGradient id="grad" x1="0%" y1="0%" x2="0%" y2="100%">',
        f'      <stop offset="0%" stop-color="{_STROKE}" stop-opacity="0.8"/>',
        f'      <stop offset="100%" stop-color="{_STROKE}" stop-opacity="0.0"/>',
        "    </linearGradient>",
        "  </defs>",
        f'  <rect width="{width}" height="{height}" fill="#111111"/>',
    ]
    for freq, x in grid_positions(geometry):
        lines.append(
            f'  <line x1="{x:.1f}" y1="{geometry.padding:g}" x2="{x:.1f}" y2="{geometry.baseline:g}" '
            'stroke="#2a2a2a" stroke-width="1" stroke-dasharray="2"/>'
        )
        lines.append(
            f'  <text x="{x:.1f}" y="{geometry.height - 6:g}" fill="#555555" font-size="9" '
            f'text-anchor="middle" font-family="monospace">{format_frequency(freq)}</text>'
        )
    lines.append(
        f'  <line x1="{geometry.padding:g}" y1="{geometry.center:g}" x2="{geometry.width - geometry.padding:g}" '
        f'y2="{geometry.center:g}" stroke="#333333" stroke-width="1"/>'
    )
    lines.append(f'  <path d="{curve.area_path()}" fill="url(#grad)" opacity="0.2"/>')
    lines.append(
        f'  <path d="{curve.line_path()}" stroke="{_STROKE}" stroke-width="2.5" fill="none" '
        'stroke-linecap="round" stroke-linejoin="round"/>'
    )
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def write_svg(curve: Curve, path: Path, geometry: PlotGeometry | None = None) -> Path:
    destination = Path(path)
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(curve_to_svg(curve, geometry), encoding="utf-8")
    logger.info("Saved SVG curve to %s", destination)
    return destination
