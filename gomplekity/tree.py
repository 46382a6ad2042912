"""SVG drawing of a tree whose leaves are coloured by complexity ratios."""

from __future__ import annotations

import random
from dataclasses import dataclass

from .foliage import foliage
from .ground import ground_and_grass

__all__ = ["ColorRatio", "generate", "tree_svg"]

WIDTH = 500
HEIGHT = 400

_TRUNK_DEFS = (
    "<defs>"
    '<linearGradient id="trunkGrad" x1="0%" y1="0%" x2="100%" y2="0%">'
    '<stop offset="0%" style="stop-color:#6d4c41;stop-opacity:1" />'
    '<stop offset="50%" style="stop-color:#8d6e63;stop-opacity:1" />'
    '<stop offset="100%" style="stop-color:#a1887f;stop-opacity:1" />'
    "</linearGradient>"
    "</defs>"
)


@dataclass(frozen=True)
class ColorRatio:
    """Shares of green, yellow, red and brown leaves."""

    green: float
    yellow: float
    red: float
    brown: float


def generate(green, yellow, red, brown, rng=None) -> str:
    """Draw the tree; ratios are normalised, all-zero ratios fall back to defaults."""
    total = green + yellow + red + brown
    if total <= 0:
        total = 1.0
        green, yellow, red, brown = 0.4, 0.3, 0.2, 0.1
    ratio = ColorRatio(green / total, yellow / total, red / total, brown / total)
    return tree_svg(WIDTH, HEIGHT, ratio, rng)


def tree_svg(width, height, color_ratio, rng=None) -> str:
    """A complete SVG document: sky, ground, trunk and crown."""
    if rng is None:
        rng = random.Random()
    parts = [
        f'<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg">',
        _TRUNK_DEFS,
        f'<rect width="{width}" height="{height}" fill="#e1f5fe"/>',
        ground_and_grass(width, height, rng),
    ]

    center_x = width / 2
    bottom_y = float(height - 30)
    top_y = float(height - 150)
    trunk_width = 40.0
    parts.append(
        f'<path d="M {center_x - trunk_width / 2:.1f} {bottom_y:.1f} '
        f"Q {center_x:.1f} {top_y + 50:.1f} {center_x - trunk_width / 3:.1f} {top_y:.1f} "
        f"L {center_x + trunk_width / 3:.1f} {top_y:.1f} "
        f"Q {center_x:.1f} {top_y + 50:.1f} {center_x + trunk_width / 2:.1f} {bottom_y:.1f} Z\" "
        'fill="url(#trunkGrad)"/>'
    )

    parts.append(foliage(center_x, top_y - 30, 120.0, color_ratio, rng))
    parts.append("</svg>")
    return "".join(parts)