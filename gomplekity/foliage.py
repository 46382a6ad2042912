"""Leaves of the tree crown and fallen leaves on the ground, as SVG fragments."""

from __future__ import annotations

import math
import random

__all__ = [
    "LEAF_COLORS",
    "TOTAL_LEAVES",
    "foliage",
    "leaf_in_area",
    "leaf_shape",
    "fallen_leaf",
]

TOTAL_LEAVES = 700
LAYERS = 5

LEAF_COLORS: dict[str, tuple[str, ...]] = {
    "green": ("#4caf50", "#66bb6a", "#81c784"),
    "yellow": ("#ffeb3b", "#ffc107", "#ff9800"),
    "red": ("#f44336", "#e53935", "#d32f2f"),
    "brown": ("#8d6e63", "#6d4c41", "#5d4037"),
}


def _leaf_path(width: float, height: float) -> str:
    """Path data of a pointed leaf outline centred on the origin."""
    return (
        f"M 0 {-height / 2:.1f} "
        f"Q {width / 3:.1f} {-height / 3:.1f} {width / 2:.1f} 0 "
        f"Q {width / 3:.1f} {height / 3:.1f} 0 {height / 2:.1f} "
        f"Q {-width / 3:.1f} {height / 3:.1f} {-width / 2:.1f} 0 "
        f"Q {-width / 3:.1f} {-height / 3:.1f} 0 {-height / 2:.1f} Z"
    )


def foliage(center_x, center_y, radius, color_ratio, rng=None) -> str:
    """Fill a circular crown with leaves coloured in the given proportions."""
    if rng is None:
        rng = random.Random()
    counts = [
        (LEAF_COLORS["green"], int(TOTAL_LEAVES * color_ratio.green)),
        (LEAF_COLORS["yellow"], int(TOTAL_LEAVES * color_ratio.yellow)),
        (LEAF_COLORS["red"], int(TOTAL_LEAVES * color_ratio.red)),
        (LEAF_COLORS["brown"], int(TOTAL_LEAVES * color_ratio.brown)),
    ]
    parts: list[str] = []
    for layer in range(LAYERS):
        layer_radius = radius * (0.3 + layer * 0.14)
        for colors, count in counts:
            per_layer = max(count, 0) // LAYERS
            parts.extend(
                leaf_in_area(center_x, center_y, colors, layer_radius, rng)
                for _ in range(per_layer)
            )
    return "".join(parts)


def leaf_in_area(center_x, center_y, color_set, max_radius, rng=None) -> str:
    """One leaf placed at random within 90% of a circle around the centre."""
    if rng is None:
        rng = random.Random()
    angle = rng.random() * 2 * math.pi
    distance = math.sqrt(rng.random()) * max_radius * 0.9
    x = center_x + distance * math.cos(angle)
    y = center_y + distance * math.sin(angle)
    size = 6 + rng.random() * 18
    color = color_set[rng.randrange(len(color_set))]
    opacity = 0.6 + rng.random() * 0.3
    rotation = rng.random() * 360
    return leaf_shape(x, y, size, color, opacity, rotation)


def leaf_shape(x, y, size, color, opacity, rotation) -> str:
    """A leaf body with stem and central vein, translated and rotated."""
    width = size
    height = size * 1.4
    stem_length = size * 0.3
    return (
        f'<g transform="translate({x:.1f},{y:.1f}) rotate({rotation:.1f})">'
        f'<path d="{_leaf_path(width, height)}" fill="{color}" opacity="{opacity:.2f}"/>'
        f'<line x1="0" y1="{height / 2:.1f}" x2="0" y2="{height / 2 + stem_length:.1f}" '
        f'stroke="#8d6e63" stroke-width="1" opacity="{opacity * 0.8:.2f}"/>'
        f'<line x1="0" y1="{-height / 2:.1f}" x2="0" y2="{height / 2:.1f}" '
        f'stroke="#2e7d32" stroke-width="0.5" opacity="{opacity * 0.6:.2f}"/>'
        "</g>"
    )


def fallen_leaf(x, y, size, color, rotation, rng=None) -> str:
    """A leaf lying on the ground with a shadow offset by one pixel."""
    if rng is None:
        rng = random.Random()
    path = _leaf_path(size, size * 1.2)
    height = size * 1.2
    return (
        f'<g transform="translate({x + 1:.1f},{y + 1:.1f}) rotate({rotation:.1f})">'
        f'<path d="{path}" fill="#1b5e20" opacity="0.3"/>'
        "</g>"
        f'<g transform="translate({x:.1f},{y:.1f}) rotate({rotation:.1f})">'
        f'<path d="{path}" fill="{color}" opacity="{0.6 + rng.random() * 0.3:.2f}"/>'
        f'<line x1="0" y1="{-height / 2:.1f}" x2="0" y2="{height / 2:.1f}" '
        f'stroke="#2e7d32" stroke-width="0.3" opacity="{0.4:.2f}"/>'
        "</g>"
    )