"""Ground, grass and fallen leaves at the foot of the tree, as SVG fragments."""

from __future__ import annotations

import random

from .foliage import fallen_leaf

__all__ = ["ground_and_grass", "wind_blown_grass"]

GROUND_HEIGHT = 30
FALLEN_LEAVES = 15

_PATCH_COLORS = ("#43a047", "#388e3c", "#2e7d32", "#66bb6a")
_FALLEN_LEAF_COLORS = ("#4caf50", "#66bb6a", "#43a047", "#ffeb3b", "#ffc107", "#8d6e63")
_GRASS_COLORS = ("#2e7d32", "#388e3c", "#43a047", "#66bb6a")

_GROUND_DEFS = (
    "<defs>"
    '<radialGradient id="groundDepth" cx="50%" cy="30%" r="70%">'
    '<stop offset="0%" style="stop-color:#66bb6a;stop-opacity:1" />'
    '<stop offset="70%" style="stop-color:#4caf50;stop-opacity:1" />'
    '<stop offset="100%" style="stop-color:#2e7d32;stop-opacity:1" />'
    "</radialGradient>"
    "</defs>"
)


def _pick(colors, rng):
    return colors[rng.randrange(len(colors))]


def _blade(x, y, cx, cy, ex, ey, color, width, opacity) -> str:
    return (
        f'<path d="M {x:.1f} {y:.1f} Q {cx:.1f} {cy:.1f} {ex:.1f} {ey:.1f}" '
        f'stroke="{color}" stroke-width="{width}" fill="none" opacity="{opacity}"/>'
    )


def ground_and_grass(width, height, rng=None) -> str:
    """The ground strip with textured grass, fallen leaves and blades on top."""
    if rng is None:
        rng = random.Random()
    top = height - GROUND_HEIGHT
    parts = [
        _GROUND_DEFS,
        f'<rect x="0" y="{top}" width="{width}" height="{GROUND_HEIGHT}" fill="url(#groundDepth)"/>',
    ]

    ground_area = float(width * GROUND_HEIGHT)
    grass_patches = int(ground_area * 0.9 / 40)

    for _ in range(grass_patches):
        patch_x = rng.random() * width
        patch_y = top + rng.random() * GROUND_HEIGHT
        for _ in range(5 + rng.randrange(8)):
            x = patch_x + (rng.random() - 0.5) * 8
            y = patch_y + (rng.random() - 0.5) * 6
            blade_height = 1.5 + rng.random() * 5
            bend = (rng.random() - 0.5) * 3
            color = _pick(_PATCH_COLORS, rng)
            parts.append(
                _blade(
                    x, y,
                    x + bend * 0.5, y - blade_height * 0.6,
                    x + bend, y - blade_height,
                    color, "1.2", "0.5",
                )
            )

    for _ in range(int(grass_patches * 0.5)):
        x = rng.random() * width
        y = top + rng.random() * GROUND_HEIGHT
        blade_height = 1 + rng.random() * 2
        bend = (rng.random() - 0.5) * 1
        color = _pick(_PATCH_COLORS, rng)
        parts.append(
            _blade(
                x, y,
                x + bend * 0.5, y - blade_height * 0.7,
                x + bend, y - blade_height,
                color, "0.8", "0.3",
            )
        )

    for _ in range(FALLEN_LEAVES):
        leaf_x = rng.random() * width
        leaf_y = (height - 25) + rng.random() * 25
        leaf_size = 8 + rng.random() * 12
        leaf_rotation = rng.random() * 360
        leaf_color = _pick(_FALLEN_LEAF_COLORS, rng)
        parts.append(fallen_leaf(leaf_x, leaf_y, leaf_size, leaf_color, leaf_rotation, rng))

    parts.append(wind_blown_grass(width, height, rng))
    return "".join(parts)


def wind_blown_grass(width, height, rng=None) -> str:
    """Grass blades bent rightwards along the top edge of the ground."""
    if rng is None:
        rng = random.Random()
    base = float(height - GROUND_HEIGHT)
    parts: list[str] = []

    for _ in range(200):
        x = rng.random() * width
        blade_height = 5 + rng.random() * 15
        bend = blade_height * (0.3 + rng.random() * 0.4)
        color = _pick(_GRASS_COLORS, rng)
        stroke = f"{0.5 + rng.random() * 0.8:.1f}"
        opacity = f"{0.7 + rng.random() * 0.3:.2f}"
        parts.append(
            _blade(
                x, base,
                x + bend * 0.6, base - blade_height * 0.7,
                x + bend, base - blade_height,
                color, stroke, opacity,
            )
        )

    for _ in range(50):
        cluster_x = rng.random() * width
        for _ in range(3 + rng.randrange(5)):
            x = cluster_x + (rng.random() - 0.5) * 8
            blade_height = 3 + rng.random() * 10
            bend = blade_height * (0.2 + rng.random() * 0.3)
            color = _pick(_GRASS_COLORS, rng)
            stroke = f"{0.6 + rng.random() * 0.6:.1f}"
            opacity = f"{0.6 + rng.random() * 0.4:.2f}"
            parts.append(
                _blade(
                    x, base,
                    x + bend * 0.5, base - blade_height * 0.6,
                    x + bend, base - blade_height,
                    color, stroke, opacity,
                )
            )
    return "".join(parts)