"""Vignette shading: a radial gradient per tile, leaning toward the parent tile."""

from __future__ import annotations

import math
from dataclasses import dataclass

from repotreemap.app.output.treemap_parts.colors import adjust_brightness, interpolate
from repotreemap.app.output.treemap_parts.theme import RGB

CENTER_BRIGHTNESS = 1.1
EDGE_BRIGHTNESS = 0.5
RADIUS_FACTOR = 1.4
# Largest center shift toward the parent, as a fraction of the tile's own size.
MAX_OFFSET_FRACTION = 0.25

Bounds = tuple[float, float, float, float]


@dataclass(frozen=True)
class RadialGradient:
    """Two-stop radial gradient from ``inner`` at the center to ``outer`` at ``radius``."""

    cx: float
    cy: float
    radius: float
    inner: RGB
    outer: RGB

    def color_at(self, x: float, y: float) -> RGB:
        if self.radius <= 0:
            return self.outer
        return interpolate(self.inner, self.outer, math.hypot(x - self.cx, y - self.cy) / self.radius)


def gradient_center(rect: Bounds, parent_rect: Bounds | None = None) -> tuple[float, float]:
    """Tile center, shifted toward the parent's center when one is given.

    The shift follows the unit vector to the parent center and is at most 25%
    of the tile's width on x and 25% of its height on y, so it never leaves
    the tile.
    """
    x0, y0, x1, y1 = rect
    cx = (x0 + x1) / 2
    cy = (y0 + y1) / 2
    if parent_rect is None:
        return cx, cy

    px0, py0, px1, py1 = parent_rect
    dx = (px0 + px1) / 2 - cx
    dy = (py0 + py1) / 2 - cy
    dist = math.hypot(dx, dy)
    if dist > 0:
        cx += dx / dist * (x1 - x0) * MAX_OFFSET_FRACTION
        cy += dy / dist * (y1 - y0) * MAX_OFFSET_FRACTION
    return cx, cy


def gradient_for(rect: Bounds, base_color: RGB, parent_rect: Bounds | None = None) -> RadialGradient:
    """Vignette for one tile: brighter center, darker edge, radius covering the tile."""
    x0, y0, x1, y1 = rect
    cx, cy = gradient_center(rect, parent_rect)
    radius = max((x1 - x0) / 2, (y1 - y0) / 2) * RADIUS_FACTOR
    return RadialGradient(
        cx=cx,
        cy=cy,
        radius=radius,
        inner=adjust_brightness(base_color, CENTER_BRIGHTNESS),
        outer=adjust_brightness(base_color, EDGE_BRIGHTNESS),
    )


__all__ = [
    "CENTER_BRIGHTNESS",
    "EDGE_BRIGHTNESS",
    "MAX_OFFSET_FRACTION",
    "RADIUS_FACTOR",
    "Bounds",
    "RadialGradient",
    "gradient_center",
    "gradient_for",
]
