"""Legend entries for the active color mode."""

from __future__ import annotations

from dataclasses import dataclass

from repotreemap.app.output.treemap_parts.colors import language_color
from repotreemap.app.output.treemap_parts.theme import (
    HEAT_GREEN,
    HEAT_RED,
    HEAT_YELLOW,
    RGB,
)
from repotreemap.core.config import ColorMode
from repotreemap.engine.tree import TreeNode, language_counts

MAX_LEGEND_ITEMS = 8

# (title, low label, high label, low color, high color)
_GRADIENT_LEGENDS: dict[str, tuple[str, str, str, RGB, RGB]] = {
    "age": ("Age", "Recent", "Old", HEAT_GREEN, HEAT_RED),
    "complexity": ("Complexity", "Simple", "Complex", HEAT_GREEN, HEAT_RED),
    "density": ("Density", "Sparse", "Dense", HEAT_RED, HEAT_GREEN),
}


@dataclass(frozen=True)
class LegendEntry:
    label: str
    color: RGB
    value: float | None = None


def legend_entries(color_mode: ColorMode | str, root: TreeNode) -> list[LegendEntry]:
    """Top languages by lines for ``language`` mode, gradient endpoints otherwise."""
    gradient = _GRADIENT_LEGENDS.get(color_mode)
    if gradient is not None:
        title, low, high, low_color, high_color = gradient
        mid = HEAT_YELLOW
        return [
            LegendEntry(label=f"{title}: {low}", color=low_color),
            LegendEntry(label=f"{title}: mid", color=mid),
            LegendEntry(label=f"{title}: {high}", color=high_color),
        ]
    counts = language_counts(root)
    return [
        LegendEntry(label=language, color=language_color(language), value=lines)
        for language, lines in list(counts.items())[:MAX_LEGEND_ITEMS]
    ]


__all__ = ["MAX_LEGEND_ITEMS", "LegendEntry", "legend_entries"]
