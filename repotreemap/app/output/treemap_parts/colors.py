"""Tile base colors for each color mode, plus brightness and contrast helpers."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from repotreemap.app.output.treemap_parts.theme import (
    DIRECTORY,
    HEAT_GREEN,
    HEAT_LIGHT_GREEN,
    HEAT_ORANGE,
    HEAT_RED,
    HEAT_YELLOW,
    NEUTRAL,
    RGB,
    TEXT_DARK,
    TEXT_LIGHT,
)
from repotreemap.core.config import ColorMode
from repotreemap.core.fallbacks import log_fallback
from repotreemap.engine.tree import TreeNode

logger = logging.getLogger(__name__)

# GitHub Linguist-style language colors
LANGUAGE_COLORS: dict[str, RGB] = {
    "TypeScript": (49, 120, 198),
    "JavaScript": (241, 224, 90),
    "Python": (53, 114, 165),
    "Ruby": (112, 21, 22),
    "Go": (0, 173, 216),
    "Rust": (222, 165, 132),
    "Java": (176, 114, 25),
    "Kotlin": (169, 123, 255),
    "Swift": (240, 81, 56),
    "C": (85, 85, 85),
    "C++": (243, 75, 125),
    "C#": (23, 134, 0),
    "PHP": (79, 93, 149),
    "Vue": (65, 184, 131),
    "Svelte": (255, 62, 0),
    "HTML": (227, 76, 38),
    "CSS": (86, 61, 124),
    "SCSS": (198, 83, 140),
    "Sass": (165, 59, 112),
    "Less": (29, 54, 93),
    "JSON": (41, 41, 41),
    "YAML": (203, 23, 30),
    "XML": (0, 96, 172),
    "Markdown": (8, 63, 161),
    "MDX": (27, 31, 36),
    "Shell": (137, 224, 81),
    "SQL": (227, 140, 0),
    "GraphQL": (225, 0, 152),
    "Dockerfile": (56, 77, 84),
    "Terraform": (92, 78, 229),
    "HCL": (132, 79, 186),
    "Lua": (0, 0, 128),
    "R": (25, 140, 231),
    "Scala": (194, 45, 64),
    "Clojure": (219, 88, 85),
    "Elixir": (110, 74, 126),
    "Erlang": (184, 57, 152),
    "Haskell": (94, 80, 134),
    "OCaml": (59, 225, 51),
    "F#": (184, 69, 252),
    "Perl": (2, 152, 195),
    "Dart": (0, 180, 171),
    "Zig": (236, 145, 92),
    "Nim": (255, 194, 0),
    "V": (79, 135, 196),
    "Solidity": (170, 103, 70),
    "TOML": (156, 66, 33),
    "Go Module": (0, 173, 216),
    "Makefile": (66, 120, 25),
    "CMake": (218, 52, 52),
}

# (max age in days, color); anything older is red
AGE_BUCKETS: tuple[tuple[int, RGB], ...] = (
    (30, HEAT_GREEN),
    (90, HEAT_LIGHT_GREEN),
    (180, HEAT_YELLOW),
    (365, HEAT_ORANGE),
)

COMPLEXITY_LOW = 15
COMPLEXITY_HIGH = 40
COMPLEXITY_CAP = 100


def language_color(language: str | None) -> RGB:
    return LANGUAGE_COLORS.get(language or "", NEUTRAL)


def interpolate(start: RGB, end: RGB, ratio: float) -> RGB:
    ratio = min(1.0, max(0.0, ratio))
    return tuple(  # type: ignore[return-value]
        int(round(a + (b - a) * ratio)) for a, b in zip(start, end, strict=True)
    )


def adjust_brightness(color: RGB, factor: float) -> RGB:
    """Scale each channel by ``factor`` (>1 brightens, <1 darkens), clamped to 0..255."""
    return tuple(min(255, max(0, int(round(c * factor)))) for c in color[:3])  # type: ignore[return-value]


def relative_luminance(color: RGB) -> float:
    r, g, b = color[:3]
    return (0.299 * r + 0.587 * g + 0.114 * b) / 255


def contrast_text_color(background: RGB) -> RGB:
    """Dark text on light tiles, light text on dark ones."""
    return TEXT_DARK if relative_luminance(background) > 0.5 else TEXT_LIGHT


def parse_timestamp(value: str | datetime) -> datetime | None:
    if isinstance(value, datetime):
        stamp = value
    else:
        try:
            stamp = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError as exc:
            log_fallback(logger, f"parse modification time {value!r}", exc)
            return None
    if stamp.tzinfo is None:
        stamp = stamp.replace(tzinfo=timezone.utc)
    return stamp


def age_color(last_modified: str | datetime | None, *, now: datetime | None = None) -> RGB:
    if not last_modified:
        return NEUTRAL
    stamp = parse_timestamp(last_modified)
    if stamp is None:
        return NEUTRAL
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    days = (now - stamp).total_seconds() / 86400
    for limit, color in AGE_BUCKETS:
        if days < limit:
            return color
    return HEAT_RED


def complexity_color(complexity: float | None) -> RGB:
    if not complexity or complexity < 0:
        return HEAT_GREEN
    if complexity < COMPLEXITY_LOW:
        return interpolate(HEAT_GREEN, HEAT_LIGHT_GREEN, complexity / COMPLEXITY_LOW)
    if complexity < COMPLEXITY_HIGH:
        return interpolate(
            HEAT_LIGHT_GREEN,
            HEAT_ORANGE,
            (complexity - COMPLEXITY_LOW) / (COMPLEXITY_HIGH - COMPLEXITY_LOW),
        )
    return interpolate(
        HEAT_ORANGE,
        HEAT_RED,
        (complexity - COMPLEXITY_HIGH) / (COMPLEXITY_CAP - COMPLEXITY_HIGH),
    )


def density_color(lines: float, comment_lines: float, blank_lines: float) -> RGB:
    """Share of code lines: dense files are green, sparse ones red."""
    total = lines + comment_lines + blank_lines
    if total <= 0:
        return NEUTRAL
    density = lines / total
    if density >= 0.8:
        return HEAT_GREEN
    if density >= 0.6:
        return interpolate(HEAT_LIGHT_GREEN, HEAT_GREEN, (density - 0.6) / 0.2)
    if density >= 0.4:
        return interpolate(HEAT_YELLOW, HEAT_LIGHT_GREEN, (density - 0.4) / 0.2)
    if density >= 0.2:
        return interpolate(HEAT_ORANGE, HEAT_YELLOW, (density - 0.2) / 0.2)
    return HEAT_RED


def node_color(node: TreeNode, mode: ColorMode | str, *, now: datetime | None = None) -> RGB:
    """Base tile color for ``node``; directories are always the neutral directory gray."""
    if node.is_directory:
        return DIRECTORY
    if mode == "age":
        return age_color(node.last_modified, now=now)
    if mode == "complexity":
        return complexity_color(node.complexity)
    if mode == "density":
        return density_color(
            node.lines or 0, node.comment_lines or 0, node.blank_lines or 0
        )
    if mode == "language":
        return language_color(node.language)
    return NEUTRAL


__all__ = [
    "AGE_BUCKETS",
    "LANGUAGE_COLORS",
    "adjust_brightness",
    "age_color",
    "complexity_color",
    "contrast_text_color",
    "density_color",
    "interpolate",
    "language_color",
    "node_color",
    "parse_timestamp",
    "relative_luminance",
]
