"""Visual style primitives shared by treemap rendering modules."""

from __future__ import annotations

import importlib
import logging

from repotreemap.core.fallbacks import log_fallback

# Render at 2x for retina/high-DPI crispness
SCALE = 2

logger = logging.getLogger(__name__)

RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]

# -- Palette used by all drawing functions --
BG = (30, 30, 30)
DIRECTORY = (74, 74, 74)  # neutral gray, never a language color
NEUTRAL = (139, 139, 139)  # unknown language / missing data
TEXT_DARK = (30, 30, 30)
TEXT_LIGHT = (255, 255, 255)
HOVER_OVERLAY: RGBA = (255, 255, 255, 51)  # white at 20%
HOVER_BORDER = (255, 255, 255)
SELECTION_BORDER = (0, 122, 204)

# Heat-scale stops, green (good) to red (bad)
HEAT_GREEN = (76, 175, 80)
HEAT_LIGHT_GREEN = (139, 195, 74)
HEAT_YELLOW = (255, 235, 59)
HEAT_ORANGE = (255, 152, 0)
HEAT_RED = (244, 67, 54)

# Label geometry, in layout pixels
FONT_SIZE = 11
LABEL_INSET = 4
MIN_LABEL_WIDTH = 60
MIN_LABEL_HEIGHT = 20
BORDER_WIDTH = 2


def load_font(size: int = FONT_SIZE, *, scale: int = SCALE):
    """Load a font with cross-platform fallback."""
    image_font_mod = importlib.import_module("PIL.ImageFont")

    size = size * scale
    candidates = [
        "/System/Library/Fonts/SFCompact.ttf",
        "/System/Library/Fonts/HelveticaNeue.ttc",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "C:/Windows/Fonts/segoeui.ttf",
    ]
    for path in candidates:
        try:
            return image_font_mod.truetype(path, size)
        except OSError as exc:
            log_fallback(logger, f"load treemap font candidate {path}", exc)
            continue
    try:
        return image_font_mod.load_default(size=size)
    except TypeError as exc:
        # Pillow < 10.1 has no sized default font.
        log_fallback(logger, "load sized default font", exc)
        return image_font_mod.load_default()


__all__ = [
    "BG",
    "BORDER_WIDTH",
    "DIRECTORY",
    "FONT_SIZE",
    "HEAT_GREEN",
    "HEAT_LIGHT_GREEN",
    "HEAT_ORANGE",
    "HEAT_RED",
    "HEAT_YELLOW",
    "HOVER_BORDER",
    "HOVER_OVERLAY",
    "LABEL_INSET",
    "MIN_LABEL_HEIGHT",
    "MIN_LABEL_WIDTH",
    "NEUTRAL",
    "RGB",
    "RGBA",
    "SCALE",
    "SELECTION_BORDER",
    "TEXT_DARK",
    "TEXT_LIGHT",
    "load_font",
]
