"""Drawing surfaces: the immediate-mode contract plus Pillow and display-list backends."""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

from repotreemap.app.output.treemap_parts.theme import (
    BG,
    FONT_SIZE,
    RGB,
    RGBA,
    SCALE,
    load_font,
)
from repotreemap.app.output.vignette import Bounds, RadialGradient

logger = logging.getLogger(__name__)

# Pillow's built-in radial gradient is 256x256 and reaches white at ~128px.
_GRADIENT_CENTER = 128.0


class Surface(Protocol):
    """2D immediate-mode drawing target, in layout (CSS) pixels."""

    def clear(self, color: RGB) -> None: ...

    def fill_rect(self, rect: Bounds, color: RGB | RGBA) -> None: ...

    def fill_gradient_rect(self, rect: Bounds, gradient: RadialGradient) -> None: ...

    def stroke_rect(self, rect: Bounds, color: RGB | RGBA, width: float) -> None:
        """Draw a border of ``width`` pixels inside ``rect``."""
        ...

    def measure_text(self, text: str) -> float: ...

    def fill_text(self, text: str, x: float, y: float, color: RGB) -> None:
        """Draw ``text`` left-aligned at ``x`` and vertically centered on ``y``."""
        ...


class PillowSurface:
    """Surface backed by a Pillow RGB image, rendered at ``scale`` device pixels per pixel."""

    def __init__(
        self,
        width: float,
        height: float,
        *,
        scale: int = SCALE,
        background: RGB = BG,
        font: Any | None = None,
    ) -> None:
        self._image_mod = importlib.import_module("PIL.Image")
        image_draw_mod = importlib.import_module("PIL.ImageDraw")

        self.width = width
        self.height = height
        self.scale = max(1, int(scale))
        size = (max(1, self._px(width)), max(1, self._px(height)))
        self.image = self._image_mod.new("RGB", size, background)
        # RGBA draw mode blends translucent fills onto the RGB image.
        self.draw = image_draw_mod.Draw(self.image, "RGBA")
        self.font = font if font is not None else load_font(FONT_SIZE, scale=self.scale)

    def _px(self, v: float) -> int:
        return int(round(v * self.scale))

    def _box(self, rect: Bounds) -> tuple[int, int, int, int]:
        x0, y0, x1, y1 = rect
        return self._px(x0), self._px(y0), self._px(x1), self._px(y1)

    def clear(self, color: RGB) -> None:
        self.draw.rectangle((0, 0, self.image.width, self.image.height), fill=color)

    def fill_rect(self, rect: Bounds, color: RGB | RGBA) -> None:
        bx0, by0, bx1, by1 = self._box(rect)
        if bx1 <= bx0 or by1 <= by0:
            return
        # Pillow boxes are inclusive of the far edge.
        self.draw.rectangle((bx0, by0, bx1 - 1, by1 - 1), fill=color)

    def fill_gradient_rect(self, rect: Bounds, gradient: RadialGradient) -> None:
        bx0, by0, bx1, by1 = self._box(rect)
        w, h = bx1 - bx0, by1 - by0
        if w <= 0 or h <= 0:
            return
        radius = gradient.radius * self.scale
        if radius <= 0:
            self.fill_rect(rect, gradient.outer)
            return

        # Map each tile pixel into Pillow's 256x256 radial gradient (0 at the
        # center, 255 at the rim); everything past the rim takes the edge color.
        k = _GRADIENT_CENTER / radius
        local_cx = gradient.cx * self.scale - bx0
        local_cy = gradient.cy * self.scale - by0
        mask = self._image_mod.radial_gradient("L").transform(
            (w, h),
            self._image_mod.Transform.AFFINE,
            (k, 0, _GRADIENT_CENTER - local_cx * k, 0, k, _GRADIENT_CENTER - local_cy * k),
            resample=self._image_mod.Resampling.BILINEAR,
            fillcolor=255,
        )
        inner = self._image_mod.new("RGB", (w, h), gradient.inner)
        outer = self._image_mod.new("RGB", (w, h), gradient.outer)
        self.image.paste(self._image_mod.composite(outer, inner, mask), (bx0, by0))

    def stroke_rect(self, rect: Bounds, color: RGB | RGBA, width: float) -> None:
        bx0, by0, bx1, by1 = self._box(rect)
        if bx1 <= bx0 or by1 <= by0:
            return
        self.draw.rectangle(
            (bx0, by0, bx1 - 1, by1 - 1),
            outline=color,
            width=max(1, self._px(width)),
        )

    def measure_text(self, text: str) -> float:
        return self.draw.textlength(text, font=self.font) / self.scale

    def fill_text(self, text: str, x: float, y: float, color: RGB) -> None:
        self.draw.text(
            (self._px(x), self._px(y)), text, fill=color, font=self.font, anchor="lm"
        )

    def save(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        self.image.save(out, format="PNG")
        logger.debug("Wrote treemap image %s (%dx%d)", out, *self.image.size)
        return out


@dataclass
class DisplayListSurface:
    """Surface that records draw calls as plain dicts.

    Useful for shipping a frame to a browser canvas, and for inspecting what a
    render pass drew. Text is measured with a fixed per-character advance.
    """

    char_width: float = 6.5
    ops: list[dict[str, Any]] = field(default_factory=list)

    def clear(self, color: RGB) -> None:
        self.ops.clear()
        self.ops.append({"op": "clear", "color": tuple(color)})

    def fill_rect(self, rect: Bounds, color: RGB | RGBA) -> None:
        self.ops.append({"op": "fill_rect", "rect": tuple(rect), "color": tuple(color)})

    def fill_gradient_rect(self, rect: Bounds, gradient: RadialGradient) -> None:
        self.ops.append(
            {
                "op": "fill_gradient_rect",
                "rect": tuple(rect),
                "center": (gradient.cx, gradient.cy),
                "radius": gradient.radius,
                "inner": tuple(gradient.inner),
                "outer": tuple(gradient.outer),
            }
        )

    def stroke_rect(self, rect: Bounds, color: RGB | RGBA, width: float) -> None:
        self.ops.append(
            {"op": "stroke_rect", "rect": tuple(rect), "color": tuple(color), "width": width}
        )

    def measure_text(self, text: str) -> float:
        return len(text) * self.char_width

    def fill_text(self, text: str, x: float, y: float, color: RGB) -> None:
        self.ops.append({"op": "fill_text", "text": text, "x": x, "y": y, "color": tuple(color)})

    def ops_named(self, name: str) -> list[dict[str, Any]]:
        return [op for op in self.ops if op["op"] == name]


__all__ = ["DisplayListSurface", "PillowSurface", "Surface"]
