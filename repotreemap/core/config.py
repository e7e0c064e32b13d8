"""Treemap configuration: size/color modes, layout knobs, and validation."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Literal

SizeMode = Literal["loc", "bytes", "files", "complexity"]
ColorMode = Literal["language", "age", "complexity", "density"]

SIZE_MODES: frozenset[str] = frozenset({"loc", "bytes", "files", "complexity"})
COLOR_MODES: frozenset[str] = frozenset({"language", "age", "complexity", "density"})

DEFAULT_MAX_NESTING_DEPTH = 3
DEFAULT_LABEL_MIN_WIDTH = 80.0
DEFAULT_LABEL_HEIGHT = 18.0

# camelCase spellings used by the webview settings payload
_KEY_ALIASES = {
    "maxNestingDepth": "max_nesting_depth",
    "labelMinWidth": "label_min_width",
    "labelHeight": "label_height",
    "sizeMode": "size_mode",
    "colorMode": "color_mode",
}


class TreemapConfigError(ValueError):
    """Raised when treemap configuration values cannot be validated."""


def normalize_size_mode(value: object) -> SizeMode:
    text = str(value or "").strip().lower()
    if text not in SIZE_MODES:
        raise TreemapConfigError(
            f"Unknown size mode {value!r}. Expected one of: {', '.join(sorted(SIZE_MODES))}"
        )
    return text  # type: ignore[return-value]


def normalize_color_mode(value: object) -> ColorMode:
    text = str(value or "").strip().lower()
    if text not in COLOR_MODES:
        raise TreemapConfigError(
            f"Unknown color mode {value!r}. Expected one of: {', '.join(sorted(COLOR_MODES))}"
        )
    return text  # type: ignore[return-value]


def clamp_depth(value: object) -> int:
    """Coerce a nesting depth to an integer >= 1."""
    try:
        depth = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError) as exc:
        raise TreemapConfigError(f"max_nesting_depth must be an integer, got {value!r}") from exc
    return max(1, depth)


def _coerce_px(name: str, value: object) -> float:
    if isinstance(value, bool):
        raise TreemapConfigError(f"{name} must be a number, got {value!r}")
    try:
        px = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise TreemapConfigError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(px) or px < 0:
        raise TreemapConfigError(f"{name} must be a finite value >= 0, got {value!r}")
    return px


@dataclass(frozen=True)
class TreemapConfig:
    """Layout and presentation settings for one treemap build."""

    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    label_min_width: float = DEFAULT_LABEL_MIN_WIDTH
    label_height: float = DEFAULT_LABEL_HEIGHT
    size_mode: SizeMode = "loc"
    color_mode: ColorMode = "language"

    def __post_init__(self) -> None:
        # Depth below 1 is clamped rather than rejected.
        object.__setattr__(self, "max_nesting_depth", clamp_depth(self.max_nesting_depth))
        object.__setattr__(
            self, "label_min_width", _coerce_px("label_min_width", self.label_min_width)
        )
        object.__setattr__(self, "label_height", _coerce_px("label_height", self.label_height))
        object.__setattr__(self, "size_mode", normalize_size_mode(self.size_mode))
        object.__setattr__(self, "color_mode", normalize_color_mode(self.color_mode))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any] | None) -> TreemapConfig:
        """Build a config from snake_case or camelCase keys; unknown keys are ignored."""
        data: dict[str, Any] = {}
        for key, value in (payload or {}).items():
            name = _KEY_ALIASES.get(key, key)
            if name in _FIELD_NAMES and value is not None:
                data[name] = value
        return cls(**data)

    def with_overrides(self, **overrides: Any) -> TreemapConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_nesting_depth": self.max_nesting_depth,
            "label_min_width": self.label_min_width,
            "label_height": self.label_height,
            "size_mode": self.size_mode,
            "color_mode": self.color_mode,
        }


_FIELD_NAMES = frozenset(
    {"max_nesting_depth", "label_min_width", "label_height", "size_mode", "color_mode"}
)

DEFAULT_CONFIG = TreemapConfig()


def load_config_file(path: str | Path) -> TreemapConfig:
    """Read a JSON config file into a TreemapConfig.

    Raises OSError when the file cannot be read and TreemapConfigError when the
    content is not a JSON object of valid settings.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TreemapConfigError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise TreemapConfigError(f"{path} must contain a JSON object")
    return TreemapConfig.from_mapping(payload)


__all__ = [
    "COLOR_MODES",
    "DEFAULT_CONFIG",
    "DEFAULT_LABEL_HEIGHT",
    "DEFAULT_LABEL_MIN_WIDTH",
    "DEFAULT_MAX_NESTING_DEPTH",
    "SIZE_MODES",
    "ColorMode",
    "SizeMode",
    "TreemapConfig",
    "TreemapConfigError",
    "clamp_depth",
    "load_config_file",
    "normalize_color_mode",
    "normalize_size_mode",
]
