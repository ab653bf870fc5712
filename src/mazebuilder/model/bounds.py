"""
Dimension Bounds
================
Inclusive [min, max] limits a requested maze width and height must respect.

Bounds are plain values handed to the validator, the display sizer and the
controller, so several profiles can live side by side (see `config.py`).
"""
from __future__ import annotations

from dataclasses import dataclass

from mazebuilder.exceptions import ConfigurationError

FIELD_NAMES = ("width", "height")


@dataclass(frozen=True)
class DimensionBounds:
    min_width: int
    min_height: int
    max_width: int
    max_height: int

    def __post_init__(self) -> None:
        for name in FIELD_NAMES:
            lo, hi = self.for_field(name)
            if isinstance(lo, bool) or isinstance(hi, bool) or not isinstance(lo, int) or not isinstance(hi, int):
                raise ConfigurationError(f"Bounds for {name} must be integers, got {lo!r}..{hi!r}")
            if lo < 1:
                raise ConfigurationError(f"Minimum {name} must be positive, got {lo}")
            if lo > hi:
                raise ConfigurationError(f"Minimum {name} ({lo}) exceeds maximum ({hi})")

    def for_field(self, field_name: str) -> tuple[int, int]:
        """Return the (min, max) pair for 'width' or 'height'."""
        if field_name == "width":
            return self.min_width, self.max_width
        if field_name == "height":
            return self.min_height, self.max_height
        raise ValueError(f"Unknown dimension field: {field_name!r}")

    def contains(self, width: int, height: int) -> bool:
        return (self.min_width <= width <= self.max_width
                and self.min_height <= height <= self.max_height)
