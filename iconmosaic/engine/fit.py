"""Icon transform calculator: uniform "contain" fit into a square cell."""

from __future__ import annotations

import math

from iconmosaic.engine.context import IconTransform, Point, Rect
from iconmosaic.errors import InvalidGeometry


def fit(bounds: Rect, cell_size: float) -> IconTransform:
    """Scale ``bounds`` uniformly into a ``cell_size`` square and centre it.

    The dominant axis fills the cell exactly; the other axis is letterboxed
    with equal margins. Raises InvalidGeometry for zero or non-finite bounds.
    """
    w, h = bounds.width, bounds.height
    if not all(math.isfinite(v) for v in (bounds.x, bounds.y, w, h)):
        raise InvalidGeometry(f"Non-finite icon bounds: {bounds}")
    if w <= 0 or h <= 0:
        raise InvalidGeometry(f"Zero-area icon bounds: {w:g}x{h:g}")
    if cell_size <= 0:
        raise ValueError(f"cell_size must be positive, got {cell_size}")

    scale = min(cell_size / w, cell_size / h)
    margin = Point((cell_size - w * scale) / 2, (cell_size - h * scale) / 2)
    translate = Point(margin.x - bounds.x * scale, margin.y - bounds.y * scale)
    return IconTransform(scale=scale, translate=translate, margin=margin)
