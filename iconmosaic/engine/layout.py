"""Grid layout: square grid sizing and row-major cell placement."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass

from iconmosaic.engine.context import GridPlacement, Point
from iconmosaic.errors import EmptyInput
from iconmosaic.models.layout import LayoutSpec

logger = logging.getLogger(__name__)


def grid_size_for(n: int) -> int:
    """Smallest g with g*g >= n, computed without floating point."""
    if n < 0:
        raise ValueError(f"Icon count must be non-negative, got {n}")
    g = math.isqrt(n)
    if g * g < n:
        g += 1
    return max(g, 1)


def canvas_size_for(grid_size: int, spec: LayoutSpec) -> int:
    return grid_size * spec.cell_unit + (grid_size - 1) * spec.cell_gap + 2 * spec.padding


@dataclass(frozen=True)
class GridLayout:
    count: int
    grid_size: int
    canvas_size: int
    spec: LayoutSpec

    @property
    def cell_unit(self) -> int:
        return self.spec.cell_unit

    @property
    def capacity(self) -> int:
        return self.grid_size * self.grid_size

    def placement(self, index: int) -> GridPlacement:
        if not 0 <= index < self.capacity:
            raise IndexError(f"Cell {index} outside a {self.grid_size}x{self.grid_size} grid")
        row, col = divmod(index, self.grid_size)
        pitch = self.spec.cell_unit + self.spec.cell_gap
        border_origin = Point(
            float(self.spec.padding + col * pitch),
            float(self.spec.padding + row * pitch),
        )
        inset = self.spec.cell_inset
        return GridPlacement(
            index=index,
            row=row,
            col=col,
            cell_origin=border_origin + Point(inset, inset),
            border_cell_origin=border_origin,
        )

    def placements(self) -> Iterator[GridPlacement]:
        """Placements for the occupied cells 0..count-1; trailing cells stay empty."""
        for i in range(self.count):
            yield self.placement(i)


def compute_layout(n: int, spec: LayoutSpec) -> GridLayout:
    """Compute the minimal square grid for ``n`` icons.

    Raises EmptyInput when ``n == 0``.
    """
    if n == 0:
        raise EmptyInput()
    g = grid_size_for(n)
    size = canvas_size_for(g, spec)
    logger.debug("Layout: %d icons → %dx%d grid, canvas %dpx", n, g, g, size)
    return GridLayout(count=n, grid_size=g, canvas_size=size, spec=spec)
