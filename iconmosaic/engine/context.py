"""Value types flowing through the composite pipeline.

Per-icon results → IconFragment (one per surviving icon, keyed by index)
Global results → CompositeCanvas / CompositeResult
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lxml import etree
    from PIL import Image

    from iconmosaic.models.layout import Rgba


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in an icon's own coordinate frame."""

    x: float
    y: float
    width: float
    height: float

    @property
    def origin(self) -> Point:
        return Point(self.x, self.y)

    @property
    def area(self) -> float:
        return self.width * self.height


@dataclass(frozen=True)
class IconDescriptor:
    """A parsed icon. ``root`` must not be mutated; stages deep-copy it."""

    index: int
    locator: str
    markup: str
    root: etree._Element
    bounds: Rect


@dataclass(frozen=True)
class GridPlacement:
    index: int
    row: int
    col: int
    # Top-left of the icon cell (cell_size square)
    cell_origin: Point
    # Top-left of the border cell (border_cell_size square)
    border_cell_origin: Point


@dataclass(frozen=True)
class IconTransform:
    """Uniform contain fit of an icon into its cell.

    Serialized as ``translate(tx, ty) scale(s)``: a local point ``p`` lands at
    ``s * p + translate`` relative to the cell origin.
    """

    scale: float
    translate: Point
    # Residual centring margin on each axis, in cell units
    margin: Point


@dataclass(frozen=True)
class ClipRegion:
    """Circular aperture in the icon's pre-transform frame."""

    cx: float
    cy: float
    r: float


@dataclass(frozen=True)
class BorderDisc:
    """Background disc in canvas space."""

    cx: float
    cy: float
    r: float
    color: Rgba


@dataclass(frozen=True)
class CellDecoration:
    icon_origin: Point
    clip: ClipRegion
    border: BorderDisc | None = None


@dataclass
class IconFragment:
    """A namespaced, fitted icon ready for placement."""

    index: int
    locator: str
    prefix: str
    # Namespaced copy of the icon root
    element: etree._Element
    bounds: Rect
    transform: IconTransform
    id_map: dict[str, str] = field(default_factory=dict)
    notes: list[str] = field(default_factory=list)
    # Filled in during assembly
    placement: GridPlacement | None = None
    decoration: CellDecoration | None = None


@dataclass(frozen=True)
class SkippedIcon:
    """Warning entry for an icon dropped from the composite."""

    index: int
    locator: str
    reason: str
    message: str


@dataclass
class CompositeCanvas:
    width: int
    height: int
    grid_size: int
    background: Rgba
    root: etree._Element
    fragments: list[IconFragment] = field(default_factory=list)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)


@dataclass
class CompositeResult:
    canvas: CompositeCanvas
    document: str
    image: Image.Image | None = None
    warnings: list[SkippedIcon] = field(default_factory=list)

    @property
    def grid_size(self) -> int:
        return self.canvas.grid_size

    @property
    def canvas_size(self) -> int:
        return self.canvas.width

    @property
    def placed_count(self) -> int:
        return len(self.canvas.fragments)
