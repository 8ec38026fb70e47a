"""Clip/border composer: per-cell aperture and background disc."""

from __future__ import annotations

from iconmosaic.engine.context import (
    BorderDisc,
    CellDecoration,
    ClipRegion,
    GridPlacement,
    IconTransform,
)
from iconmosaic.models.layout import LayoutSpec


def clip_region(transform: IconTransform, cell_size: float) -> ClipRegion:
    """Cell-sized circle expressed in the icon's local (pre-scale) frame.

    After ``translate(t) scale(s)`` the circle maps back onto the cell centre
    with radius ``cell_size / 2``.
    """
    half = cell_size / 2
    s = transform.scale
    return ClipRegion(
        cx=(half - transform.translate.x) / s,
        cy=(half - transform.translate.y) / s,
        r=half / s,
    )


def border_disc(placement: GridPlacement, spec: LayoutSpec) -> BorderDisc:
    half = spec.effective_border_cell_size / 2
    origin = placement.border_cell_origin
    return BorderDisc(cx=origin.x + half, cy=origin.y + half, r=half, color=spec.border_color)


def compose_cell(placement: GridPlacement, transform: IconTransform, spec: LayoutSpec) -> CellDecoration:
    """Aperture, optional disc and icon origin for one grid cell."""
    return CellDecoration(
        icon_origin=placement.cell_origin,
        clip=clip_region(transform, spec.cell_size),
        border=border_disc(placement, spec) if spec.borders_enabled else None,
    )
