"""Layout configuration models."""

from __future__ import annotations

import enum
import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3,4}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")


class OutputFormat(str, enum.Enum):
    RASTER = "raster"
    VECTOR = "vector"


class Rgba(BaseModel):
    """8-bit RGB colour with a fractional alpha channel."""

    model_config = ConfigDict(frozen=True)

    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)
    alpha: float = Field(default=1.0, ge=0.0, le=1.0)

    @model_validator(mode="before")
    @classmethod
    def _parse_hex(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_hex_color(value)
        return value

    @property
    def svg_color(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @property
    def svg_opacity(self) -> str:
        return f"{round(self.alpha, 4):g}"

    @property
    def is_opaque(self) -> bool:
        return self.alpha >= 1.0


def parse_hex_color(text: str) -> dict[str, Any]:
    """Parse ``#rgb``, ``#rgba``, ``#rrggbb`` or ``#rrggbbaa`` into Rgba fields."""
    m = _HEX_RE.match(text.strip())
    if not m:
        raise ValueError(f"Invalid hex colour: {text!r}")
    digits = m.group(1)
    if len(digits) in (3, 4):
        digits = "".join(ch * 2 for ch in digits)
    r, g, b = (int(digits[i:i + 2], 16) for i in (0, 2, 4))
    alpha = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0
    return {"r": r, "g": g, "b": b, "alpha": round(alpha, 4)}


class LayoutSpec(BaseModel):
    """Immutable layout constants shared by every stage.

    ``border_cell_size`` is ``None`` when no background disc is drawn; the
    grid then advances by ``cell_size`` alone. ``padding`` defaults to
    ``cell_gap``.
    """

    model_config = ConfigDict(frozen=True)

    cell_size: int = Field(default=512, ge=1, description="Icon cell edge in canvas pixels")
    border_cell_size: int | None = Field(
        default=None,
        ge=1,
        description="Border cell edge; enables background discs when set",
    )
    cell_gap: int = Field(default=256, ge=0, description="Gap between neighbouring cells")
    padding: int = Field(default=256, ge=0, description="Canvas padding (defaults to cell_gap)")
    background_color: Rgba = Field(default_factory=lambda: Rgba(r=240, g=240, b=240))
    border_color: Rgba = Field(default_factory=lambda: Rgba(r=255, g=255, b=255, alpha=0.5))

    @model_validator(mode="before")
    @classmethod
    def _default_padding(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("padding") is None:
            gap = data.get("cell_gap", cls.model_fields["cell_gap"].default)
            data = {**data, "padding": gap}
        return data

    @model_validator(mode="after")
    def _check_sizes(self) -> LayoutSpec:
        if self.border_cell_size is not None and self.border_cell_size < self.cell_size:
            raise ValueError(
                f"border_cell_size ({self.border_cell_size}) must be >= cell_size ({self.cell_size})"
            )
        return self

    @property
    def borders_enabled(self) -> bool:
        return self.border_cell_size is not None

    @property
    def effective_border_cell_size(self) -> int:
        return self.border_cell_size if self.border_cell_size is not None else self.cell_size

    @property
    def cell_unit(self) -> int:
        """Grid pitch without the gap: border cell when borders are on, else the cell."""
        return self.effective_border_cell_size

    @property
    def cell_inset(self) -> float:
        """Offset of the icon cell inside its border cell, on both axes."""
        return (self.effective_border_cell_size - self.cell_size) / 2
