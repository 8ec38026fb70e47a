"""Pydantic models for inputs and layout configuration."""

from iconmosaic.models.icon import IconSource
from iconmosaic.models.layout import LayoutSpec, OutputFormat, Rgba, parse_hex_color

__all__ = [
    "IconSource",
    "LayoutSpec",
    "OutputFormat",
    "Rgba",
    "parse_hex_color",
]
