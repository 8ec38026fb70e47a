"""Rasterization: composite SVG document to an RGBA bitmap via CairoSVG."""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image

logger = logging.getLogger(__name__)


def render(document: str | bytes, output_size: int | tuple[int, int] | None = None) -> Image.Image:
    """Render an SVG document to an RGBA image.

    The bitmap matches the document's declared width/height unless
    ``output_size`` (an edge length or a ``(width, height)`` pair) overrides it.
    """
    import cairosvg

    raw = document.encode("utf-8") if isinstance(document, str) else document
    kwargs: dict[str, int] = {}
    if output_size is not None:
        width, height = (output_size, output_size) if isinstance(output_size, int) else output_size
        kwargs = {"output_width": width, "output_height": height}

    try:
        png_bytes = cairosvg.svg2png(bytestring=raw, **kwargs)
    except Exception as e:
        logger.warning("Failed to render SVG to PNG: %s", e)
        raise
    return Image.open(io.BytesIO(png_bytes)).convert("RGBA")


def to_array(image: Image.Image) -> NDArray[np.uint8]:
    """HxWx4 uint8 array of an image."""
    return np.array(image.convert("RGBA"))


def save_png(image: Image.Image, path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    image.save(out, format="PNG")
    return out
