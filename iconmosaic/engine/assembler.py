"""Document assembler: merge background, discs and clipped icons into one SVG tree.

Structure of the output document:

    <svg width=W height=W viewBox="0 0 W W">
      <defs><clipPath id="mosaic-canvas">canvas rect</clipPath></defs>
      <g clip-path="url(#mosaic-canvas)">
        <rect .../>                               background
        <g id="mosaic-cell-{i}">                  one context per icon
          <circle .../>                           border disc (optional)
          <defs><clipPath id="mosaic-clip-{i}">   aperture, icon-local frame
          <g transform="translate() scale()" clip-path="url(#mosaic-clip-{i})">
            <g ...root presentation attrs>        icon content
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable

from lxml import etree

from iconmosaic.engine.context import CompositeCanvas, IconFragment
from iconmosaic.engine.layout import GridLayout
from iconmosaic.models.layout import Rgba
from iconmosaic.svg.serializer import NSMAP, fmt_num, sub_element, svg_tag, url_ref

logger = logging.getLogger(__name__)

# Reserved prefix for identifiers owned by the assembler
ID_PREFIX = "mosaic-"
CANVAS_CLIP_ID = f"{ID_PREFIX}canvas"

# Root-only attributes that make no sense on an inner <g>
_ROOT_ONLY_ATTRS = {
    "width",
    "height",
    "viewBox",
    "x",
    "y",
    "version",
    "baseProfile",
    "preserveAspectRatio",
    "zoomAndPan",
    "contentScriptType",
    "contentStyleType",
}


def cell_id(index: int) -> str:
    return f"{ID_PREFIX}cell-{index}"


def clip_id(index: int) -> str:
    return f"{ID_PREFIX}clip-{index}"


def _paint(color: Rgba) -> dict[str, str]:
    attrs = {"fill": color.svg_color}
    if not color.is_opaque:
        attrs["fill_opacity"] = color.svg_opacity
    return attrs


def icon_wrapper(icon_root: etree._Element) -> etree._Element:
    """Turn an icon's ``<svg>`` root into a ``<g>`` that keeps its presentation attributes.

    Children are copied; ``icon_root`` is left untouched.
    """
    wrapper = etree.Element(svg_tag("g"))
    for name, value in icon_root.attrib.items():
        if name not in _ROOT_ONLY_ATTRS:
            wrapper.set(name, value)
    for child in list(icon_root):
        wrapper.append(copy.deepcopy(child))
    return wrapper


def _append_fragment(surface: etree._Element, frag: IconFragment) -> None:
    if frag.placement is None or frag.decoration is None:
        raise ValueError(f"Icon {frag.index} has no placement; compose it before assembly")
    deco = frag.decoration
    cell = sub_element(surface, "g", id=cell_id(frag.index))

    if deco.border is not None:
        sub_element(cell, "circle", cx=deco.border.cx, cy=deco.border.cy, r=deco.border.r, **_paint(deco.border.color))

    defs = sub_element(cell, "defs")
    aperture = sub_element(defs, "clipPath", id=clip_id(frag.index), clipPathUnits="userSpaceOnUse")
    sub_element(aperture, "circle", cx=deco.clip.cx, cy=deco.clip.cy, r=deco.clip.r)

    t = frag.transform
    tx = deco.icon_origin.x + t.translate.x
    ty = deco.icon_origin.y + t.translate.y
    icon_group = sub_element(
        cell,
        "g",
        transform=f"translate({fmt_num(tx)} {fmt_num(ty)}) scale({fmt_num(t.scale)})",
        clip_path=url_ref(clip_id(frag.index)),
    )
    icon_group.append(icon_wrapper(frag.element))


def assemble(layout: GridLayout, background: Rgba, fragments: Iterable[IconFragment]) -> CompositeCanvas:
    """Build the composite document. Fragments are emitted in index order."""
    size = layout.canvas_size
    ordered = sorted(fragments, key=lambda f: f.index)

    root = etree.Element(svg_tag("svg"), nsmap=NSMAP)
    root.set("version", "1.1")
    root.set("width", fmt_num(size))
    root.set("height", fmt_num(size))
    root.set("viewBox", f"0 0 {fmt_num(size)} {fmt_num(size)}")

    defs = sub_element(root, "defs")
    canvas_clip = sub_element(defs, "clipPath", id=CANVAS_CLIP_ID)
    sub_element(canvas_clip, "rect", x=0, y=0, width=size, height=size)

    surface = sub_element(root, "g", clip_path=url_ref(CANVAS_CLIP_ID))
    sub_element(surface, "rect", x=0, y=0, width=size, height=size, **_paint(background))

    for frag in ordered:
        _append_fragment(surface, frag)

    logger.debug("Assembled %d fragments on a %dpx canvas", len(ordered), size)
    return CompositeCanvas(
        width=size,
        height=size,
        grid_size=layout.grid_size,
        background=background,
        root=root,
        fragments=ordered,
    )
