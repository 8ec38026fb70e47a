"""Icon loader: facade over lxml + svgpathtools.

Converts raw SVG text → IconDescriptor (parsed tree + intrinsic bounds).
"""

from __future__ import annotations

import logging
import re

import numpy as np
from lxml import etree
from svgpathtools import parse_path

from iconmosaic.engine.context import IconDescriptor, Rect
from iconmosaic.errors import MalformedMarkup
from iconmosaic.models.icon import IconSource
from iconmosaic.svg.serializer import SVG_NS, XLINK_NS, local_name

logger = logging.getLogger(__name__)

_XML_DECL_RE = re.compile(r"^\s*<\?xml[^>]*\?>", re.IGNORECASE)
_SVG_OPEN_RE = re.compile(r"<svg\b[^>]*>", re.IGNORECASE)
# Whitespace, comments, processing instructions and the DOCTYPE ahead of the root
_PROLOG_RE = re.compile(r"(?:\s+|<!--.*?-->|<\?.*?\?>|<!DOCTYPE(?:[^\[>]|\[.*?\])*>)*", re.DOTALL | re.IGNORECASE)
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
_LENGTH_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([a-z]*)\s*$", re.IGNORECASE)
_LIST_SPLIT_RE = re.compile(r"[\s,]+")

# W3C CSS 2.1 default replaced-element size
_DEFAULT_BOUNDS = Rect(0.0, 0.0, 300.0, 150.0)

# Geometry under these elements is not painted directly
_NON_RENDERED = {"defs", "clipPath", "mask", "symbol", "pattern", "marker", "linearGradient", "radialGradient", "filter"}


def _make_parser() -> etree.XMLParser:
    """Hardened parser: no entities, no DTD, no network. One per call (parsers are not shared across threads)."""
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        huge_tree=False,
        remove_comments=False,
    )


def _declare_namespaces(text: str) -> str:
    """Add missing SVG / xlink namespace declarations to the root start tag."""
    prolog = _PROLOG_RE.match(text)
    m = _SVG_OPEN_RE.match(text, prolog.end())
    if not m:
        return text
    tag = m.group(0)
    extra = ""
    if not re.search(r"\sxmlns\s*=", tag):
        extra += f' xmlns="{SVG_NS}"'
    if "xlink:" in text and "xmlns:xlink" not in tag:
        extra += f' xmlns:xlink="{XLINK_NS}"'
    if not extra:
        return text
    patched = tag[:4] + extra + tag[4:]
    return text[: m.start()] + patched + text[m.end():]


def parse_markup(markup: str) -> etree._Element:
    """Parse SVG text into an lxml element tree rooted at ``<svg>``.

    Raises MalformedMarkup when the text is not well-formed XML or the root
    is not an SVG element.
    """
    text = _XML_DECL_RE.sub("", markup.lstrip("\ufeff"), count=1)
    text = _declare_namespaces(text)
    try:
        root = etree.fromstring(text, _make_parser())
    except (etree.XMLSyntaxError, ValueError) as e:
        raise MalformedMarkup(f"Unparseable SVG: {e}") from e
    if root.tag != f"{{{SVG_NS}}}svg":
        raise MalformedMarkup(f"Root element is {root.tag!r}, expected <svg>")
    return root


def parse_icon(source: IconSource, index: int = 0) -> IconDescriptor:
    """Parse one icon source into an immutable descriptor."""
    try:
        root = parse_markup(source.markup)
        bounds = resolve_bounds(root)
    except MalformedMarkup as e:
        e.index, e.locator = index, source.locator
        raise
    logger.debug(
        "Parsed icon %d (%s): bounds %.4g,%.4g %.4g×%.4g",
        index, source.locator or "-", bounds.x, bounds.y, bounds.width, bounds.height,
    )
    return IconDescriptor(
        index=index,
        locator=source.locator,
        markup=source.markup,
        root=root,
        bounds=bounds,
    )


def resolve_bounds(root: etree._Element) -> Rect:
    """Intrinsic coordinate frame: viewBox, else width/height, else drawn geometry."""
    vb = root.get("viewBox")
    if vb is not None and vb.strip():
        return parse_viewbox(vb)

    w = parse_length(root.get("width"))
    h = parse_length(root.get("height"))
    if w is not None and h is not None:
        return Rect(0.0, 0.0, w, h)

    geo = geometry_bounds(root)
    if geo is not None:
        return geo

    logger.debug("No viewBox, size or geometry; using default %sx%s", _DEFAULT_BOUNDS.width, _DEFAULT_BOUNDS.height)
    return _DEFAULT_BOUNDS


def parse_viewbox(vb: str) -> Rect:
    parts = [p for p in _LIST_SPLIT_RE.split(vb.strip()) if p]
    if len(parts) != 4:
        raise MalformedMarkup(f"viewBox needs 4 numbers, got {vb!r}")
    try:
        x, y, w, h = (float(p) for p in parts)
    except ValueError as e:
        raise MalformedMarkup(f"Non-numeric viewBox {vb!r}") from e
    return Rect(x, y, w, h)


def parse_length(value: str | None) -> float | None:
    """Numeric part of an SVG length (``24``, ``24px``, ``1.5em``). Percentages → None."""
    if value is None:
        return None
    m = _LENGTH_RE.match(value)
    if not m:
        return None
    return float(m.group(1))


def geometry_bounds(root: etree._Element) -> Rect | None:
    """Union bounding box of drawn shapes (transforms and stroke width ignored)."""
    extents: list[tuple[float, float, float, float]] = []
    _collect_extents(root, extents)
    if not extents:
        return None
    arr = np.array(extents)
    xmin, ymin = float(np.min(arr[:, 0])), float(np.min(arr[:, 1]))
    xmax, ymax = float(np.max(arr[:, 2])), float(np.max(arr[:, 3]))
    return Rect(xmin, ymin, xmax - xmin, ymax - ymin)


def _collect_extents(el: etree._Element, out: list[tuple[float, float, float, float]]) -> None:
    for child in el.iterchildren(tag=etree.Element):
        tag = local_name(child.tag)
        if tag in _NON_RENDERED:
            continue
        ext = _shape_extent(tag, child)
        if ext is not None:
            out.append(ext)
        _collect_extents(child, out)


def _num(el: etree._Element, name: str, default: float = 0.0) -> float:
    value = parse_length(el.get(name))
    return default if value is None else value


def _shape_extent(tag: str, el: etree._Element) -> tuple[float, float, float, float] | None:
    if tag == "path":
        d = el.get("d", "")
        if not d.strip():
            return None
        try:
            path = parse_path(d)
            if len(path) == 0:
                return None
            xmin, xmax, ymin, ymax = path.bbox()
        except Exception as e:
            logger.warning("Failed to parse path: %s", e)
            return None
        return (xmin, ymin, xmax, ymax)

    if tag == "circle":
        cx, cy, r = _num(el, "cx"), _num(el, "cy"), _num(el, "r")
        return (cx - r, cy - r, cx + r, cy + r) if r > 0 else None

    if tag == "ellipse":
        cx, cy = _num(el, "cx"), _num(el, "cy")
        rx, ry = _num(el, "rx"), _num(el, "ry")
        return (cx - rx, cy - ry, cx + rx, cy + ry) if rx > 0 and ry > 0 else None

    if tag == "rect":
        x, y = _num(el, "x"), _num(el, "y")
        w, h = _num(el, "width"), _num(el, "height")
        return (x, y, x + w, y + h) if w > 0 and h > 0 else None

    if tag == "line":
        x1, y1, x2, y2 = (_num(el, a) for a in ("x1", "y1", "x2", "y2"))
        return (min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))

    if tag in ("polyline", "polygon"):
        nums = [float(v) for v in _NUMBER_RE.findall(el.get("points", ""))]
        if len(nums) < 2:
            return None
        pts = np.array(nums[: len(nums) // 2 * 2]).reshape(-1, 2)
        return (
            float(pts[:, 0].min()),
            float(pts[:, 1].min()),
            float(pts[:, 0].max()),
            float(pts[:, 1].max()),
        )

    return None
