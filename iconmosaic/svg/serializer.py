"""Write the assembled SVG tree out as text.

All numbers go through ``fmt_num`` so identical input gives byte-identical output.
"""

from __future__ import annotations

from typing import Any

from lxml import etree

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
NSMAP = {None: SVG_NS, "xlink": XLINK_NS}

# Fixed precision for every coordinate written by the assembler
_PRECISION = 6


def svg_tag(local: str) -> str:
    return f"{{{SVG_NS}}}{local}"


def local_name(tag: Any) -> str:
    """Tag without namespace; empty string for comments and PIs."""
    if not isinstance(tag, str):
        return ""
    return tag.split("}")[-1] if "}" in tag else tag


def fmt_num(value: float) -> str:
    """Fixed-precision number with trailing zeros stripped (``12.5``, ``256``)."""
    text = f"{round(float(value), _PRECISION):.{_PRECISION}f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def url_ref(element_id: str) -> str:
    return f"url(#{element_id})"


def sub_element(parent: etree._Element, local: str, **attrs: Any) -> etree._Element:
    """Append an SVG child. Attribute names use ``_`` for ``-``; floats are formatted."""
    el = etree.SubElement(parent, svg_tag(local))
    for key, value in attrs.items():
        if value is None:
            continue
        name = key.rstrip("_").replace("_", "-")
        el.set(name, fmt_num(value) if isinstance(value, (int, float)) else str(value))
    return el


def serialize_document(root: etree._Element, pretty: bool = True) -> str:
    """Serialize a document root to a standalone SVG string."""
    etree.cleanup_namespaces(root, top_nsmap=NSMAP)
    raw = etree.tostring(root, xml_declaration=True, encoding="UTF-8", pretty_print=pretty)
    return raw.decode("utf-8")
