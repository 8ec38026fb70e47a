"""SVG sanitizer: strips everything that should not travel into the composite.

Removes: comments, processing instructions, <script>, <metadata>, <title>,
<desc>, editor nodes/attributes (sodipodi, inkscape), on* event handlers and
links and url() references that point outside the document, including
@import rules in <style> text.
Keeps: every painted element, defs, styles, transforms and local references.
"""

from __future__ import annotations

import logging
import re

from lxml import etree

from iconmosaic.svg.serializer import XLINK_NS, local_name

logger = logging.getLogger(__name__)

REMOVE_TAGS = {"script", "metadata", "title", "desc"}

EDITOR_NAMESPACES = {
    "http://sodipodi.sourceforge.net/DTD/sodipodi-0.0.dtd",
    "http://www.inkscape.org/namespaces/inkscape",
}

HREF_ATTRS = ("href", f"{{{XLINK_NS}}}href")

_URL_RE = re.compile(r"""url\(\s*(['"]?)([^'")]*)\1\s*\)""", re.IGNORECASE)
_IMPORT_RE = re.compile(r"@import\s[^;]*;?", re.IGNORECASE)


def _namespace(name: str) -> str:
    return name[1:].split("}")[0] if name.startswith("{") else ""


def _is_local_href(value: str) -> bool:
    value = value.strip()
    return value.startswith("#") or value.startswith("data:") or value == ""


def strip_external_urls(value: str, where: str) -> tuple[str, list[str]]:
    """Replace every non-local ``url()`` in ``value`` with ``none``."""
    notes: list[str] = []

    def _sub(m: re.Match[str]) -> str:
        if _is_local_href(m.group(2)):
            return m.group(0)
        notes.append(f"dropped external reference {m.group(2).strip()!r} on {where}")
        return "none"

    return _URL_RE.sub(_sub, value), notes


def sanitize_css(css: str) -> tuple[str, list[str]]:
    """Remove @import rules and external url() references from a stylesheet."""
    notes: list[str] = []

    def _drop_import(m: re.Match[str]) -> str:
        notes.append(f"dropped stylesheet rule {m.group(0).strip()!r}")
        return ""

    css = _IMPORT_RE.sub(_drop_import, css)
    css, url_notes = strip_external_urls(css, "<style>")
    return css, notes + url_notes


def drop_node(node: etree._Element) -> None:
    """Remove a node from its parent, keeping its tail text in place."""
    parent = node.getparent()
    if parent is None:
        return
    if node.tail:
        prev = node.getprevious()
        if prev is not None:
            prev.tail = (prev.tail or "") + node.tail
        else:
            parent.text = (parent.text or "") + node.tail
    parent.remove(node)


def sanitize_tree(root: etree._Element) -> list[str]:
    """Sanitize ``root`` in place. Returns notes about dropped external links."""
    doomed: list[etree._Element] = []
    notes: list[str] = []

    for node in root.iter():
        if node is root:
            continue
        if not isinstance(node.tag, str):
            # Comment or processing instruction
            doomed.append(node)
            continue
        if local_name(node.tag) in REMOVE_TAGS or _namespace(node.tag) in EDITOR_NAMESPACES:
            doomed.append(node)

    for node in doomed:
        # Descendants of an already removed node are detached with it
        if node.getparent() is not None:
            drop_node(node)

    for el in root.iter(tag=etree.Element):
        for name in list(el.attrib):
            if _namespace(name) in EDITOR_NAMESPACES or local_name(name).lower().startswith("on"):
                del el.attrib[name]
        for name in HREF_ATTRS:
            value = el.get(name)
            if value is not None and not _is_local_href(value):
                notes.append(f"dropped external reference {value!r} on <{local_name(el.tag)}>")
                del el.attrib[name]
        for name, value in list(el.attrib.items()):
            if "url(" in value.lower():
                cleaned, dropped = strip_external_urls(value, f"<{local_name(el.tag)} {local_name(name)}>")
                if dropped:
                    el.set(name, cleaned)
                    notes.extend(dropped)
        if local_name(el.tag) == "style" and el.text:
            el.text, dropped = sanitize_css(el.text)
            notes.extend(dropped)

    for note in notes:
        logger.warning("Sanitizer: %s", note)
    return notes
