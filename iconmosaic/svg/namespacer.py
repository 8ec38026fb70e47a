"""Identifier namespacer: prefix ids and classes so merged icons cannot collide.

Works on the parsed tree rather than raw text: only identifiers an icon
declares itself are renamed, together with every reference to them:

- ``id`` attributes
- ``href`` / ``xlink:href`` of the form ``#id``
- ``url(#id)`` in any attribute value (fill, clip-path, filter, style, ...)
- id lists in ``aria-labelledby`` / ``aria-describedby``
- ``<style>`` text: ``#id`` and ``.class`` selectors, ``url(#id)`` values
- ``class`` attributes, for classes the icon's own stylesheet defines
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from lxml import etree

from iconmosaic.errors import MalformedMarkup
from iconmosaic.svg.parser import parse_markup
from iconmosaic.svg.serializer import XLINK_NS, local_name

logger = logging.getLogger(__name__)

_HREF_ATTRS = {"href", f"{{{XLINK_NS}}}href"}
_IDLIST_ATTRS = {"aria-labelledby", "aria-describedby"}

_URL_REF_RE = re.compile(r"""url\(\s*(['"]?)#([^'")\s]+)\1\s*\)""")
# One CSS rule: selector text followed by a declaration block without nesting
_CSS_RULE_RE = re.compile(r"([^{}]*)(\{[^{}]*\})")
_CSS_CLASS_RE = re.compile(r"\.(-?[_a-zA-Z][\w-]*)")
_CSS_ID_RE = re.compile(r"#(-?[_a-zA-Z][\w-]*)")
# Comments, url() and quoted strings; never scanned for selectors
_CSS_LITERAL_RE = re.compile(r"""/\*.*?\*/|url\([^)]*\)|"[^"]*"|'[^']*'""", re.DOTALL | re.IGNORECASE)


@dataclass
class Renames:
    """Old → new names applied to one icon."""

    ids: dict[str, str] = field(default_factory=dict)
    classes: dict[str, str] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return bool(self.ids or self.classes)


def _rewrite_urls(value: str, ids: dict[str, str]) -> str:
    def _sub(m: re.Match[str]) -> str:
        quote, ref = m.group(1), m.group(2)
        if ref not in ids:
            return m.group(0)
        return f"url({quote}#{ids[ref]}{quote})"

    return _URL_REF_RE.sub(_sub, value)


def _rewrite_tokens(value: str, names: dict[str, str]) -> str:
    return " ".join(names.get(tok, tok) for tok in value.split())


def _mask_literals(text: str) -> str:
    """Blank out literals, keeping offsets intact."""
    return _CSS_LITERAL_RE.sub(lambda m: " " * len(m.group(0)), text)


def split_prelude(prelude: str) -> tuple[str, str]:
    """Split the text before a ``{`` into leading statements and the selector.

    Statements such as ``@import url(...);`` end up in the head. At-rule
    preludes (``@media ...``, ``@font-face``) have no selector.
    """
    masked = _mask_literals(prelude)
    cut = masked.rfind(";") + 1
    if masked[cut:].lstrip().startswith("@"):
        return prelude, ""
    return prelude[:cut], prelude[cut:]


def _rewrite_selector(selector: str, renames: Renames) -> str:
    def _names(part: str) -> str:
        part = _CSS_CLASS_RE.sub(lambda m: "." + renames.classes.get(m.group(1), m.group(1)), part)
        return _CSS_ID_RE.sub(lambda m: "#" + renames.ids.get(m.group(1), m.group(1)), part)

    out, pos = [], 0
    for m in _CSS_LITERAL_RE.finditer(selector):
        out.append(_names(selector[pos:m.start()]))
        out.append(m.group(0))
        pos = m.end()
    out.append(_names(selector[pos:]))
    return "".join(out)


def rewrite_css(css: str, renames: Renames) -> str:
    """Rename selectors and url() references inside a stylesheet."""

    def _rule(m: re.Match[str]) -> str:
        head, selector = split_prelude(m.group(1))
        return head + _rewrite_selector(selector, renames) + _rewrite_urls(m.group(2), renames.ids)

    return _CSS_RULE_RE.sub(_rule, css)


def stylesheet_classes(root: etree._Element) -> set[str]:
    """Class names used as selectors in the icon's ``<style>`` elements."""
    found: set[str] = set()
    for el in root.iter(tag=etree.Element):
        if local_name(el.tag) != "style" or not el.text:
            continue
        for m in _CSS_RULE_RE.finditer(el.text):
            _, selector = split_prelude(m.group(1))
            found.update(_CSS_CLASS_RE.findall(_mask_literals(selector)))
    return found


def namespace_tree(root: etree._Element, prefix: str) -> Renames:
    """Prefix every locally declared id/class in ``root`` (in place)."""
    renames = Renames()
    for el in root.iter(tag=etree.Element):
        old = el.get("id")
        if old:
            new = prefix + old
            renames.ids[old] = new
            el.set("id", new)

    renames.classes = {name: prefix + name for name in sorted(stylesheet_classes(root))}
    if not renames.changed:
        return renames

    for el in root.iter(tag=etree.Element):
        for name, value in list(el.attrib.items()):
            if name == "id":
                continue
            if name in _HREF_ATTRS:
                ref = value.strip()
                if ref.startswith("#") and ref[1:] in renames.ids:
                    el.set(name, "#" + renames.ids[ref[1:]])
            elif name in _IDLIST_ATTRS:
                el.set(name, _rewrite_tokens(value, renames.ids))
            elif name == "class":
                if renames.classes:
                    el.set(name, _rewrite_tokens(value, renames.classes))
            elif "url(" in value:
                el.set(name, _rewrite_urls(value, renames.ids))
        if local_name(el.tag) == "style" and el.text:
            el.text = rewrite_css(el.text, renames)

    logger.debug("Namespaced %d ids, %d classes with prefix %r", len(renames.ids), len(renames.classes), prefix)
    return renames


def namespace_markup(markup: str, prefix: str) -> str:
    """Text form of ``namespace_tree``.

    Returns ``markup`` unchanged when it declares no identifiers or cannot be
    parsed; never raises on malformed input.
    """
    try:
        root = parse_markup(markup)
    except MalformedMarkup as e:
        logger.debug("Namespacer left unparseable markup untouched: %s", e)
        return markup
    if not namespace_tree(root, prefix).changed:
        return markup
    return etree.tostring(root, encoding="unicode")
