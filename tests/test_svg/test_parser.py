"""Tests for the icon loader."""

import pytest

from tests.conftest import (
    BROKEN_SVG,
    CIRCLE_SVG,
    GEOMETRY_ONLY_SVG,
    NO_NAMESPACE_SVG,
    NOT_SVG,
    OFFSET_VIEWBOX_SVG,
    SIZE_ONLY_SVG,
    WIDE_SVG,
)

from iconmosaic.engine.context import Rect
from iconmosaic.errors import MalformedMarkup
from iconmosaic.models.icon import IconSource
from iconmosaic.svg.parser import parse_icon, parse_length, parse_markup, parse_viewbox
from iconmosaic.svg.serializer import svg_tag


def test_parse_circle():
    desc = parse_icon(IconSource(locator="circle.svg", markup=CIRCLE_SVG), index=2)
    assert desc.index == 2
    assert desc.locator == "circle.svg"
    assert desc.bounds == Rect(0.0, 0.0, 24.0, 24.0)
    assert desc.root.tag == svg_tag("svg")


def test_viewbox_wins_over_size():
    assert parse_icon(IconSource(markup=WIDE_SVG)).bounds == Rect(0.0, 0.0, 100.0, 50.0)


def test_viewbox_with_commas_and_negative_origin():
    assert parse_icon(IconSource(markup=OFFSET_VIEWBOX_SVG)).bounds == Rect(-10.0, -10.0, 100.0, 50.0)


def test_size_fallback_strips_units():
    assert parse_icon(IconSource(markup=SIZE_ONLY_SVG)).bounds == Rect(0.0, 0.0, 32.0, 16.0)


def test_geometry_fallback_ignores_defs():
    bounds = parse_icon(IconSource(markup=GEOMETRY_ONLY_SVG)).bounds
    assert bounds.x == pytest.approx(10)
    assert bounds.y == pytest.approx(20)
    assert bounds.width == pytest.approx(100)
    assert bounds.height == pytest.approx(60)


def test_percentage_size_falls_through_to_geometry():
    markup = '<svg xmlns="http://www.w3.org/2000/svg" width="100%" height="100%"><rect x="2" y="3" width="4" height="5"/></svg>'
    assert parse_icon(IconSource(markup=markup)).bounds == Rect(2.0, 3.0, 4.0, 5.0)


def test_polygon_and_line_geometry():
    markup = (
        '<svg xmlns="http://www.w3.org/2000/svg">'
        '<polygon points="0,0 8,2 4,6"/><line x1="-1" y1="9" x2="3" y2="1"/></svg>'
    )
    assert parse_icon(IconSource(markup=markup)).bounds == Rect(-1.0, 0.0, 9.0, 9.0)


def test_empty_icon_uses_default_size():
    bounds = parse_icon(IconSource(markup='<svg xmlns="http://www.w3.org/2000/svg"/>')).bounds
    assert bounds == Rect(0.0, 0.0, 300.0, 150.0)


def test_missing_namespaces_are_declared():
    root = parse_markup(NO_NAMESPACE_SVG)
    assert root.tag == svg_tag("svg")
    assert root[0].tag == svg_tag("rect")

    root = parse_markup('<svg viewBox="0 0 4 4"><use xlink:href="#a"/></svg>')
    assert root[0].tag == svg_tag("use")


def test_xml_declaration_and_bom():
    markup = '\ufeff<?xml version="1.0" encoding="UTF-8"?>\n' + CIRCLE_SVG
    assert parse_icon(IconSource(markup=markup)).bounds == Rect(0.0, 0.0, 24.0, 24.0)


def test_malformed_markup_carries_icon_identity():
    with pytest.raises(MalformedMarkup) as exc:
        parse_icon(IconSource(locator="broken.svg", markup=BROKEN_SVG), index=3)
    assert exc.value.index == 3
    assert exc.value.locator == "broken.svg"
    assert exc.value.kind == "malformed_markup"


def test_non_svg_root_is_rejected():
    with pytest.raises(MalformedMarkup):
        parse_markup(NOT_SVG)


@pytest.mark.parametrize("vb", ["0 0 24", "0 0 a b", "0 0 24 24 24"])
def test_bad_viewbox_is_rejected(vb):
    with pytest.raises(MalformedMarkup):
        parse_viewbox(vb)


@pytest.mark.parametrize(
    "value,expected",
    [("24", 24.0), ("24px", 24.0), (" 1.5em ", 1.5), ("1e2", 100.0), ("50%", None), ("auto", None), (None, None)],
)
def test_parse_length(value, expected):
    assert parse_length(value) == expected


@pytest.mark.parametrize(
    "prolog",
    [
        "<!-- exported <svg> icon -->",
        '<?xml-stylesheet href="<svg>"?>\n',
        '<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG 1.1//EN" "http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">\n',
    ],
)
def test_root_namespace_injected_after_prolog(prolog):
    desc = parse_icon(IconSource(markup=prolog + NO_NAMESPACE_SVG))
    assert desc.root.tag == svg_tag("svg")
    assert desc.bounds == Rect(0.0, 0.0, 10.0, 10.0)
