"""Shared test fixtures."""

from __future__ import annotations

import pytest


# Stroke icons (Lucide style: presentation attributes on the root)

CIRCLE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <circle cx="12" cy="12" r="10"/>
</svg>'''

SMILEY_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <circle cx="12" cy="12" r="10"/>
  <circle cx="8" cy="9" r="1"/>
  <circle cx="16" cy="9" r="1"/>
  <path d="M8 14s1.5 2 4 2 4-2 4-2"/>
</svg>'''

HOME_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" viewBox="0 0 24 24" fill="none" stroke="currentColor" stroke-width="2" stroke-linecap="round" stroke-linejoin="round">
  <path d="M15 21v-8a1 1 0 0 0-1-1h-4a1 1 0 0 0-1 1v8"/>
  <path d="M3 10a2 2 0 0 1 .709-1.528l7-5.999a2 2 0 0 1 2.582 0l7 5.999A2 2 0 0 1 21 10v9a2 2 0 0 1-2 2H5a2 2 0 0 1-2-2z"/>
</svg>'''


# Icons with internal identifiers

GRADIENT_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">
  <defs>
    <linearGradient id="grad" x1="0" y1="0" x2="1" y2="1">
      <stop offset="0" stop-color="#4ECDC4"/>
      <stop offset="1" stop-color="#FF6B6B"/>
    </linearGradient>
  </defs>
  <circle cx="50" cy="50" r="45" fill="url(#grad)"/>
</svg>'''

CLIP_USE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" viewBox="0 0 64 64">
  <defs>
    <clipPath id="clip"><rect x="0" y="0" width="32" height="64"/></clipPath>
    <circle id="dot" cx="32" cy="32" r="30"/>
  </defs>
  <use xlink:href="#dot" fill="#45B7D1" clip-path="url(#clip)"/>
  <use href="#dot" fill="none" stroke="#333" style="filter: url('#missing')"/>
</svg>'''

STYLED_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 48 48" aria-labelledby="t1">
  <style>
    .cls-1 { fill: url(#shade); }
    #accent, .cls-2 { fill: #009edb; }
  </style>
  <defs>
    <radialGradient id="shade"><stop offset="0" stop-color="#fff"/></radialGradient>
  </defs>
  <rect class="cls-1 outline" x="4" y="4" width="40" height="40"/>
  <circle id="accent" class="cls-2" cx="24" cy="24" r="8"/>
</svg>'''


# Geometry edge cases

WIDE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 50">
  <rect x="0" y="0" width="100" height="50" fill="#4ECDC4"/>
</svg>'''

OFFSET_VIEWBOX_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="-10,-10,100,50">
  <rect x="-10" y="-10" width="100" height="50" fill="#FF6B6B"/>
</svg>'''

SIZE_ONLY_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" width="32px" height="16px">
  <rect width="32" height="16" fill="#FFEAA7"/>
</svg>'''

GEOMETRY_ONLY_SVG = '''<svg xmlns="http://www.w3.org/2000/svg">
  <defs><rect x="-500" y="-500" width="10" height="10"/></defs>
  <path d="M10 20 L110 70"/>
  <circle cx="50" cy="50" r="30"/>
</svg>'''

ZERO_WIDTH_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 0 24">
  <path d="M0 0 L0 24"/>
</svg>'''

NO_NAMESPACE_SVG = '''<svg viewBox="0 0 10 10"><rect width="10" height="10" fill="red"/></svg>'''

BROKEN_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24"><path d="M0 0"'''

NOT_SVG = "<not-svg/>"

# Solid squares for pixel checks
RED_SQUARE_SVG = '''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10">
  <rect x="0" y="0" width="10" height="10" fill="#ff0000"/>
</svg>'''


@pytest.fixture
def circle_svg() -> str:
    return CIRCLE_SVG


@pytest.fixture
def gradient_svg() -> str:
    return GRADIENT_SVG


@pytest.fixture
def styled_svg() -> str:
    return STYLED_SVG


@pytest.fixture
def four_icons() -> list[str]:
    return [CIRCLE_SVG, SMILEY_SVG, HOME_SVG, GRADIENT_SVG]
