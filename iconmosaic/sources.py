"""File-system icon source provider."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from iconmosaic.models.icon import IconSource

logger = logging.getLogger(__name__)


def collect_svg_paths(inputs: Iterable[str | Path]) -> list[Path]:
    """Expand files and directories (sorted ``*.svg``) into an ordered path list."""
    paths: list[Path] = []
    for item in inputs:
        p = Path(item)
        if p.is_dir():
            found = sorted(f for f in p.glob("*.svg") if f.is_file())
            logger.debug("Found %d SVGs in %s", len(found), p)
            paths.extend(found)
        elif p.is_file():
            paths.append(p)
        else:
            raise FileNotFoundError(f"No such file or directory: {p}")
    return paths


def load_sources(inputs: Iterable[str | Path]) -> list[IconSource]:
    """Read every SVG file into an IconSource, preserving order."""
    sources = []
    for path in collect_svg_paths(inputs):
        markup = path.read_text(encoding="utf-8", errors="replace")
        sources.append(IconSource(locator=str(path), markup=markup))
    logger.info("Found %d icons.", len(sources))
    return sources
