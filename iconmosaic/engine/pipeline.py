"""Pipeline orchestrator: per-icon map on a thread pool, then an ordered reduce.

    sources ─► prepare (parse → sanitize → namespace → fit)   parallel, keyed by index
            ─► layout ─► compose cells ─► assemble ─► serialize ─► rasterize
"""

from __future__ import annotations

import copy
import dataclasses
import logging
import time
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor

from iconmosaic.engine.assembler import assemble
from iconmosaic.engine.clip import compose_cell
from iconmosaic.engine.config import PipelineConfig
from iconmosaic.engine.context import CompositeResult, IconFragment, SkippedIcon
from iconmosaic.engine.fit import fit
from iconmosaic.engine.layout import GridLayout, compute_layout
from iconmosaic.errors import AssemblyFailure, EmptyInput, IconError
from iconmosaic.models.icon import IconSource
from iconmosaic.models.layout import LayoutSpec, OutputFormat
from iconmosaic.svg.namespacer import namespace_tree
from iconmosaic.svg.parser import parse_icon
from iconmosaic.svg.sanitizer import sanitize_tree
from iconmosaic.svg.serializer import serialize_document

logger = logging.getLogger(__name__)

SourceLike = IconSource | tuple[str, str] | str


def coerce_source(item: SourceLike, index: int) -> IconSource:
    """Accept IconSource, ``(locator, markup)`` pairs or bare markup."""
    if isinstance(item, IconSource):
        return item
    if isinstance(item, tuple):
        locator, markup = item
        return IconSource(locator=locator, markup=markup)
    return IconSource(locator=f"#{index}", markup=item)


def prepare_icon(source: IconSource, index: int, spec: LayoutSpec, config: PipelineConfig) -> IconFragment:
    """Per-icon pure stage. Raises MalformedMarkup / InvalidGeometry."""
    descriptor = parse_icon(source, index)
    try:
        transform = fit(descriptor.bounds, spec.cell_size)
    except IconError as e:
        e.index, e.locator = index, source.locator
        raise

    element = copy.deepcopy(descriptor.root)
    notes = sanitize_tree(element)
    prefix = config.id_prefix(index)
    renames = namespace_tree(element, prefix)
    return IconFragment(
        index=index,
        locator=source.locator,
        prefix=prefix,
        element=element,
        bounds=descriptor.bounds,
        transform=transform,
        id_map=dict(renames.ids),
        notes=notes,
    )


class Pipeline:
    """Orchestrates the composite pipeline."""

    def __init__(
        self,
        spec: LayoutSpec | None = None,
        config: PipelineConfig | None = None,
    ) -> None:
        self.spec = spec or LayoutSpec()
        self.config = config or PipelineConfig()

    def run(self, sources: Iterable[SourceLike]) -> CompositeResult:
        """Composite every source into one canvas.

        Raises EmptyInput when there are no sources and AssemblyFailure when
        every icon was dropped. Dropped icons are returned as warnings.
        """
        start = time.perf_counter()
        items = [coerce_source(s, i) for i, s in enumerate(sources)]
        if not items:
            logger.info("No icons supplied, nothing to composite")
            raise EmptyInput()

        t0 = time.perf_counter()
        fragments, warnings = self.prepare_all(items)
        logger.debug("  prepare: %d icons in %.1fms", len(items), (time.perf_counter() - t0) * 1000)

        if not fragments:
            raise AssemblyFailure(f"All {len(items)} icons were dropped; nothing left to composite")

        layout, fragments = self.place(fragments, len(items))

        t0 = time.perf_counter()
        canvas = assemble(layout, self.spec.background_color, fragments)
        document = serialize_document(canvas.root)
        logger.debug("  assemble: %.1fms", (time.perf_counter() - t0) * 1000)

        image = None
        if self.config.output_format == OutputFormat.RASTER:
            from iconmosaic.utils.rasterizer import render

            t0 = time.perf_counter()
            image = render(document, self.config.output_size)
            logger.debug("  rasterize: %dx%d in %.1fms", image.width, image.height, (time.perf_counter() - t0) * 1000)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Composite complete: %d/%d icons on a %dx%d grid (%dpx) in %.0fms",
            len(fragments),
            len(items),
            layout.grid_size,
            layout.grid_size,
            layout.canvas_size,
            total,
        )
        return CompositeResult(canvas=canvas, document=document, image=image, warnings=warnings)

    def prepare_all(self, items: list[IconSource]) -> tuple[list[IconFragment], list[SkippedIcon]]:
        """Run ``prepare_icon`` for every source; results come back in index order."""
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            outcomes = list(pool.map(self._prepare_one, range(len(items)), items))

        fragments = [o for o in outcomes if isinstance(o, IconFragment)]
        warnings = [o for o in outcomes if isinstance(o, SkippedIcon)]
        return fragments, warnings

    def _prepare_one(self, index: int, source: IconSource) -> IconFragment | SkippedIcon:
        try:
            return prepare_icon(source, index, self.spec, self.config)
        except IconError as e:
            logger.warning("  icon %d (%s) skipped: %s", index, source.locator or "-", e)
            return SkippedIcon(index=index, locator=source.locator, reason=e.kind, message=str(e))

    def place(self, fragments: list[IconFragment], total: int) -> tuple[GridLayout, list[IconFragment]]:
        """Assign grid cells. Reserve-and-skip keeps slots of dropped icons empty.

        Returns placed copies; the input fragments are not modified.
        """
        if self.config.compact_layout:
            layout = compute_layout(len(fragments), self.spec)
            slots = range(len(fragments))
        else:
            layout = compute_layout(total, self.spec)
            slots = (f.index for f in fragments)

        placed = []
        for slot, frag in zip(slots, fragments):
            placement = layout.placement(slot)
            decoration = compose_cell(placement, frag.transform, self.spec)
            placed.append(dataclasses.replace(frag, placement=placement, decoration=decoration))
        return layout, placed


def create_pipeline(spec: LayoutSpec | None = None, config: PipelineConfig | None = None) -> Pipeline:
    """Factory function for creating a pipeline instance."""
    return Pipeline(spec=spec, config=config)


def composite(
    sources: Iterable[SourceLike],
    spec: LayoutSpec | None = None,
    config: PipelineConfig | None = None,
) -> CompositeResult:
    """One-shot convenience wrapper around ``Pipeline.run``."""
    return create_pipeline(spec, config).run(sources)
