"""Composite engine: layout, fit, clip, assembly and orchestration."""

from iconmosaic.engine.assembler import assemble
from iconmosaic.engine.clip import compose_cell
from iconmosaic.engine.config import PipelineConfig
from iconmosaic.engine.context import CompositeCanvas, CompositeResult, IconTransform, Rect
from iconmosaic.engine.fit import fit
from iconmosaic.engine.layout import GridLayout, compute_layout
from iconmosaic.engine.pipeline import Pipeline, composite, create_pipeline

__all__ = [
    "assemble",
    "compose_cell",
    "PipelineConfig",
    "CompositeCanvas",
    "CompositeResult",
    "IconTransform",
    "Rect",
    "fit",
    "GridLayout",
    "compute_layout",
    "Pipeline",
    "composite",
    "create_pipeline",
]
