"""iconmosaic: composite SVG icons into a square grid of circular cells."""

from iconmosaic.engine.config import PipelineConfig
from iconmosaic.engine.context import CompositeResult, SkippedIcon
from iconmosaic.engine.pipeline import Pipeline, composite, create_pipeline
from iconmosaic.errors import AssemblyFailure, CompositeError, EmptyInput, InvalidGeometry, MalformedMarkup
from iconmosaic.models import IconSource, LayoutSpec, OutputFormat, Rgba

__version__ = "0.1.0"

__all__ = [
    "PipelineConfig",
    "CompositeResult",
    "SkippedIcon",
    "Pipeline",
    "composite",
    "create_pipeline",
    "AssemblyFailure",
    "CompositeError",
    "EmptyInput",
    "InvalidGeometry",
    "MalformedMarkup",
    "IconSource",
    "LayoutSpec",
    "OutputFormat",
    "Rgba",
]
