"""Pipeline configuration: output and scheduling options."""

from __future__ import annotations

from dataclasses import dataclass

from iconmosaic.models.layout import OutputFormat


@dataclass(frozen=True)
class PipelineConfig:
    """Controls what the pipeline produces and how per-icon work is scheduled."""

    output_format: OutputFormat = OutputFormat.RASTER
    # Square bitmap edge; None = the computed canvas size
    output_size: int | None = None

    # Dropped icons keep their grid slot unless compaction is requested
    compact_layout: bool = False

    # Thread pool size for per-icon preparation (None = executor default)
    max_workers: int | None = None

    # Per-icon identifier prefix; formatted with the icon index
    id_prefix_template: str = "icon-{index}-"

    def id_prefix(self, index: int) -> str:
        return self.id_prefix_template.format(index=index)
