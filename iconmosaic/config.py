"""Application configuration from environment variables."""

from __future__ import annotations

from typing import Any

from pydantic_settings import BaseSettings, SettingsConfigDict

from iconmosaic.engine.config import PipelineConfig
from iconmosaic.models.layout import LayoutSpec, OutputFormat


class Settings(BaseSettings):
    env: str = "development"
    log_level: str = "info"

    # Layout defaults
    cell_size: int = 512
    cell_gap: int = 256
    padding: int | None = None
    border_cell_size: int | None = None
    background_color: str = "#f0f0f0"
    border_color: str = "#ffffff80"

    # Output
    output_format: OutputFormat = OutputFormat.RASTER
    output_size: int | None = None
    compact_layout: bool = False
    max_workers: int | None = None

    model_config = SettingsConfigDict(
        env_prefix="ICONMOSAIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def layout_spec(self, **overrides: Any) -> LayoutSpec:
        """Validated LayoutSpec from these settings; ``None`` overrides are ignored."""
        values: dict[str, Any] = {
            "cell_size": self.cell_size,
            "cell_gap": self.cell_gap,
            "padding": self.padding,
            "border_cell_size": self.border_cell_size,
            "background_color": self.background_color,
            "border_color": self.border_color,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return LayoutSpec.model_validate(values)

    def pipeline_config(self, **overrides: Any) -> PipelineConfig:
        values: dict[str, Any] = {
            "output_format": self.output_format,
            "output_size": self.output_size,
            "compact_layout": self.compact_layout,
            "max_workers": self.max_workers,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return PipelineConfig(**values)
