"""Icon input models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class IconSource(BaseModel):
    """One icon as handed over by a source provider."""

    model_config = ConfigDict(frozen=True)

    locator: str = Field(default="", description="Where the icon came from (diagnostics only)")
    markup: str = Field(..., description="Raw SVG code")
