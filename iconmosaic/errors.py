"""Error taxonomy for the composite pipeline.

Per-icon errors (InvalidGeometry, MalformedMarkup) are caught by the pipeline
and turned into warnings. EmptyInput and AssemblyFailure are terminal.
"""

from __future__ import annotations


class CompositeError(Exception):
    """Base class for every error raised by iconmosaic."""


class EmptyInput(CompositeError):
    """No icons were supplied, so there is nothing to composite."""

    def __init__(self, message: str = "No icons to composite") -> None:
        super().__init__(message)


class IconError(CompositeError):
    """An error tied to a single icon. The icon is dropped, the batch continues."""

    kind = "icon_error"

    def __init__(self, message: str, *, index: int | None = None, locator: str = "") -> None:
        super().__init__(message)
        self.index = index
        self.locator = locator


class InvalidGeometry(IconError):
    """Icon bounds have zero (or non-finite) area."""

    kind = "invalid_geometry"


class MalformedMarkup(IconError):
    """Icon markup cannot be parsed as an SVG document."""

    kind = "malformed_markup"


class AssemblyFailure(CompositeError):
    """Every icon was dropped, an empty composite is meaningless."""
