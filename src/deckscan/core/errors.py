"""Error taxonomy for deck extraction.

Only `OpenError` escapes `extract_slides`; the per-shape errors are caught
inside the pipeline and recorded as issues on the result.
"""
from __future__ import annotations

from typing import Optional


class DeckscanError(Exception):
    """Base class for all extraction errors."""


class OpenError(DeckscanError):
    """The presentation could not be opened or parsed as a .pptx package."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"failed to open presentation: {source} ({reason})")
        self.source = source
        self.reason = reason


class ShapeTextError(DeckscanError):
    def __init__(self, slide_number: int, shape_index: int, reason: str) -> None:
        super().__init__(f"slide {slide_number} shape {shape_index}: text unavailable ({reason})")
        self.slide_number = slide_number
        self.shape_index = shape_index
        self.reason = reason


class ImageExtractionError(DeckscanError):
    def __init__(
        self,
        slide_number: int,
        shape_index: int,
        reason: str,
        filename: Optional[str] = None,
    ) -> None:
        where = f" [{filename}]" if filename else ""
        super().__init__(f"slide {slide_number} shape {shape_index}{where}: image skipped ({reason})")
        self.slide_number = slide_number
        self.shape_index = shape_index
        self.reason = reason
        self.filename = filename
