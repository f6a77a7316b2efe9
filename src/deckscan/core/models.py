from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

SCHEMA_VERSION = "0.1"


@dataclass(frozen=True)
class ImageRecord:
    """One embedded picture, persisted under `src` and carried inline as base64."""

    src: str
    base64: str
    # Reserved: never populated by extraction.
    alt: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"src": self.src}
        if self.alt is not None:
            out["alt"] = self.alt
        if self.width is not None:
            out["width"] = self.width
        if self.height is not None:
            out["height"] = self.height
        out["base64"] = self.base64
        return out


@dataclass(frozen=True)
class SlideRecord:
    """Extraction result for one slide. `slide_number` is the 1-based traversal position."""

    slide_number: int
    title: Optional[str] = None
    paragraphs: Tuple[str, ...] = ()
    images: Tuple[ImageRecord, ...] = ()
    # Reserved: never populated by extraction.
    subheading: Optional[str] = None
    speaker_notes: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"slide_number": self.slide_number}
        if self.title is not None:
            out["title"] = self.title
        if self.subheading is not None:
            out["subheading"] = self.subheading
        out["paragraphs"] = list(self.paragraphs)
        out["images"] = [img.to_dict() for img in self.images]
        if self.speaker_notes is not None:
            out["speaker_notes"] = self.speaker_notes
        return out


@dataclass(frozen=True)
class Issue:
    """A recovered per-shape failure: kind is "shape_text" or "image"."""

    kind: str
    slide_number: int
    shape_index: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "slide_number": self.slide_number,
            "shape_index": self.shape_index,
            "message": self.message,
        }


IssueSink = Callable[[Issue], None]


@dataclass(frozen=True)
class ExtractionResult:
    """Complete, possibly degraded, outcome of one extraction call.

    Fatal failures never produce a result; they raise `OpenError`.
    """

    slides: Tuple[SlideRecord, ...] = ()
    issues: Tuple[Issue, ...] = field(default=())

    @property
    def degraded(self) -> bool:
        return bool(self.issues)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": SCHEMA_VERSION,
            "slides": [s.to_dict() for s in self.slides],
            "issues": [i.to_dict() for i in self.issues],
        }
