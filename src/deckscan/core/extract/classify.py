from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from deckscan.core.errors import ShapeTextError
from deckscan.core.extract.shapes import Shape
from deckscan.core.models import Issue, IssueSink

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 50


@dataclass(frozen=True)
class Classification:
    title: Optional[str]
    paragraphs: Tuple[str, ...]


# Strategy: ordered text fragments of one slide -> title + paragraphs.
TextClassifier = Callable[[Sequence[str]], Classification]


def first_short_title(fragments: Sequence[str], *, threshold: int = TITLE_MAX_LENGTH) -> Classification:
    """First fragment shorter than `threshold` characters is the title; the rest are paragraphs.

    Deliberately not content-aware: an empty fragment is shorter than the
    threshold and claims the title when it comes first.
    """
    title: Optional[str] = None
    paragraphs: List[str] = []
    for text in fragments:
        if title is None and len(text) < threshold:
            title = text
        else:
            paragraphs.append(text)
    return Classification(title=title, paragraphs=tuple(paragraphs))


def make_first_short_title(threshold: int) -> TextClassifier:
    if threshold < 1:
        raise ValueError(f"title threshold must be >= 1, got {threshold}")

    def _classify(fragments: Sequence[str]) -> Classification:
        return first_short_title(fragments, threshold=threshold)

    return _classify


def read_fragments(
    shapes: Iterable[Shape],
    *,
    slide_number: int,
    on_issue: Optional[IssueSink] = None,
) -> List[str]:
    """Text of each text-bearing shape in order; unreadable shapes are skipped."""
    out: List[str] = []
    for shp in shapes:
        try:
            out.append(shp.text())
        except ShapeTextError as e:
            logger.warning("Skipping shape text | slide=%d shape=%d error=%s", slide_number, shp.index, e.reason)
            if on_issue is not None:
                on_issue(Issue("shape_text", slide_number, shp.index, str(e)))
    return out


def classify_shapes(
    shapes: Iterable[Shape],
    classifier: TextClassifier = first_short_title,
    *,
    slide_number: int,
    on_issue: Optional[IssueSink] = None,
) -> Classification:
    fragments = read_fragments(shapes, slide_number=slide_number, on_issue=on_issue)
    return classifier(fragments)
