"""Presentation extraction package.

Public API:
- `extract_slides(source, image_dir=None, *, classifier=None, store=None)`
- `parse_pptx(source, image_dir=None, **kwargs)`

Keep this module as a thin re-export layer so callers can import a stable path:

    from deckscan.core.extract import extract_slides
"""

from __future__ import annotations

from .assemble import extract_slides, parse_pptx
from .classify import Classification, TextClassifier, first_short_title, make_first_short_title
from .container import open_container, slide_count
from .images import ImageStore

__all__ = [
    "Classification",
    "ImageStore",
    "TextClassifier",
    "extract_slides",
    "first_short_title",
    "make_first_short_title",
    "open_container",
    "parse_pptx",
    "slide_count",
]
