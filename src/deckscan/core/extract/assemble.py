from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from deckscan.core.extract.classify import TextClassifier, classify_shapes, first_short_title
from deckscan.core.extract.container import Source, open_container
from deckscan.core.extract.images import ImageStore, extract_images
from deckscan.core.extract.shapes import picture_shapes, text_shapes, walk_shapes
from deckscan.core.models import ExtractionResult, Issue, SlideRecord

logger = logging.getLogger(__name__)


def extract_slides(
    source: Source,
    image_dir: Optional[Union[str, Path]] = None,
    *,
    classifier: Optional[TextClassifier] = None,
    store: Optional[ImageStore] = None,
) -> ExtractionResult:
    """Extract every slide of a presentation into ordered SlideRecords.

    - slide_number: 1-based traversal position
    - images go to `store`, or to ImageStore(image_dir); with neither they stay in memory
    - raises OpenError when the document cannot be opened; per-shape failures
      are skipped and reported in `ExtractionResult.issues`
    """
    if store is None and image_dir is not None:
        store = ImageStore(image_dir)
    classify = classifier or first_short_title

    issues: List[Issue] = []
    slides: List[SlideRecord] = []

    with open_container(source) as container:
        for slide_idx, slide in enumerate(container, start=1):
            shapes = walk_shapes(slide, slide_number=slide_idx)

            cls = classify_shapes(
                text_shapes(shapes),
                classify,
                slide_number=slide_idx,
                on_issue=issues.append,
            )
            images = extract_images(
                picture_shapes(shapes),
                store,
                slide_number=slide_idx,
                on_issue=issues.append,
            )

            slides.append(
                SlideRecord(
                    slide_number=slide_idx,
                    title=cls.title,
                    paragraphs=cls.paragraphs,
                    images=tuple(images),
                )
            )
            logger.debug(
                "Slide extracted | slide=%d shapes=%d paragraphs=%d images=%d title=%s",
                slide_idx,
                len(shapes),
                len(cls.paragraphs),
                len(images),
                cls.title is not None,
            )

    logger.info("Presentation extracted | slides=%d issues=%d", len(slides), len(issues))
    return ExtractionResult(slides=tuple(slides), issues=tuple(issues))


def parse_pptx(
    source: Source,
    image_dir: Optional[Union[str, Path]] = None,
    **kwargs,
) -> List[SlideRecord]:
    return list(extract_slides(source, image_dir, **kwargs).slides)
