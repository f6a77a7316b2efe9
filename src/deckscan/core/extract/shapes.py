from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Tuple

from pptx.enum.shapes import MSO_SHAPE_TYPE
from pptx.shapes.picture import Picture

from deckscan.core.errors import ImageExtractionError, ShapeTextError


def _has_text(shp: Any) -> bool:
    try:
        return bool(getattr(shp, "has_text_frame", False))
    except Exception:
        return False


def _has_picture(shp: Any) -> bool:
    """Picture shapes, including filled picture placeholders, carry an embedded image."""
    if isinstance(shp, Picture):
        return True
    try:
        return shp.shape_type == MSO_SHAPE_TYPE.PICTURE
    except Exception:
        return False


def _image_part_name(shp: Any) -> str:
    """Name of the image part inside the package, e.g. /ppt/media/image3.png.

    python-pptx reports every loaded image as "image.<ext>", so the part name
    is the only name that distinguishes pictures.
    """
    try:
        rId = shp._element.blip_rId
        if rId:
            return str(shp.part.related_part(rId).partname)
    except Exception:
        pass
    return shp.image.filename or ""


@dataclass(frozen=True)
class Shape:
    """One visual element of a slide, described by its capabilities.

    `index` is the 0-based position in the slide's shape tree.
    """

    slide_number: int
    index: int
    name: str
    has_text: bool
    has_picture: bool
    _shape: Any = field(repr=False, compare=False, default=None)

    def text(self) -> str:
        try:
            return self._shape.text_frame.text
        except Exception as e:
            raise ShapeTextError(self.slide_number, self.index, f"{type(e).__name__}: {e}") from e

    def picture(self) -> Tuple[bytes, str]:
        """Return (raw image bytes, embedded file name)."""
        try:
            blob = self._shape.image.blob
            name = _image_part_name(self._shape)
        except Exception as e:
            raise ImageExtractionError(self.slide_number, self.index, f"{type(e).__name__}: {e}") from e
        return bytes(blob), name


def walk_shapes(slide: Any, *, slide_number: int) -> List[Shape]:
    """Project the slide's top-level shape tree in document order.

    Groups are reported as a single shape; nothing is filtered or reordered.
    """
    out: List[Shape] = []
    for idx, shp in enumerate(slide.shapes):
        try:
            name = shp.name or ""
        except Exception:
            name = ""
        out.append(
            Shape(
                slide_number=slide_number,
                index=idx,
                name=name,
                has_text=_has_text(shp),
                has_picture=_has_picture(shp),
                _shape=shp,
            )
        )
    return out


def text_shapes(shapes: Iterable[Shape]) -> List[Shape]:
    return [s for s in shapes if s.has_text]


def picture_shapes(shapes: Iterable[Shape]) -> List[Shape]:
    return [s for s in shapes if s.has_picture]
