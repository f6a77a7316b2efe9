from __future__ import annotations

import base64
import hashlib
import logging
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Union

from deckscan.core.errors import ImageExtractionError
from deckscan.core.extract.shapes import Shape
from deckscan.core.models import ImageRecord, Issue, IssueSink

logger = logging.getLogger(__name__)

NAMING_POLICIES = ("basename", "sha256")


def normalize_filename(name: str) -> str:
    """Base component of an embedded name; both / and \\ count as separators."""
    base = PurePosixPath((name or "").replace("\\", "/")).name
    return base or "image"


def encode_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


class ImageStore:
    """Writable directory that extracted images are persisted into.

    naming="basename" keeps the embedded file name; a later picture with the
    same name overwrites the earlier file (last write wins, no detection).
    naming="sha256" names files by content so equal names mean equal bytes.
    `prefix` namespaces every file written through this store.
    """

    def __init__(self, directory: Union[str, Path], *, naming: str = "basename", prefix: str = "") -> None:
        if naming not in NAMING_POLICIES:
            raise ValueError(f"unknown naming policy: {naming!r} (use one of {', '.join(NAMING_POLICIES)})")
        # File names stay base names inside `directory`.
        if "/" in prefix or "\\" in prefix or prefix in (".", ".."):
            raise ValueError(f"image prefix must not contain a path: {prefix!r}")
        self.directory = Path(directory)
        self.naming = naming
        self.prefix = prefix

    def name_for(self, embedded_name: str, blob: bytes) -> str:
        base = normalize_filename(embedded_name)
        if self.naming == "sha256":
            base = hashlib.sha256(blob).hexdigest() + PurePosixPath(base).suffix.lower()
        return f"{self.prefix}{base}"

    def path(self, name: str) -> Path:
        return self.directory / name

    def write(self, name: str, blob: bytes) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        p = self.path(name)
        p.write_bytes(blob)
        return p

    def read(self, name: str) -> bytes:
        return self.path(name).read_bytes()


def _extract_one(shp: Shape, store: Optional[ImageStore], slide_number: int) -> ImageRecord:
    blob, embedded_name = shp.picture()

    if store is None:
        # In-memory only: nothing is written, src is still the normalized name.
        return ImageRecord(src=normalize_filename(embedded_name), base64=encode_base64(blob))

    name = store.name_for(embedded_name, blob)
    try:
        store.write(name, blob)
        persisted = store.read(name)
        encoded = encode_base64(persisted)
    except (OSError, ValueError) as e:
        raise ImageExtractionError(slide_number, shp.index, f"{type(e).__name__}: {e}", filename=name) from e
    return ImageRecord(src=name, base64=encoded)


def extract_images(
    shapes: Iterable[Shape],
    store: Optional[ImageStore],
    *,
    slide_number: int,
    on_issue: Optional[IssueSink] = None,
) -> List[ImageRecord]:
    """Persist and encode each picture in order; failed pictures are skipped and reported."""
    out: List[ImageRecord] = []
    for shp in shapes:
        try:
            rec = _extract_one(shp, store, slide_number)
        except ImageExtractionError as e:
            logger.warning(
                "Skipping image | slide=%d shape=%d file=%s error=%s",
                slide_number,
                shp.index,
                e.filename or "-",
                e.reason,
            )
            if on_issue is not None:
                on_issue(Issue("image", slide_number, shp.index, str(e)))
            continue
        out.append(rec)
    return out
