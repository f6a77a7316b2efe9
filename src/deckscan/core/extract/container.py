from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, Iterator, Tuple, Union

from pptx import Presentation

from deckscan.core.errors import OpenError

Source = Union[str, Path, IO[bytes]]


def _describe(source: Source) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return getattr(source, "name", None) or "<stream>"


def _load(fh: IO[bytes], label: str) -> Any:
    try:
        return Presentation(fh)
    except Exception as e:
        # python-pptx surfaces bad input as PackageNotFoundError, BadZipFile,
        # KeyError (missing part) or lxml syntax errors.
        raise OpenError(label, f"{type(e).__name__}: {e}") from e


@contextmanager
def open_container(source: Source) -> Iterator[Tuple[Any, ...]]:
    """Open a presentation and yield its slides in document order.

    A path is opened here and closed on every exit path, including when the
    caller raises inside the block. A caller-supplied stream is left open.
    """
    label = _describe(source)

    if not isinstance(source, (str, Path)):
        prs = _load(source, label)
        yield tuple(prs.slides)
        return

    try:
        fh = open(Path(source), "rb")
    except OSError as e:
        raise OpenError(label, f"{type(e).__name__}: {e}") from e

    with fh:
        prs = _load(fh, label)
        yield tuple(prs.slides)


def slide_count(source: Source) -> int:
    with open_container(source) as slides:
        return len(slides)
