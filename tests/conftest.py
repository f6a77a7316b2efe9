"""
pytest fixtures: decks are built on the fly with python-pptx.
"""
from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import Callable, Sequence, Tuple, Union

import pytest
from PIL import Image
from pptx import Presentation
from pptx.enum.shapes import MSO_AUTO_SHAPE_TYPE
from pptx.util import Inches

from deckscan.core.settings import get_settings

# ("text", "Hello") | ("image", b"...png...") | ("rect", None)
Item = Tuple[str, Union[str, bytes, None]]

BLANK_LAYOUT = 6


def make_png(color: Tuple[int, int, int] = (255, 0, 0), size: Tuple[int, int] = (8, 8)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


def build_deck(path: Path, slides: Sequence[Sequence[Item]]) -> Path:
    prs = Presentation()
    layout = prs.slide_layouts[BLANK_LAYOUT]
    for items in slides:
        slide = prs.slides.add_slide(layout)
        top = Inches(0.2)
        for kind, payload in items:
            if kind == "text":
                box = slide.shapes.add_textbox(Inches(0.5), top, Inches(8), Inches(0.6))
                box.text_frame.text = payload
            elif kind == "image":
                slide.shapes.add_picture(io.BytesIO(payload), Inches(0.5), top, width=Inches(1))
            elif kind == "rect":
                slide.shapes.add_shape(MSO_AUTO_SHAPE_TYPE.RECTANGLE, Inches(0.5), top, Inches(1), Inches(0.5))
            else:
                raise ValueError(f"unknown item kind: {kind}")
            top += Inches(0.7)
    prs.save(str(path))
    return path


@pytest.fixture
def png() -> Callable[..., bytes]:
    return make_png


@pytest.fixture
def deck(tmp_path: Path) -> Callable[..., Path]:
    """Factory: deck([[("text", "Title")], []], name="x.pptx") -> path."""

    def _make(slides: Sequence[Sequence[Item]], name: str = "deck.pptx") -> Path:
        return build_deck(tmp_path / name, slides)

    return _make


@pytest.fixture
def image_dir(tmp_path: Path) -> Path:
    d = tmp_path / "images"
    d.mkdir()
    return d


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """No stray .env or DECKSCAN_* variables; fresh settings per test."""
    monkeypatch.chdir(tmp_path)
    for key in list(os.environ):
        if key.upper().startswith("DECKSCAN_"):
            monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _restore_root_logging():
    """The CLI installs its own root handler; undo it after each test."""
    root = logging.getLogger()
    before, level = list(root.handlers), root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) is logging.StreamHandler and handler not in before:
            root.removeHandler(handler)
    root.setLevel(level)
