"""
Tests for record serialization and the slides schema.
"""
import dataclasses

import pytest

from deckscan.core.models import ExtractionResult, ImageRecord, Issue, SlideRecord
from deckscan.core.validate.schema_validate import validate_extraction


def test_optional_fields_omitted():
    rec = SlideRecord(slide_number=1, paragraphs=("p",), images=(ImageRecord(src="a.png", base64="AAAA"),))

    assert rec.to_dict() == {
        "slide_number": 1,
        "paragraphs": ["p"],
        "images": [{"src": "a.png", "base64": "AAAA"}],
    }


def test_empty_title_is_present():
    assert SlideRecord(slide_number=2, title="").to_dict()["title"] == ""


def test_records_are_immutable():
    rec = SlideRecord(slide_number=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        rec.title = "changed"


def test_result_degraded_flag_and_schema():
    issue = Issue("image", 1, 0, "slide 1 shape 0: image skipped (boom)")
    result = ExtractionResult(slides=(SlideRecord(slide_number=1, title="T"),), issues=(issue,))

    assert result.degraded
    assert not ExtractionResult().degraded
    assert validate_extraction(result.to_dict()) == []


def test_schema_rejects_directory_in_src():
    data = ExtractionResult(
        slides=(SlideRecord(slide_number=1, images=(ImageRecord(src="media/a.png", base64="AAAA"),)),)
    ).to_dict()

    errs = validate_extraction(data)
    assert len(errs) == 1
    assert "['src']" in errs[0]
