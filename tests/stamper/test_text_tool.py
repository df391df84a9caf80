from __future__ import annotations

from io import BytesIO

import pytest
from pypdf import PdfReader

from ultipdf import add_text
from ultipdf.exceptions import InvalidOptionError, MissingInputError
from ultipdf.tools import load_builtin_plugins
from ultipdf.tools.common.pipeline import run_tool
from ultipdf.tools.stamper.text import TextStyle, resolve_font


def setup_module(module):
    load_builtin_plugins()


def _texts(data: bytes) -> list[str]:
    return [page.extract_text() or "" for page in PdfReader(BytesIO(data)).pages]


def test_add_text_to_selected_pages(pdf_factory, read_widths) -> None:
    source = pdf_factory(3)
    result = add_text(source, "CONFIDENTIAL", pages=[1, 3], rotation=0, fontSize=12)

    texts = _texts(result.data)
    assert "CONFIDENTIAL" in texts[0]
    assert "CONFIDENTIAL" not in texts[1]
    assert "CONFIDENTIAL" in texts[2]
    assert read_widths(result.data) == read_widths(source)
    assert result.details["modifiedPages"] == [1, 3]
    assert result.details["totalPages"] == 3
    assert result.message == "Added text to 2 page(s)"
    assert result.filename.startswith("watermarked_")


def test_add_text_echoes_default_styling(sample_pdf: bytes) -> None:
    result = run_tool("watermark", {"pdf": sample_pdf, "text": "DRAFT"})
    assert result.details == {
        "text": "DRAFT",
        "position": "center",
        "fontSize": 40,
        "color": "#888888",
        "opacity": 0.3,
        "rotation": -45,
        "font": "Helvetica-Bold",
        "totalPages": 5,
        "modifiedPages": [1, 2, 3, 4, 5],
    }


def test_unknown_position_falls_back_to_center(sample_pdf: bytes) -> None:
    result = run_tool("editor", {"pdf": sample_pdf, "text": "x", "position": "somewhere"})
    assert result.details["position"] == "center"


def test_add_text_with_no_surviving_pages(sample_pdf: bytes) -> None:
    result = run_tool("text", {"pdf": sample_pdf, "text": "x", "pages": [12]})
    assert result.details["modifiedPages"] == []


@pytest.mark.parametrize(
    "options",
    [{"color": "#12"}, {"color": "blue"}, {"opacity": 2}, {"fontSize": 0}, {"font": "Comic Sans"}],
)
def test_add_text_rejects_invalid_styling(sample_pdf: bytes, options: dict) -> None:
    with pytest.raises(InvalidOptionError):
        run_tool("add-text", {"pdf": sample_pdf, "text": "x", **options})


def test_add_text_requires_text(sample_pdf: bytes) -> None:
    with pytest.raises(MissingInputError) as excinfo:
        run_tool("add-text", {"pdf": sample_pdf, "text": ""})
    assert excinfo.value.message.startswith("Text is required")


def test_font_names_are_normalised() -> None:
    assert resolve_font("HelveticaBold") == "Helvetica-Bold"
    assert resolve_font("times-roman") == "Times-Roman"
    assert resolve_font(None) == "Helvetica-Bold"


def test_measure_uses_font_metrics() -> None:
    width, height = TextStyle(font="Courier", font_size=10).measure("abcd")
    assert width == pytest.approx(24.0)
    assert height == 10
