from __future__ import annotations

import base64

import pytest

from ultipdf import merge_documents
from ultipdf.exceptions import DecodeFailureError, InvalidSelectorError
from ultipdf.tools import load_builtin_plugins
from ultipdf.tools.common.pipeline import run_tool


def setup_module(module):
    load_builtin_plugins()


def test_merge_appends_pages_in_input_order(pdf_factory, read_widths) -> None:
    first = pdf_factory(2, first=1)
    second = pdf_factory(3, first=3)

    result = run_tool("merge", {"pdfs": [second, first]})

    assert read_widths(result.data) == [130, 140, 150, 110, 120]
    assert result.page_count == 5
    assert result.details["inputFiles"] == 2
    assert result.details["totalInputPages"] == 5
    assert result.details["outputPages"] == 5
    assert result.message == "Successfully merged 2 PDFs"
    assert result.filename.startswith("merged_") and result.filename.endswith(".pdf")


def test_merge_is_associative(pdf_factory, read_widths) -> None:
    a, b, c = pdf_factory(1, first=1), pdf_factory(2, first=2), pdf_factory(1, first=4)

    nested = merge_documents([merge_documents([a, b]).data, c])
    flat = merge_documents([a, b, c])

    assert read_widths(nested.data) == read_widths(flat.data) == [110, 120, 130, 140]


def test_merge_accepts_base64_payloads(pdf_factory) -> None:
    encoded = [base64.b64encode(pdf_factory(1)).decode("ascii") for _ in range(2)]
    payload = run_tool("merge", {"pdfs": encoded}).to_payload()
    assert payload["outputPages"] == 2
    assert base64.b64decode(payload["pdf"]).startswith(b"%PDF")
    assert payload["fileSizeBytes"] == len(base64.b64decode(payload["pdf"]))


@pytest.mark.parametrize("pdfs", [None, [], ["only-one"], "not-a-list"])
def test_merge_requires_two_documents(pdfs) -> None:
    with pytest.raises(InvalidSelectorError) as excinfo:
        run_tool("merge", {"pdfs": pdfs})
    assert excinfo.value.message.startswith("At least 2 PDF files required")


def test_merge_names_the_failing_input(pdf_factory) -> None:
    with pytest.raises(DecodeFailureError) as excinfo:
        run_tool("merge", {"pdfs": [pdf_factory(1), b"garbage"]})
    assert excinfo.value.message.startswith("Error processing PDF #2:")
