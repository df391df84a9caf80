from __future__ import annotations

import base64
from io import BytesIO
from pathlib import Path
from typing import Callable, Sequence
import sys

import pytest
from PIL import Image
from pypdf import PdfReader, PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


def page_widths(data: bytes) -> list[float]:
    """Widths identify the pages built by ``pdf_factory``: page ``n`` is ``100 + 10 * n`` wide."""

    return [float(page.mediabox.width) for page in PdfReader(BytesIO(data)).pages]


def build_pdf(widths: Sequence[float], height: float = 200, title: str | None = None) -> bytes:
    writer = PdfWriter()
    for width in widths:
        writer.add_blank_page(width=width, height=height)
    if title is not None:
        writer.add_metadata({"/Title": title})
    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture()
def pdf_factory() -> Callable[..., bytes]:
    def _create(page_count: int, *, first: int = 1, title: str | None = None) -> bytes:
        return build_pdf([100 + 10 * number for number in range(first, first + page_count)], title=title)

    return _create


@pytest.fixture()
def sample_pdf(pdf_factory: Callable[..., bytes]) -> bytes:
    return pdf_factory(5, title="Sample")


@pytest.fixture()
def sample_pdf_b64(sample_pdf: bytes) -> str:
    return base64.b64encode(sample_pdf).decode("ascii")


@pytest.fixture()
def sample_pdf_path(tmp_path: Path, sample_pdf: bytes) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    pdf_path.write_bytes(sample_pdf)
    return pdf_path


@pytest.fixture()
def jpeg_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (400, 200), color=(200, 30, 30)).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture()
def png_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGBA", (100, 300), color=(30, 30, 200, 128)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture()
def gif_bytes() -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (10, 10)).save(buffer, format="GIF")
    return buffer.getvalue()


@pytest.fixture()
def read_widths() -> Callable[[bytes], list[float]]:
    return page_widths
