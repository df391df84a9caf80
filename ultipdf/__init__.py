"""Stateless PDF transformation toolkit exposing merge, split, page and overlay tools."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from .config import Settings
from .core.codec import Payload
from .core.geometry import Anchor, PageSize, Rectangle, lookup_page_size, place_image, place_overlay
from .core.selection import PageRange, parse_selector, resolve
from .exceptions import (
    DecodeFailureError,
    ImageConversionError,
    IncorrectPasswordError,
    InvalidOptionError,
    InvalidSelectorError,
    MissingInputError,
    NoValidPagesError,
    UltiPDFError,
    UnknownOperationError,
    UnsupportedImageFormatError,
    WouldRemoveAllPagesError,
)
from .tools import load_builtin_plugins, registry, run_tool
from .tools.common.results import DocumentPart, ImageFailure, ToolResult

__version__ = "1.0.0"

load_builtin_plugins()

__all__ = [
    "__version__",
    "Settings",
    "run_tool",
    "registry",
    "merge_documents",
    "split_document",
    "extract_document_pages",
    "delete_document_pages",
    "rotate_document",
    "compress_document",
    "images_to_document",
    "add_text",
    "ToolResult",
    "DocumentPart",
    "ImageFailure",
    "Anchor",
    "PageSize",
    "PageRange",
    "Rectangle",
    "lookup_page_size",
    "place_image",
    "place_overlay",
    "parse_selector",
    "resolve",
    "UltiPDFError",
    "MissingInputError",
    "InvalidSelectorError",
    "NoValidPagesError",
    "WouldRemoveAllPagesError",
    "DecodeFailureError",
    "IncorrectPasswordError",
    "UnsupportedImageFormatError",
    "ImageConversionError",
    "InvalidOptionError",
    "UnknownOperationError",
]


def merge_documents(pdfs: Iterable[Payload]) -> ToolResult:
    """Convenience wrapper around the ``merge`` tool."""

    return run_tool("merge", {"pdfs": list(pdfs)})


def split_document(pdf: Payload, ranges: Sequence[object] | str | None = None) -> ToolResult:
    """Convenience wrapper around the ``split`` tool."""

    return run_tool("split", {"pdf": pdf, "ranges": ranges})


def extract_document_pages(pdf: Payload, pages: Sequence[int | str]) -> ToolResult:
    """Convenience wrapper around the ``extract-pages`` tool."""

    return run_tool("extract-pages", {"pdf": pdf, "pages": list(pages)})


def delete_document_pages(pdf: Payload, pages: Sequence[int | str]) -> ToolResult:
    """Convenience wrapper around the ``delete-pages`` tool."""

    return run_tool("delete-pages", {"pdf": pdf, "pages": list(pages)})


def rotate_document(pdf: Payload, rotation: int = 90, pages: Sequence[int] | str | None = None) -> ToolResult:
    """Convenience wrapper around the ``rotate`` tool."""

    return run_tool("rotate", {"pdf": pdf, "rotation": rotation, "pages": pages})


def compress_document(pdf: Payload, quality: str = "medium") -> ToolResult:
    """Convenience wrapper around the ``compress`` tool."""

    return run_tool("compress", {"pdf": pdf, "quality": quality})


def images_to_document(images: Iterable[Payload], **options: Any) -> ToolResult:
    """Convenience wrapper around the ``jpg-to-pdf`` tool."""

    return run_tool("jpg-to-pdf", {"images": list(images), **options})


def add_text(pdf: Payload, text: str, **options: Any) -> ToolResult:
    """Convenience wrapper around the ``add-text`` tool."""

    payload: Mapping[str, Any] = {"pdf": pdf, "text": text, **options}
    return run_tool("add-text", payload)
