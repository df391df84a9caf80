"""Plugins that reorganise pages in place: rotate and delete-pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from pypdf import PdfWriter

from ...core.codec import Payload, decode_payload, load_document, save_document
from ...core.selection import (
    ALL_PAGES,
    PageNumbers,
    PageSelector,
    page_numbers,
    parse_page_numbers,
    parse_selector,
    require_pages,
    resolve,
)
from ...core.utils import build_output_filename, get_logger
from ...exceptions import InvalidOptionError, WouldRemoveAllPagesError
from ..common.interfaces import BaseTool, ToolOptions, require
from ..common.pipeline import register_tool
from ..common.results import ToolResult

LOGGER = get_logger("ultipdf.tools.organize")

VALID_ROTATIONS = (90, 180, 270, -90, -180, -270)


def parse_rotation(value: Any) -> int:
    """Accept one of :data:`VALID_ROTATIONS` given as a number or numeric string."""

    message = f"Invalid rotation: {value}. Use: 90, 180, 270, -90, -180, or -270"
    if isinstance(value, bool):
        raise InvalidOptionError(message)
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidOptionError(message) from exc
    if not number.is_integer() or int(number) not in VALID_ROTATIONS:
        raise InvalidOptionError(message)
    return int(number)


@dataclass(frozen=True)
class RotateOptions(ToolOptions):
    pdf: Payload
    rotation: int = 90
    selector: PageSelector = ALL_PAGES

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "RotateOptions":
        pdf = require(payload, "pdf", 'PDF file required. Send as: { "pdf": "base64...", "rotation": 90 }')
        rotation = payload.get("rotation")
        return cls(
            pdf=pdf,
            rotation=90 if rotation is None else parse_rotation(rotation),
            selector=parse_selector(payload.get("pages")),
        )


@register_tool("rotate")
class RotateTool(BaseTool):
    """Add the requested angle to the current rotation of each selected page."""

    name = "rotate"
    description = "Rotate PDF pages"
    options_class = RotateOptions

    def run(self) -> ToolResult:
        options: RotateOptions = self.options
        reader = load_document(decode_payload(options.pdf))
        writer = PdfWriter(clone_from=reader)
        total_pages = len(writer.pages)

        # an explicit list that filters to nothing still produces a document
        indices = resolve(options.selector, total_pages)
        for index in indices:
            page = writer.pages[index]
            page.rotation = (page.rotation + options.rotation) % 360

        data = save_document(writer)
        rotated = page_numbers(indices)
        LOGGER.info("Rotated %d page(s) by %d degrees", len(rotated), options.rotation)
        return ToolResult(
            tool=self.name,
            message=f"Rotated {len(rotated)} page(s) by {options.rotation}°",
            page_count=total_pages,
            filename=build_output_filename(f"rotated_{options.rotation}deg"),
            data=data,
            details={
                "totalPages": total_pages,
                "rotatedPages": rotated,
                "rotation": options.rotation,
            },
        )


@dataclass(frozen=True)
class DeletePagesOptions(ToolOptions):
    pdf: Payload
    selector: PageNumbers

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "DeletePagesOptions":
        pdf = require(
            payload, "pdf", 'PDF file required. Send as: { "pdf": "base64...", "pages": [1, 3, 5] }'
        )
        pages = require(payload, "pages", 'Pages to delete required. Example: { "pages": [1, 3, 5] }')
        return cls(pdf=pdf, selector=PageNumbers(tuple(parse_page_numbers(pages))))


@register_tool("delete-pages", "remove-pages")
class DeletePagesTool(BaseTool):
    name = "delete-pages"
    description = "Delete specific pages"
    options_class = DeletePagesOptions

    def run(self) -> ToolResult:
        options: DeletePagesOptions = self.options
        reader = load_document(decode_payload(options.pdf))
        total_pages = len(reader.pages)
        indices = require_pages(
            resolve(options.selector, total_pages),
            total_pages,
            f"No valid pages to delete. PDF has {total_pages} pages.",
        )
        if len(indices) >= total_pages:
            raise WouldRemoveAllPagesError()

        writer = PdfWriter(clone_from=reader)
        for index in sorted(indices, reverse=True):
            del writer.pages[index]

        data = save_document(writer)
        deleted = page_numbers(indices)
        LOGGER.info("Deleted pages %s, %d remain", deleted, len(writer.pages))
        return ToolResult(
            tool=self.name,
            message=f"Deleted {len(deleted)} page(s)",
            page_count=len(writer.pages),
            filename=build_output_filename("pages_deleted"),
            data=data,
            details={
                "originalPages": total_pages,
                "deletedPages": deleted,
                "remainingPages": len(writer.pages),
            },
        )
