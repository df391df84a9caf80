"""Plugins that slice one PDF into smaller documents.

``split`` produces one document per page range, ``pdf-to-jpg`` produces one
single-page document per selected page and ``extract-pages`` gathers selected
pages into a single new document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from ...core.codec import (
    Payload,
    copy_pages,
    decode_payload,
    load_document,
    page_size,
    save_document,
)
from ...core.selection import (
    ALL_PAGES,
    PageNumbers,
    PageRanges,
    PageSelector,
    parse_page_numbers,
    parse_ranges,
    parse_selector,
    page_numbers,
    require_pages,
    resolve,
    resolve_ranges,
)
from ...core.utils import build_output_filename, get_logger
from ..common.interfaces import BaseTool, ToolOptions, optional_bool, require
from ..common.pipeline import register_tool
from ..common.results import DocumentPart, ToolResult

LOGGER = get_logger("ultipdf.tools.split")


@dataclass(frozen=True)
class SplitOptions(ToolOptions):
    pdf: Payload
    selector: PageSelector = ALL_PAGES

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "SplitOptions":
        pdf = require(
            payload,
            "pdf",
            'PDF file required. Send as: { "pdf": "base64...", "ranges": [{"start":1,"end":2}] }',
        )
        ranges = payload.get("ranges")
        # anything other than a list or range string splits page by page
        if not isinstance(ranges, (str, list, tuple)):
            ranges = None
        if optional_bool(payload, "splitAll", False) or not ranges:
            return cls(pdf=pdf)
        return cls(pdf=pdf, selector=PageRanges(tuple(parse_ranges(ranges))))


@register_tool("split")
class SplitTool(BaseTool):
    name = "split"
    description = "Split PDF into multiple files"
    options_class = SplitOptions

    def run(self) -> ToolResult:
        options: SplitOptions = self.options
        reader = load_document(decode_payload(options.pdf))
        total_pages = len(reader.pages)
        ranges = resolve_ranges(options.selector, total_pages)

        documents = []
        for page_range in ranges:
            data = save_document(copy_pages(reader, page_range.indices()))
            documents.append(
                DocumentPart(
                    data=data,
                    page_count=page_range.page_count,
                    filename=build_output_filename(f"split_{page_range.label()}"),
                    details={
                        "index": len(documents) + 1,
                        "range": page_range.label(),
                        "pages": page_range.page_count,
                    },
                )
            )

        LOGGER.info("Split %d page PDF into %d documents", total_pages, len(documents))
        return ToolResult(
            tool=self.name,
            message=f"PDF split into {len(documents)} documents",
            page_count=total_pages,
            details={"originalPages": total_pages, "documentsCreated": len(documents)},
            documents=tuple(documents),
        )


@dataclass(frozen=True)
class PageExportOptions(ToolOptions):
    pdf: Payload
    selector: PageSelector = ALL_PAGES

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "PageExportOptions":
        pdf = require(payload, "pdf", 'PDF file required. Send as: { "pdf": "base64..." }')
        return cls(pdf=pdf, selector=parse_selector(payload.get("pages")))


@register_tool("pdf-to-jpg", "pdf-to-image")
class PageExportTool(BaseTool):
    """Return every selected page as its own single-page PDF.

    Pages are extracted structurally. Nothing is rasterised.
    """

    name = "pdf-to-jpg"
    description = "Extract PDF pages"
    options_class = PageExportOptions

    def run(self) -> ToolResult:
        options: PageExportOptions = self.options
        reader = load_document(decode_payload(options.pdf))
        total_pages = len(reader.pages)
        indices = require_pages(
            resolve(options.selector, total_pages), total_pages, "No valid pages selected"
        )

        parts = []
        for index in indices:
            width, height = page_size(reader.pages[index])
            parts.append(
                DocumentPart(
                    data=save_document(copy_pages(reader, [index])),
                    page_count=1,
                    filename=build_output_filename(f"page_{index + 1}"),
                    details={
                        "pageNumber": index + 1,
                        "width": round(width),
                        "height": round(height),
                    },
                )
            )

        LOGGER.info("Exported %d of %d page(s)", len(parts), total_pages)
        return ToolResult(
            tool=self.name,
            message=f"Extracted {len(parts)} page(s) from PDF",
            page_count=total_pages,
            details={
                "totalPagesInOriginal": total_pages,
                "extractedCount": len(parts),
                "note": "Each page is returned as a separate single-page PDF",
            },
            documents=tuple(parts),
            documents_key="pages",
        )


@dataclass(frozen=True)
class ExtractOptions(ToolOptions):
    pdf: Payload
    selector: PageNumbers

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "ExtractOptions":
        pdf = require(
            payload, "pdf", 'PDF file required. Send as: { "pdf": "base64...", "pages": [1, 3, 5] }'
        )
        pages = require(payload, "pages", 'Pages to extract required. Example: { "pages": [1, 3, 5] }')
        return cls(pdf=pdf, selector=PageNumbers(tuple(parse_page_numbers(pages))))


@register_tool("extract-pages", "extract")
class ExtractPagesTool(BaseTool):
    name = "extract-pages"
    description = "Extract specific pages"
    options_class = ExtractOptions

    def run(self) -> ToolResult:
        options: ExtractOptions = self.options
        reader = load_document(decode_payload(options.pdf))
        total_pages = len(reader.pages)
        indices = require_pages(
            resolve(options.selector, total_pages),
            total_pages,
            f"No valid pages to extract. PDF has {total_pages} pages.",
        )

        writer = copy_pages(reader, indices)
        data = save_document(writer)
        extracted = page_numbers(indices)
        LOGGER.info("Extracted pages %s of %d", extracted, total_pages)
        return ToolResult(
            tool=self.name,
            message=f"Extracted {len(extracted)} page(s)",
            page_count=len(writer.pages),
            filename=build_output_filename("extracted_pages"),
            data=data,
            details={
                "originalPages": total_pages,
                "extractedPages": extracted,
                "newDocumentPages": len(writer.pages),
            },
        )
