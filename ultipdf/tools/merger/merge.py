"""Plugin exposing PDF merge capabilities through the registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from pypdf import PdfWriter

from ...core.codec import Payload, decode_payload, load_document, save_document
from ...core.utils import build_output_filename, get_logger
from ...exceptions import DecodeFailureError, InvalidSelectorError, UltiPDFError
from ..common.interfaces import BaseTool, ToolOptions
from ..common.pipeline import register_tool
from ..common.results import ToolResult

LOGGER = get_logger("ultipdf.tools.merge")


@dataclass(frozen=True)
class MergeOptions(ToolOptions):
    """Documents to concatenate, in order. At least two are required."""

    pdfs: tuple[Payload, ...]

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "MergeOptions":
        pdfs = payload.get("pdfs")
        if not isinstance(pdfs, (list, tuple)) or len(pdfs) < 2:
            raise InvalidSelectorError(
                'At least 2 PDF files required. Send as: { "pdfs": ["base64...", "base64..."] }'
            )
        return cls(pdfs=tuple(pdfs))


@register_tool("merge")
class MergeTool(BaseTool):
    name = "merge"
    description = "Merge multiple PDFs"
    options_class = MergeOptions

    def run(self) -> ToolResult:
        options: MergeOptions = self.options
        writer = PdfWriter()
        total_input_pages = 0

        for index, raw in enumerate(options.pdfs, start=1):
            try:
                reader = load_document(decode_payload(raw, label=f"PDF #{index}"))
            except UltiPDFError as exc:
                raise DecodeFailureError(f"Error processing PDF #{index}: {exc.message}") from exc
            LOGGER.debug("Appending %d page(s) from PDF #%d", len(reader.pages), index)
            for page in reader.pages:
                writer.add_page(page)
            total_input_pages += len(reader.pages)

        data = save_document(writer)
        LOGGER.info("Merged %d PDFs into %d page(s)", len(options.pdfs), len(writer.pages))
        return ToolResult(
            tool=self.name,
            message=f"Successfully merged {len(options.pdfs)} PDFs",
            page_count=len(writer.pages),
            filename=build_output_filename("merged"),
            data=data,
            details={
                "inputFiles": len(options.pdfs),
                "totalInputPages": total_input_pages,
                "outputPages": len(writer.pages),
            },
        )
