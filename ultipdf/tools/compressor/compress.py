"""Plugin exposing lossless PDF compression through the registry."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from pypdf import PdfWriter

from ...core.codec import Payload, decode_payload, load_document, save_document
from ...core.utils import build_output_filename, get_logger, size_in_kb
from ..common.interfaces import BaseTool, ToolOptions, require
from ..common.pipeline import register_tool
from ..common.results import ToolResult

LOGGER = get_logger("ultipdf.tools.compress")

QUALITY_LEVELS = ("low", "medium", "high")


@dataclass(frozen=True)
class CompressOptions(ToolOptions):
    """``quality`` is reported back with the result.

    Every level is saved with the most compact encoding pypdf offers: content
    streams are compressed, identical objects folded and orphans dropped.
    Embedded images are never recompressed. Unknown levels fall back to ``medium``.
    """

    pdf: Payload
    quality: str = "medium"

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "CompressOptions":
        pdf = require(payload, "pdf", 'PDF file required. Send as: { "pdf": "base64..." }')
        quality = str(payload.get("quality") or "medium").strip().lower()
        if quality not in QUALITY_LEVELS:
            quality = "medium"
        return cls(pdf=pdf, quality=quality)


def reduction_percent(original_size: int, compressed_size: int) -> int:
    """Percentage saved, rounded half up and floored at zero."""

    if original_size <= 0:
        return 0
    percent = (original_size - compressed_size) / original_size * 100
    return max(0, math.floor(percent + 0.5))


@register_tool("compress")
class CompressTool(BaseTool):
    name = "compress"
    description = "Compress PDF size"
    options_class = CompressOptions

    def run(self) -> ToolResult:
        options: CompressOptions = self.options
        original = decode_payload(options.pdf)
        reader = load_document(original)

        writer = PdfWriter(clone_from=reader)
        data = save_document(writer, compact=True, fold_identical=True)

        saved = len(original) - len(data)
        LOGGER.info(
            "Compressed PDF from %d to %d bytes at %s quality", len(original), len(data), options.quality
        )
        return ToolResult(
            tool=self.name,
            message="PDF compressed successfully",
            page_count=len(writer.pages),
            filename=build_output_filename("compressed"),
            data=data,
            details={
                "originalSizeBytes": len(original),
                "originalSizeKB": size_in_kb(len(original)),
                "compressedSizeBytes": len(data),
                "compressedSizeKB": size_in_kb(len(data)),
                "savedBytes": saved,
                "savedKB": size_in_kb(saved),
                "reductionPercent": f"{reduction_percent(len(original), len(data))}%",
                "pages": len(writer.pages),
                "quality": options.quality,
            },
        )
