"""Plugin composing JPEG and PNG images into a PDF, one page per image."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from typing import Any, Mapping

from PIL import Image, UnidentifiedImageError
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from ...core.codec import Payload, decode_payload
from ...core.geometry import PageSize, lookup_page_size, place_image
from ...core.utils import build_output_filename, get_logger, json_number
from ...exceptions import (
    ImageConversionError,
    InvalidOptionError,
    MissingInputError,
    UltiPDFError,
    UnsupportedImageFormatError,
)
from ..common.interfaces import BaseTool, ToolOptions, optional_bool, optional_number
from ..common.pipeline import register_tool
from ..common.results import ImageFailure, ToolResult

LOGGER = get_logger("ultipdf.tools.images")

# Decoders are tried in this order.
IMAGE_FORMATS = ("JPEG", "PNG")


def open_image(data: bytes) -> Image.Image:
    """Decode ``data`` as JPEG, falling back to PNG."""

    for image_format in IMAGE_FORMATS:
        try:
            image = Image.open(BytesIO(data), formats=(image_format,))
            image.load()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError):
            continue
        LOGGER.debug("Decoded %s image of %dx%d pixels", image_format, *image.size)
        return image
    raise UnsupportedImageFormatError()


def _drawable(image: Image.Image) -> Image.Image:
    if image.mode in ("RGB", "RGBA", "L"):
        return image
    if image.mode in ("LA", "PA") or "transparency" in image.info:
        return image.convert("RGBA")
    return image.convert("RGB")


@dataclass(frozen=True)
class ImagesToPdfOptions(ToolOptions):
    images: tuple[Payload, ...]
    page_size: PageSize
    orientation: str = "portrait"
    margin: float = 40.0
    fit_to_page: bool = True

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "ImagesToPdfOptions":
        images = payload.get("images")
        if not isinstance(images, (list, tuple)) or not images:
            raise MissingInputError(
                'At least 1 image required. Send as: { "images": ["base64...", "base64..."] }'
            )
        orientation = "landscape" if str(payload.get("orientation") or "").lower() == "landscape" else "portrait"
        page_size = lookup_page_size(payload.get("pageSize"), orientation)
        margin = optional_number(payload, "margin", 40.0)
        if margin < 0 or margin * 2 >= min(page_size.width, page_size.height):
            raise InvalidOptionError(f"Invalid margin: {margin}. It must leave room for the image")
        return cls(
            images=tuple(images),
            page_size=page_size,
            orientation=orientation,
            margin=margin,
            fit_to_page=optional_bool(payload, "fitToPage", True),
        )


@register_tool("jpg-to-pdf", "image-to-pdf", "img-to-pdf")
class ImagesToPdfTool(BaseTool):
    """Place each image on its own page.

    Images that fail to decode are reported in ``errors`` and skipped. The call
    only fails when no image at all could be placed.
    """

    name = "jpg-to-pdf"
    description = "Convert images to PDF"
    options_class = ImagesToPdfOptions

    def run(self) -> ToolResult:
        options: ImagesToPdfOptions = self.options
        size = options.page_size
        buffer = BytesIO()
        pdf_canvas = canvas.Canvas(buffer, pagesize=(size.width, size.height))
        pdf_canvas.setCreator(self.context.settings.producer)

        converted = 0
        failures: list[ImageFailure] = []
        for number, raw in enumerate(options.images, start=1):
            try:
                image = open_image(decode_payload(raw, label=f"Image #{number}"))
                rect = place_image(
                    size.width, size.height, image.width, image.height, options.margin, options.fit_to_page
                )
            except UltiPDFError as exc:
                LOGGER.warning("Skipping image #%d: %s", number, exc.message)
                failures.append(ImageFailure(image=number, error=exc.message))
                continue
            pdf_canvas.drawImage(
                ImageReader(_drawable(image)), rect.x, rect.y, width=rect.width, height=rect.height, mask="auto"
            )
            pdf_canvas.showPage()
            converted += 1

        if converted == 0:
            raise ImageConversionError(failures)

        pdf_canvas.save()
        data = buffer.getvalue()
        LOGGER.info("Converted %d of %d image(s) onto %s pages", converted, len(options.images), size.name)

        details: dict[str, Any] = {
            "inputImages": len(options.images),
            "successfullyConverted": converted,
        }
        if failures:
            details["errors"] = failures
        details.update(
            {
                "pageSize": size.name,
                "orientation": options.orientation,
                "margin": json_number(options.margin),
                "pages": converted,
            }
        )
        return ToolResult(
            tool=self.name,
            message=f"{converted} image(s) converted to PDF",
            page_count=converted,
            filename=build_output_filename("images_to_pdf"),
            data=data,
            details=details,
        )
