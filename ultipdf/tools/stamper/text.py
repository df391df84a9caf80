"""Plugin stamping a text overlay, such as a watermark, onto PDF pages."""

from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from typing import Any, Mapping

from pypdf import PageObject, PdfReader, PdfWriter
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from ...core.codec import Payload, decode_payload, load_document, page_size, save_document
from ...core.geometry import DEFAULT_OVERLAY_MARGIN, Anchor, Rectangle, parse_hex_color, place_overlay
from ...core.selection import ALL_PAGES, PageSelector, page_numbers, parse_selector, resolve
from ...core.utils import build_output_filename, get_logger, json_number
from ...exceptions import InvalidOptionError
from ..common.interfaces import BaseTool, ToolOptions, optional_number, require
from ..common.pipeline import register_tool
from ..common.results import ToolResult

LOGGER = get_logger("ultipdf.tools.text")

DEFAULT_FONT = "Helvetica-Bold"
STANDARD_FONTS = (
    "Helvetica",
    "Helvetica-Bold",
    "Helvetica-Oblique",
    "Helvetica-BoldOblique",
    "Times-Roman",
    "Times-Bold",
    "Times-Italic",
    "Times-BoldItalic",
    "Courier",
    "Courier-Bold",
    "Courier-Oblique",
    "Courier-BoldOblique",
)
# "HelveticaBold", "helvetica-bold" and "Helvetica-Bold" all name the same font
_FONTS_BY_KEY = {font.replace("-", "").lower(): font for font in STANDARD_FONTS}


def resolve_font(name: Any) -> str:
    if name is None or name == "":
        return DEFAULT_FONT
    font = _FONTS_BY_KEY.get(str(name).replace("-", "").replace(" ", "").lower())
    if font is None:
        raise InvalidOptionError(f"Unknown font: {name}. Use one of: {', '.join(STANDARD_FONTS)}")
    return font


@dataclass(frozen=True)
class TextStyle:
    font: str = DEFAULT_FONT
    font_size: float = 40.0
    color: str = "#888888"
    rgb: tuple[float, float, float] = (0x88 / 255, 0x88 / 255, 0x88 / 255)
    opacity: float = 0.3
    rotation: float = -45.0

    def measure(self, text: str) -> tuple[float, float]:
        """Advance width of ``text`` and the font size used as its height."""

        return pdfmetrics.stringWidth(text, self.font, self.font_size), self.font_size


@dataclass(frozen=True)
class AddTextOptions(ToolOptions):
    pdf: Payload
    text: str
    selector: PageSelector = ALL_PAGES
    position: Anchor = Anchor.CENTER
    style: TextStyle = TextStyle()

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "AddTextOptions":
        pdf = require(payload, "pdf", "PDF file required")
        text = require(payload, "text", 'Text is required. Send as: { "text": "CONFIDENTIAL" }')

        font_size = optional_number(payload, "fontSize", 40.0)
        if font_size <= 0:
            raise InvalidOptionError(f"Invalid fontSize: {font_size}. It must be positive")
        opacity = optional_number(payload, "opacity", 0.3)
        if not 0 <= opacity <= 1:
            raise InvalidOptionError(f"Invalid opacity: {opacity}. It must be between 0 and 1")
        color = payload.get("color") or "#888888"

        style = TextStyle(
            font=resolve_font(payload.get("font")),
            font_size=font_size,
            color=str(color),
            rgb=parse_hex_color(color),
            opacity=opacity,
            rotation=optional_number(payload, "rotation", -45.0),
        )
        return cls(
            pdf=pdf,
            text=str(text),
            selector=parse_selector(payload.get("pages")),
            position=Anchor.parse(payload.get("position")),
            style=style,
        )


def render_overlay(width: float, height: float, text: str, style: TextStyle, rect: Rectangle) -> PageObject:
    """Draw ``text`` on a transparent page of the given size.

    The text baseline starts at the rectangle origin and is rotated around it.
    """

    buffer = BytesIO()
    overlay = canvas.Canvas(buffer, pagesize=(width, height))
    overlay.setFillColorRGB(*style.rgb)
    overlay.setFillAlpha(style.opacity)
    overlay.setFont(style.font, style.font_size)
    overlay.translate(rect.x, rect.y)
    overlay.rotate(style.rotation)
    overlay.drawString(0, 0, text)
    overlay.showPage()
    overlay.save()
    return PdfReader(BytesIO(buffer.getvalue())).pages[0]


@register_tool("add-text", "watermark", "text", "editor")
class AddTextTool(BaseTool):
    name = "add-text"
    description = "Add text/watermark"
    options_class = AddTextOptions

    def run(self) -> ToolResult:
        options: AddTextOptions = self.options
        style = options.style
        reader = load_document(decode_payload(options.pdf))
        writer = PdfWriter(clone_from=reader)
        total_pages = len(writer.pages)

        text_width, text_height = style.measure(options.text)
        overlays: dict[tuple[float, float], PageObject] = {}
        indices = resolve(options.selector, total_pages)
        for index in indices:
            page = writer.pages[index]
            width, height = page_size(page)
            overlay = overlays.get((width, height))
            if overlay is None:
                rect = place_overlay(
                    width, height, text_width, text_height, options.position, DEFAULT_OVERLAY_MARGIN
                )
                overlay = overlays[(width, height)] = render_overlay(width, height, options.text, style, rect)
            page.merge_page(overlay)

        data = save_document(writer)
        modified = page_numbers(indices)
        LOGGER.info("Added text to %d of %d page(s)", len(modified), total_pages)
        return ToolResult(
            tool=self.name,
            message=f"Added text to {len(modified)} page(s)",
            page_count=total_pages,
            filename=build_output_filename("watermarked"),
            data=data,
            details={
                "text": options.text,
                "position": options.position.value,
                "fontSize": json_number(style.font_size),
                "color": style.color,
                "opacity": style.opacity,
                "rotation": json_number(style.rotation),
                "font": style.font,
                "totalPages": total_pages,
                "modifiedPages": modified,
            },
        )
