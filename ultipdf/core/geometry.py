"""Placement math for text overlays and raster images.

All coordinates are content-space units with the origin at the bottom-left corner
of the page.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from ..exceptions import InvalidOptionError

DEFAULT_OVERLAY_MARGIN = 50.0


class Anchor(str, Enum):
    """Named overlay positions."""

    CENTER = "center"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    TOP_CENTER = "top-center"
    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    BOTTOM_CENTER = "bottom-center"

    @classmethod
    def parse(cls, value: "str | Anchor | None") -> "Anchor":
        """Return the anchor named by ``value``; unknown names fall back to center."""

        if isinstance(value, Anchor):
            return value
        if not value:
            return cls.CENTER
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.CENTER


@dataclass(frozen=True)
class Rectangle:
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class PageSize:
    name: str
    width: float
    height: float


PAGE_SIZES: dict[str, PageSize] = {
    size.name: size
    for size in (
        PageSize("A4", 595.28, 841.89),
        PageSize("A3", 841.89, 1190.55),
        PageSize("A5", 419.53, 595.28),
        PageSize("Letter", 612.0, 792.0),
        PageSize("Legal", 612.0, 1008.0),
        PageSize("Tabloid", 792.0, 1224.0),
    )
}

_PAGE_SIZES_BY_KEY = {name.lower(): size for name, size in PAGE_SIZES.items()}


def lookup_page_size(name: str | None, orientation: str | None = "portrait") -> PageSize:
    """Resolve ``name`` against the catalog, swapping axes for landscape.

    Unknown names fall back to A4.
    """

    size = _PAGE_SIZES_BY_KEY.get(str(name or "").strip().lower(), PAGE_SIZES["A4"])
    if str(orientation or "").strip().lower() == "landscape":
        return PageSize(size.name, size.height, size.width)
    return size


def place_overlay(
    page_width: float,
    page_height: float,
    content_width: float,
    content_height: float,
    anchor: Anchor | str | None = Anchor.CENTER,
    margin: float = DEFAULT_OVERLAY_MARGIN,
) -> Rectangle:
    """Compute where content of the given size sits on a page for ``anchor``."""

    anchor = Anchor.parse(anchor)
    value = anchor.value

    if value.endswith("-left"):
        x = margin
    elif value.endswith("-right"):
        x = page_width - content_width - margin
    else:
        x = (page_width - content_width) / 2

    if value.startswith("top-"):
        y = page_height - margin - content_height
    elif value.startswith("bottom-"):
        y = margin
    else:
        y = (page_height - content_height) / 2

    return Rectangle(x, y, content_width, content_height)


def place_image(
    page_width: float,
    page_height: float,
    image_width: float,
    image_height: float,
    margin: float,
    fit_to_page: bool = True,
) -> Rectangle:
    """Size an image inside the page margins and center it on the page.

    When ``fit_to_page`` is false each axis is clamped independently, which may
    change the aspect ratio.
    """

    if image_width <= 0 or image_height <= 0:
        raise InvalidOptionError(f"Image dimensions must be positive, got {image_width}x{image_height}")

    available_width = page_width - margin * 2
    available_height = page_height - margin * 2

    if fit_to_page:
        scale = min(available_width / image_width, available_height / image_height)
        width = image_width * scale
        height = image_height * scale
    else:
        width = min(image_width, available_width)
        height = min(image_height, available_height)

    return Rectangle((page_width - width) / 2, (page_height - height) / 2, width, height)


_HEX_COLOR_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")


def parse_hex_color(value: str) -> tuple[float, float, float]:
    """Split ``#rrggbb`` into three channels in ``[0, 1]``."""

    match = _HEX_COLOR_RE.match(str(value).strip()) if value is not None else None
    if match is None:
        raise InvalidOptionError(f"Invalid color: {value!r}. Use a 6 digit hex value such as '#888888'")
    digits = match.group(1)
    return tuple(int(digits[offset : offset + 2], 16) / 255 for offset in (0, 2, 4))  # type: ignore[return-value]


__all__ = [
    "Anchor",
    "Rectangle",
    "PageSize",
    "PAGE_SIZES",
    "DEFAULT_OVERLAY_MARGIN",
    "lookup_page_size",
    "place_overlay",
    "place_image",
    "parse_hex_color",
]
