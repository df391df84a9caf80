"""Custom exceptions raised by :mod:`ultipdf`.

Every failure surfaced by a tool derives from :class:`UltiPDFError` and carries a
human-readable message. The ``kind`` attribute names the failure family so callers
such as the HTTP shell can map errors without matching on message text.
"""

from __future__ import annotations

from typing import Iterable, Sequence


class UltiPDFError(Exception):
    """Base exception for all ultipdf errors."""

    kind = "Error"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF processing error occurred."


class MissingInputError(UltiPDFError):
    """Raised when a required document, image, text or password is absent."""

    kind = "MissingInput"

    @property
    def default_message(self) -> str:
        return "A required input is missing."


class InvalidSelectorError(UltiPDFError):
    """Raised when a page selector or page range is invalid."""

    kind = "InvalidSelector"

    @property
    def default_message(self) -> str:
        return "Invalid page selection."


class NoValidPagesError(UltiPDFError):
    """Raised when no pages remain after filtering a page selection."""

    kind = "NoValidPages"

    def __init__(self, message: str = "", *, page_count: int | None = None) -> None:
        self.page_count = page_count
        if not message and page_count is not None:
            message = f"No valid pages selected. PDF has {page_count} pages."
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return "No valid pages selected."


class WouldRemoveAllPagesError(UltiPDFError):
    """Raised when a deletion would leave a document without pages."""

    kind = "WouldRemoveAllPages"

    @property
    def default_message(self) -> str:
        return "Cannot delete all pages. At least one page must remain."


class DecodeFailureError(UltiPDFError):
    """Raised when input bytes cannot be decoded into a document."""

    kind = "DecodeFailure"

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF data."


class IncorrectPasswordError(DecodeFailureError):
    """Raised when an encrypted document cannot be opened with the supplied password."""

    @property
    def default_message(self) -> str:
        return "Failed to unlock PDF. Password may be incorrect."


class UnsupportedImageFormatError(UltiPDFError):
    """Raised when an image is neither a JPEG nor a PNG."""

    kind = "UnsupportedImageFormat"

    @property
    def default_message(self) -> str:
        return "Image format not supported. Use JPG or PNG."


class ImageConversionError(UltiPDFError):
    """Raised when no image of a batch could be converted."""

    kind = "ImageConversion"

    def __init__(self, failures: Iterable[object] = ()) -> None:
        self.failures = list(failures)
        details = [
            {"image": getattr(failure, "image", None), "error": getattr(failure, "error", str(failure))}
            for failure in self.failures
        ]
        super().__init__(f"No images could be processed. Errors: {details}")

    @property
    def default_message(self) -> str:
        return "No images could be processed."


class InvalidOptionError(UltiPDFError):
    """Raised when an option value lies outside its accepted set."""

    kind = "InvalidOption"

    @property
    def default_message(self) -> str:
        return "Invalid option value."


class UnknownOperationError(UltiPDFError):
    """Raised when a tool name matches no registered tool or synonym."""

    kind = "UnknownOperation"

    def __init__(self, name: object, available: Sequence[str] = ()) -> None:
        self.name = name
        self.available = list(available)
        super().__init__(f'Unknown tool: "{name}"')

    @property
    def default_message(self) -> str:
        return "Unknown tool."


__all__ = [
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
