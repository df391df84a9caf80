"""Transport and document codec helpers.

Documents and images travel as base64 text, optionally prefixed with a
``data:<mime>;base64,`` header. This module turns that text into bytes, bytes into
a :class:`pypdf.PdfReader`, and a :class:`pypdf.PdfWriter` back into bytes.
"""

from __future__ import annotations

import base64
import binascii
import re
from io import BytesIO
from typing import Iterable, Union

from pypdf import PageObject, PasswordType, PdfReader, PdfWriter

from ..exceptions import DecodeFailureError, IncorrectPasswordError, MissingInputError
from .utils import get_logger

LOGGER = get_logger("ultipdf.core.codec")

Payload = Union[str, bytes, bytearray]

_DATA_URI_RE = re.compile(r"^data:[\w.+-]+/[\w.+-]+;base64,", re.IGNORECASE)
_URLSAFE = str.maketrans("-_", "+/")


def strip_data_uri(text: str) -> str:
    """Remove an optional ``data:<mime>;base64,`` header from ``text``."""

    return _DATA_URI_RE.sub("", text.strip(), count=1)


def decode_payload(value: Payload | None, *, label: str = "PDF file") -> bytes:
    """Return the raw bytes carried by ``value``.

    Raw ``bytes`` are returned unchanged so in-process callers can skip the
    transport encoding entirely.
    """

    if value is None:
        raise MissingInputError(f"{label} required")
    if isinstance(value, (bytes, bytearray)):
        if not value:
            raise MissingInputError(f"{label} required")
        return bytes(value)
    if not isinstance(value, str):
        raise DecodeFailureError(f"{label} must be base64 encoded text")

    cleaned = strip_data_uri(value)
    if not cleaned:
        raise MissingInputError(f"{label} required")
    # URL-safe alphabet and missing padding are accepted
    text = "".join(cleaned.split()).translate(_URLSAFE).rstrip("=")
    text += "=" * (-len(text) % 4)
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeFailureError(f"{label} is not valid base64 data") from exc


def encode_payload(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def load_document(data: bytes, *, password: str | None = None) -> PdfReader:
    """Parse ``data`` into a reader, opening encrypted files on a best-effort basis."""

    try:
        reader = PdfReader(BytesIO(data))
    except Exception as exc:  # pypdf raises a variety of parse errors
        raise DecodeFailureError(f"Unable to read PDF: {exc}") from exc

    if reader.is_encrypted:
        LOGGER.debug("Attempting to decrypt encrypted PDF")
        try:
            status = reader.decrypt(password or "")
        except Exception as exc:  # decrypt errors vary with the security handler
            raise _decrypt_error(password) from exc
        if status == PasswordType.NOT_DECRYPTED:
            raise _decrypt_error(password)

    try:
        len(reader.pages)
    except Exception as exc:  # broken page trees only surface on access
        raise DecodeFailureError(f"Unable to read PDF pages: {exc}") from exc
    return reader


def _decrypt_error(password: str | None) -> DecodeFailureError:
    if password:
        return IncorrectPasswordError()
    return DecodeFailureError("PDF is encrypted and cannot be opened without a password")


def save_document(writer: PdfWriter, *, compact: bool = False, fold_identical: bool = False) -> bytes:
    """Serialise ``writer`` and return the encoded bytes.

    ``compact`` compresses page content streams. ``fold_identical`` additionally
    merges identical objects and drops orphaned ones. Embedded images are left as is.
    """

    if compact:
        for page in writer.pages:
            page.compress_content_streams()
    if fold_identical:
        writer.compress_identical_objects()

    buffer = BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


def copy_pages(reader: PdfReader, indices: Iterable[int]) -> PdfWriter:
    """Build a fresh writer holding the pages at ``indices`` in the given order."""

    writer = PdfWriter()
    for index in indices:
        writer.add_page(reader.pages[index])
    return writer


def page_size(page: PageObject) -> tuple[float, float]:
    box = page.mediabox
    return float(box.width), float(box.height)


__all__ = [
    "Payload",
    "strip_data_uri",
    "decode_payload",
    "encode_payload",
    "load_document",
    "save_document",
    "copy_pages",
    "page_size",
]
