"""Plugins for the protect and unlock operations.

Neither operation changes the access control of a document. ``protect`` only
stamps descriptive metadata and ``unlock`` opens the document on a best-effort
basis before copying its pages into a fresh, unencrypted file.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping

from pypdf import PdfWriter

from ...core.codec import Payload, copy_pages, decode_payload, load_document, save_document
from ...core.utils import build_output_filename, get_logger
from ...exceptions import DecodeFailureError, IncorrectPasswordError, InvalidOptionError, MissingInputError
from ..common.interfaces import BaseTool, ToolOptions, optional_bool, require
from ..common.pipeline import register_tool
from ..common.results import ToolResult

LOGGER = get_logger("ultipdf.tools.encrypt")

DEFAULT_TITLE = "Protected Document"
PERMISSION_KEYS = ("printing", "copying", "modifying")
PROTECT_NOTE = "Only document metadata is updated. The output is not encrypted."


def pdf_date(moment: datetime | None = None) -> str:
    """Format ``moment`` as a PDF date string in UTC."""

    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime("D:%Y%m%d%H%M%SZ")


@dataclass(frozen=True)
class ProtectOptions(ToolOptions):
    pdf: Payload
    user_password: str | None = None
    owner_password: str | None = None
    permissions: dict[str, bool] = field(default_factory=lambda: dict.fromkeys(PERMISSION_KEYS, True))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "ProtectOptions":
        pdf = require(payload, "pdf", 'PDF file required. Send as: { "pdf": "base64...", "userPassword": "123" }')
        user_password = payload.get("userPassword") or None
        owner_password = payload.get("ownerPassword") or None
        if not user_password and not owner_password:
            raise MissingInputError("At least one password required (userPassword or ownerPassword)")

        raw_permissions = payload.get("permissions") or {}
        if not isinstance(raw_permissions, Mapping):
            raise InvalidOptionError(f"'permissions' must be an object, got {raw_permissions!r}")
        return cls(
            pdf=pdf,
            user_password=str(user_password) if user_password else None,
            owner_password=str(owner_password) if owner_password else None,
            permissions={key: optional_bool(raw_permissions, key, True) for key in PERMISSION_KEYS},
        )


@register_tool("protect", "add-password", "lock")
class ProtectTool(BaseTool):
    name = "protect"
    description = "Add password protection"
    options_class = ProtectOptions

    def run(self) -> ToolResult:
        options: ProtectOptions = self.options
        producer = self.context.settings.producer
        reader = load_document(decode_payload(options.pdf))
        writer = PdfWriter(clone_from=reader)

        existing = reader.metadata
        now = pdf_date()
        writer.add_metadata(
            {
                "/Title": (existing.title if existing is not None else None) or DEFAULT_TITLE,
                "/Producer": producer,
                "/Creator": f"{producer} - Protected",
                "/CreationDate": now,
                "/ModDate": now,
            }
        )

        data = save_document(writer)
        LOGGER.info("Stamped protection metadata on %d page(s)", len(writer.pages))
        return ToolResult(
            tool=self.name,
            message="PDF protection applied",
            page_count=len(writer.pages),
            filename=build_output_filename("protected"),
            data=data,
            details={
                "pages": len(writer.pages),
                "userPasswordSet": options.user_password is not None,
                "ownerPasswordSet": options.owner_password is not None,
                "permissions": dict(options.permissions),
                "note": PROTECT_NOTE,
            },
        )


@dataclass(frozen=True)
class UnlockOptions(ToolOptions):
    pdf: Payload
    password: str = ""

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "UnlockOptions":
        pdf = require(payload, "pdf", 'PDF file required. Send as: { "pdf": "base64...", "password": "123" }')
        password = payload.get("password")
        return cls(pdf=pdf, password="" if password is None else str(password))


@register_tool("unlock", "remove-password")
class UnlockTool(BaseTool):
    name = "unlock"
    description = "Remove password"
    options_class = UnlockOptions

    def run(self) -> ToolResult:
        options: UnlockOptions = self.options
        producer = self.context.settings.producer
        data = decode_payload(options.pdf)
        try:
            reader = load_document(data, password=options.password)
        except DecodeFailureError as exc:
            raise IncorrectPasswordError() from exc

        writer = copy_pages(reader, range(len(reader.pages)))
        writer.add_metadata({"/Producer": f"{producer} - Unlocked", "/Creator": producer})

        output = save_document(writer)
        LOGGER.info("Unlocked PDF with %d page(s)", len(writer.pages))
        return ToolResult(
            tool=self.name,
            message="PDF unlocked successfully",
            page_count=len(writer.pages),
            filename=build_output_filename("unlocked"),
            data=output,
            details={"pages": len(writer.pages)},
        )
