"""Result records returned by ultipdf tools."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from ...core.codec import encode_payload
from ...core.utils import size_in_kb, update_dict


def _freeze(details: Mapping[str, Any] | None) -> Mapping[str, Any]:
    return MappingProxyType(dict(details or {}))


@dataclass(frozen=True)
class DocumentPart:
    """One output document of a tool producing several documents."""

    data: bytes
    page_count: int
    filename: str
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "details", _freeze(self.details))

    @property
    def size_bytes(self) -> int:
        return len(self.data)

    def to_payload(self) -> dict[str, Any]:
        payload = dict(self.details)
        payload.update(
            {
                "sizeBytes": self.size_bytes,
                "sizeKB": size_in_kb(self.size_bytes),
                "pdf": encode_payload(self.data),
                "filename": self.filename,
            }
        )
        return payload


@dataclass(frozen=True)
class ImageFailure:
    """A single image that could not be placed into the output document."""

    image: int
    error: str

    def to_payload(self) -> dict[str, Any]:
        return {"image": self.image, "error": self.error}


@dataclass(frozen=True)
class ToolResult:
    """Immutable outcome of a successful tool run."""

    tool: str
    message: str
    page_count: int
    filename: str | None = None
    data: bytes | None = None
    details: Mapping[str, Any] = field(default_factory=dict)
    documents: tuple[DocumentPart, ...] = ()
    documents_key: str = "documents"

    def __post_init__(self) -> None:
        object.__setattr__(self, "details", _freeze(self.details))
        object.__setattr__(self, "documents", tuple(self.documents))

    @property
    def size_bytes(self) -> int | None:
        return None if self.data is None else len(self.data)

    @property
    def size_kb(self) -> int | None:
        return None if self.data is None else size_in_kb(len(self.data))

    def to_payload(self) -> dict[str, Any]:
        """Render the JSON-compatible body handed back to the transport layer."""

        payload: dict[str, Any] = {"message": self.message}
        for key, value in self.details.items():
            if isinstance(value, (list, tuple)):
                value = [item.to_payload() if hasattr(item, "to_payload") else item for item in value]
            payload[key] = value
        if self.documents:
            payload[self.documents_key] = [part.to_payload() for part in self.documents]
        if self.data is not None:
            update_dict(
                payload,
                fileSizeBytes=self.size_bytes,
                fileSizeKB=self.size_kb,
                pdf=encode_payload(self.data),
            )
        update_dict(payload, filename=self.filename)
        return payload


__all__ = ["DocumentPart", "ImageFailure", "ToolResult"]
