"""Namespace for pluggable ultipdf tools."""

from __future__ import annotations

from .common.pipeline import registry, run_tool


def load_builtin_plugins() -> None:
    from .merger import merge  # noqa: F401
    from .compressor import compress  # noqa: F401
    from .splitter import split  # noqa: F401  # register split, pdf-to-jpg and extract-pages
    from .converter import images  # noqa: F401
    from .organizer import organize  # noqa: F401  # register rotate and delete-pages
    from .encryptor import encrypt  # noqa: F401  # register protect and unlock
    from .stamper import text  # noqa: F401


__all__ = ["registry", "run_tool", "load_builtin_plugins"]
