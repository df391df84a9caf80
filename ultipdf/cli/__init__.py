"""Command-line entry point for ultipdf."""

from .main import cli

__all__ = ["cli"]
