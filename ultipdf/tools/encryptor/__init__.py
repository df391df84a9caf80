"""Protect and unlock tools."""
