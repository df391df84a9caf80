"""Shared interfaces, results and registry for ultipdf tools."""
