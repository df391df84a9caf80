"""Core primitives shared by ultipdf tools: codec, page selection and geometry."""
