"""Text overlay tool."""
