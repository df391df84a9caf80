"""PDF merge tool."""
