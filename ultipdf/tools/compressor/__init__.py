"""PDF compression tool."""
