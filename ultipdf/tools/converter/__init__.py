"""Image to PDF conversion tool."""
