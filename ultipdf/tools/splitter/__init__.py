"""Tools that slice a PDF into smaller documents."""
