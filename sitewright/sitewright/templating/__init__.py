"""Template parsing, filters and block composition."""
