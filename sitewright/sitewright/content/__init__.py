"""Page content helpers."""
