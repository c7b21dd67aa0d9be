"""Output rendering: pages, assets and routes."""
