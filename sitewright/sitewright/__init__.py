"""Sitewright - static site generator built on block inheritance.

MarkDown pages extend HTML base templates through ``{% extends %}`` and
``{% block %}`` declarations.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
