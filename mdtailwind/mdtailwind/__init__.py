"""mdtailwind - Tailwind CSS output format for Markdown documents.

Renders Markdown to HTML and splices in Tailwind CSS, either compiled locally
with PostCSS or loaded from the just-in-time CDN.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .formats import tailwind, tailwind_prose

__all__ = ["tailwind", "tailwind_prose"]
