"""Paste clipboard images into markdown documents."""

from mdpaste.pipeline.pipeline import paste_image

__all__ = ["paste_image"]
__version__ = "0.1.0"
