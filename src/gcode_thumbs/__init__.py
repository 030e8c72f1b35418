"""Extract and scale the preview images embedded in G-code files."""

from __future__ import annotations

from .gcode import extract_candidates, select_best
from .provider import AlphaType, GCodeThumbnailProvider, ThumbnailResult
from .thumbnails import MAX_THUMBNAIL_SIZE, get_thumbnail, resize_image

__all__ = [
    "AlphaType",
    "GCodeThumbnailProvider",
    "MAX_THUMBNAIL_SIZE",
    "ThumbnailResult",
    "__version__",
    "extract_candidates",
    "get_thumbnail",
    "resize_image",
    "select_best",
]

__version__ = "0.1.0"
