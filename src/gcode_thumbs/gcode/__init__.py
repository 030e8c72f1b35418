"""Utilities for reading thumbnails embedded in G-code programs."""

from .thumbnails import (
    THUMBNAIL_BEGIN_MARKER,
    THUMBNAIL_END_MARKER,
    ThumbnailBlock,
    extract_candidates,
    iter_thumbnail_blocks,
    select_best,
)

__all__ = [
    "THUMBNAIL_BEGIN_MARKER",
    "THUMBNAIL_END_MARKER",
    "ThumbnailBlock",
    "extract_candidates",
    "iter_thumbnail_blocks",
    "select_best",
]
