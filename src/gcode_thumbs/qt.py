"""Convert produced thumbnails into Qt image types."""

from __future__ import annotations

from PIL import Image

try:  # pragma: no cover - import guard exercised via tests
    from PySide6.QtGui import QImage, QPixmap
except ImportError:  # pragma: no cover - optional desktop dependency
    QImage = None  # type: ignore[assignment,misc]
    QPixmap = None  # type: ignore[assignment,misc]

from .thumbnails import ThumbnailError

__all__ = ["QtUnavailableError", "to_qimage", "to_qpixmap"]


class QtUnavailableError(ThumbnailError):
    """Raised when PySide6 is required but not installed."""


def to_qimage(image: Image.Image) -> QImage:
    """Return a detached ``QImage`` holding the pixels of *image*."""

    if QImage is None:
        raise QtUnavailableError("PySide6 is required to build Qt images")

    rgba = image.convert("RGBA")
    try:
        data = rgba.tobytes("raw", "RGBA")
        qimage = QImage(data, rgba.width, rgba.height, rgba.width * 4, QImage.Format_RGBA8888)
        # QImage borrows ``data``; copy so the result outlives it.
        return qimage.copy()
    finally:
        rgba.close()


def to_qpixmap(image: Image.Image) -> QPixmap:
    """Return a ``QPixmap`` for *image*. Requires a running ``QApplication``."""

    if QPixmap is None:
        raise QtUnavailableError("PySide6 is required to build Qt pixmaps")

    return QPixmap.fromImage(to_qimage(image))
