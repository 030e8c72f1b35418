"""Tests for converting thumbnails into Qt image types."""

from __future__ import annotations

import pytest
from PIL import Image

import gcode_thumbs.qt as qt
from gcode_thumbs.qt import QtUnavailableError, to_qimage, to_qpixmap


def test_to_qimage_preserves_dimensions_and_pixels(qapp) -> None:
    image = Image.new("RGB", (12, 5), (10, 200, 30))

    qimage = to_qimage(image)

    assert (qimage.width(), qimage.height()) == (12, 5)
    color = qimage.pixelColor(3, 2)
    assert (color.red(), color.green(), color.blue()) == (10, 200, 30)


def test_to_qpixmap(qapp) -> None:
    pixmap = to_qpixmap(Image.new("RGB", (7, 9), (0, 0, 0)))

    assert (pixmap.width(), pixmap.height()) == (7, 9)


def test_missing_qt_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(qt, "QImage", None)

    with pytest.raises(QtUnavailableError):
        to_qimage(Image.new("RGB", (1, 1)))
