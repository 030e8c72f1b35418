"""Basic smoke tests for the gcode_thumbs package."""

from __future__ import annotations

import importlib


def test_package_importable() -> None:
    """Ensure that the top-level package can be imported."""

    module = importlib.import_module("gcode_thumbs")
    assert module.__version__ == "0.1.0"
    assert module.MAX_THUMBNAIL_SIZE == 10000
