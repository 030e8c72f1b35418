"""Pytest configuration helpers for gcode_thumbs tests."""

from __future__ import annotations

import base64
import io
import os
import sys
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

# Run Qt headless so tests work without a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:  # pragma: no cover - dependency availability varies between environments
    from PySide6.QtWidgets import QApplication
except ImportError:  # pragma: no cover - used when Qt is unavailable
    QApplication = None  # type: ignore[assignment]

# Ensure the source directory is importable without requiring an editable install.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


@pytest.fixture(autouse=True)
def reset_thumbnail_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure each test runs with the default thumbnail configuration."""

    from gcode_thumbs.config import ENCODING_ENV_VAR, SIZE_ENV_VAR, configure

    monkeypatch.delenv(ENCODING_ENV_VAR, raising=False)
    monkeypatch.delenv(SIZE_ENV_VAR, raising=False)
    configure()
    yield
    monkeypatch.delenv(ENCODING_ENV_VAR, raising=False)
    monkeypatch.delenv(SIZE_ENV_VAR, raising=False)
    configure()


@pytest.fixture(scope="session")
def qapp():
    """Provide a ``QApplication`` instance for Qt conversion tests."""

    if QApplication is None:
        pytest.skip("PySide6 is unavailable in this environment")

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


def encode_png(
    size: tuple[int, int],
    color: tuple[int, ...] = (255, 0, 0),
    *,
    mode: str = "RGB",
    dpi: tuple[int, int] | None = None,
    compress_level: int = 6,
) -> str:
    """Return a base64 encoded PNG filled with *color*."""

    from PIL import Image

    image = Image.new(mode, size, color)
    options: dict[str, object] = {"compress_level": compress_level}
    if dpi is not None:
        options["dpi"] = dpi
    buffer = io.BytesIO()
    image.save(buffer, format="PNG", **options)
    return base64.b64encode(buffer.getvalue()).decode("ascii")


def thumbnail_block(payload: str, *, hint: str = "", width: int = 78) -> str:
    """Return *payload* wrapped in slicer style thumbnail comments."""

    header = "; thumbnail begin"
    if hint:
        header = f"{header} {hint}"
    body = "\n".join(f"; {chunk}" for chunk in textwrap.wrap(payload, width))
    return f"{header}\n{body}\n; thumbnail end\n"


@pytest.fixture()
def png_payload() -> Callable[..., str]:
    return encode_png


@pytest.fixture()
def make_block() -> Callable[..., str]:
    return thumbnail_block


@pytest.fixture()
def gcode_with_thumbnails() -> Callable[..., str]:
    """Return a factory wrapping thumbnail blocks in a small G-code program."""

    def factory(*blocks: str) -> str:
        lines = [
            "; generated by PrusaSlicer 2.6.0",
            ";",
            *blocks,
            "; external perimeters extrusion width = 0.45mm",
            "G21",
            "G90",
            "G1 Z0.2 F7800",
            "G1 X10 Y10 E0.5",
            "M104 S0",
        ]
        return "\n".join(lines) + "\n"

    return factory
