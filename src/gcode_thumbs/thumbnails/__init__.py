"""Decode and scale thumbnails embedded in G-code programs."""

from __future__ import annotations

import base64
import binascii
import io
import logging
from collections.abc import Iterable
from typing import Final

from PIL import Image

from ..gcode import extract_candidates, select_best

__all__ = [
    "MAX_THUMBNAIL_SIZE",
    "ThumbnailDecodeError",
    "ThumbnailError",
    "decode_thumbnail",
    "get_thumbnail",
    "resize_image",
]

logger = logging.getLogger(__name__)

MAX_THUMBNAIL_SIZE: Final[int] = 10000
"""Largest width or height, in pixels, of any thumbnail produced."""

_BACKGROUND: Final[tuple[int, int, int]] = (255, 255, 255)


class ThumbnailError(RuntimeError):
    """Base exception raised by the thumbnail pipeline."""


class ThumbnailDecodeError(ThumbnailError):
    """Raised when an embedded payload cannot be decoded into an image."""


def get_thumbnail(lines: Iterable[str] | None, cx: int) -> Image.Image | None:
    """Return the largest thumbnail embedded in *lines* fitted into *cx* pixels.

    Parameters
    ----------
    lines:
        Text stream (or any iterable of lines) holding the G-code program.
        The stream is only read, never closed.
    cx:
        Bounding dimension requested by the caller. Both sides of the result
        fit within it while the aspect ratio of the embedded image is kept.

    ``None`` is returned when the request is out of range, when the program
    has no terminated thumbnail block or when the payload does not decode.
    """

    if lines is None or cx <= 0 or cx > MAX_THUMBNAIL_SIZE:
        return None

    try:
        payload = select_best(extract_candidates(lines))
        if not payload:
            logger.debug("No embedded thumbnail found")
            return None

        try:
            image = decode_thumbnail(payload)
        except ThumbnailDecodeError as exc:
            logger.debug("Ignoring undecodable thumbnail: %s", exc)
            return None

        return _fit_to_request(image, cx)
    except Exception:
        logger.exception("Unexpected failure while extracting a G-code thumbnail")
        return None


def decode_thumbnail(payload: str) -> Image.Image:
    """Decode a base64 *payload* into a fully loaded Pillow image."""

    # Whitespace inside the payload is tolerated, anything else must be base64.
    compact = "".join(payload.split())
    try:
        data = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ThumbnailDecodeError(f"Payload is not valid base64: {exc}") from exc

    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ThumbnailDecodeError(f"Payload is not a readable image: {exc}") from exc

    return image


def resize_image(image: Image.Image | None, width: int, height: int) -> Image.Image | None:
    """Return a high quality copy of *image* scaled to ``width x height``.

    The copy is opaque RGB on a white background and keeps the source
    resolution metadata. ``None`` is returned for out of range targets.
    """

    if (
        width <= 0
        or height <= 0
        or width > MAX_THUMBNAIL_SIZE
        or height > MAX_THUMBNAIL_SIZE
        or image is None
    ):
        return None

    canvas = Image.new("RGB", (width, height), _BACKGROUND)
    dpi = image.info.get("dpi")
    if dpi is not None:
        canvas.info["dpi"] = dpi

    scaled = image.convert("RGBA").resize((width, height), Image.Resampling.BICUBIC)
    try:
        canvas.paste(scaled, (0, 0), scaled)
    finally:
        scaled.close()

    return canvas


def _fit_to_request(image: Image.Image, cx: int) -> Image.Image | None:
    width, height = image.size
    if width == cx and height == cx:
        return image

    if width <= 0 or height <= 0:
        image.close()
        return None

    scale = min(cx / width, cx / height)
    scaled_width = int(width * scale)
    scaled_height = int(height * scale)

    logger.debug(
        "Scaling %dx%d thumbnail to %dx%d",
        width,
        height,
        scaled_width,
        scaled_height,
    )
    resized = resize_image(image, scaled_width, scaled_height)
    image.close()
    return resized
