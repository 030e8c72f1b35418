"""Host-facing thumbnail provider for G-code files."""

from __future__ import annotations

import enum
import io
import logging
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import IO, Any

from PIL import Image

from .config import get_config
from .thumbnails import MAX_THUMBNAIL_SIZE, get_thumbnail

__all__ = [
    "AlphaType",
    "GCodeThumbnailProvider",
    "ThumbnailResult",
    "thumbnail_from_path",
]

logger = logging.getLogger(__name__)


class AlphaType(enum.Enum):
    """Describe how a host should treat the alpha channel of a thumbnail."""

    UNKNOWN = 0
    RGB = 1
    ARGB = 2


@dataclass(slots=True)
class ThumbnailResult:
    """Outcome of a provider request."""

    image: Image.Image | None
    alpha: AlphaType = AlphaType.UNKNOWN

    @property
    def has_thumbnail(self) -> bool:
        return self.image is not None


class GCodeThumbnailProvider:
    """Serve thumbnails for a single G-code stream.

    The host hands over the stream with :meth:`initialize` and then asks for
    a thumbnail of a given size. Each instance serves one stream; hosts
    issuing parallel requests create one provider per request.
    """

    def __init__(self, *, encoding: str | None = None) -> None:
        self._encoding = encoding
        self._stream: IO[Any] | Iterable[str] | None = None

    @property
    def stream(self) -> IO[Any] | Iterable[str] | None:
        return self._stream

    def initialize(self, stream: IO[Any] | Iterable[str] | None, mode: int = 0) -> None:
        """Remember *stream* for later requests.

        *stream* may be a text or binary stream, or any iterable of ``str``
        or ``bytes`` lines. Binary input is decoded with the configured
        encoding. *mode* is accepted for host compatibility and ignored; the
        stream is always read only.
        """

        self._stream = stream

    def get_thumbnail(self, cx: int) -> ThumbnailResult:
        """Return the thumbnail fitted into *cx* pixels with its alpha hint."""

        if cx == 0 or cx > MAX_THUMBNAIL_SIZE or self._stream is None:
            return ThumbnailResult(None)

        encoding = self._encoding or get_config().text_encoding
        with _text_lines(self._stream, encoding) as lines:
            image = get_thumbnail(lines, cx)

        if image is None:
            return ThumbnailResult(None)

        if image.width <= 0 or image.height <= 0:
            image.close()
            return ThumbnailResult(None)

        return ThumbnailResult(image, AlphaType.RGB)


def thumbnail_from_path(
    path: str | PathLike[str],
    cx: int,
    *,
    encoding: str | None = None,
) -> Image.Image | None:
    """Return the thumbnail embedded in the G-code file at *path*."""

    source = Path(path).expanduser()
    encoding = encoding or get_config().text_encoding
    try:
        with source.open("r", encoding=encoding, errors="ignore") as handle:
            return get_thumbnail(handle, cx)
    except OSError as exc:
        logger.warning("Unable to read %s: %s", source, exc)
        return None


@contextmanager
def _text_lines(stream: IO[Any] | Iterable[str], encoding: str) -> Iterator[Iterable[str]]:
    """Yield *stream* as text lines without taking ownership of it."""

    if isinstance(stream, io.RawIOBase):
        buffered = io.BufferedReader(stream)
        wrapper = io.TextIOWrapper(buffered, encoding=encoding, errors="ignore")
        try:
            yield wrapper
        finally:
            wrapper.detach()
            buffered.detach()
    elif isinstance(stream, io.BufferedIOBase):
        wrapper = io.TextIOWrapper(stream, encoding=encoding, errors="ignore")
        try:
            yield wrapper
        finally:
            wrapper.detach()
    else:
        yield _decoded_lines(stream, encoding)


def _decoded_lines(lines: Iterable[str | bytes], encoding: str) -> Iterator[str]:
    for line in lines:
        if isinstance(line, bytes):
            yield line.decode(encoding, errors="ignore")
        else:
            yield line
