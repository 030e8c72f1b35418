"""Configuration helpers for the gcode-thumbs package."""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass
from typing import Final

from .thumbnails import MAX_THUMBNAIL_SIZE

__all__ = [
    "DEFAULT_TEXT_ENCODING",
    "DEFAULT_THUMBNAIL_SIZE",
    "ENCODING_ENV_VAR",
    "SIZE_ENV_VAR",
    "ThumbnailConfig",
    "configure",
    "get_config",
]

ENCODING_ENV_VAR: Final[str] = "GCODE_THUMBS_ENCODING"
"""Environment variable overriding the text encoding used to read G-code."""

SIZE_ENV_VAR: Final[str] = "GCODE_THUMBS_SIZE"
"""Environment variable overriding the default requested thumbnail size."""

DEFAULT_TEXT_ENCODING: Final[str] = "utf-8"
"""Encoding used to decode G-code files when none is configured."""

DEFAULT_THUMBNAIL_SIZE: Final[int] = 256
"""Bounding dimension requested when callers do not specify one."""


@dataclass(frozen=True, slots=True)
class ThumbnailConfig:
    """Runtime configuration for thumbnail extraction."""

    text_encoding: str = DEFAULT_TEXT_ENCODING
    default_size: int = DEFAULT_THUMBNAIL_SIZE

    def __post_init__(self) -> None:
        try:
            codecs.lookup(self.text_encoding)
        except LookupError as exc:
            raise ValueError(f"Unknown text encoding: {self.text_encoding!r}") from exc

        if not 0 < self.default_size <= MAX_THUMBNAIL_SIZE:
            raise ValueError(
                f"Thumbnail size must be between 1 and {MAX_THUMBNAIL_SIZE}, got {self.default_size}"
            )


_CONFIG: ThumbnailConfig | None = None


def get_config() -> ThumbnailConfig:
    """Return the cached :class:`ThumbnailConfig` instance."""

    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _build_config()
    return _CONFIG


def configure(
    *,
    text_encoding: str | None = None,
    default_size: int | None = None,
) -> ThumbnailConfig:
    """Rebuild the global configuration with optional overrides."""

    global _CONFIG
    _CONFIG = _build_config(text_encoding=text_encoding, default_size=default_size)
    return _CONFIG


def _build_config(
    *,
    text_encoding: str | None = None,
    default_size: int | None = None,
) -> ThumbnailConfig:
    if text_encoding is None:
        text_encoding = os.environ.get(ENCODING_ENV_VAR, "").strip() or DEFAULT_TEXT_ENCODING

    if default_size is None:
        env_value = os.environ.get(SIZE_ENV_VAR, "").strip()
        if env_value:
            try:
                default_size = int(env_value)
            except ValueError as exc:
                raise ValueError(f"{SIZE_ENV_VAR} must be an integer, got {env_value!r}") from exc
        else:
            default_size = DEFAULT_THUMBNAIL_SIZE

    return ThumbnailConfig(text_encoding=text_encoding, default_size=default_size)
