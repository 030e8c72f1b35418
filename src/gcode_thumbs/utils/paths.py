"""Utilities for coercing user-provided values into :class:`~pathlib.Path` objects."""

from __future__ import annotations

from os import PathLike
from pathlib import Path

__all__ = ["coerce_required_path", "default_output_path"]


def coerce_required_path(
    value: str | Path | PathLike[str],
    *,
    empty_error: str | None = None,
) -> Path:
    """Return *value* coerced into an absolute :class:`~pathlib.Path`.

    Raises :class:`ValueError` when *value* is an empty string.
    """

    if isinstance(value, Path):
        candidate = value
    else:
        text = str(value).strip()
        if not text:
            raise ValueError(empty_error or "Path value cannot be empty.")
        candidate = Path(text)

    return candidate.expanduser().resolve()


def default_output_path(source: Path, suffix: str = ".png") -> Path:
    """Return the image path written next to *source* when none is given."""

    return source.with_suffix(suffix)
