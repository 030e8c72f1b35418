#!/usr/bin/env python3
"""Entry-point shim for running the CLI from a source checkout."""

from __future__ import annotations

from gcode_thumbs.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
