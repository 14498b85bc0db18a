"""Reading bundled text assets and rendering the example configuration."""

from __future__ import annotations

import os
from pathlib import Path

_EXAMPLE_HEADER = "\n  Example of the file content:\n"
_EXAMPLE_INDENT = "  "


def strip_leading_comments(content: str) -> str:
    """Drop the block of consecutive ``#`` lines at the start of ``content``."""
    lines = content.split("\n")
    for index, line in enumerate(lines):
        if not line.startswith("#"):
            return "\n".join(lines[index:])
    return ""


def read_asset(path: str | os.PathLike[str]) -> str:
    """Read a text asset and drop its leading comment block.

    Raises ``FileNotFoundError`` (or another ``OSError``) if it cannot be read.
    """
    return strip_leading_comments(Path(path).read_text(encoding="utf-8"))


def example_text(content: str) -> str:
    """Render an example configuration file for inclusion in help text.

    Every line starting with ``#`` is left out and the rest are indented.
    """
    body = "".join(
        f"{_EXAMPLE_INDENT}{line}\n"
        for line in content.split("\n")
        if not line.startswith("#")
    )
    return _EXAMPLE_HEADER + body