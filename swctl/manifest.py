"""Help text and overlay loading for the install manifest commands."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import IO, Any

import yaml


def usage(command: str, example_overlays: str) -> str:
    """Return the examples section of the help text of a manifest command."""
    return f"""
Examples:

{example_overlays}

1. Output manifest with default custom resource
$ swctl install manifest {command}

2. Load overlay custom resource from flag
$ swctl install manifest {command} -f {command}-cr.yaml

3. Load overlay custom resource from stdin
$ cat {command}-cr.yaml | swctl install manifest {command} -f=-

4. Apply directly to Kubernetes
$ swctl install manifest {command} -f {command}-cr.yaml | kubectl apply -f-
"""


def load_overlay(
    file: str | os.PathLike[str], stream: IO[str] | None = None
) -> Any:
    """Load an overlay custom resource.

    An empty ``file`` gives ``None``; ``-`` reads from ``stream`` (standard
    input by default), giving ``None`` when it is empty; anything else is a
    path to read. Raises ``OSError`` or ``yaml.YAMLError`` on failure.
    """
    if not file:
        return None
    if str(file) == "-":
        source = sys.stdin if stream is None else stream
        lines = [line.rstrip("\n").rstrip("\r") for line in source]
        if not lines:
            return None
        return yaml.safe_load("\n".join(lines))
    return yaml.safe_load(Path(file).read_text(encoding="utf-8"))