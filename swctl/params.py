"""Parsing of ``key=value`` parameters attached to reported events."""

from __future__ import annotations

from collections.abc import Iterable


def parse_parameters(params: Iterable[str]) -> dict[str, str]:
    """Parse ``key=value`` strings into a dict.

    Both key and value must be non-empty; the value may hold further ``=``.
    Raises ``ValueError`` on the first malformed parameter.
    """
    result: dict[str, str] = {}
    for param in params:
        key, separator, value = param.partition("=")
        if not key or not separator or not value:
            raise ValueError(f"{param} is not a valid parameter, should like `key=value`")
        result[key] = value
    return result