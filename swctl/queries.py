"""Query conditions for logs and browser error logs, and instance filtering."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from swctl.duration import QueryDuration
from swctl.events import Pagination


@dataclass(frozen=True)
class LogQuery:
    """Condition of a log query."""

    duration: QueryDuration
    service_id: str = ""
    instance_id: str = ""
    endpoint_id: str = ""
    trace_id: str = ""
    tags: list[tuple[str, str]] = field(default_factory=list)
    paging: Pagination = field(default_factory=Pagination)


@dataclass(frozen=True)
class BrowserLogQuery:
    """Condition of a browser error log query."""

    duration: QueryDuration
    service_id: str = ""
    version_id: str = ""
    page_id: str = ""
    paging: Pagination = field(default_factory=Pagination)


def parse_log_tags(text: str) -> list[tuple[str, str]]:
    """Parse ``key=value,key=value`` into a list of pairs.

    Only the text between the first and second ``=`` of a tag is kept as its
    value. Raises ``ValueError`` for a tag without ``=``.
    """
    if not text:
        return []
    tags = []
    for tag in text.split(","):
        parts = tag.split("=")
        if len(parts) < 2:
            raise ValueError(f"invalid tag, expected key=value: {tag}")
        tags.append((parts[0], parts[1]))
    return tags


def build_log_query(
    duration: QueryDuration,
    service_id: str = "",
    instance_id: str = "",
    endpoint_id: str = "",
    trace_id: str = "",
    tags: str = "",
) -> LogQuery:
    """Build the condition for listing logs; ``tags`` is ``key=value,...``."""
    return LogQuery(
        duration=duration,
        service_id=service_id,
        instance_id=instance_id,
        endpoint_id=endpoint_id,
        trace_id=trace_id,
        tags=parse_log_tags(tags),
    )


def build_browser_log_query(
    duration: QueryDuration,
    service_id: str = "",
    version_id: str = "",
    page_id: str = "",
) -> BrowserLogQuery:
    """Build the condition for listing browser error logs."""
    return BrowserLogQuery(
        duration=duration,
        service_id=service_id,
        version_id=version_id,
        page_id=page_id,
    )


def _name_of(instance: Any) -> str:
    if isinstance(instance, Mapping):
        return str(instance.get("name", ""))
    return str(getattr(instance, "name", ""))


def filter_instances(instances: Iterable[Any], regex: str) -> list[Any]:
    """Keep the instances whose name matches ``regex`` anywhere.

    Instances are mappings with a ``name`` key or objects with a ``name``
    attribute. An invalid pattern matches nothing.
    """
    try:
        pattern = re.compile(regex)
    except re.error:
        return []
    return [instance for instance in instances if pattern.search(_name_of(instance))]