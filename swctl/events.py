"""Query conditions for alarms and events, and events to report."""

from __future__ import annotations

import uuid as _uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from swctl.duration import QueryDuration
from swctl.params import parse_parameters

DEFAULT_PAGE_SIZE = 15


@dataclass(frozen=True)
class Pagination:
    """Which page of results to ask for."""

    page_num: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


class EventType(Enum):
    """Type of an event; ``ALL`` selects every type in a query."""

    ALL = -1
    NORMAL = 0
    ERROR = 1

    @property
    def label(self) -> str:
        """Name of the type as the backend spells it."""
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, text: str) -> EventType:
        """Parse ``Normal`` or ``Error`` (any case)."""
        for member in (cls.NORMAL, cls.ERROR):
            if member.label.lower() == text.strip().lower():
                return member
        raise ValueError(f"invalid event type {text!r}, expected Normal or Error")


def _coerce_type(event_type: EventType | str) -> EventType:
    return event_type if isinstance(event_type, EventType) else EventType.parse(event_type)


@dataclass(frozen=True)
class AlarmCondition:
    """Condition of an alarm query."""

    duration: QueryDuration
    keyword: str = ""
    scope: str = ""
    tags: list[tuple[str, str]] = field(default_factory=list)
    paging: Pagination = field(default_factory=Pagination)


@dataclass(frozen=True)
class EventQuery:
    """Condition of an event query."""

    duration: QueryDuration
    service: str = ""
    instance: str = ""
    endpoint: str = ""
    name: str = ""
    layer: str = ""
    event_type: EventType | None = None
    paging: Pagination = field(default_factory=Pagination)


@dataclass(frozen=True)
class EventReport:
    """An event to report to the backend."""

    uuid: str
    layer: str
    service: str = ""
    instance: str = ""
    endpoint: str = ""
    name: str = ""
    event_type: EventType = EventType.NORMAL
    message: str = ""
    parameters: dict[str, str] = field(default_factory=dict)
    start_time: int = 0
    end_time: int = 0


def parse_alarm_tags(text: str) -> list[tuple[str, str]]:
    """Parse ``key=value,key=value`` into a list of pairs.

    Raises ``ValueError`` for a tag without ``=``.
    """
    if not text:
        return []
    tags = []
    for tag in text.split(","):
        key, separator, value = tag.partition("=")
        if not separator:
            raise ValueError(f"invalid tag, cannot be splitted into 2 parts. {tag}")
        tags.append((key, value))
    return tags


def build_alarm_condition(
    duration: QueryDuration, keyword: str = "", tags: str = "", scope: str = ""
) -> AlarmCondition:
    """Build the condition for listing alarms; ``tags`` is ``key=value,...``."""
    return AlarmCondition(
        duration=duration,
        keyword=keyword,
        scope=scope,
        tags=parse_alarm_tags(tags),
    )


def build_event_query(
    duration: QueryDuration,
    service: str = "",
    instance: str = "",
    endpoint: str = "",
    name: str = "",
    layer: str = "",
    event_type: EventType | str = EventType.ALL,
) -> EventQuery:
    """Build the condition for listing events; ``ALL`` leaves the type open."""
    if isinstance(event_type, str) and event_type.strip().lower() == "all":
        event_type = EventType.ALL
    chosen = _coerce_type(event_type)
    return EventQuery(
        duration=duration,
        service=service,
        instance=instance,
        endpoint=endpoint,
        name=name,
        layer=layer.upper(),
        event_type=None if chosen is EventType.ALL else chosen,
    )


def build_event_report(
    layer: str,
    args: Iterable[str] = (),
    uuid: str | None = None,
    service: str = "",
    instance: str = "",
    endpoint: str = "",
    name: str = "",
    event_type: EventType | str = EventType.NORMAL,
    message: str = "",
    start_time: int = 0,
    end_time: int = 0,
) -> EventReport:
    """Build an event to report; ``args`` are ``key=value`` parameters.

    A random uuid is generated when none is given. Raises ``ValueError`` when
    the layer is empty or a parameter is malformed.
    """
    if not layer:
        raise ValueError('required flag "layer" not set')
    chosen = _coerce_type(event_type)
    if chosen is EventType.ALL:
        raise ValueError("an event to report must be of type Normal or Error")
    return EventReport(
        uuid=uuid or str(_uuid.uuid4()),
        layer=layer.upper(),
        service=service,
        instance=instance,
        endpoint=endpoint,
        name=name,
        event_type=chosen,
        message=message,
        parameters=parse_parameters(args),
        start_time=start_time,
        end_time=end_time,
    )