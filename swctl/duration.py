"""Parsing of query time ranges, steps and timezones."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from datetime import timezone as _FixedZone
from decimal import Decimal
from enum import Enum


class Step(Enum):
    """Precision of a query time range."""

    DAY = "DAY"
    HOUR = "HOUR"
    MINUTE = "MINUTE"
    SECOND = "SECOND"

    @property
    def time_format(self) -> str:
        """``strftime`` format of times at this precision."""
        return _FORMATS[self]

    @property
    def span(self) -> timedelta:
        """Length of one unit of this precision."""
        return _SPANS[self]

    def __str__(self) -> str:
        return self.value


_FORMATS = {
    Step.DAY: "%Y-%m-%d",
    Step.HOUR: "%Y-%m-%d %H",
    Step.MINUTE: "%Y-%m-%d %H%M",
    Step.SECOND: "%Y-%m-%d %H%M%S",
}

_SPANS = {
    Step.DAY: timedelta(days=1),
    Step.HOUR: timedelta(hours=1),
    Step.MINUTE: timedelta(minutes=1),
    Step.SECOND: timedelta(seconds=1),
}

_DATE = r"([0-9]{4})-([0-9]{2})-([0-9]{2})"
_PATTERNS = {
    Step.DAY: re.compile(_DATE),
    Step.HOUR: re.compile(_DATE + r" ([0-9]{2})"),
    Step.MINUTE: re.compile(_DATE + r" ([0-9]{2})([0-9]{2})"),
    Step.SECOND: re.compile(_DATE + r" ([0-9]{2})([0-9]{2})([0-9]{2})"),
}

_DEFAULT_UNITS = 30


class DurationType(Enum):
    """Which ends of the time range the user gave."""

    BOTH_ABSENT = "BothAbsent"
    BOTH_PRESENT = "BothPresent"
    START_ABSENT = "StartAbsent"
    END_ABSENT = "EndAbsent"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class QueryDuration:
    """A formatted time range as sent to the backend."""

    start: str
    end: str
    step: Step


_NANOS_PER_UNIT = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_DURATION_PART = re.compile(r"([0-9]*)(?:\.([0-9]*))?(ns|us|\u00b5s|\u03bcs|ms|s|m|h)")
_MAX_NANOS = 2**63 - 1


def parse_go_duration(text: str) -> timedelta:
    """Parse a relative duration such as ``-1h30m`` or ``300ms``.

    Accepts an optional sign followed by one or more decimal numbers, each
    with a unit among ns, us, ms, s, m and h. Raises ``ValueError`` otherwise.
    """
    rest = text
    negative = False
    if rest[:1] in ("+", "-"):
        negative = rest[0] == "-"
        rest = rest[1:]
    if rest == "0":
        return timedelta(0)
    if not rest:
        raise ValueError(f"invalid duration {text!r}")

    total = Decimal(0)
    position = 0
    while position < len(rest):
        match = _DURATION_PART.match(rest, position)
        if match is None or not (match.group(1) or match.group(2)):
            raise ValueError(f"invalid duration {text!r}")
        whole, fraction, unit = match.groups()
        number = Decimal(f"{whole or '0'}.{fraction or '0'}")
        total += number * _NANOS_PER_UNIT[unit]
        position = match.end()

    limit = _MAX_NANOS + 1 if negative else _MAX_NANOS
    if total > limit:
        raise ValueError(f"invalid duration {text!r}")
    micros = int(total / 1000)
    return timedelta(microseconds=-micros if negative else micros)


def format_time(moment: datetime, step: Step) -> str:
    """Format ``moment`` at the precision of ``step``."""
    return moment.strftime(step.time_format)


def try_parse_time(
    unparsed: str, user_step: Step | None, now: datetime | None = None
) -> tuple[Step | None, datetime]:
    """Parse an absolute or relative time.

    An absolute time fixes the step by its precision; a relative duration is
    added to ``now`` and keeps ``user_step``. Raises ``ValueError`` if neither.
    """
    absolute_error: ValueError | None = None
    for step, pattern in _PATTERNS.items():
        match = pattern.fullmatch(unparsed)
        if match is None:
            continue
        try:
            return step, datetime(*(int(group) for group in match.groups()))
        except ValueError as exc:
            absolute_error = exc
    try:
        delta = parse_go_duration(unparsed)
    except ValueError as exc:
        detail = f"{absolute_error}; {exc}" if absolute_error else str(exc)
        raise ValueError(
            f"the given time {unparsed!r} is neither absolute time nor relative time: {detail}"
        ) from exc
    if now is None:
        now = datetime.now()
    return user_step, now + delta


def _span(step: Step | None) -> timedelta:
    return step.span if step is not None else timedelta(0)


def parse_duration(
    start: str,
    end: str,
    user_step: Step | None = None,
    now: datetime | None = None,
) -> tuple[datetime, datetime, Step | None, DurationType]:
    """Resolve ``start`` and ``end`` into ``(start, end, step, duration_type)``.

    With both absent the range is the last 30 minutes. With one absent it
    extends 30 units of the present one's precision from it.
    """
    if now is None:
        now = datetime.now()

    if not start and not end:
        return (
            now - _DEFAULT_UNITS * Step.MINUTE.span,
            now,
            Step.MINUTE,
            DurationType.BOTH_ABSENT,
        )

    if start and end:
        user_step, start_time = try_parse_time(start, user_step, now)
        step, end_time = try_parse_time(end, user_step, now)
        return start_time, end_time, step, DurationType.BOTH_PRESENT

    if not end:
        step, start_time = try_parse_time(start, user_step, now)
        return (
            start_time,
            start_time + _DEFAULT_UNITS * _span(step),
            step,
            DurationType.END_ABSENT,
        )

    step, end_time = try_parse_time(end, user_step, now)
    return (
        end_time - _DEFAULT_UNITS * _span(step),
        end_time,
        step,
        DurationType.START_ABSENT,
    )


def align_precision(start: str, end: str) -> tuple[str, str]:
    """Truncate the more precise of two time strings to the other's length."""
    if len(start) < len(end):
        return start, end[: len(start)]
    if len(start) > len(end):
        return start[: len(end)], end
    return start, end


_INTEGER = re.compile(r"[+-]?[0-9]+")


def timezone_offset(timezone: str | None) -> _FixedZone | None:
    """Turn an offset such as ``+0800`` into a fixed timezone.

    Only whole hours are kept. Returns ``None`` when the text is not an integer
    or the offset is out of range, meaning the local timezone applies.
    """
    if timezone is None or not _INTEGER.fullmatch(timezone):
        return None
    value = int(timezone)
    hours = abs(value) // 100
    if value < 0:
        hours = -hours
    try:
        return _FixedZone(timedelta(hours=hours))
    except ValueError:
        return None


def choose_timezone(explicit: str | None, server_timezone: str | None) -> str | None:
    """Pick the timezone to use: the user's if given, else a valid server one."""
    if explicit is not None:
        return explicit
    if server_timezone is not None and _INTEGER.fullmatch(server_timezone):
        return server_timezone
    return None