"""Parsing of duration and interval expressions (``1h30m``, ``11-12:30``).

Two grammars are accepted by :func:`parse`:

* duration: one or more ``<int><unit>`` tokens without separators, units ``h``
  and ``m`` (``2h``, ``45m``, ``1h30m``);
* interval: two clock times joined by ``-``. A clock time is ``HH:mm``,
  ``HH.mm``, compact ``HHmm`` or a bare hour ``H``/``HH``.

A failed parse returns ``None``; callers decide how to report it.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta

from tempo_app.core.config import START_TIME_FORMAT
from tempo_app.core.models import Interval, ParsedDuration

SECONDS_PER_UNIT: dict[str, int] = {"h": 3600, "m": 60}

_DURATION_RE = re.compile(r"^(?:\d+[hm])+$")
_DURATION_TOKEN_RE = re.compile(r"(\d+)([hm])")
_CLOCK = r"\d{1,2}(?:[:.]\d{2})?|\d{3,4}"
_INTERVAL_RE = re.compile(rf"^({_CLOCK})-({_CLOCK})$")
_CLOCK_RE = re.compile(r"^(\d{1,2})(?:[:.](\d{2})(?::(\d{2}))?)?$|^(\d{1,2})(\d{2})$")


def _parse_clock(text: str) -> tuple[int, int, int] | None:
    match = _CLOCK_RE.match(text.strip())
    if not match:
        return None
    if match.group(1) is not None:
        hours = int(match.group(1))
        minutes = int(match.group(2) or 0)
        seconds = int(match.group(3) or 0)
    else:
        hours = int(match.group(4))
        minutes = int(match.group(5))
        seconds = 0
    if hours > 23 or minutes > 59 or seconds > 59:
        return None
    return hours, minutes, seconds


def parse_time(text: str | None, reference_date: datetime) -> datetime | None:
    """Place a standalone clock time on the day of ``reference_date``."""
    if not text:
        return None
    clock = _parse_clock(text)
    if clock is None:
        return None
    hours, minutes, seconds = clock
    return reference_date.replace(hour=hours, minute=minutes, second=seconds, microsecond=0)


def _parse_duration(expression: str) -> ParsedDuration | None:
    if not _DURATION_RE.match(expression):
        return None
    total = 0
    for magnitude, unit in _DURATION_TOKEN_RE.findall(expression):
        total += int(magnitude) * SECONDS_PER_UNIT[unit]
    return ParsedDuration(seconds=total)


def _parse_interval(expression: str, reference_date: datetime) -> ParsedDuration | None:
    match = _INTERVAL_RE.match(expression)
    if not match:
        return None
    start = parse_time(match.group(1), reference_date)
    end = parse_time(match.group(2), reference_date)
    if start is None or end is None or end <= start:
        return None
    seconds = int((end - start).total_seconds())
    return ParsedDuration(seconds=seconds, start_time=start.strftime(START_TIME_FORMAT))


def parse(expression: str | None, reference_date: datetime) -> ParsedDuration | None:
    if not expression:
        return None
    cleaned = expression.strip().lower()
    return _parse_duration(cleaned) or _parse_interval(cleaned, reference_date)


def to_interval(seconds: int, start_time: str | None, reference_date: datetime) -> Interval | None:
    """Rebuild a start/end pair from a stored duration; ``None`` when unknown."""
    try:
        start = parse_time(start_time, reference_date)
        if start is None:
            return None
        return Interval(start=start, end=start + timedelta(seconds=int(seconds)))
    except (TypeError, ValueError, OverflowError):
        return None


def to_duration(seconds: int | None) -> str | None:
    """Render seconds in the compact duration grammar (``1h30m``).

    Leftover seconds below a full minute are dropped.
    """
    if seconds is None or seconds < 0:
        return None
    hours, rest = divmod(int(seconds), 3600)
    minutes = rest // 60
    if hours and minutes:
        return f"{hours}h{minutes}m"
    if hours:
        return f"{hours}h"
    return f"{minutes}m"
