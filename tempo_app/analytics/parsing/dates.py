"""Resolve free-form "when" tokens (``y``, ``t-2``, ``2020-06-15``) to dates."""

from __future__ import annotations

import re
from collections.abc import Collection
from datetime import datetime, timedelta

from tempo_app.core.config import DATE_FORMAT, TODAY_LITERALS, YESTERDAY_LITERALS
from tempo_app.core.errors import DateParseError

TODAY_REFERENCE_RE = re.compile(rf"^(?:{'|'.join(TODAY_LITERALS)})([-+]\d+)$")


def _midnight(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def parse_date(token: str) -> datetime:
    """Parse an explicit ``yyyy-MM-dd`` date or raise :class:`DateParseError`."""
    try:
        return datetime.strptime(token, DATE_FORMAT)
    except (TypeError, ValueError) as exc:
        raise DateParseError(token) from exc


def resolve_when(
    now: datetime,
    token: str | None = None,
    *,
    yesterday_literals: Collection[str] = YESTERDAY_LITERALS,
    today_pattern: re.Pattern[str] = TODAY_REFERENCE_RE,
) -> datetime:
    """Turn a "when" token into a concrete datetime.

    Checked in order: no token returns ``now`` untouched; a yesterday literal
    and ``t``/``today`` with a signed day offset return a midnight; anything
    else must be an explicit ``yyyy-MM-dd`` date.
    """
    if token is None:
        return now
    if token in yesterday_literals:
        return _midnight(now) - timedelta(days=1)
    match = today_pattern.match(token)
    if match:
        try:
            return _midnight(now) + timedelta(days=int(match.group(1)))
        except (OverflowError, ValueError) as exc:
            raise DateParseError(token) from exc
    return parse_date(token)
