"""Calendar-day parsing at the service boundary."""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Union

from pharmis_backend.domain.insight.errors import InvalidDateFormat

_YMD = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_calendar_date(value: Union[str, date]) -> date:
    """Accept a `date` or an exact `YYYY-MM-DD` string; raise InvalidDateFormat otherwise."""
    if isinstance(value, datetime):
        # a datetime carries a time of day and is rejected like any other shape
        raise InvalidDateFormat(value)
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _YMD.match(value):
        raise InvalidDateFormat(value)
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidDateFormat(value) from e
