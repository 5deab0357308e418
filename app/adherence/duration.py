"""
Duration parsing.

Coaches log exercise durations as free text ("20 min", "1 hour",
"45 seconds") or as bare numbers.  Everything is converted to minutes.
Unparseable input counts as zero minutes and never raises.
"""

from __future__ import annotations

import re
from typing import Any

_NUMBER = re.compile(r"(\d+(?:[.,]\d+)?)")

# Unit tokens may follow the number directly ("90s", "1.5h").
_HOURS = re.compile(r"(?:(?<=\d)|\b)(?:h|hs|hr|hrs|hour|hours)\b")
_SECONDS = re.compile(r"(?:(?<=\d)|\b)(?:s|sec|secs|second|seconds)\b")


def parse_duration_minutes(value: Any) -> float:
    """Convert a logged duration to minutes.

    Numbers pass through unchanged.  For text, the first numeric substring
    is the quantity; an hour unit multiplies it by 60, a second unit divides
    it by 60, anything else (minutes or no unit) keeps it as minutes.

    Examples::

        >>> parse_duration_minutes("1 hour")
        60.0
        >>> parse_duration_minutes("45")
        45.0
        >>> parse_duration_minutes("30 seconds")
        0.5
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return 0.0

    text = value.strip().lower()
    match = _NUMBER.search(text)
    if not match:
        return 0.0

    quantity = float(match.group(1).replace(",", "."))

    if _HOURS.search(text):
        return quantity * 60.0
    if _SECONDS.search(text):
        return quantity / 60.0
    return quantity
