"""
Module `summary_utils` — small helpers shared by the summary contributors.

Harvested facts are untrusted: every helper here tolerates missing keys,
values of the wrong type and malformed strings, and answers with None
instead of raising.
"""

import re
from datetime import date, datetime
from typing import Any, Mapping, Optional

# leading calendar date of an ISO-like timestamp: "2018-06-01", "2018-06-01T21:41:57.99Z", ...
_LEADING_DATE = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:$|[T\s]\d{2}:\d{2})")


def is_empty(value: Any) -> bool:
    """None, empty strings (blank included) and empty containers carry no signal."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (dict, list, tuple, set)):
        return len(value) == 0
    return False


def get_value(data: Any, dotted_path: str, default: Any = None) -> Any:
    """
    Reads `a.b.c` from nested mappings. Any intermediate value that is not a
    mapping ends the lookup with `default`.
    """
    current = data
    for key in dotted_path.split("."):
        if not isinstance(current, Mapping) or key not in current:
            return default
        current = current[key]
    return current


def set_if_value(target: dict, dotted_path: str, value: Any) -> bool:
    """
    Writes `value` at `dotted_path`, creating intermediate dicts, only when the
    value carries a signal. Returns True when something was written.
    """
    if is_empty(value):
        return False
    keys = dotted_path.split(".")
    current = target
    for key in keys[:-1]:
        child = current.get(key)
        if not isinstance(child, dict):
            child = {}
            current[key] = child
        current = child
    current[keys[-1]] = value
    return True


def extract_date(value: Any) -> Optional[str]:
    """
    Returns the calendar date (YYYY-MM-DD) of a timestamp, or None.

    The date is taken as written: time of day and UTC offset are discarded,
    no timezone conversion happens.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        return None

    s = value.strip()
    try:
        return datetime.fromisoformat(s).date().isoformat()
    except ValueError:
        pass

    # fromisoformat is stricter than what registries emit (e.g. 2 digit fractions)
    match = _LEADING_DATE.match(s)
    if not match:
        return None
    try:
        return date.fromisoformat(match.group(1)).isoformat()
    except ValueError:
        return None


def non_empty_string(value: Any) -> Optional[str]:
    """The value itself when it is a non blank string, verbatim."""
    if isinstance(value, str) and value.strip():
        return value
    return None


def first_string(value: Any) -> Optional[str]:
    """A non blank string, or the first non blank string of a list."""
    if isinstance(value, (list, tuple)):
        for item in value:
            found = non_empty_string(item)
            if found:
                return found
        return None
    return non_empty_string(value)
