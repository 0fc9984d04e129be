"""Jinja2 filters giving configuration values their canonical document form.

Every ``{{ }}`` substitution in the skeleton goes through ``format_value``
(registered as the environment ``finalize`` hook), so the template itself
never has to know the Python type of a field:

- bool: ``true`` / ``false``
- timedelta: Go-style short units (``1s``, ``1m5s``, ``24h0m0s``, ``100ms``)
- Enum: its value
- int / str: ``str()``, strings are inserted raw (quotes live in the skeleton)
"""

from datetime import timedelta
from enum import Enum
from typing import Any

from bridgeconf.errors import MalformedModelError

_MICROSECOND = 1
_MILLISECOND = 1000 * _MICROSECOND
_SECOND = 1000 * _MILLISECOND
_MINUTE = 60 * _SECOND
_HOUR = 60 * _MINUTE


def _fraction(value: int, unit: int) -> str:
    """Format ``value / unit`` with trailing zeros of the fraction dropped."""
    whole, frac = divmod(value, unit)
    if not frac:
        return str(whole)

    digits = len(str(unit)) - 1
    return f"{whole}." + f"{frac:0{digits}d}".rstrip("0")


def format_duration(value: timedelta) -> str:
    """Format a duration the way the bridge writes durations.

    Args:
        value: Duration (microsecond resolution)

    Returns:
        Short-unit string

    Examples:
        >>> format_duration(timedelta(minutes=1, seconds=5))
        '1m5s'
        >>> format_duration(timedelta(hours=24))
        '24h0m0s'
        >>> format_duration(timedelta(milliseconds=100))
        '100ms'
        >>> format_duration(timedelta())
        '0s'
    """
    total = value // timedelta(microseconds=1)
    if total == 0:
        return "0s"

    sign = "-" if total < 0 else ""
    total = abs(total)

    if total < _MILLISECOND:
        return f"{sign}{total}µs"
    if total < _SECOND:
        return f"{sign}{_fraction(total, _MILLISECOND)}ms"

    hours, rest = divmod(total, _HOUR)
    minutes, rest = divmod(rest, _MINUTE)
    seconds = _fraction(rest, _SECOND) + "s"

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}"
    if minutes:
        return f"{sign}{minutes}m{seconds}"
    return f"{sign}{seconds}"


def toml_bool(value: bool) -> str:
    """Lowercase boolean literal."""
    return "true" if value else "false"


def format_value(value: Any) -> str:
    """Render a scalar for substitution into the document.

    Args:
        value: Field value looked up by the skeleton

    Returns:
        Canonical textual representation

    Raises:
        MalformedModelError: If a required slot holds ``None``
    """
    if value is None:
        raise MalformedModelError("required configuration value is None")

    # bool before int, bool is an int subclass
    if isinstance(value, bool):
        return toml_bool(value)
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, Enum):
        return str(value.value)

    return str(value)
