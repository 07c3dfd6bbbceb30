"""
Date, file size and number formatting.
"""

from __future__ import annotations

from datetime import date as _date, datetime, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

DEFAULT_DATE_FORMAT = "%Y-%m-%d"

_BYTE_UNITS = ["B", "kB", "MB", "GB", "TB", "PB"]


def date(value: Any, fmt: Optional[str] = None) -> Optional[str]:
    """
    Formats a date with strftime directives.

    Accepts date/datetime objects, Unix timestamps and ISO 8601 strings.
    Empty values yield None, which renders as nothing.
    """
    if value is None or value == "" or value == 0:
        return None

    fmt = fmt or DEFAULT_DATE_FORMAT

    if isinstance(value, timedelta):
        return str(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        value = datetime.fromtimestamp(value)
    elif isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError as e:
            raise ValueError(f"Cannot parse date '{value}'") from e
    elif not isinstance(value, _date):
        raise TypeError(f"Cannot format {type(value).__name__} as a date")

    return value.strftime(fmt)


def _trim_number(text: str) -> str:
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _round_half_up(value: Any, places: int = 0) -> Decimal:
    # halves go away from zero, unlike round()
    return Decimal(str(value)).quantize(Decimal(1).scaleb(-int(places)), rounding=ROUND_HALF_UP)


def bytes_(value: Any, precision: int = 2) -> str:
    """Human readable file size, e.g. ``1536 -> '1.5 kB'``."""
    size = _round_half_up(float(value))
    unit = _BYTE_UNITS[0]
    for unit in _BYTE_UNITS:
        if abs(size) < 1024 or unit == _BYTE_UNITS[-1]:
            break
        size /= 1024

    return f"{_trim_number(format(_round_half_up(size, precision), 'f'))} {unit}"


def number(value: Any, decimals: int = 0, dec_point: str = ".", thousands_sep: str = ",") -> str:
    """Groups thousands and rounds to ``decimals`` places."""
    text = f"{_round_half_up(float(value), decimals):,f}"
    return text.replace(",", "\0").replace(".", dec_point).replace("\0", thousands_sep)


FORMAT_FUNCTIONS = {
    "date": date,
    "bytes": bytes_,
    "number": number,
}


class FormatExtension:
    name = "format"

    def register(self, engine) -> None:
        for fn_name, fn in FORMAT_FUNCTIONS.items():
            engine.register_function(fn_name, fn)


__all__ = ["FormatExtension", "FORMAT_FUNCTIONS"]
