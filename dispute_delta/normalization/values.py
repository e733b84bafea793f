"""Cell value normalizers.

Decoded spreadsheets hand back a mix of formatted strings, numbers and
(for workbooks) native dates. These helpers turn any of those into the
canonical text/float values used by the records, and never raise.
"""

import re
from datetime import date, datetime, timedelta, timezone
from typing import Any

from dispute_delta.config import DEFAULT_DATE_FORMAT
from dispute_delta.models.records import NOT_AVAILABLE

_TRAILING_ZERO_FRACTION = re.compile(r"(?:\s*\.0+)+$")
_NON_AMOUNT_CHARS = re.compile(r"[^0-9.\-]")
_NON_DIGITS = re.compile(r"[^0-9]")
_DATE_SERIAL = re.compile(r"^\d{5}(\.\d+)?$")

# Plausible serial range: roughly 1979 to 2064.
_SERIAL_MIN = 29000
_SERIAL_MAX = 60000
# Days between the spreadsheet serial epoch (1899-12-30) and 1970-01-01.
_SERIAL_UNIX_OFFSET = 25569
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_text(value: Any) -> str:
    """Stringify a cell value; ``None`` becomes empty, ``5.0`` becomes ``"5"``."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def clean_identifier(value: Any) -> str:
    """Normalize an identifier for comparison.

    Handles "123", "123.0", 123 and " 123 " alike, and lowercases.
    """
    text = to_text(value).strip()
    text = _TRAILING_ZERO_FRACTION.sub("", text)
    return text.lower()


def clean_amount(value: Any) -> float:
    """Parse a currency amount, returning 0.0 when it cannot be parsed.

    A result of 0 means "absent or unparseable" to every caller.
    """
    cleaned = _NON_AMOUNT_CHARS.sub("", to_text(value))
    try:
        return float(cleaned)
    except ValueError:
        return 0.0


def resolve_calendar_date(value: Any, date_format: str = DEFAULT_DATE_FORMAT) -> str:
    """Render a date cell as text.

    Pre-formatted strings pass through untouched. Numeric day-count serials
    (e.g. ``45321``) are converted, as are native date objects.
    """
    if isinstance(value, datetime):
        return value.strftime(date_format)
    if isinstance(value, date):
        return value.strftime(date_format)

    text = to_text(value).strip()
    if not text or text == NOT_AVAILABLE:
        return NOT_AVAILABLE

    if _DATE_SERIAL.match(text):
        serial = float(text)
        if _SERIAL_MIN < serial < _SERIAL_MAX:
            seconds = round((serial - _SERIAL_UNIX_OFFSET) * 86400)
            return (_UNIX_EPOCH + timedelta(seconds=seconds)).strftime(date_format)
    return text


def last_four(value: Any) -> str:
    """Last four characters of the stringified value."""
    return to_text(value)[-4:]


def last_four_digits(value: Any) -> str:
    """Last four digits of a (possibly masked) card number."""
    return _NON_DIGITS.sub("", to_text(value))[-4:]
