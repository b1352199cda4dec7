"""Helper utility functions for the Marketplace to Tally converter."""

import re
import warnings
from datetime import date
from typing import Optional
from xml.sax.saxutils import escape

import numpy as np
import pandas as pd

from config import FALLBACK_VOUCHER_DATE

# Characters kept before a cell is read as a number
_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
_NUMBER = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")
_CAMEL_BOUNDARY = re.compile(r"([A-Z])")
# Characters XML 1.0 does not allow in a document
_XML_INVALID = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")

_XML_ENTITIES = {"'": "&apos;", '"': "&quot;"}


def is_blank(val) -> bool:
    """
    Check if value is considered empty.

    Returns True if value is:
    - NaN / None
    - Empty string ""
    - String containing only whitespace

    Args:
        val: Value to check (any type)

    Returns:
        True if value is considered empty, False otherwise
    """
    if val is None:
        return True
    if isinstance(val, str):
        return val.strip() == ""
    try:
        return bool(pd.isna(val))
    except (TypeError, ValueError):
        return False


def clean_numeric(raw: str) -> str:
    """
    Strip every character that is not a digit, a minus sign or a decimal point.

    Examples:
        >>> clean_numeric("₹1,234.50")
        '1234.50'
        >>> clean_numeric("18%")
        '18'
    """
    return _NON_NUMERIC.sub("", raw or "")


def looks_numeric(raw: str) -> bool:
    """
    Check whether a raw cell reads as one number once cleaned.

    Blank cells pass. The cleaned remainder must be a single number in full,
    so residues such as ``"1.2.3"`` or ``"-"`` fail.
    """
    if is_blank(raw):
        return True
    return _NUMBER.fullmatch(clean_numeric(raw)) is not None


def coerce_number(raw: str) -> Optional[float]:
    """
    Read a raw cell as a float.

    The cell is cleaned with ``clean_numeric`` and the longest leading number
    of what remains is used, so ``"1.2.3"`` reads as 1.2 and ``"12-05"`` as 12.

    Args:
        raw: Cell text

    Returns:
        Finite float, or None if no number could be read

    Examples:
        >>> coerce_number("INR 1,000.00")
        1000.0
        >>> coerce_number("n/a") is None
        True
    """
    m = _NUMBER.match(clean_numeric(raw))
    if m is None:
        return None
    value = float(m.group(0))
    if not np.isfinite(value):
        return None
    return value


def parse_date_safe(val) -> Optional[date]:
    """
    Safely parse a calendar date.

    Args:
        val: Date value (string, datetime, or None)

    Returns:
        date object or None if parsing fails or value is blank

    Examples:
        >>> parse_date_safe("2025-01-15")
        datetime.date(2025, 1, 15)
        >>> parse_date_safe("") is None
        True
    """
    if is_blank(val):
        return None
    try:
        # day-first strings such as "15/04/2024" trigger a format inference warning
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", UserWarning)
            ts = pd.to_datetime(val, errors="coerce")
    except (ValueError, TypeError, OverflowError):
        return None
    if pd.isna(ts):
        return None
    return ts.date()


def looks_like_date(raw: str) -> bool:
    """Blank cells pass; anything else must parse as a calendar date."""
    if is_blank(raw):
        return True
    return parse_date_safe(raw) is not None


def to_tally_date(raw: str) -> str:
    """Render a date as YYYYMMDD, falling back to a fixed date when unparsable."""
    parsed = parse_date_safe(raw)
    if parsed is None:
        return FALLBACK_VOUCHER_DATE
    return f"{parsed.year:04d}{parsed.month:02d}{parsed.day:02d}"


def fmt_number(v) -> str:
    """
    Format a number for ledger names and quantities.

    Whole numbers drop the decimal point, everything else uses the shortest
    round-trip form.

    Examples:
        >>> fmt_number(18.0)
        '18'
        >>> fmt_number(2.5)
        '2.5'
    """
    f = float(v)
    return str(int(f)) if f.is_integer() else repr(f)


def fmt_amount(v) -> str:
    """Fixed-point amount with exactly two decimals and no separators."""
    return f"{float(v):.2f}"


def xml_escape(text) -> str:
    """Escape ``< > & ' "`` for XML content, dropping characters XML 1.0 forbids."""
    if text is None:
        return ""
    return escape(_XML_INVALID.sub("", str(text)), _XML_ENTITIES)


def humanize_field(key: str) -> str:
    """
    Render a canonical field key for messages.

    Examples:
        >>> humanize_field("taxableValue")
        'Taxable Value'
    """
    words = _CAMEL_BOUNDARY.sub(r" \1", key).strip()
    return words[:1].upper() + words[1:]
