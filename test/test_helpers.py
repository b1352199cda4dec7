# test/test_helpers.py
from __future__ import annotations

import warnings
from datetime import date

import pytest

from utils.helpers import (
    clean_numeric,
    coerce_number,
    fmt_amount,
    fmt_number,
    humanize_field,
    is_blank,
    looks_like_date,
    looks_numeric,
    parse_date_safe,
    to_tally_date,
    xml_escape,
)


@pytest.mark.parametrize("raw, expected", [
    ("₹1,234.50", 1234.5),
    ("18%", 18.0),
    ("-42", -42.0),
    (".5", 0.5),
    ("5.", 5.0),
    # residues after cleaning keep only the leading number
    ("1.2.3", 1.2),
    ("12-05", 12.0),
    ("5-", 5.0),
    ("", None),
    ("n/a", None),
    ("-", None),
    (".", None),
    ("--5", None),
])
def test_coerce_number(raw, expected):
    assert coerce_number(raw) == expected


def test_looks_numeric_needs_a_single_number():
    assert looks_numeric("")
    assert looks_numeric("INR 1,000.00")
    assert not looks_numeric("1.2.3")
    assert not looks_numeric("abc")
    assert not looks_numeric("-")


def test_clean_numeric_keeps_digits_minus_and_dot():
    assert clean_numeric("INR -1,000.50/-") == "-1000.50-"


def test_dates():
    assert looks_like_date("")
    assert looks_like_date("2024-04-15")
    assert not looks_like_date("not a date")
    assert to_tally_date("2024-04-05") == "20240405"
    assert to_tally_date("garbage") == "20240401"
    assert to_tally_date("") == "20240401"


def test_day_first_dates_parse_without_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error", UserWarning)
        assert parse_date_safe("15/04/2024") == date(2024, 4, 15)
        assert to_tally_date("15/04/2024") == "20240415"


def test_number_formatting():
    assert fmt_number(18.0) == "18"
    assert fmt_number(9) == "9"
    assert fmt_number(2.5) == "2.5"
    assert fmt_number(0.125) == "0.125"
    assert fmt_amount(1000) == "1000.00"
    assert fmt_amount(1234567.891) == "1234567.89"
    assert fmt_amount(-180) == "-180.00"


def test_xml_escape_all_five_characters():
    assert xml_escape("""<a & 'b' "c">""") == "&lt;a &amp; &apos;b&apos; &quot;c&quot;&gt;"
    assert xml_escape(None) == ""


def test_xml_escape_drops_characters_xml_forbids():
    assert xml_escape("Acme\x0bLtd\x00") == "AcmeLtd"
    assert xml_escape("a\x1f&b\uffff") == "a&amp;b"
    # tab, newline and carriage return are legal
    assert xml_escape("a\tb\nc\r") == "a\tb\nc\r"


def test_humanize_field_and_is_blank():
    assert humanize_field("taxableValue") == "Taxable Value"
    assert humanize_field("date") == "Date"
    assert is_blank("  ")
    assert is_blank(None)
    assert not is_blank("0")


def test_currency_prefix_with_dot_is_flagged_and_degrades_deterministically():
    # "Rs. 1,000.00" cleans to ".1000.00": validation warns, coercion reads 0.1
    assert not looks_numeric("Rs. 1,000.00")
    assert coerce_number("Rs. 1,000.00") == 0.1
