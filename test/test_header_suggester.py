# test/test_header_suggester.py
from __future__ import annotations

import logging

from config import CANONICAL_FIELDS
from models import Source, blank_mapping
from suggesters.header_suggester import (
    AliasHeaderSuggester,
    CollaboratorError,
    normalize_header,
    suggest_mapping,
)

AMAZON_HEADERS = [
    "Invoice Date", "Invoice Number", "Buyer Name", "Ship To State", "Taxable Value",
    "IGST", "CGST", "SGST", "Invoice Amount", "GST Rate", "Product Name", "Quantity",
]


class RecordingSuggester:
    def __init__(self, result=None, exc=None):
        self.result = result
        self.exc = exc
        self.seen = None

    def suggest(self, headers):
        self.seen = headers
        if self.exc is not None:
            raise self.exc
        return self.result


def _src(name, headers):
    return Source(name=name, headers=tuple(headers), rows=())


# ---------- alias suggester ----------
def test_alias_suggester_maps_common_export():
    mapping = AliasHeaderSuggester().suggest(AMAZON_HEADERS)
    assert mapping == dict(zip(CANONICAL_FIELDS, AMAZON_HEADERS))


def test_alias_suggester_ignores_case_and_punctuation():
    mapping = AliasHeaderSuggester().suggest(["invoice_date", "QTY", "Item Description"])
    assert mapping["date"] == "invoice_date"
    assert mapping["quantity"] == "QTY"
    assert mapping["productName"] == "Item Description"
    assert mapping["invoiceNo"] == ""


def test_alias_suggester_never_reuses_a_header():
    mapping = AliasHeaderSuggester(aliases={"date": ("x",), "invoiceNo": ("x",)}).suggest(["X"])
    assert mapping["date"] == "X"
    assert mapping["invoiceNo"] == ""


def test_normalize_header():
    assert normalize_header(" Ship-To State ") == "shiptostate"
    assert normalize_header(None) == ""


# ---------- suggest_mapping ----------
def test_first_source_headers_are_offered():
    stub = RecordingSuggester(result={"date": "Date"})
    sources = [_src("a.csv", ["Date", "Qty"]), _src("b.csv", ["Other"])]
    mapping = suggest_mapping(stub, sources)

    assert stub.seen == ["Date", "Qty"]
    assert mapping == {**blank_mapping(), "date": "Date"}


def test_collaborator_failure_degrades_to_blank(caplog):
    stub = RecordingSuggester(exc=CollaboratorError("service unavailable"))
    with caplog.at_level(logging.WARNING):
        mapping = suggest_mapping(stub, [_src("a.csv", ["Date"])])
    assert mapping == blank_mapping()
    assert "service unavailable" in caplog.text


def test_unexpected_exception_degrades_to_blank():
    stub = RecordingSuggester(exc=KeyError("boom"))
    assert suggest_mapping(stub, [_src("a.csv", ["Date"])]) == blank_mapping()


def test_non_dict_result_is_ignored():
    stub = RecordingSuggester(result=["date", "Date"])
    assert suggest_mapping(stub, [_src("a.csv", ["Date"])]) == blank_mapping()


def test_no_suggester_or_no_sources():
    assert suggest_mapping(None, [_src("a.csv", ["Date"])]) == blank_mapping()
    stub = RecordingSuggester(result={"date": "Date"})
    assert suggest_mapping(stub, []) == blank_mapping()
    assert stub.seen is None


def test_junk_in_result_is_coerced():
    stub = RecordingSuggester(result={"date": " Date ", "quantity": 3, "bogus": "X", "igst": None})
    mapping = suggest_mapping(stub, [_src("a.csv", ["Date"])])
    assert set(mapping) == set(CANONICAL_FIELDS)
    assert mapping["date"] == "Date"
    assert mapping["quantity"] == ""
    assert mapping["igst"] == ""
