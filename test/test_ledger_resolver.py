# test/test_ledger_resolver.py
from __future__ import annotations

from ledgers.ledger_resolver import (
    LedgerResolver,
    cgst_ledger_name,
    resolve_ledger_name,
    resolve_ledgers,
)
from models import Ledger


def _names(ledgers):
    return [l.name for l in ledgers]


def test_mixed_batch_at_one_rate(make_tx):
    txs = [make_tx(igst=180.0), make_tx(cgst=90.0, sgst=90.0)]
    assert resolve_ledgers(txs) == [
        Ledger("Sales @ 18%", "Sales Ledger", 18.0),
        Ledger("Output IGST @ 18%", "Tax Ledger", 18.0),
        Ledger("Output CGST @ 9%", "Tax Ledger", 18.0),
        Ledger("Output SGST @ 9%", "Tax Ledger", 18.0),
    ]


def test_rates_ascending_and_each_listed_once(make_tx):
    txs = [make_tx(gst_rate=18, igst=1), make_tx(gst_rate=5, igst=1), make_tx(gst_rate=18, igst=2)]
    assert _names(resolve_ledgers(txs)) == [
        "Sales @ 5%", "Output IGST @ 5%",
        "Sales @ 18%", "Output IGST @ 18%",
    ]


def test_zero_rate_and_no_tax_yield_sales_only(make_tx):
    txs = [make_tx(gst_rate=0), make_tx(gst_rate=12)]
    assert _names(resolve_ledgers(txs)) == ["Sales @ 12%"]


def test_tax_ledgers_are_decided_for_the_whole_batch(make_tx):
    txs = [make_tx(gst_rate=5, igst=5.0), make_tx(gst_rate=18, cgst=9.0)]
    names = _names(resolve_ledgers(txs))
    assert "Output CGST @ 2.5%" in names
    assert "Output IGST @ 18%" in names
    assert len(names) == 8


def test_only_sgst_still_lists_both_halves(make_tx):
    assert _names(resolve_ledgers([make_tx(gst_rate=28, sgst=14.0)])) == [
        "Sales @ 28%", "Output CGST @ 14%", "Output SGST @ 14%",
    ]


def test_fractional_rates_keep_their_digits(make_tx):
    assert cgst_ledger_name(5) == "Output CGST @ 2.5%"
    assert _names(resolve_ledgers([make_tx(gst_rate=0.25)])) == ["Sales @ 0.25%"]


def test_resolution_is_idempotent(make_tx):
    resolver = LedgerResolver([make_tx(igst=1.0), make_tx(gst_rate=5, cgst=1.0)])
    assert resolver.resolve() == resolver.resolve()


def test_empty_batch():
    assert resolve_ledgers([]) == []


def test_override_applies_only_when_non_blank():
    overrides = {"Sales @ 18%": "My Custom Sales", "Output IGST @ 18%": "   "}
    assert resolve_ledger_name("Sales @ 18%", overrides) == "My Custom Sales"
    assert resolve_ledger_name("Output IGST @ 18%", overrides) == "Output IGST @ 18%"
    assert resolve_ledger_name("Sales @ 5%", overrides) == "Sales @ 5%"
    assert resolve_ledger_name("Sales @ 5%", None) == "Sales @ 5%"


def test_ledger_guide_pairs_defaults_with_effective_names(make_tx):
    guide = LedgerResolver([make_tx(igst=180.0)]).ledger_guide({"Sales @ 18%": "Amazon Sales"})
    assert [(l.name, name) for l, name in guide] == [
        ("Sales @ 18%", "Amazon Sales"),
        ("Output IGST @ 18%", "Output IGST @ 18%"),
    ]
