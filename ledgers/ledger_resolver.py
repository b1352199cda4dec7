"""Ledger derivation for a batch of sales transactions."""

import logging
from typing import List, Mapping, Optional, Sequence, Tuple

from config import SALES_LEDGER, TAX_LEDGER
from models import Ledger, Transaction
from utils.helpers import fmt_number


def sales_ledger_name(rate: float) -> str:
    return f"Sales @ {fmt_number(rate)}%"


def igst_ledger_name(rate: float) -> str:
    return f"Output IGST @ {fmt_number(rate)}%"


def cgst_ledger_name(rate: float) -> str:
    return f"Output CGST @ {fmt_number(rate / 2)}%"


def sgst_ledger_name(rate: float) -> str:
    return f"Output SGST @ {fmt_number(rate / 2)}%"


def resolve_ledger_name(default_name: str, overrides: Optional[Mapping[str, str]] = None) -> str:
    """Use the override for ``default_name`` unless it is missing or blank."""
    custom = (overrides or {}).get(default_name)
    if isinstance(custom, str) and custom.strip():
        return custom
    return default_name


class LedgerResolver:
    """
    Derive the Tally ledgers a batch of transactions needs.

    One Sales ledger per distinct positive GST rate. Tax ledgers are decided
    batch-wide: if any transaction carries IGST, every rate gets an IGST
    ledger; if any carries CGST or SGST, every rate gets a CGST and an SGST
    ledger at half the rate. A rate only ever used for IGST therefore still
    lists CGST/SGST ledgers when another transaction in the batch is
    intra-state.
    """

    def __init__(self, transactions: Sequence[Transaction]):
        self.transactions = list(transactions)

    def rates(self) -> List[float]:
        return sorted({float(t.gst_rate) for t in self.transactions if t.gst_rate > 0})

    def has_igst(self) -> bool:
        return any(t.igst > 0 for t in self.transactions)

    def has_cgst_sgst(self) -> bool:
        return any(t.cgst > 0 or t.sgst > 0 for t in self.transactions)

    def resolve(self) -> List[Ledger]:
        has_igst = self.has_igst()
        has_split = self.has_cgst_sgst()

        ledgers: List[Ledger] = []
        for rate in self.rates():
            ledgers.append(Ledger(sales_ledger_name(rate), SALES_LEDGER, rate))
            if has_igst:
                ledgers.append(Ledger(igst_ledger_name(rate), TAX_LEDGER, rate))
            if has_split:
                ledgers.append(Ledger(cgst_ledger_name(rate), TAX_LEDGER, rate))
                ledgers.append(Ledger(sgst_ledger_name(rate), TAX_LEDGER, rate))

        logging.info(f"[Ledgers] {len(ledgers)} ledger(s) for {len(self.rates())} rate(s)")
        return ledgers

    def ledger_guide(self, overrides: Optional[Mapping[str, str]] = None) -> List[Tuple[Ledger, str]]:
        """Each derived ledger with the name it will be exported under."""
        return [(ledger, resolve_ledger_name(ledger.name, overrides)) for ledger in self.resolve()]


def resolve_ledgers(transactions: Sequence[Transaction]) -> List[Ledger]:
    return LedgerResolver(transactions).resolve()

