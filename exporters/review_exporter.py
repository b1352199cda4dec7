"""
Review Exporter Module
======================

Consolidated review of a transaction batch before it is sent to Tally.

This module handles:
- Flattening transactions to a DataFrame
- Totals per GST rate
- Writing a review workbook (details, rate summary, ledger guide)
"""

from dataclasses import asdict
from pathlib import Path
from typing import Mapping, Optional, Sequence

import pandas as pd

from ledgers.ledger_resolver import LedgerResolver
from models import Transaction

AMOUNT_COLS = ["taxable_value", "igst", "cgst", "sgst", "total_amount"]


class ReviewExporter:
    """
    Review exporter for a built transaction batch.

    Attributes:
        transactions: Transactions in voucher order
        overrides: Ledger overrides, shown next to the default names
        source_count: Number of report files the batch was built from
    """

    def __init__(
        self,
        transactions: Sequence[Transaction],
        overrides: Optional[Mapping[str, str]] = None,
        source_count: int = 0,
    ):
        self.transactions = list(transactions)
        self.overrides = dict(overrides or {})
        self.source_count = source_count

    def to_frame(self) -> pd.DataFrame:
        """One row per transaction, columns named after Transaction attributes."""
        columns = list(Transaction.__dataclass_fields__)
        return pd.DataFrame([asdict(t) for t in self.transactions], columns=columns)

    def summary_by_rate(self) -> pd.DataFrame:
        """
        Totals per GST rate.

        Columns: gst_rate, vouchers, taxable_value, igst, cgst, sgst,
        total_amount (amounts rounded to 2 decimals).
        """
        df = self.to_frame()
        if df.empty:
            return pd.DataFrame(columns=["gst_rate", "vouchers"] + AMOUNT_COLS)

        summary = (
            df.groupby("gst_rate", as_index=False)
            .agg(vouchers=("invoice_no", "size"), **{c: (c, "sum") for c in AMOUNT_COLS})
            .sort_values("gst_rate")
            .reset_index(drop=True)
        )
        summary[AMOUNT_COLS] = summary[AMOUNT_COLS].round(2)
        return summary

    def ledger_frame(self) -> pd.DataFrame:
        rows = [
            {"Type": ledger.ledger_type, "Rate": ledger.rate, "Default Name": ledger.name, "Tally Name": name}
            for ledger, name in LedgerResolver(self.transactions).ledger_guide(self.overrides)
        ]
        return pd.DataFrame(rows, columns=["Type", "Rate", "Default Name", "Tally Name"])

    def headline(self) -> str:
        return f"Generated {len(self.transactions)} vouchers from {self.source_count} files."

    def export(self, output_file) -> Path:
        """
        Write the review workbook.

        Sheets:
        - Details: All transactions
        - Summary by Rate: Totals per GST rate
        - Ledgers: Ledgers to prepare in Tally, with overridden names

        Returns:
            Path of the written workbook
        """
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_file, engine="xlsxwriter") as writer:
            self.to_frame().to_excel(writer, sheet_name="Details", index=False)
            self.summary_by_rate().to_excel(writer, sheet_name="Summary by Rate", index=False)
            self.ledger_frame().to_excel(writer, sheet_name="Ledgers", index=False)

        print(f"📁 Review workbook saved to {output_file}")
        return output_file
