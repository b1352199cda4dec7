"""
Tally Exporter Module
=====================

Renders canonical sales transactions as one Tally "Import Data" XML document,
one Sales voucher per transaction.

Voucher layout:
- Dr party ledger for the gross total (negative amount)
- Cr sales ledger for the taxable value, with one inventory entry
- Cr IGST ledger when the transaction carries IGST
- Cr CGST and SGST ledgers when the transaction carries either

Every text value is entity-escaped. The document is produced chunk by chunk
so large batches can be written straight to disk.
"""

import logging
from pathlib import Path
from typing import IO, Iterator, Mapping, Optional, Sequence, Union

from config import (
    COMPANY_NAME,
    DEFAULT_GST_RATE,
    DEFAULT_PARTY_NAME,
    DEFAULT_PRODUCT_NAME,
    DEFAULT_STATE_NAME,
    UDF_NAMESPACE,
    UNIT_SUFFIX,
)
from ledgers.ledger_resolver import (
    cgst_ledger_name,
    igst_ledger_name,
    resolve_ledger_name,
    sales_ledger_name,
    sgst_ledger_name,
)
from models import Transaction
from utils.helpers import fmt_amount, fmt_number, is_blank, to_tally_date, xml_escape

_HEADER = """<?xml version="1.0"?>
<ENVELOPE>
  <HEADER>
    <TALLYREQUEST>Import Data</TALLYREQUEST>
  </HEADER>
  <BODY>
    <IMPORTDATA>
      <REQUESTDESC>
        <REPORTNAME>Vouchers</REPORTNAME>
        <STATICVARIABLES>
          <SVCURRENTCOMPANY>{company}</SVCURRENTCOMPANY>
        </STATICVARIABLES>
      </REQUESTDESC>
      <REQUESTDATA>"""

_FOOTER = """
      </REQUESTDATA>
    </IMPORTDATA>
  </BODY>
</ENVELOPE>"""

_VOUCHER_OPEN = """
        <TALLYMESSAGE xmlns:UDF="{udf}">
          <VOUCHER VCHTYPE="Sales" ACTION="Create" OBJVIEW="Accounting Voucher View">
            <DATE>{date}</DATE>
            <VOUCHERTYPENAME>Sales</VOUCHERTYPENAME>
            <REFERENCE>{reference}</REFERENCE>
            <PARTYLEDGERNAME>{party}</PARTYLEDGERNAME>
            <STATENAME>{state}</STATENAME>
            <FBTPAYMENTTYPE>Default</FBTPAYMENTTYPE>
            <PERSISTEDVIEW>Accounting Voucher View</PERSISTEDVIEW>
            <ALLLEDGERENTRIES.LIST>
              <LEDGERNAME>{party}</LEDGERNAME>
              <ISDEEMEDPOSITIVE>Yes</ISDEEMEDPOSITIVE>
              <AMOUNT>{party_amount}</AMOUNT>
            </ALLLEDGERENTRIES.LIST>
            <ALLLEDGERENTRIES.LIST>
              <LEDGERNAME>{sales_ledger}</LEDGERNAME>
              <ISDEEMEDPOSITIVE>No</ISDEEMEDPOSITIVE>
              <AMOUNT>{taxable}</AMOUNT>
              <INVENTORYENTRIES.LIST>
                <STOCKITEMNAME>{product}</STOCKITEMNAME>
                <ISDEEMEDPOSITIVE>No</ISDEEMEDPOSITIVE>
                <RATE>{unit_rate}</RATE>
                <AMOUNT>{taxable}</AMOUNT>
                <ACTUALQTY>{qty}</ACTUALQTY>
                <BILLEDQTY>{qty}</BILLEDQTY>
              </INVENTORYENTRIES.LIST>
            </ALLLEDGERENTRIES.LIST>"""

_TAX_ENTRY = """
            <ALLLEDGERENTRIES.LIST>
              <LEDGERNAME>{ledger}</LEDGERNAME>
              <ISDEEMEDPOSITIVE>No</ISDEEMEDPOSITIVE>
              <AMOUNT>{amount}</AMOUNT>
            </ALLLEDGERENTRIES.LIST>"""

_VOUCHER_CLOSE = """
          </VOUCHER>
        </TALLYMESSAGE>"""


class VoucherExporter:
    """
    Tally XML exporter.

    Attributes:
        transactions: Transactions to export, in voucher order
        overrides: Default ledger name -> replacement chosen by the user
        company: Value of SVCURRENTCOMPANY
    """

    def __init__(
        self,
        transactions: Sequence[Transaction],
        overrides: Optional[Mapping[str, str]] = None,
        company: str = COMPANY_NAME,
    ):
        self.transactions = list(transactions)
        self.overrides = dict(overrides or {})
        self.company = company

    def _ledger(self, default_name: str) -> str:
        return xml_escape(resolve_ledger_name(default_name, self.overrides))

    def render_voucher(self, tx: Transaction) -> str:
        """Render one TALLYMESSAGE block for ``tx``."""
        rate = tx.gst_rate if tx.gst_rate > 0 else DEFAULT_GST_RATE
        qty = tx.quantity if tx.quantity > 0 else 1
        party = xml_escape(tx.customer_name if not is_blank(tx.customer_name) else DEFAULT_PARTY_NAME)

        parts = [
            _VOUCHER_OPEN.format(
                udf=UDF_NAMESPACE,
                date=to_tally_date(tx.date),
                reference=xml_escape(tx.invoice_no),
                party=party,
                state=xml_escape(tx.state if not is_blank(tx.state) else DEFAULT_STATE_NAME),
                party_amount=fmt_amount(-tx.total_amount),
                sales_ledger=self._ledger(sales_ledger_name(rate)),
                taxable=fmt_amount(tx.taxable_value),
                product=xml_escape(
                    tx.product_name if not is_blank(tx.product_name) else DEFAULT_PRODUCT_NAME
                ),
                unit_rate=fmt_amount(tx.taxable_value / qty),
                qty=f"{fmt_number(qty)} {UNIT_SUFFIX}",
            )
        ]

        if tx.igst > 0:
            parts.append(
                _TAX_ENTRY.format(ledger=self._ledger(igst_ledger_name(rate)), amount=fmt_amount(tx.igst))
            )
        if tx.cgst > 0 or tx.sgst > 0:
            parts.append(
                _TAX_ENTRY.format(ledger=self._ledger(cgst_ledger_name(rate)), amount=fmt_amount(tx.cgst))
            )
            parts.append(
                _TAX_ENTRY.format(ledger=self._ledger(sgst_ledger_name(rate)), amount=fmt_amount(tx.sgst))
            )

        parts.append(_VOUCHER_CLOSE)
        return "".join(parts)

    def iter_chunks(self) -> Iterator[str]:
        """Yield the document piece by piece: header, one chunk per voucher, footer."""
        yield _HEADER.format(company=xml_escape(self.company))
        for tx in self.transactions:
            yield self.render_voucher(tx)
        yield _FOOTER

    def generate(self) -> str:
        """Return the whole document as one string."""
        return "".join(self.iter_chunks())

    def write(self, target: Union[str, Path, IO[str]]) -> None:
        """
        Stream the document to a file path or an open text stream.

        Args:
            target: Output path, or any object with a ``write(str)`` method
        """
        if hasattr(target, "write"):
            for chunk in self.iter_chunks():
                target.write(chunk)
            return

        output_file = Path(target)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with output_file.open("w", encoding="utf-8", newline="\n") as f:
            for chunk in self.iter_chunks():
                f.write(chunk)
        logging.info(f"[Tally] {len(self.transactions)} voucher(s) written to {output_file}")


def generate_tally_xml(
    transactions: Sequence[Transaction], overrides: Optional[Mapping[str, str]] = None
) -> str:
    return VoucherExporter(transactions, overrides).generate()