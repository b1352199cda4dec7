"""Transaction builder turning raw report rows into canonical sales records."""

import logging
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from config import CANONICAL_FIELDS, DEFAULT_PRODUCT_NAME, DEFAULT_QUANTITY
from models import Source, Transaction, coerce_mapping
from utils.helpers import coerce_number, is_blank
from validators.mapping_validator import MappingValidator


class MappingRejectedError(ValueError):
    """Raised when transactions are requested from a mapping that has errors."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        fields = ", ".join(sorted(self.errors))
        super().__init__(f"Mapping has {len(self.errors)} error(s): {fields}")


class TransactionBuilder:
    """Apply an accepted column mapping to every row of every report."""

    def __init__(self, sources: Sequence[Source], mapping: Mapping[str, str]):
        """
        Initialize builder.

        The mapping is validated against ``sources`` first and frozen; the
        builder refuses to run on a mapping with any error.

        Args:
            sources: Loaded reports, in selection order
            mapping: Canonical field -> header

        Raises:
            MappingRejectedError: If the mapping does not validate cleanly
        """
        self.sources = list(sources)
        mapping = coerce_mapping(mapping)

        result = MappingValidator(self.sources).validate(mapping)
        if not result.is_acceptable:
            raise MappingRejectedError(result.errors)

        self.mapping = MappingProxyType(mapping)
        self.transactions: List[Transaction] = []

    def _column_indices(self, src: Source) -> Dict[str, Optional[int]]:
        """Column index of each field in this report; None when unmapped or absent."""
        return {key: src.column_index(self.mapping[key]) for key in CANONICAL_FIELDS}

    @staticmethod
    def _amount(raw: str) -> float:
        value = coerce_number(raw)
        return 0.0 if value is None else value

    @staticmethod
    def _quantity(raw: str) -> float:
        value = coerce_number(raw)
        if value is None or value <= 0:
            return float(DEFAULT_QUANTITY)
        return value

    def _build_row(self, row: Tuple[str, ...], indices: Dict[str, Optional[int]]) -> Transaction:
        def val(key: str) -> str:
            idx = indices[key]
            if idx is None or idx >= len(row):
                return ""
            return row[idx]

        product = val("productName")
        return Transaction(
            date=val("date"),
            invoice_no=val("invoiceNo"),
            customer_name=val("customerName"),
            state=val("state"),
            taxable_value=self._amount(val("taxableValue")),
            igst=self._amount(val("igst")),
            cgst=self._amount(val("cgst")),
            sgst=self._amount(val("sgst")),
            total_amount=self._amount(val("totalAmount")),
            gst_rate=self._amount(val("gstRate")),
            product_name=DEFAULT_PRODUCT_NAME if is_blank(product) else product,
            quantity=self._quantity(val("quantity")),
        )

    def build_transactions(self) -> List[Transaction]:
        """
        Convert every raw row into a Transaction.

        Reports are processed in order and row order is kept inside each one.
        Reports need not share the same columns: a field whose header a report
        lacks resolves to an empty cell there. Unreadable cells fall back to
        defaults (0, 1 for quantity, a placeholder product name) instead of
        failing the batch.

        Returns:
            All transactions, report by report
        """
        out: List[Transaction] = []
        for src in self.sources:
            indices = self._column_indices(src)
            built = [self._build_row(row, indices) for row in src.rows]
            logging.info(f"[Builder] {src.name}: {len(built)} transaction(s)")
            out.extend(built)

        self.transactions = out
        return out


def build_transactions(sources: Sequence[Source], mapping: Mapping[str, str]) -> List[Transaction]:
    return TransactionBuilder(sources, mapping).build_transactions()
