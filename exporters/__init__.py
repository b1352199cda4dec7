"""
Exporters Package
=================

This package contains all export functionality for built transactions.

Classes:
    - VoucherExporter: Tally "Import Data" XML, one Sales voucher per transaction
    - ReviewExporter: Review DataFrames and workbook for a batch

Usage:
    from exporters import VoucherExporter

    exporter = VoucherExporter(transactions, ledger_overrides)
    exporter.write(output_path)
"""

from .review_exporter import ReviewExporter
from .tally_exporter import VoucherExporter, generate_tally_xml

__all__ = [
    "VoucherExporter",
    "ReviewExporter",
    "generate_tally_xml",
]
