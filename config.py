"""Configuration constants for the Marketplace to Tally converter."""

import os
from typing import List, Tuple

# ============================================================================
# CANONICAL FIELDS
# ============================================================================

# Every semantic role a marketplace sales report can supply, in display order
CANONICAL_FIELDS: Tuple[str, ...] = (
    "date",
    "invoiceNo",
    "customerName",
    "state",
    "taxableValue",
    "igst",
    "cgst",
    "sgst",
    "totalAmount",
    "gstRate",
    "productName",
    "quantity",
)

# Fields that must be mapped before transactions can be built
REQUIRED_FIELDS: Tuple[str, ...] = (
    "date",
    "invoiceNo",
    "customerName",
    "taxableValue",
    "totalAmount",
    "gstRate",
    "productName",
    "quantity",
)

NUMERIC_FIELDS: Tuple[str, ...] = (
    "taxableValue", "igst", "cgst", "sgst", "totalAmount", "gstRate", "quantity"
)

DATE_FIELDS: Tuple[str, ...] = ("date",)

# ============================================================================
# VALIDATION SETTINGS
# ============================================================================

# Number of preview values collected per mapped field
SAMPLE_SIZE: int = 3

MSG_REQUIRED: str = "This field is required for Tally import."
MSG_NOT_NUMERIC: str = "Values in some files don't look like numbers."
MSG_NOT_DATE: str = "Values in some files don't look like valid dates."

# ============================================================================
# INGESTION SETTINGS
# ============================================================================

# Encodings tried in order when reading report files from disk
TRIED_ENCODINGS: List[str] = ["utf-8-sig", "cp1252"]

# Parallel file parsing (results are always merged in input order)
INGEST_WORKERS: int = max(1, int(os.getenv("ECOM_TALLY_INGEST_WORKERS", "4")))

# ============================================================================
# TRANSACTION DEFAULTS
# ============================================================================

DEFAULT_PRODUCT_NAME: str = "General Item"
DEFAULT_QUANTITY: float = 1

# ============================================================================
# TALLY EXPORT SETTINGS
# ============================================================================

COMPANY_NAME: str = "Ecommerce Sales"
UDF_NAMESPACE: str = "TallyUDF"
DEFAULT_PARTY_NAME: str = "Cash"
DEFAULT_STATE_NAME: str = "Maharashtra"
DEFAULT_GST_RATE: float = 18
FALLBACK_VOUCHER_DATE: str = "20240401"
UNIT_SUFFIX: str = "Nos"

SALES_LEDGER: str = "Sales Ledger"
TAX_LEDGER: str = "Tax Ledger"

# ============================================================================
# DEBUG FLAGS
# ============================================================================

LOG_LEVEL: str = os.getenv("ECOM_TALLY_LOG_LEVEL", "INFO")
