from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from config import CANONICAL_FIELDS


def blank_mapping() -> Dict[str, str]:
    """Return a mapping with every canonical field unmapped."""
    return {key: "" for key in CANONICAL_FIELDS}


def coerce_mapping(raw: Optional[Mapping]) -> Dict[str, str]:
    """
    Turn any field -> header dict into a total mapping over the canonical fields.

    Unknown keys are dropped, missing keys become unmapped, and values that
    are not strings are treated as unmapped.
    """
    mapping = blank_mapping()
    for key, value in (raw or {}).items():
        if key in mapping and isinstance(value, str):
            mapping[key] = value.strip()
    return mapping


@dataclass(frozen=True)
class Source:
    name: str = ""
    headers: Tuple[str, ...] = ()
    rows: Tuple[Tuple[str, ...], ...] = ()

    def column_index(self, header: str) -> Optional[int]:
        """First column carrying ``header``, or None if this file lacks it."""
        if not header:
            return None
        try:
            return self.headers.index(header)
        except ValueError:
            return None

    @property
    def is_empty(self) -> bool:
        return not self.headers and not self.rows


@dataclass(frozen=True)
class Transaction:
    date: str = ""
    invoice_no: str = ""
    customer_name: str = ""
    state: str = ""
    taxable_value: float = 0.0
    igst: float = 0.0
    cgst: float = 0.0
    sgst: float = 0.0
    total_amount: float = 0.0
    gst_rate: float = 0.0
    product_name: str = ""
    quantity: float = 1.0


@dataclass(frozen=True)
class Ledger:
    name: str
    ledger_type: str
    rate: float


@dataclass
class ValidationResult:
    errors: Dict[str, str] = field(default_factory=dict)
    warnings: Dict[str, str] = field(default_factory=dict)
    samples: Dict[str, List[str]] = field(default_factory=dict)

    @property
    def is_acceptable(self) -> bool:
        return not self.errors
