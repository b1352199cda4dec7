"""Initial column mapping suggestions."""

import logging
import re
from typing import Dict, List, Optional, Protocol, Sequence, Tuple

from config import CANONICAL_FIELDS
from models import Source, blank_mapping, coerce_mapping

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

# Map canonical field -> normalized header names seen in marketplace exports
HEADER_ALIASES: Dict[str, Tuple[str, ...]] = {
    "date": ("invoicedate", "date", "orderdate", "transactiondate", "buyerinvoicedate"),
    "invoiceNo": ("invoicenumber", "invoiceno", "invoiceid", "buyerinvoiceid", "orderid", "ordernumber"),
    "customerName": ("customername", "buyername", "billtoname", "shiptoname", "customer", "name"),
    "state": ("shiptostate", "state", "placeofsupply", "customerstate", "billtostate"),
    "taxableValue": ("taxablevalue", "taxableamount", "taxexclusivegross", "netamount"),
    "igst": ("igst", "igstamount", "igsttax"),
    "cgst": ("cgst", "cgstamount", "cgsttax"),
    "sgst": ("sgst", "sgstamount", "sgsttax", "utgstamount"),
    "totalAmount": ("invoiceamount", "totalamount", "grossamount", "finalinvoiceamount", "total"),
    "gstRate": ("gstrate", "taxrate", "totaltaxrate", "rate", "gst"),
    "productName": ("productname", "itemdescription", "producttitle", "product", "item", "sku", "description"),
    "quantity": ("quantity", "qty", "units"),
}


class CollaboratorError(RuntimeError):
    """A header suggester could not produce a mapping."""


class HeaderSuggester(Protocol):
    def suggest(self, headers: List[str]) -> Dict[str, str]:
        """Guess a canonical field -> header mapping; may raise CollaboratorError."""
        ...


def normalize_header(header: str) -> str:
    return _NON_ALNUM.sub("", (header or "").lower())


class AliasHeaderSuggester:
    """
    Offline suggester matching headers against known marketplace column names.

    Matching is exact on the normalized name (lowercase, letters and digits
    only). Fields are tried in canonical order, aliases in listed order, and
    each header is given to at most one field.
    """

    def __init__(self, aliases: Optional[Dict[str, Tuple[str, ...]]] = None):
        self.aliases = aliases or HEADER_ALIASES

    def suggest(self, headers: List[str]) -> Dict[str, str]:
        by_norm: Dict[str, str] = {}
        for h in headers:
            by_norm.setdefault(normalize_header(h), h)

        mapping = blank_mapping()
        taken = set()
        for key in CANONICAL_FIELDS:
            for alias in self.aliases.get(key, ()):
                header = by_norm.get(alias)
                if header is not None and header not in taken:
                    mapping[key] = header
                    taken.add(header)
                    break
        return mapping


def suggest_mapping(suggester: Optional[HeaderSuggester], sources: Sequence[Source]) -> Dict[str, str]:
    """
    Ask a suggester for a starting mapping, never failing.

    The first report's headers are offered. Whatever comes back is coerced
    into a total 12-field mapping of strings and is treated exactly like a
    hand-entered mapping. Any failure yields a blank mapping.

    Args:
        suggester: Any object with ``suggest(headers)``, or None
        sources: Loaded reports, in selection order

    Returns:
        Canonical field -> header (unmapped fields are "")
    """
    if suggester is None or not sources:
        return blank_mapping()

    headers = list(sources[0].headers)
    try:
        raw = suggester.suggest(headers)
    except CollaboratorError as e:
        logging.warning(f"[Suggest] Suggester failed: {e}; starting from a blank mapping.")
        return blank_mapping()
    except Exception as e:
        logging.warning(
            f"[Suggest] Unexpected {type(e).__name__} from suggester: {e}; "
            f"starting from a blank mapping."
        )
        return blank_mapping()

    if not isinstance(raw, dict):
        logging.warning(f"[Suggest] Suggester returned {type(raw).__name__}, not a mapping; ignoring.")
        return blank_mapping()

    mapping = coerce_mapping(raw)
    filled = sum(1 for v in mapping.values() if v)
    logging.info(f"[Suggest] {filled}/{len(mapping)} field(s) suggested")
    return mapping
