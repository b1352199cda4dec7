"""Column mapping validation across all ingested reports."""

import logging
from typing import Dict, List, Mapping, Sequence

from config import (
    CANONICAL_FIELDS,
    DATE_FIELDS,
    MSG_NOT_DATE,
    MSG_NOT_NUMERIC,
    MSG_REQUIRED,
    NUMERIC_FIELDS,
    REQUIRED_FIELDS,
    SAMPLE_SIZE,
)
from models import Source, ValidationResult, coerce_mapping
from utils.helpers import humanize_field, looks_like_date, looks_numeric


class MappingValidator:
    """
    Check a canonical field -> header mapping against the loaded reports.

    The result is derived state: call ``validate`` again whenever the mapping
    or the set of sources changes.

    Produces, per canonical field:
    - errors: required field unmapped, or header shared with another field
    - warnings: sample values that don't look numeric / like dates
    - samples: up to SAMPLE_SIZE raw values from the first report that has
      the mapped header
    """

    def __init__(self, sources: Sequence[Source], sample_size: int = SAMPLE_SIZE):
        """
        Initialize validator.

        Args:
            sources: Loaded reports, in selection order
            sample_size: Preview values collected per field
        """
        self.sources = list(sources)
        self.sample_size = sample_size

    def sample_values(self, header: str) -> List[str]:
        """Leading values of ``header`` from the first report that has it."""
        for src in self.sources:
            idx = src.column_index(header)
            if idx is None:
                continue
            return [row[idx] for row in src.rows[: self.sample_size] if idx < len(row)]
        return []

    def validate(self, mapping: Mapping[str, str]) -> ValidationResult:
        mapping = coerce_mapping(mapping)
        result = ValidationResult()
        used_headers: Dict[str, List[str]] = {}

        for key in CANONICAL_FIELDS:
            header = mapping[key]

            if not header:
                if key in REQUIRED_FIELDS:
                    result.errors[key] = MSG_REQUIRED
                continue

            used_headers.setdefault(header, []).append(key)

            samples = self.sample_values(header)
            result.samples[key] = samples
            if not samples:
                continue

            if key in NUMERIC_FIELDS and not all(looks_numeric(v) for v in samples):
                result.warnings[key] = MSG_NOT_NUMERIC
            if key in DATE_FIELDS and not all(looks_like_date(v) for v in samples):
                result.warnings[key] = MSG_NOT_DATE

        for header, keys in used_headers.items():
            if len(keys) < 2:
                continue
            for key in keys:
                others = ", ".join(humanize_field(k) for k in keys if k != key)
                result.errors[key] = f'Duplicate mapping: "{header}" is also used for {others}.'

        logging.info(
            f"[Mapping] {len(result.errors)} error(s), {len(result.warnings)} warning(s) "
            f"across {len(self.sources)} file(s)"
        )
        return result

    def is_acceptable(self, mapping: Mapping[str, str]) -> bool:
        """True when the mapping produces no errors; warnings never block."""
        return self.validate(mapping).is_acceptable


def validate_mapping(mapping: Mapping[str, str], sources: Sequence[Source]) -> ValidationResult:
    return MappingValidator(sources).validate(mapping)
