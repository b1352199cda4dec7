# pipeline.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path

from builders.transaction_builder import TransactionBuilder
from config import CANONICAL_FIELDS, LOG_LEVEL
from exporters.review_exporter import ReviewExporter
from exporters.tally_exporter import VoucherExporter
from ledgers.ledger_resolver import LedgerResolver
from loaders.report_loader import MarketplaceReportLoader, header_universe
from models import Source, coerce_mapping
from suggesters.header_suggester import AliasHeaderSuggester, suggest_mapping
from utils.StepTimer import StepTimer
from validators.mapping_validator import MappingValidator


# ---- utilities ----
def default_output_name() -> str:
    return f"Consolidated_TallyExport_{date.today().isoformat()}.xml"


def read_json_dict(path: str | None) -> dict:
    if not path:
        return {}
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object, got {type(data).__name__}.")
    return data


def resolve_mapping(sources: list[Source], mapping_path: str | None) -> dict:
    """Mapping from file when given, otherwise the alias suggestion."""
    if mapping_path:
        return coerce_mapping(read_json_dict(mapping_path))
    return suggest_mapping(AliasHeaderSuggester(), sources)


def print_validation(result) -> None:
    for key in CANONICAL_FIELDS:
        if key in result.errors:
            print(f"❌ {key}: {result.errors[key]}")
        elif key in result.warnings:
            print(f"⚠️  {key}: {result.warnings[key]}")
        if result.samples.get(key):
            print(f"     samples: {', '.join(result.samples[key])}")


# ---- commands ----
def run_inspect(paths: list[str]) -> int:
    sources = MarketplaceReportLoader().load_files(paths)
    out = {
        "files": [{"name": s.name, "columns": len(s.headers), "rows": len(s.rows)} for s in sources],
        "headers": header_universe(sources),
        "suggested_mapping": suggest_mapping(AliasHeaderSuggester(), sources),
    }
    print(json.dumps(out, ensure_ascii=False, indent=2))
    return 0


def run_validate(paths: list[str], mapping_path: str | None) -> int:
    sources = MarketplaceReportLoader().load_files(paths)
    mapping = resolve_mapping(sources, mapping_path)
    result = MappingValidator(sources).validate(mapping)
    print_validation(result)
    if not result.is_acceptable:
        print(f"❌ Mapping rejected: {len(result.errors)} error(s).")
        return 1
    print(f"✅ Mapping accepted ({len(result.warnings)} warning(s)).")
    return 0


def run_export(
    paths: list[str],
    mapping_path: str | None,
    ledgers_path: str | None,
    output: str | None,
    review: str | None,
) -> int:
    t = StepTimer()

    with t.timeit("1) ingest"):
        sources = MarketplaceReportLoader().load_files(paths)

    with t.timeit("2) validate"):
        mapping = resolve_mapping(sources, mapping_path)
        result = MappingValidator(sources).validate(mapping)
    if not result.is_acceptable:
        print_validation(result)
        print(f"❌ Mapping rejected: {len(result.errors)} error(s). Nothing exported.")
        return 1

    with t.timeit("3) build"):
        transactions = TransactionBuilder(sources, mapping).build_transactions()

    overrides = {k: v for k, v in read_json_dict(ledgers_path).items() if isinstance(v, str)}
    with t.timeit("4) ledgers"):
        for ledger, name in LedgerResolver(transactions).ledger_guide(overrides):
            print(f"   {ledger.ledger_type:<12} {name}")

    with t.timeit("5) export"):
        output_file = Path(output or default_output_name())
        VoucherExporter(transactions, overrides).write(output_file)
        print(f"📁 Tally XML saved to {output_file}")
        review_exporter = ReviewExporter(transactions, overrides, source_count=len(sources))
        if review:
            review_exporter.export(review)

    print(f"✅ {review_exporter.headline()}")
    t.log_summary()
    return 0


# ---- CLI ----
def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Marketplace sales reports to Tally XML")
    sub = ap.add_subparsers(dest="cmd", required=True)

    s1 = sub.add_parser("inspect", help="Show headers and a suggested mapping.")
    s1.add_argument("reports", nargs="+", help="Marketplace CSV reports")

    s2 = sub.add_parser("validate", help="Check a mapping against the reports.")
    s2.add_argument("reports", nargs="+", help="Marketplace CSV reports")
    s2.add_argument("--mapping", help="JSON file: canonical field -> header (suggested if omitted)")

    s3 = sub.add_parser("export", help="Build vouchers and write the Tally XML.")
    s3.add_argument("reports", nargs="+", help="Marketplace CSV reports")
    s3.add_argument("--mapping", help="JSON file: canonical field -> header (suggested if omitted)")
    s3.add_argument("--ledgers", help="JSON file: default ledger name -> Tally ledger name")
    s3.add_argument("--output", help="Output XML path (default Consolidated_TallyExport_<date>.xml)")
    s3.add_argument("--review", help="Optional review workbook (.xlsx)")

    args = ap.parse_args(argv)
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(message)s")

    if args.cmd == "inspect":
        return run_inspect(args.reports)
    if args.cmd == "validate":
        return run_validate(args.reports, args.mapping)
    return run_export(args.reports, args.mapping, args.ledgers, args.output, args.review)


if __name__ == "__main__":
    sys.exit(main())
