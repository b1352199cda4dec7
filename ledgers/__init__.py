from .ledger_resolver import LedgerResolver, resolve_ledger_name, resolve_ledgers

__all__ = ["LedgerResolver", "resolve_ledger_name", "resolve_ledgers"]
