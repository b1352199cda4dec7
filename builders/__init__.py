from .transaction_builder import MappingRejectedError, TransactionBuilder, build_transactions

__all__ = ["MappingRejectedError", "TransactionBuilder", "build_transactions"]
