"""Domain models and types for the payments ledger.

This package contains the in-memory (Pydantic) models describing transaction
records and client accounts. They carry no I/O so that the account rules can
be tested without touching CSV files.
"""

__all__ = [
    "account",
    "base_types",
    "transaction",
]
