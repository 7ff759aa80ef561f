"""
Record Resolution

This package resolves identity records for a single identifier.

Key Components:
- identifier.py: Identifier classification, validation and query name derivation
- txt.py: TXT lookup capability backed by aiodns
- batch.py: Concurrent per-key resolution with isolated failures
- __main__.py: CLI interface for resolution

The resolution flow for each requested key:
1. Validate the identifier for its shape (domain or email)
2. Derive the TXT query name for the key
3. Look up TXT records against the nameserver chosen for the call
4. Record either the space-joined value or an error for the key
"""

from selfie.records.resolve.batch import (
    DEFAULT_NAMESERVER,
    DEFAULT_RECORDS,
    BatchResult,
    RecordsResolver,
    ResolutionOutcome,
)

__all__ = [
    "DEFAULT_NAMESERVER",
    "DEFAULT_RECORDS",
    "BatchResult",
    "RecordsResolver",
    "ResolutionOutcome",
]
