"""Structural contracts: fail-fast enforcement of OI-FITS invariants.

Key principle:
- Pydantic validates configuration and schema-definition models
- Contracts validate data-blocks and their cross-references
- Nothing interprets the astronomical meaning of the values
"""

from oifits.contracts.failure import (
    CrossReferenceError,
    LinkPolicy,
    OIFitsError,
    SchemaError,
    SelectionError,
    ValidationError,
)
from oifits.contracts.base import require

__all__ = [
    "OIFitsError",
    "SchemaError",
    "ValidationError",
    "CrossReferenceError",
    "SelectionError",
    "LinkPolicy",
    "require",
]
