"""
Version and release tracking.

Components:
- version_id: 4-part version identifiers (format, parse, increment)
- impact: heuristic impact scoring for releases
- migration: forward migration of legacy 3-part documents
- ledger: read-modify-write of the persisted version document
- notes: read-only release note views

Design principles:
- Canonical: the version string is always derived from its components
- Total reads: a missing or corrupt document falls back to a default
- Loud writes: a failed save raises instead of looking successful
"""

__version__ = "0.1.0"

from .impact import ImpactLevel, ImpactTier, classify_impact, compute_impact, impact_score
from .ledger import LedgerWriteError, ReleaseInfo, ReleaseLedger
from .migration import migrate_document
from .models import Release, ReleaseType, VersionDocument, default_document
from .storage import DocumentStore, FileDocumentStore, MemoryDocumentStore
from .version_id import (
    IncrementKind,
    VersionIdentifier,
    format_version,
    increment_version,
    parse_version,
)

__all__ = [
    "__version__",
    "DocumentStore",
    "FileDocumentStore",
    "ImpactLevel",
    "ImpactTier",
    "IncrementKind",
    "LedgerWriteError",
    "MemoryDocumentStore",
    "Release",
    "ReleaseInfo",
    "ReleaseLedger",
    "ReleaseType",
    "VersionDocument",
    "VersionIdentifier",
    "classify_impact",
    "compute_impact",
    "default_document",
    "format_version",
    "impact_score",
    "increment_version",
    "migrate_document",
    "parse_version",
]
