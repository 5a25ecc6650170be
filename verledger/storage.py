"""
Persistence collaborators for the version document.

The ledger only needs to read and write one opaque blob. Anything that
implements `DocumentStore` can back it: a file on disk, memory in tests,
or a database row.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Protocol


DEFAULT_FILENAME = "version.json"


class DocumentStore(Protocol):
    """Protocol for reading and writing the persisted document."""

    def read(self) -> bytes | None:
        """
        Return the stored bytes, or None if nothing has been stored yet.

        May raise; the ledger treats any error as "no prior state".
        """
        ...

    def write(self, data: bytes) -> None:
        """
        Replace the stored bytes.

        Must raise on failure so the caller never reports a lost write as saved.
        """
        ...


class FileDocumentStore:
    """
    Store the document as a single JSON file.

    Writes go to a sibling temp file that is then renamed over the target,
    so a reader never sees a half-written document.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def __repr__(self) -> str:
        return f"FileDocumentStore({str(self.path)!r})"

    def read(self) -> bytes | None:
        if not self.path.exists():
            return None
        return self.path.read_bytes()

    def write(self, data: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_name(self.path.name + ".tmp")
        temp_path.write_bytes(data)
        try:
            os.replace(temp_path, self.path)
        except OSError:
            temp_path.unlink(missing_ok=True)
            raise


class MemoryDocumentStore:
    """In-process store, mostly for tests and embedding."""

    def __init__(self, data: bytes | None = None):
        self.data = data
        self.writes = 0

    def read(self) -> bytes | None:
        return self.data

    def write(self, data: bytes) -> None:
        self.data = data
        self.writes += 1
