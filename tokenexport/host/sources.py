"""Snapshot sources: anything with a ``load_snapshot()`` returning a fresh Snapshot, and ``close()``."""

from pathlib import Path
from typing import Union

from tokenexport.snapshot.loader import SnapshotLoader
from tokenexport.snapshot.types import Snapshot


class FileSnapshotSource:
    """Reads a snapshot file; re-read on every load so edits are picked up."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load_snapshot(self) -> Snapshot:
        return SnapshotLoader().load(self.path)

    def close(self):
        """Nothing to release."""


class StaticSnapshotSource:
    """Serves an already materialized snapshot."""

    def __init__(self, snapshot: Snapshot):
        self.snapshot = snapshot

    def load_snapshot(self) -> Snapshot:
        return self.snapshot

    def close(self):
        """Nothing to release."""
