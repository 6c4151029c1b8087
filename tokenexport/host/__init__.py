"""Host collaborators that supply variable snapshots."""

from .figma import FigmaSnapshotSource, extract_file_key
from .sources import FileSnapshotSource, StaticSnapshotSource

__all__ = ['FigmaSnapshotSource', 'FileSnapshotSource', 'StaticSnapshotSource', 'extract_file_key']
