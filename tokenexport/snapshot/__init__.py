"""
Snapshot module.
Typed read-only model of collections, modes, variables and styles.
"""

from .types import (
    RGBA,
    AliasRef,
    Collection,
    Mode,
    PaintStyle,
    ResolvedType,
    Snapshot,
    TextStyle,
    Variable,
)
from .loader import SnapshotLoader

__all__ = [
    "RGBA",
    "AliasRef",
    "Collection",
    "Mode",
    "PaintStyle",
    "ResolvedType",
    "Snapshot",
    "TextStyle",
    "Variable",
    "SnapshotLoader",
]
