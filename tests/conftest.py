"""Shared snapshot fixtures."""

import json
from pathlib import Path

import pytest

from tokenexport.snapshot.loader import SnapshotLoader


# Figma REST ``variables/local`` shape plus classic styles
SAMPLE_SNAPSHOT_FILE = Path(__file__).parent / "fixtures" / "variables.json"


@pytest.fixture
def raw_snapshot():
    """Fresh copy of the sample snapshot document."""
    return json.loads(SAMPLE_SNAPSHOT_FILE.read_text())


@pytest.fixture
def snapshot(raw_snapshot):
    """Sample snapshot parsed into the typed model."""
    return SnapshotLoader().parse(raw_snapshot)
