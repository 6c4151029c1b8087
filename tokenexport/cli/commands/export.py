"""Export and collections commands."""

import json
import logging
from argparse import Namespace
from pathlib import Path

from tokenexport.exceptions import SnapshotValidationError
from tokenexport.formats.registry import FormatRegistry
from tokenexport.snapshot.loader import SnapshotLoader
from tokenexport.tokens.catalog import list_variables
from tokenexport.tokens.tree import build_token_tree
from .common import setup_logging, write_output


logger = logging.getLogger(__name__)


def export_tokens(args: Namespace) -> int:
    """Render a snapshot in one output format."""
    setup_logging(args)

    snapshot_path = Path(args.snapshot)
    if not snapshot_path.exists():
        logger.error(f"Snapshot file not found: {snapshot_path}")
        return 1

    try:
        snapshot = SnapshotLoader().load(snapshot_path)
    except SnapshotValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code

    registry = FormatRegistry()
    try:
        tree = build_token_tree(snapshot, args.collection or [])
        rendered = registry.render(args.format, tree)
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 2

    if args.dry_run:
        logger.info(f"[DRY RUN] Would write {len(tree)} tokens as {rendered.format_id}")
        return 0

    try:
        write_output(rendered.content, args.output)
    except OSError as e:
        logger.error(f"Failed to write output: {e}")
        return 1

    if args.output:
        logger.info(f"Wrote {rendered.format_id} output to {args.output}")
    return 0


def list_collections(args: Namespace) -> int:
    """Print the variable catalog grouped by collection."""
    setup_logging(args)

    snapshot_path = Path(args.snapshot)
    if not snapshot_path.exists():
        logger.error(f"Snapshot file not found: {snapshot_path}")
        return 1

    try:
        snapshot = SnapshotLoader().load(snapshot_path)
    except SnapshotValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code

    write_output(json.dumps(list_variables(snapshot), indent=2), None)
    return 0
