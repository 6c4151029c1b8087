"""Fetch command: download a variables snapshot from Figma."""

import json
import logging
from argparse import Namespace

from tokenexport.exceptions import SnapshotValidationError, TransportFailure
from tokenexport.host.figma import FigmaSnapshotSource
from tokenexport.security.secrets import FIGMA_TOKEN_ENV
from tokenexport.snapshot.loader import SnapshotLoader
from .common import setup_logging, write_output


logger = logging.getLogger(__name__)


def fetch_snapshot(args: Namespace) -> int:
    """Fetch, validate and save the raw ``variables/local`` payload."""
    secrets_manager = setup_logging(args)

    secrets = secrets_manager.resolve_secrets([FIGMA_TOKEN_ENV], {FIGMA_TOKEN_ENV: args.token})
    if secrets.missing_secrets:
        logger.error(f"Missing required secret: {FIGMA_TOKEN_ENV} (or pass --token)")
        return 2

    source = FigmaSnapshotSource(args.file_ref, secrets.get(FIGMA_TOKEN_ENV))
    if args.dry_run:
        logger.info(f"[DRY RUN] Would fetch variables for Figma file {source.file_key}")
        return 0

    try:
        raw = source.fetch()
        snapshot = SnapshotLoader().parse(raw)
    except TransportFailure as e:
        logger.error(f"Transport failure: {e}")
        return 1
    except SnapshotValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code
    finally:
        source.close()

    logger.info(
        f"Fetched {len(snapshot.variables)} variables in {len(snapshot.collections)} collections"
    )
    try:
        write_output(json.dumps(raw, indent=2), args.output)
    except OSError as e:
        logger.error(f"Failed to write output: {e}")
        return 1
    return 0
