"""Message command: answer one UI command message from the CLI."""

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path

from tokenexport.host.sources import FileSnapshotSource
from tokenexport.messages.dispatcher import ERROR_TYPE, MessageDispatcher
from .common import setup_logging, write_output


logger = logging.getLogger(__name__)


def handle_message(args: Namespace) -> int:
    """
    Read a JSON message from ``--input`` or stdin and print the response.

    The response is always printed; the exit code is 1 when it is an
    ``export-error`` or an unsuccessful push.
    """
    secrets_manager = setup_logging(args)

    snapshot_path = Path(args.snapshot)
    if not snapshot_path.exists():
        logger.error(f"Snapshot file not found: {snapshot_path}")
        return 1

    try:
        if args.input:
            with open(args.input, 'r') as f:
                message = json.load(f)
        else:
            message = json.load(sys.stdin)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to read message: {e}")
        return 2

    dispatcher = MessageDispatcher(FileSnapshotSource(snapshot_path), secrets_manager=secrets_manager)
    response = dispatcher.handle(message)
    write_output(json.dumps(response, indent=2), None)

    if response['type'] == ERROR_TYPE:
        return 1
    if response['type'] == 'github-push-complete' and not response['result']['success']:
        return 1
    return 0
