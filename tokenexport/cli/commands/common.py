"""Helpers shared by the CLI commands."""

import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Optional

from tokenexport.security.secrets import SecretsManager, install_masking


LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'error': logging.ERROR,
}


def setup_logging(args: Namespace) -> SecretsManager:
    """Configure logging from the verbosity flags and install secret masking."""
    log_level = LOG_LEVELS[args.log_level]
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR
    elif args.verbose:
        log_level = logging.DEBUG

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logging.getLogger('tokenexport').setLevel(log_level)

    secrets_manager = SecretsManager()
    install_masking(secrets_manager)
    return secrets_manager


def write_output(content: str, output: Optional[str]) -> None:
    """Write to ``output`` (parents created) or to stdout when omitted."""
    if not output:
        sys.stdout.write(content)
        if not content.endswith('\n'):
            sys.stdout.write('\n')
        return

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding='utf-8')
