"""Push command: publish one generated file to GitHub."""

import logging
from argparse import Namespace
from pathlib import Path

from tokenexport.publish.github import GitHubPublisher, parse_repo_url
from tokenexport.security.secrets import GITHUB_TOKEN_ENV
from .common import setup_logging


logger = logging.getLogger(__name__)


def push_file(args: Namespace) -> int:
    """Push a local file to ``--repo`` at ``--path/<file name>``."""
    secrets_manager = setup_logging(args)

    file_path = Path(args.file)
    if not file_path.is_file():
        logger.error(f"File not found: {file_path}")
        return 1

    try:
        parse_repo_url(args.repo)
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 2

    secrets = secrets_manager.resolve_secrets([GITHUB_TOKEN_ENV], {GITHUB_TOKEN_ENV: args.token})
    if secrets.missing_secrets:
        logger.error(f"Missing required secret: {GITHUB_TOKEN_ENV} (or pass --token)")
        return 2

    filename = args.filename or file_path.name
    if args.dry_run:
        logger.info(f"[DRY RUN] Would push {file_path} to {args.repo}@{args.branch} as {filename}")
        return 0

    content = file_path.read_text(encoding='utf-8')
    publisher = GitHubPublisher(secrets.get(GITHUB_TOKEN_ENV))
    try:
        result = publisher.push(args.repo, args.branch, args.path, filename, content, args.message)
    finally:
        publisher.close()

    if not result.success:
        logger.error(result.message)
        return 1

    logger.info(result.message)
    print(result.url or result.message)
    return 0
