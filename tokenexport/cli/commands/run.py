"""Run command: batch export driven by a config file."""

import logging
from argparse import Namespace
from pathlib import Path
from typing import List

from tokenexport.exceptions import ConfigValidationError, SnapshotValidationError, TransportFailure
from tokenexport.formats.registry import FormatRegistry, RenderedOutput
from tokenexport.host.figma import FigmaSnapshotSource
from tokenexport.host.sources import FileSnapshotSource
from tokenexport.loader import ExportConfig, ExportConfigLoader
from tokenexport.publish.github import GitHubPublisher
from tokenexport.security.secrets import FIGMA_TOKEN_ENV, GITHUB_TOKEN_ENV, SecretsManager
from tokenexport.tokens.tree import build_token_tree
from .common import setup_logging


logger = logging.getLogger(__name__)


def make_source(config: ExportConfig, secrets_manager: SecretsManager):
    """Snapshot source for the config; raises ValueError if FIGMA_TOKEN is missing."""
    if config.snapshot is not None:
        return FileSnapshotSource(config.snapshot)

    secrets = secrets_manager.resolve_secrets([FIGMA_TOKEN_ENV])
    if secrets.missing_secrets:
        raise ValueError(f"Missing required secret: {FIGMA_TOKEN_ENV}")
    return FigmaSnapshotSource(config.figma_file, secrets.get(FIGMA_TOKEN_ENV))


def write_outputs(outputs: List[RenderedOutput], output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    for rendered in outputs:
        target = output_dir / rendered.filename
        target.write_text(rendered.content, encoding='utf-8')
        logger.info(f"Wrote {rendered.format_id} output to {target}")


def push_outputs(outputs: List[RenderedOutput], config: ExportConfig, token: str) -> bool:
    """Push each output to the configured repository. Returns True if all succeeded."""
    publisher = GitHubPublisher(token)
    all_ok = True
    try:
        for rendered in outputs:
            result = publisher.push(
                repo_url=config.github.repo,
                branch=config.github.branch,
                path=config.github.path,
                filename=rendered.filename,
                content=rendered.content,
                commit_message=config.github.commit_message,
            )
            if result.success:
                logger.info(f"{result.message}: {result.url}")
            else:
                logger.error(result.message)
                all_ok = False
    finally:
        publisher.close()
    return all_ok


def run_export(args: Namespace) -> int:
    """
    Render every configured format and optionally push the results.

    Returns:
        0 on success, 1 on runtime or transport failure, 2 on validation error
    """
    secrets_manager = setup_logging(args)

    try:
        workspace = Path.cwd()

        config_path = Path(args.config).resolve()
        if not config_path.exists():
            logger.error(f"Config file not found: {config_path}")
            return 1

        logger.info(f"Loading config: {config_path}")
        registry = FormatRegistry()
        try:
            config = ExportConfigLoader(workspace, registry).load(config_path)
        except ConfigValidationError as e:
            for error in e.errors:
                logger.error(f"Validation error: {error.message}")
            return e.exit_code

        github_token = None
        if args.push:
            if config.github is None:
                logger.error("Validation error: --push requires a 'github' section in the config")
                return 2
            secrets = secrets_manager.resolve_secrets([GITHUB_TOKEN_ENV])
            if secrets.missing_secrets:
                logger.error(f"Missing required secret: {GITHUB_TOKEN_ENV}")
                return 2
            github_token = secrets.get(GITHUB_TOKEN_ENV)

        source = make_source(config, secrets_manager)
        try:
            if args.dry_run:
                for format_id in config.formats:
                    target = config.output_dir / registry.filename_for(format_id)
                    logger.info(f"[DRY RUN] Would write {format_id} output to {target}")
                logger.info("[DRY RUN] Config validation successful")
                return 0

            snapshot = source.load_snapshot()
        finally:
            source.close()

        tree = build_token_tree(snapshot, config.collections)
        logger.info(f"Built {len(tree)} tokens from {len(snapshot.collections)} collections")

        outputs = [registry.render(format_id, tree) for format_id in config.formats]
        write_outputs(outputs, config.output_dir)

        if github_token and not push_outputs(outputs, config, github_token):
            return 1

        return 0

    except SnapshotValidationError as e:
        for error in e.errors:
            logger.error(f"Validation error: {error.message}")
        return e.exit_code
    except TransportFailure as e:
        logger.error(f"Transport failure: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 2
    except OSError as e:
        logger.error(f"File error: {e}")
        return 1
    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        return 1
