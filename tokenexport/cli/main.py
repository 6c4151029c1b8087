"""Main CLI entry point for tokenexport."""

import argparse
import sys
from typing import Optional

from tokenexport.formats.registry import FormatRegistry
from .commands import (
    export_tokens,
    fetch_snapshot,
    handle_message,
    list_collections,
    push_file,
    run_export,
)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Validate without writing or pushing'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='info',
        help='Set log level'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the tokenexport CLI."""
    parser = argparse.ArgumentParser(
        prog='tokenexport',
        description='Design token alias resolver and exporter'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Export command
    export_parser = subparsers.add_parser('export', help='Export a snapshot in one format')
    export_parser.add_argument(
        'snapshot',
        type=str,
        help='Path to variables snapshot (JSON or YAML)'
    )
    export_parser.add_argument(
        '--format',
        choices=FormatRegistry().list_formats(),
        default='tokens',
        help='Output format'
    )
    export_parser.add_argument(
        '--collection',
        action='append',
        metavar='NAME',
        help='Only export this collection (can be specified multiple times)'
    )
    export_parser.add_argument(
        '--output',
        type=str,
        help='Output file (default: stdout)'
    )
    _add_common_arguments(export_parser)

    # Collections command
    collections_parser = subparsers.add_parser('collections', help='List variables by collection')
    collections_parser.add_argument(
        'snapshot',
        type=str,
        help='Path to variables snapshot (JSON or YAML)'
    )
    _add_common_arguments(collections_parser)

    # Run command
    run_parser = subparsers.add_parser('run', help='Run an export config')
    run_parser.add_argument(
        'config',
        type=str,
        help='Path to export config YAML file'
    )
    run_parser.add_argument(
        '--push',
        action='store_true',
        help='Push generated files to the configured GitHub repository'
    )
    _add_common_arguments(run_parser)

    # Push command
    push_parser = subparsers.add_parser('push', help='Push a file to GitHub')
    push_parser.add_argument(
        'file',
        type=str,
        help='File to push'
    )
    push_parser.add_argument(
        '--repo',
        type=str,
        required=True,
        help='Repository URL (https://github.com/owner/repo)'
    )
    push_parser.add_argument(
        '--branch',
        type=str,
        default='main',
        help='Target branch'
    )
    push_parser.add_argument(
        '--path',
        type=str,
        default='',
        help='Directory inside the repository'
    )
    push_parser.add_argument(
        '--filename',
        type=str,
        help='Name of the file in the repository (default: local file name)'
    )
    push_parser.add_argument(
        '--message',
        type=str,
        help='Commit message (default: "Update <filename> from tokenexport")'
    )
    push_parser.add_argument(
        '--token',
        type=str,
        help='GitHub token (default: $GITHUB_TOKEN)'
    )
    _add_common_arguments(push_parser)

    # Fetch command
    fetch_parser = subparsers.add_parser('fetch', help='Fetch a snapshot from Figma')
    fetch_parser.add_argument(
        'file_ref',
        type=str,
        help='Figma file key or URL'
    )
    fetch_parser.add_argument(
        '--output',
        type=str,
        help='Output file (default: stdout)'
    )
    fetch_parser.add_argument(
        '--token',
        type=str,
        help='Figma access token (default: $FIGMA_TOKEN)'
    )
    _add_common_arguments(fetch_parser)

    # Message command
    message_parser = subparsers.add_parser('message', help='Answer one command message')
    message_parser.add_argument(
        'snapshot',
        type=str,
        help='Path to variables snapshot (JSON or YAML)'
    )
    message_parser.add_argument(
        '--input',
        type=str,
        help='JSON message file (default: stdin)'
    )
    _add_common_arguments(message_parser)

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    handlers = {
        'export': export_tokens,
        'collections': list_collections,
        'run': run_export,
        'push': push_file,
        'fetch': fetch_snapshot,
        'message': handle_message,
    }
    return handlers[parsed_args.command](parsed_args)


if __name__ == '__main__':
    sys.exit(main())
