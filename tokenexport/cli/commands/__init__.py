"""CLI command handlers."""

from .export import export_tokens, list_collections
from .fetch import fetch_snapshot
from .message import handle_message
from .push import push_file
from .run import run_export

__all__ = [
    'export_tokens',
    'list_collections',
    'fetch_snapshot',
    'handle_message',
    'push_file',
    'run_export',
]
