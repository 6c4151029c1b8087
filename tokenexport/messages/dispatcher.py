"""
Command message dispatcher.

Answers the JSON command messages a UI sends: each request carries a
``type`` tag plus optional parameters and gets back exactly one response
message, either a success payload or ``export-error``.
"""

import json
import logging
from typing import Any, Callable, Dict, List, Optional

from tokenexport.formats.registry import ALL_PLATFORMS, FormatRegistry
from tokenexport.publish.github import GitHubPublisher, PushResult
from tokenexport.security.secrets import SecretsManager
from tokenexport.snapshot.types import Snapshot
from tokenexport.tokens.catalog import color_palette, filter_by_collections, list_variables
from tokenexport.tokens.tree import TokenTree, build_token_tree


logger = logging.getLogger(__name__)

ERROR_TYPE = 'export-error'
PALETTE_FILENAME = 'color-palette.json'

Message = Dict[str, Any]


class MessageDispatcher:
    """
    Routes command messages to handlers.

    Args:
        source: Object with ``load_snapshot()``; called once per message so
            every export sees a fresh snapshot
        registry: Output formats; a default registry is created if omitted
        publisher_factory: Builds a GitHubPublisher from a token
        secrets_manager: Receives tokens from push messages for log masking
    """

    def __init__(
        self,
        source,
        registry: Optional[FormatRegistry] = None,
        publisher_factory: Optional[Callable[[str], GitHubPublisher]] = None,
        secrets_manager: Optional[SecretsManager] = None
    ):
        self.source = source
        self.registry = registry or FormatRegistry()
        self.publisher_factory = publisher_factory or GitHubPublisher
        self.secrets_manager = secrets_manager or SecretsManager()
        self._handlers: Dict[str, Callable[[Message], Message]] = {
            'get-variables': self._get_variables,
            'export-tokens': self._export_tokens,
            'export-style-dictionary': self._export_style_dictionary,
            'export-tailwind-css': self._export_tailwind,
            'export-token-studio': self._export_token_studio,
            'get-colors': self._get_colors,
            'export-colors': self._export_colors,
            'push-to-github': self._push_to_github,
        }

    def handle(self, message: Any) -> Message:
        """Handle one message; never raises."""
        if not isinstance(message, dict):
            return self._error("Message must be a JSON object")

        message_type = message.get('type')
        handler = self._handlers.get(message_type) if isinstance(message_type, str) else None
        if handler is None:
            return self._error(f"Unknown message type: {message_type!r}")

        logger.debug(f"Handling message {message_type}")
        try:
            return handler(message)
        except Exception as e:
            logger.error(f"Error handling {message_type}: {e}", exc_info=True)
            return self._error(str(e) or 'Unknown error occurred')

    def _error(self, text: str) -> Message:
        return {'type': ERROR_TYPE, 'message': text}

    def _selected(self, message: Message) -> List[str]:
        selected = message.get('selectedCollections') or []
        if not isinstance(selected, list) or not all(isinstance(name, str) for name in selected):
            raise ValueError("'selectedCollections' must be a list of collection names")
        return selected

    def _tree(self, message: Message) -> TokenTree:
        snapshot: Snapshot = self.source.load_snapshot()
        return build_token_tree(snapshot, self._selected(message))

    def _get_variables(self, message: Message) -> Message:
        snapshot = self.source.load_snapshot()
        return {'type': 'variables-loaded', 'variables': list_variables(snapshot)}

    def _export_tokens(self, message: Message) -> Message:
        rendered = self.registry.render('tokens', self._tree(message))
        return {'type': 'export-complete', 'jsonString': rendered.content}

    def _export_style_dictionary(self, message: Message) -> Message:
        platform = message.get('platform') or 'json'
        allowed = FormatRegistry.PLATFORM_IDS + ['json', ALL_PLATFORMS]
        if platform not in allowed:
            raise ValueError(f"Unknown platform '{platform}'. Available: {', '.join(allowed)}")

        rendered = self.registry.render(platform, self._tree(message))
        return {
            'type': 'export-style-dictionary-complete',
            'output': rendered.content,
            'platform': platform,
            'filename': rendered.filename,
        }

    def _export_tailwind(self, message: Message) -> Message:
        rendered = self.registry.render('tailwind', self._tree(message))
        return {'type': 'export-tailwind-css-complete', 'tailwindConfig': rendered.content}

    def _export_token_studio(self, message: Message) -> Message:
        rendered = self.registry.render('token-studio', self._tree(message))
        return {
            'type': 'export-token-studio-complete',
            'output': rendered.content,
            'filename': rendered.filename,
        }

    def _palette(self, message: Message) -> Dict[str, Any]:
        prefix = message.get('prefix') or ''
        if not isinstance(prefix, str):
            raise ValueError("'prefix' must be a string")
        catalog = filter_by_collections(list_variables(self.source.load_snapshot()), self._selected(message))
        return color_palette(catalog, prefix)

    def _get_colors(self, message: Message) -> Message:
        return {'type': 'colors-loaded', 'colors': self._palette(message)}

    def _export_colors(self, message: Message) -> Message:
        return {
            'type': 'export-colors-complete',
            'output': json.dumps(self._palette(message), indent=2),
            'filename': PALETTE_FILENAME,
        }

    def _push_to_github(self, message: Message) -> Message:
        token = message.get('token')
        filename = message.get('filename')
        content = message.get('content')

        if not token:
            result = PushResult(success=False, message="Failed to push to GitHub: missing token")
        elif not filename or content is None:
            result = PushResult(success=False, message="Failed to push to GitHub: missing filename or content")
        else:
            self.secrets_manager.add_masked_value(token)
            publisher = self.publisher_factory(token)
            try:
                result = publisher.push(
                    repo_url=message.get('repoUrl', ''),
                    branch=message.get('branch') or '',
                    path=message.get('path'),
                    filename=filename,
                    content=content,
                )
            finally:
                publisher.close()

        return {'type': 'github-push-complete', 'result': result.to_dict()}
