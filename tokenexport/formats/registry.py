"""
Output format registry.

Maps format ids to renderers and default filenames. Platform formats render
the Style Dictionary table; tree formats render the TokenTree directly.
"""

import json
import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from tokenexport.tokens.tree import TokenTree
from .platforms import (
    generate_android,
    generate_css,
    generate_flutter,
    generate_ios,
    generate_js,
    generate_json,
    generate_react_native,
    generate_scss,
    generate_ts,
)
from .style_dictionary import TokenTable, to_style_dictionary
from .tailwind import generate_tailwind
from .token_studio import generate_dtcg, generate_token_studio


logger = logging.getLogger(__name__)

ALL_PLATFORMS = "all"


@dataclass
class OutputFormat:
    """
    Output format definition.

    Attributes:
        id: Format identifier used on the CLI and in messages (e.g. 'css')
        name: Human readable name
        description: One-line description
        filename: Default output filename
        render: Callable producing the output text from a token tree
    """
    id: str
    name: str
    description: str
    filename: str
    render: Callable[[TokenTree], str]


@dataclass
class RenderedOutput:
    """Rendered text plus the filename it should be saved under."""
    format_id: str
    filename: str
    content: str


def _from_table(generator: Callable[[TokenTable], str]) -> Callable[[TokenTree], str]:
    def render(tree: TokenTree) -> str:
        return generator(to_style_dictionary(tree))
    return render


class FormatRegistry:
    """Registry of output formats with built-in platforms pre-registered."""

    # Order also defines what "all" renders
    PLATFORM_IDS = ['css', 'scss', 'js', 'ts', 'ios', 'android', 'flutter', 'react-native']

    def __init__(self):
        self._formats: Dict[str, OutputFormat] = {}
        for output_format in self._builtin_formats():
            self.register(output_format)

    def _builtin_formats(self) -> List[OutputFormat]:
        return [
            OutputFormat('css', 'CSS Custom Properties', 'CSS variables for web',
                         'design-tokens.css', _from_table(generate_css)),
            OutputFormat('scss', 'SCSS Variables', 'SCSS variables for web',
                         'design-tokens.scss', _from_table(generate_scss)),
            OutputFormat('js', 'JavaScript/ES6', 'ES6 module for web',
                         'design-tokens.js', _from_table(generate_js)),
            OutputFormat('ts', 'TypeScript', 'TypeScript definitions',
                         'design-tokens.ts', _from_table(generate_ts)),
            OutputFormat('ios', 'iOS Swift', 'Swift enums for iOS',
                         'DesignTokens.swift', _from_table(generate_ios)),
            OutputFormat('android', 'Android Kotlin', 'Kotlin objects for Android Compose',
                         'DesignTokens.kt', _from_table(generate_android)),
            OutputFormat('flutter', 'Flutter Dart', 'Dart class for Flutter',
                         'design_tokens.dart', _from_table(generate_flutter)),
            OutputFormat('react-native', 'React Native', 'JavaScript module for React Native',
                         'DesignTokens.js', _from_table(generate_react_native)),
            OutputFormat('json', 'JSON', 'Style Dictionary flat JSON',
                         'design-tokens.json', _from_table(generate_json)),
            OutputFormat('tokens', 'Design Tokens', 'Nested tokens with $type/$value',
                         'tokens.json', generate_dtcg),
            OutputFormat('tailwind', 'Tailwind CSS', 'Tailwind theme config',
                         'tailwind.config.js', generate_tailwind),
            OutputFormat('token-studio', 'Token Studio', 'Tokens Studio for Figma JSON',
                         'tokens-studio.json', generate_token_studio),
            OutputFormat(ALL_PLATFORMS, 'All platforms', 'Every platform output in one JSON object',
                         'all-platforms.json', self._render_all),
        ]

    def register(self, output_format: OutputFormat) -> None:
        self._formats[output_format.id] = output_format
        logger.debug(f"Registered output format: {output_format.id}")

    def get(self, format_id: str) -> Optional[OutputFormat]:
        return self._formats.get(format_id)

    def list_formats(self) -> List[str]:
        return list(self._formats)

    def filename_for(self, format_id: str) -> str:
        """Default filename, falling back to the JSON filename for unknown ids."""
        output_format = self._formats.get(format_id)
        return output_format.filename if output_format else self._formats['json'].filename

    def render(self, format_id: str, tree: TokenTree) -> RenderedOutput:
        """
        Render ``tree`` in the given format.

        Raises:
            ValueError: If the format id is not registered
        """
        output_format = self._formats.get(format_id)
        if output_format is None:
            raise ValueError(
                f"Unknown format '{format_id}'. Available: {', '.join(self.list_formats())}"
            )
        return RenderedOutput(
            format_id=format_id,
            filename=output_format.filename,
            content=output_format.render(tree),
        )

    def _render_all(self, tree: TokenTree) -> str:
        """Every platform in one JSON object; a failing platform is reported inline."""
        outputs: Dict[str, str] = {}
        for platform_id in self.PLATFORM_IDS:
            try:
                outputs[platform_id] = self._formats[platform_id].render(tree)
            except Exception as e:
                logger.error(f"Error generating {platform_id}: {e}")
                outputs[platform_id] = f"Error generating {platform_id}: {e}"
        return json.dumps(outputs, indent=2)
