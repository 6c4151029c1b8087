"""Tailwind theme config generator."""

import logging
from typing import Any, Dict, Optional, Tuple

from tokenexport.tokens.tree import Token, TokenTree, TokenType
from .naming import format_number, quote_single, to_kebab


logger = logging.getLogger(__name__)

SECTIONS = ('colors', 'spacing', 'fontSize', 'fontFamily', 'fontWeight', 'lineHeight', 'opacity', 'borderRadius')


def classify(name: str, token: Token) -> Optional[Tuple[str, Any]]:
    """Pick the theme section and rendered value for a token, or None to leave it out."""
    value = token.value

    if token.type == TokenType.COLOR:
        return 'colors', quote_single(value)

    if token.type == TokenType.TEXT:
        if 'font' in name and ('family' in name or 'face' in name):
            return 'fontFamily', f"[{quote_single(value)}]"
        return None

    if token.type == TokenType.NUMBER:
        number = format_number(value)
        if 'radius' in name:
            return 'borderRadius', quote_single(f"{number}px")
        if 'weight' in name:
            return 'fontWeight', quote_single(number)
        if 'line-height' in name:
            return 'lineHeight', quote_single(number)
        if 'opacity' in name:
            return 'opacity', quote_single(number)
        if 'z-index' in name or 'ratio' in name:
            return None
        if 'font' in name or 'size' in name:
            return 'fontSize', quote_single(f"{number}px")
        return 'spacing', quote_single(f"{number}px")

    return None


def generate_tailwind(tree: TokenTree) -> str:
    """Render tokens as a ``module.exports`` Tailwind config extending the theme."""
    sections: Dict[str, Dict[str, str]] = {section: {} for section in SECTIONS}

    for token in tree.tokens():
        if token.unresolved:
            logger.debug(f"Leaving unresolved token {'/'.join(token.path)} out of Tailwind config")
            continue
        name = to_kebab('-'.join(token.path))
        placement = classify(name, token)
        if placement is None:
            continue
        section, rendered = placement
        sections[section][name] = rendered

    lines = ['module.exports = {', '  theme: {', '    extend: {']
    for section in SECTIONS:
        entries = sections[section]
        if not entries:
            continue
        lines.append(f"      {section}: {{")
        for name, rendered in entries.items():
            lines.append(f"        {quote_single(name)}: {rendered},")
        lines.append('      },')
    lines.extend(['    },', '  },', '};'])
    return '\n'.join(lines) + '\n'
