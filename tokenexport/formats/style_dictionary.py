"""
Style Dictionary flattening.

Turns the nested TokenTree into a two-level table
``{category: {token-name: {value, type, description?}}}`` that the platform
formatters consume.
"""

from typing import Any, Dict, List

from tokenexport.tokens.tree import Token, TokenTree, TokenType
from .naming import to_kebab


# Single-segment style tokens sit directly at the root
GLOBAL_CATEGORY = "global"

TokenTable = Dict[str, Dict[str, Dict[str, Any]]]


def sd_type(token: Token) -> str:
    """Style Dictionary prefers "dimension" for numeric tokens."""
    return "dimension" if token.type == TokenType.NUMBER else token.type.value


def to_style_dictionary(tree: TokenTree) -> TokenTable:
    """
    Flatten a TokenTree.

    Category is the kebab-cased root key ("Semantic Colors/Light" ->
    "semantic-colors-light"); token name is the kebab-cased remaining path
    joined with "-".
    """
    table: TokenTable = {}

    for root_key, node in tree.root.items():
        if isinstance(node, Token):
            _add(table, GLOBAL_CATEGORY, [root_key], node)
            continue
        _walk(table, to_kebab(root_key), [], node)

    return table


def _walk(table: TokenTable, category: str, path: List[str], node: Dict[str, Any]):
    for key, value in node.items():
        if isinstance(value, Token):
            _add(table, category, path + [key], value)
        elif isinstance(value, dict):
            _walk(table, category, path + [key], value)


def _add(table: TokenTable, category: str, path: List[str], token: Token):
    entry: Dict[str, Any] = {
        'value': token.value,
        'type': sd_type(token),
    }
    if token.description:
        entry['description'] = token.description
    table.setdefault(category, {})[to_kebab('-'.join(path))] = entry
