"""
Token module.
Alias resolution, literal formatting and token tree construction.
"""

from .colors import format_color, parse_color
from .resolver import MAX_ALIAS_DEPTH, AliasResolver, Unresolved, UnresolvedReason, resolve_alias
from .tree import Token, TokenTree, TokenTreeBuilder, TokenType, build_token_tree
from .catalog import color_palette, filter_by_collections, list_variables

__all__ = [
    'format_color',
    'parse_color',
    'MAX_ALIAS_DEPTH',
    'AliasResolver',
    'Unresolved',
    'UnresolvedReason',
    'resolve_alias',
    'Token',
    'TokenTree',
    'TokenTreeBuilder',
    'TokenType',
    'build_token_tree',
    'color_palette',
    'filter_by_collections',
    'list_variables',
]
