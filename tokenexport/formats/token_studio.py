"""Token Studio (Tokens Studio for Figma) JSON generator."""

import json
from typing import Any, Dict

from tokenexport.tokens.tree import Token, TokenTree


GLOBAL_SET = "global"


def to_token_studio(tree: TokenTree) -> Dict[str, Any]:
    """
    One token set per root key, nested ``$value``/``$type`` tokens.

    Tokens that sit directly at the root are collected in the "global" set.
    Empty sets are dropped and ``$metadata.tokenSetOrder`` follows the
    remaining sets in tree order.
    """
    token_sets: Dict[str, Any] = {}

    for root_key, node in tree.root.items():
        if isinstance(node, Token):
            token_sets.setdefault(GLOBAL_SET, {})[root_key] = node.to_dict('$')
            continue
        content = TokenTree(node).to_dict('$')
        if content:
            token_sets[root_key] = content

    result: Dict[str, Any] = {
        '$themes': [],
        '$metadata': {'tokenSetOrder': list(token_sets)},
    }
    result.update(token_sets)
    return result


def generate_token_studio(tree: TokenTree) -> str:
    return json.dumps(to_token_studio(tree), indent=2)


def generate_dtcg(tree: TokenTree) -> str:
    """The token tree itself with ``$type``/``$value``/``$description`` leaves."""
    return json.dumps(tree.to_dict('$'), indent=2)
