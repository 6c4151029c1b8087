"""
Token tree construction.

Walks collections x modes x owned variables, resolves each value and places
the resulting Token at ``["<Collection>/<Mode>", *name.split("/")]``. Classic
paint and text styles are merged afterwards at their own slash path unless a
variable already claims the same name.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

from tokenexport.snapshot.types import (
    RGBA,
    AliasRef,
    Collection,
    Mode,
    ResolvedType,
    Snapshot,
    Variable,
)
from tokenexport.tokens.colors import format_rgba, parse_color
from tokenexport.tokens.resolver import AliasResolver, Unresolved


logger = logging.getLogger(__name__)

PAINT_STYLES = "Paint Styles"
TEXT_STYLES = "Text Styles"


class TokenType(str, Enum):
    """Platform-agnostic token type."""
    COLOR = "color"
    NUMBER = "number"
    TEXT = "text"
    BOOLEAN = "boolean"


TYPE_MAP = {
    ResolvedType.COLOR: TokenType.COLOR,
    ResolvedType.FLOAT: TokenType.NUMBER,
    ResolvedType.STRING: TokenType.TEXT,
    ResolvedType.BOOLEAN: TokenType.BOOLEAN,
}


@dataclass(frozen=True)
class Token:
    """
    One resolved design value.

    Attributes:
        path: Full path from the tree root
        type: Token type
        value: Hex string, number, text, bool, or a "{...}" alias placeholder
        description: Optional description carried over from the source
        unresolved: True when value is an alias placeholder
    """
    path: Tuple[str, ...]
    type: TokenType
    value: Any
    description: str = ""
    unresolved: bool = False

    def to_dict(self, prefix: str = "") -> Dict[str, Any]:
        """Serialize as ``{type, value, description?}``, optionally with a key prefix like ``$``."""
        result = {f"{prefix}type": self.type.value, f"{prefix}value": self.value}
        if self.description:
            result[f"{prefix}description"] = self.description
        return result


def set_nested(tree: Dict[str, Any], path: Sequence[str], value: Any) -> None:
    """Set ``value`` at ``path``, replacing any non-group node met on the way."""
    current = tree
    for key in path[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]
    current[path[-1]] = value


class TokenTree:
    """Nested mapping of path segments ending in Token leaves."""

    def __init__(self, root: Optional[Dict[str, Any]] = None, token_sets: Optional[List[str]] = None):
        self.root: Dict[str, Any] = root if root is not None else {}
        # "<Collection>/<Mode>" keys in build order
        self.token_sets: List[str] = token_sets if token_sets is not None else []

    def set(self, path: Sequence[str], token: Token) -> None:
        set_nested(self.root, path, token)

    def get(self, path: Sequence[str]) -> Any:
        """Return the node at ``path`` or None."""
        node: Any = self.root
        for key in path:
            if not isinstance(node, dict) or key not in node:
                return None
            node = node[key]
        return node

    def tokens(self) -> Iterator[Token]:
        """Leaves in tree order."""
        yield from self._walk(self.root)

    def _walk(self, node: Dict[str, Any]) -> Iterator[Token]:
        for value in node.values():
            if isinstance(value, Token):
                yield value
            elif isinstance(value, dict):
                yield from self._walk(value)

    def to_dict(self, prefix: str = "") -> Dict[str, Any]:
        """Plain nested dict; leaves become ``{type, value, description?}``."""
        return self._node_to_dict(self.root, prefix)

    def _node_to_dict(self, node: Dict[str, Any], prefix: str) -> Dict[str, Any]:
        result: Dict[str, Any] = {}
        for key, value in node.items():
            if isinstance(value, Token):
                result[key] = value.to_dict(prefix)
            else:
                result[key] = self._node_to_dict(value, prefix)
        return result

    def __len__(self) -> int:
        return sum(1 for _ in self.tokens())


class TokenTreeBuilder:
    """
    Builds a TokenTree from a snapshot.

    Args:
        snapshot: Read-only snapshot to flatten
        selected_collections: Collection names to include; empty means all.
            Styles take part as the "Paint Styles" and "Text Styles" pseudo
            collections.
    """

    def __init__(self, snapshot: Snapshot, selected_collections: Optional[Iterable[str]] = None):
        self.snapshot = snapshot
        self.selected: Set[str] = set(selected_collections or [])
        self.resolver = AliasResolver(snapshot.variables)

    def is_selected(self, collection_name: str) -> bool:
        return not self.selected or collection_name in self.selected

    def build(self) -> TokenTree:
        tree = TokenTree()

        for collection in self.snapshot.collections:
            if not self.is_selected(collection.name):
                continue
            for mode in collection.modes:
                self._add_mode(tree, collection, mode)

        self._merge_styles(tree)

        logger.debug(f"Built token tree with {len(tree)} tokens in {len(tree.token_sets)} token sets")
        return tree

    def _add_mode(self, tree: TokenTree, collection: Collection, mode: Mode):
        token_set = f"{collection.name}/{mode.name}"
        if token_set not in tree.token_sets:
            tree.token_sets.append(token_set)

        for variable_id in collection.variable_ids:
            variable = self.snapshot.variables.get(variable_id)
            if variable is None:
                logger.debug(f"Collection {collection.name} lists unknown variable {variable_id}")
                continue

            path = (token_set, *variable.name.split('/'))
            token = self.variable_token(variable, mode.mode_id, path)
            if token is not None:
                tree.set(path, token)

    def variable_token(self, variable: Variable, mode_id: str, path: Tuple[str, ...]) -> Optional[Token]:
        """
        Produce the token for one variable in one mode.

        Returns None when the variable has no value in the mode, has an
        unsupported type, or its literal does not fit its declared type.
        """
        slot = variable.values_by_mode.get(mode_id)
        if slot is None:
            return None

        kind = variable.kind
        if kind is None:
            logger.debug(f"Skipping {variable.name}: unsupported type {variable.resolved_type}")
            return None
        token_type = TYPE_MAP[kind]

        if isinstance(slot, AliasRef):
            resolved = self.resolver.resolve(variable.id, mode_id)
            if isinstance(resolved, Unresolved):
                logger.warning(
                    f"Unresolved alias for {variable.name} in mode {mode_id}: "
                    f"{resolved.reason.value} at {resolved.variable_id}"
                )
                return Token(
                    path=path,
                    type=token_type,
                    value=alias_placeholder(slot, self.snapshot.variables),
                    description=variable.description,
                    unresolved=True,
                )
            literal = resolved
        else:
            literal = slot

        value = format_literal(kind, literal)
        if value is None:
            logger.warning(
                f"Skipping {variable.name}: value {literal!r} does not match type {kind.value}"
            )
            return None

        return Token(path=path, type=token_type, value=value, description=variable.description)

    def _merge_styles(self, tree: TokenTree):
        """Add style-derived tokens that no variable already claims."""
        claimed = {variable.alias_name for variable in self.snapshot.variables.values()}

        if self.is_selected(PAINT_STYLES):
            for style in self.snapshot.paint_styles:
                if style.name.replace('/', '.') in claimed:
                    logger.debug(f"Paint style {style.name} shadowed by variable")
                    continue
                color = style.solid_color()
                if color is None:
                    continue
                path = tuple(style.name.split('/'))
                tree.set(path, Token(
                    path=path,
                    type=TokenType.COLOR,
                    value=format_rgba(color),
                    description=style.description,
                ))

        if self.is_selected(TEXT_STYLES):
            for style in self.snapshot.text_styles:
                if style.name.replace('/', '.') in claimed:
                    logger.debug(f"Text style {style.name} shadowed by variable")
                    continue
                for key, value in style.properties():
                    path = (*style.name.split('/'), key)
                    token_type = TokenType.TEXT if isinstance(value, str) else TokenType.NUMBER
                    tree.set(path, Token(
                        path=path,
                        type=token_type,
                        value=value,
                        description=style.description,
                    ))


def alias_placeholder(alias: AliasRef, variables_by_id: Mapping[str, Variable]) -> str:
    """``{Dotted.Name}`` of the alias target, or ``{<id>}`` if the target is unknown."""
    target = variables_by_id.get(alias.target_id)
    if target is not None:
        return f"{{{target.alias_name}}}"
    return f"{{{alias.target_id}}}"


def format_literal(kind: ResolvedType, literal: Any) -> Any:
    """Canonical token value for a literal of the declared kind, or None on mismatch."""
    if kind == ResolvedType.COLOR:
        if isinstance(literal, RGBA):
            return format_rgba(literal)
        if isinstance(literal, str):
            try:
                return format_rgba(parse_color(literal))
            except ValueError:
                return None
        return None

    if kind == ResolvedType.FLOAT:
        if isinstance(literal, (int, float)) and not isinstance(literal, bool):
            return literal
        return None

    if kind == ResolvedType.STRING:
        return literal if isinstance(literal, str) else None

    if kind == ResolvedType.BOOLEAN:
        return literal if isinstance(literal, bool) else None

    return None


def build_token_tree(snapshot: Snapshot, selected_collections: Optional[Iterable[str]] = None) -> TokenTree:
    return TokenTreeBuilder(snapshot, selected_collections).build()
