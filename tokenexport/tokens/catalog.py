"""Variable catalog: per-collection listing used by the collection picker."""

import logging
from typing import Any, Dict, Iterable, List, Optional

from tokenexport.snapshot.types import RGBA, AliasRef, Snapshot, Variable
from tokenexport.tokens.colors import format_rgba
from tokenexport.tokens.resolver import AliasResolver, Unresolved
from tokenexport.tokens.tree import PAINT_STYLES, TEXT_STYLES, alias_placeholder, format_literal


logger = logging.getLogger(__name__)

UNKNOWN_COLLECTION = "Unknown"


def list_variables(snapshot: Snapshot) -> Dict[str, List[Dict[str, Any]]]:
    """
    Group variables and styles by collection name.

    Each entry carries the variable's value in the first mode of its
    collection, with alias chains followed. Categories are sorted
    alphabetically.
    """
    resolver = AliasResolver(snapshot.variables)
    categorized: Dict[str, List[Dict[str, Any]]] = {}

    for variable in snapshot.variables.values():
        collection = snapshot.collection_of(variable.id)
        collection_name = collection.name if collection else UNKNOWN_COLLECTION
        modes = collection.modes if collection else []

        value = None
        if modes:
            value = _first_mode_value(variable, modes[0].mode_id, resolver, snapshot)

        categorized.setdefault(collection_name, []).append({
            'id': variable.id,
            'name': variable.name,
            'type': variable.resolved_type,
            'value': value,
            'collection': collection_name,
            'modes': [mode.name for mode in modes],
            'description': variable.description,
        })

    for style in snapshot.paint_styles:
        color = style.solid_color()
        categorized.setdefault(PAINT_STYLES, []).append({
            'id': style.id,
            'name': style.name,
            'type': 'PAINT_STYLE',
            'value': format_rgba(color) if color else None,
            'collection': PAINT_STYLES,
            'modes': ['Default'],
            'description': style.description,
        })

    for style in snapshot.text_styles:
        categorized.setdefault(TEXT_STYLES, []).append({
            'id': style.id,
            'name': style.name,
            'type': 'TEXT_STYLE',
            'value': dict(style.properties()),
            'collection': TEXT_STYLES,
            'modes': ['Default'],
            'description': style.description,
        })

    total = sum(len(entries) for entries in categorized.values())
    logger.debug(f"Cataloged {total} entries in {len(categorized)} collections")

    return {name: categorized[name] for name in sorted(categorized)}


def _first_mode_value(variable: Variable, mode_id: str, resolver: AliasResolver,
                      snapshot: Snapshot) -> Optional[Any]:
    slot = variable.values_by_mode.get(mode_id)
    if slot is None:
        return None

    literal = resolver.resolve(variable.id, mode_id)
    if isinstance(literal, Unresolved):
        if isinstance(slot, AliasRef):
            return alias_placeholder(slot, snapshot.variables)
        return None

    kind = variable.kind
    if kind is None:
        return format_rgba(literal) if isinstance(literal, RGBA) else literal
    return format_literal(kind, literal)


def filter_by_collections(categorized: Dict[str, List[Dict[str, Any]]],
                          selected_collections: Optional[Iterable[str]]) -> Dict[str, List[Dict[str, Any]]]:
    """Keep only the selected categories; an empty selection keeps everything."""
    selected = list(selected_collections or [])
    if not selected:
        return categorized
    return {name: categorized[name] for name in selected if name in categorized}


def color_palette(categorized: Dict[str, List[Dict[str, Any]]],
                  prefix: str = "") -> Dict[str, Dict[str, Dict[str, Any]]]:
    """
    Group paint styles into ``{family: {shade: entry}}``.

    A style named ``"Greyscale/900"`` lands under family ``Greyscale``, shade
    ``900``; deeper names keep the rest of the path in the shade
    (``"Brand/Blue/Light"`` -> ``Brand`` / ``Blue/Light``). With a prefix,
    only styles under it are kept and the prefix is dropped first. Names
    without at least two segments are skipped.
    """
    prefix_parts = _segments(prefix)
    palette: Dict[str, Dict[str, Dict[str, Any]]] = {}

    for entry in categorized.get(PAINT_STYLES, []):
        parts = _segments(entry['name'])
        if parts[:len(prefix_parts)] != prefix_parts:
            continue
        parts = parts[len(prefix_parts):]
        if len(parts) < 2:
            logger.debug(f"Skipping paint style {entry['name']!r}: no family/shade")
            continue

        family, shade = parts[0], '/'.join(parts[1:])
        palette.setdefault(family, {})[shade] = {
            'value': entry['value'],
            'type': 'color',
            'description': entry['description'],
        }

    return palette


def _segments(name: str) -> List[str]:
    return [part.strip() for part in (name or "").split('/') if part.strip()]
