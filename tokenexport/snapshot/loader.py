"""Snapshot loader and strict validation of raw variable documents."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
import yaml

from tokenexport.exceptions import SnapshotValidationError, ValidationError
from tokenexport.snapshot.types import (
    RGBA,
    AliasRef,
    Collection,
    Mode,
    PaintStyle,
    Snapshot,
    TextStyle,
    ValueSlot,
    Variable,
)


logger = logging.getLogger(__name__)

ALIAS_TYPE = "VARIABLE_ALIAS"
WRAPPED_VALUE_TYPES = {"COLOR", "FLOAT", "STRING", "BOOLEAN"}


class SnapshotLoader:
    """
    Loads a variable snapshot and validates it.

    Accepts the Figma REST ``variables/local`` response (``meta.variables``
    and ``meta.variableCollections``) or the same keys at the top level, as
    id-keyed mappings or plain lists. Optional ``paintStyles`` and
    ``textStyles`` lists carry the classic styles.
    """

    def __init__(self):
        self.errors: List[ValidationError] = []

    def load(self, snapshot_path: Path) -> Snapshot:
        """Load and validate a snapshot from a JSON or YAML file."""
        self.errors = []
        try:
            with open(snapshot_path, 'r') as f:
                if Path(snapshot_path).suffix.lower() in ('.yml', '.yaml'):
                    raw = yaml.safe_load(f)
                else:
                    raw = json.load(f)
        except (OSError, ValueError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load snapshot: {e}")
            self._raise_validation_errors()

        return self.parse(raw)

    def parse(self, raw: Any) -> Snapshot:
        """Validate a raw snapshot document and build the typed model."""
        self.errors = []

        if not isinstance(raw, dict):
            self._add_error("Snapshot must be a JSON/YAML object")
            self._raise_validation_errors()

        # Figma REST wraps the payload in "meta"
        body = raw.get('meta') if isinstance(raw.get('meta'), dict) else raw

        variables = self._parse_variables(body.get('variables', {}))
        collections = self._parse_collections(body.get('variableCollections', {}))
        paint_styles = self._parse_paint_styles(raw.get('paintStyles', []))
        text_styles = self._parse_text_styles(raw.get('textStyles', []))

        if self.errors:
            self._raise_validation_errors()

        self._link_collections(collections, variables)

        logger.debug(
            f"Loaded snapshot: {len(collections)} collections, {len(variables)} variables, "
            f"{len(paint_styles)} paint styles, {len(text_styles)} text styles"
        )
        return Snapshot(
            collections=collections,
            variables=variables,
            paint_styles=paint_styles,
            text_styles=text_styles,
        )

    def _entries(self, value: Any, field_name: str) -> List[Any]:
        """Normalize an id-keyed mapping or a list into a list of entries."""
        if isinstance(value, dict):
            return list(value.values())
        if isinstance(value, list):
            return value
        self._add_error(f"'{field_name}' must be a mapping or a list", field_name)
        return []

    def _parse_variables(self, raw_variables: Any) -> Dict[str, Variable]:
        variables: Dict[str, Variable] = {}

        for i, entry in enumerate(self._entries(raw_variables, 'variables')):
            path = f"variables[{i}]"
            if not isinstance(entry, dict):
                self._add_error("Variable must be an object", path)
                continue

            var_id = entry.get('id')
            if not isinstance(var_id, str) or not var_id:
                self._add_error("Variable missing required 'id' string", path)
                continue
            path = f"variables[{var_id}]"

            name = entry.get('name')
            if not isinstance(name, str) or not name:
                self._add_error("Variable missing required 'name' string", path)
                continue

            resolved_type = entry.get('resolvedType')
            if not isinstance(resolved_type, str):
                self._add_error("Variable missing required 'resolvedType' string", path)
                continue

            raw_values = entry.get('valuesByMode', {})
            if not isinstance(raw_values, dict):
                self._add_error("'valuesByMode' must be a mapping", path)
                continue

            values: Dict[str, ValueSlot] = {}
            for mode_id, raw_slot in raw_values.items():
                slot = self._parse_slot(raw_slot, f"{path}.valuesByMode[{mode_id}]")
                if slot is not None:
                    values[str(mode_id)] = slot

            if var_id in variables:
                self._add_error(f"Duplicate variable id '{var_id}'", path)
                continue

            collection_id = entry.get('variableCollectionId')
            variables[var_id] = Variable(
                id=var_id,
                name=name,
                resolved_type=resolved_type,
                values_by_mode=values,
                description=entry.get('description') or "",
                collection_id=collection_id if isinstance(collection_id, str) else None,
            )

        return variables

    def _parse_slot(self, raw: Any, path: str) -> Optional[ValueSlot]:
        """Parse one value slot; literals pass through, dicts are aliases or colors."""
        if isinstance(raw, (bool, int, float, str)):
            return raw

        if isinstance(raw, dict):
            kind = raw.get('type')
            if kind == ALIAS_TYPE:
                target = raw.get('id')
                if not isinstance(target, str) or not target:
                    self._add_error("Alias reference missing target 'id'", path)
                    return None
                return AliasRef(target_id=target)

            # {"type": "COLOR", "value": {...}} wrapped literal
            if kind in WRAPPED_VALUE_TYPES and 'value' in raw:
                return self._parse_slot(raw['value'], path)

            if all(channel in raw for channel in ('r', 'g', 'b')):
                try:
                    return RGBA(
                        r=float(raw['r']),
                        g=float(raw['g']),
                        b=float(raw['b']),
                        a=float(raw.get('a', 1)),
                    )
                except (TypeError, ValueError):
                    self._add_error("Color channels must be numbers", path)
                    return None

        self._add_error(f"Unsupported value slot {raw!r}", path)
        return None

    def _parse_collections(self, raw_collections: Any) -> List[Collection]:
        collections: List[Collection] = []
        seen_ids = set()

        for i, entry in enumerate(self._entries(raw_collections, 'variableCollections')):
            path = f"variableCollections[{i}]"
            if not isinstance(entry, dict):
                self._add_error("Collection must be an object", path)
                continue

            coll_id = entry.get('id')
            name = entry.get('name')
            if not isinstance(coll_id, str) or not coll_id:
                self._add_error("Collection missing required 'id' string", path)
                continue
            path = f"variableCollections[{coll_id}]"
            if not isinstance(name, str) or not name:
                self._add_error("Collection missing required 'name' string", path)
                continue
            if coll_id in seen_ids:
                self._add_error(f"Duplicate collection id '{coll_id}'", path)
                continue
            seen_ids.add(coll_id)

            modes: List[Mode] = []
            raw_modes = entry.get('modes', [])
            if not isinstance(raw_modes, list):
                self._add_error("'modes' must be a list", path)
                raw_modes = []
            for j, raw_mode in enumerate(raw_modes):
                if (not isinstance(raw_mode, dict) or 'modeId' not in raw_mode
                        or not isinstance(raw_mode.get('name'), str)):
                    self._add_error("Mode requires 'modeId' and 'name'", f"{path}.modes[{j}]")
                    continue
                modes.append(Mode(mode_id=str(raw_mode['modeId']), name=raw_mode['name']))

            variable_ids = entry.get('variableIds')
            if variable_ids is not None and not isinstance(variable_ids, list):
                self._add_error("'variableIds' must be a list", path)
                variable_ids = None

            collections.append(Collection(
                id=coll_id,
                name=name,
                modes=modes,
                variable_ids=[str(v) for v in variable_ids] if variable_ids is not None else [],
            ))

        return collections

    def _link_collections(self, collections: List[Collection], variables: Dict[str, Variable]):
        """Fill in ownership from variableCollectionId when a collection omits variableIds."""
        for collection in collections:
            if collection.variable_ids:
                continue
            collection.variable_ids = [
                var.id for var in variables.values() if var.collection_id == collection.id
            ]

    def _parse_paint_styles(self, raw_styles: Any) -> List[PaintStyle]:
        styles: List[PaintStyle] = []
        for i, entry in enumerate(self._entries(raw_styles, 'paintStyles')):
            path = f"paintStyles[{i}]"
            if not isinstance(entry, dict) or not isinstance(entry.get('name'), str):
                self._add_error("Paint style requires a 'name' string", path)
                continue
            paints = entry.get('paints', [])
            if not isinstance(paints, list):
                self._add_error("'paints' must be a list", path)
                continue
            styles.append(PaintStyle(
                id=str(entry.get('id', entry['name'])),
                name=entry['name'],
                paints=[p for p in paints if isinstance(p, dict)],
                description=entry.get('description') or "",
            ))
        return styles

    def _parse_text_styles(self, raw_styles: Any) -> List[TextStyle]:
        styles: List[TextStyle] = []
        for i, entry in enumerate(self._entries(raw_styles, 'textStyles')):
            path = f"textStyles[{i}]"
            if not isinstance(entry, dict) or not isinstance(entry.get('name'), str):
                self._add_error("Text style requires a 'name' string", path)
                continue

            # Figma nests the family under fontName
            font_family = entry.get('fontFamily')
            if font_family is None and isinstance(entry.get('fontName'), dict):
                font_family = entry['fontName'].get('family')

            numbers = {}
            for key in ('fontSize', 'fontWeight', 'lineHeight', 'letterSpacing'):
                value = entry.get(key)
                # lineHeight/letterSpacing come as {"value": n, "unit": ...}
                if isinstance(value, dict):
                    value = value.get('value')
                if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float))):
                    self._add_error(f"'{key}' must be a number", path)
                    value = None
                numbers[key] = value

            styles.append(TextStyle(
                id=str(entry.get('id', entry['name'])),
                name=entry['name'],
                font_family=font_family if isinstance(font_family, str) else None,
                font_size=numbers['fontSize'],
                font_weight=numbers['fontWeight'],
                line_height=numbers['lineHeight'],
                letter_spacing=numbers['letterSpacing'],
                description=entry.get('description') or "",
            ))
        return styles

    def _add_error(self, message: str, path: str = "", exit_code: int = 2):
        """Add validation error."""
        self.errors.append(ValidationError(message, path, exit_code))

    def _raise_validation_errors(self):
        """Raise SnapshotValidationError with accumulated errors."""
        raise SnapshotValidationError(self.errors)
