"""
Platform output generators.

Each generator renders a Style Dictionary table (see style_dictionary.py) as
source text for one platform. Colors in native sources are derived from the
canonical hex value through parse_color.
"""

import json
import logging
from typing import Any, Dict, List

from tokenexport.tokens.colors import argb_hex, parse_color
from .naming import (
    format_number,
    kotlin_identifier,
    quote_double,
    quote_single,
    swift_identifier,
    to_camel,
    to_pascal,
)
from .style_dictionary import TokenTable


logger = logging.getLogger(__name__)

UNITLESS_HINTS = ('weight', 'opacity', 'z-index', 'line-height', 'ratio')


def is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_unitless(name: str) -> bool:
    return any(hint in name for hint in UNITLESS_HINTS)


def css_value(name: str, entry: Dict[str, Any]) -> str:
    """Value as written in CSS/SCSS; dimensions get px unless the name says otherwise."""
    value = entry['value']
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_numeric(value):
        number = format_number(value)
        if entry['type'] == 'dimension' and not is_unitless(name):
            return f"{number}px"
        return number
    return str(value)


def js_literal(value: Any) -> str:
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if is_numeric(value):
        return format_number(value)
    return quote_single(value)


def ts_type(value: Any) -> str:
    if isinstance(value, bool):
        return 'boolean'
    if is_numeric(value):
        return 'number'
    return 'string'


def generate_css(table: TokenTable) -> str:
    lines = [':root {']
    for category, tokens in table.items():
        for name, entry in tokens.items():
            lines.append(f"  --{category}-{name}: {css_value(name, entry)};")
    lines.append('}')
    return '\n'.join(lines) + '\n'


def generate_scss(table: TokenTable) -> str:
    lines: List[str] = []
    for category, tokens in table.items():
        lines.append(f"// {category}")
        for name, entry in tokens.items():
            lines.append(f"${category}-{name}: {css_value(name, entry)};")
        lines.append('')
    return '\n'.join(lines) + ('\n' if lines else '')


def _js_object_body(table: TokenTable) -> List[str]:
    lines = []
    for category, tokens in table.items():
        lines.append(f"  {to_camel(category)}: {{")
        for name, entry in tokens.items():
            lines.append(f"    {to_camel(name)}: {js_literal(entry['value'])},")
        lines.append('  },')
    return lines


def generate_js(table: TokenTable) -> str:
    lines = ['export const designTokens = {']
    lines.extend(_js_object_body(table))
    lines.append('};')
    return '\n'.join(lines) + '\n'


def generate_ts(table: TokenTable) -> str:
    lines = ['export interface DesignTokens {']
    for category, tokens in table.items():
        lines.append(f"  {to_camel(category)}: {{")
        for name, entry in tokens.items():
            lines.append(f"    {to_camel(name)}: {ts_type(entry['value'])};")
        lines.append('  };')
    lines.append('}')
    lines.append('')
    lines.append('export const designTokens: DesignTokens = {')
    lines.extend(_js_object_body(table))
    lines.append('};')
    return '\n'.join(lines) + '\n'


def generate_react_native(table: TokenTable) -> str:
    lines = ['const designTokens = {']
    lines.extend(_js_object_body(table))
    lines.append('};')
    lines.append('')
    lines.append('export default designTokens;')
    return '\n'.join(lines) + '\n'


def _channel(value: float) -> str:
    return format_number(round(value, 4))


def generate_ios(table: TokenTable) -> str:
    lines = ['import UIKit', '', 'public enum DesignTokens {']
    for category, tokens in table.items():
        lines.append(f"  // MARK: - {category}")
        lines.append(f"  public enum {swift_identifier(to_pascal(category))} {{")
        for name, entry in tokens.items():
            identifier = swift_identifier(to_camel(name))
            value = entry['value']
            if entry['type'] == 'color':
                try:
                    color = parse_color(value)
                    lines.append(
                        f"    public static let {identifier} = UIColor(red: {_channel(color.r)}, "
                        f"green: {_channel(color.g)}, blue: {_channel(color.b)}, alpha: {_channel(color.a)})"
                    )
                except ValueError:
                    logger.warning(f"Cannot parse color {value!r} for {category}.{name}")
                    lines.append(f"    public static let {identifier} = {quote_double(value)} // Unresolved color")
            elif isinstance(value, bool):
                lines.append(f"    public static let {identifier}: Bool = {js_literal(value)}")
            elif is_numeric(value):
                lines.append(f"    public static let {identifier}: CGFloat = {format_number(value)}")
            else:
                lines.append(f"    public static let {identifier} = {quote_double(value)}")
        lines.append('  }')
        lines.append('')
    lines.append('}')
    return '\n'.join(lines) + '\n'


def generate_android(table: TokenTable) -> str:
    lines = [
        'package com.example.designsystem',
        '',
        'import androidx.compose.ui.graphics.Color',
        '',
        'object DesignTokens {',
    ]
    for category, tokens in table.items():
        lines.append(f"    // {category}")
        lines.append(f"    object {to_pascal(category)} {{")
        for name, entry in tokens.items():
            identifier = kotlin_identifier(to_camel(name))
            value = entry['value']
            if entry['type'] == 'color':
                try:
                    color = parse_color(value)
                    lines.append(f"        val {identifier} = Color(0x{argb_hex(color)})")
                except ValueError:
                    logger.warning(f"Cannot parse color {value!r} for {category}.{name}")
                    lines.append(
                        f"        val {identifier} = {quote_double(value, escape_dollar=True)} // Unresolved color"
                    )
            elif isinstance(value, bool) or is_numeric(value):
                number = js_literal(value)
                if isinstance(value, float) and not value.is_integer():
                    number = f"{number}f"
                lines.append(f"        val {identifier} = {number}")
            else:
                lines.append(f"        val {identifier} = {quote_double(value, escape_dollar=True)}")
        lines.append('    }')
        lines.append('')
    lines.append('}')
    return '\n'.join(lines) + '\n'


def generate_flutter(table: TokenTable) -> str:
    lines = [
        "import 'package:flutter/material.dart';",
        '',
        'class DesignTokens {',
        '  const DesignTokens._();',
        '',
    ]
    for category, tokens in table.items():
        lines.append(f"  // {category}")
        for name, entry in tokens.items():
            identifier = to_camel(f"{category}-{name}")
            value = entry['value']
            if entry['type'] == 'color':
                try:
                    color = parse_color(value)
                    lines.append(f"  static const Color {identifier} = Color(0x{argb_hex(color)});")
                except ValueError:
                    logger.warning(f"Cannot parse color {value!r} for {category}.{name}")
                    lines.append(
                        f"  static const String {identifier} = "
                        f"{quote_single(value, escape_dollar=True)}; // Unresolved color"
                    )
            elif isinstance(value, bool):
                lines.append(f"  static const bool {identifier} = {js_literal(value)};")
            elif is_numeric(value):
                lines.append(f"  static const double {identifier} = {float(value)};")
            else:
                lines.append(f"  static const String {identifier} = {quote_single(value, escape_dollar=True)};")
        lines.append('')
    lines.append('}')
    return '\n'.join(lines) + '\n'


def generate_json(table: TokenTable) -> str:
    return json.dumps(table, indent=2)
