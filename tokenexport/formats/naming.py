"""Identifier helpers shared by the output formatters."""

import re


SWIFT_KEYWORDS = frozenset({
    'associatedtype', 'class', 'deinit', 'enum', 'extension', 'fileprivate', 'func',
    'import', 'init', 'inout', 'internal', 'let', 'open', 'operator', 'private',
    'precedencegroup', 'protocol', 'public', 'rethrows', 'static', 'struct', 'subscript',
    'typealias', 'var', 'break', 'case', 'catch', 'continue', 'default', 'defer', 'do',
    'else', 'fallthrough', 'for', 'guard', 'if', 'in', 'repeat', 'return', 'throw',
    'switch', 'where', 'while', 'as', 'await', 'false', 'is', 'nil', 'self', 'super',
    'throws', 'true', 'try', 'Any', 'Self', 'Type', 'Protocol',
})

# Hard keywords only; soft and modifier keywords are valid identifiers
KOTLIN_KEYWORDS = frozenset({
    'as', 'break', 'class', 'continue', 'do', 'else', 'false', 'for', 'fun', 'if',
    'in', 'interface', 'is', 'null', 'object', 'package', 'return', 'super', 'this',
    'throw', 'true', 'try', 'typealias', 'typeof', 'val', 'var', 'when', 'while',
})


def to_kebab(text: str) -> str:
    """"Semantic Colors/Light" -> "semantic-colors-light", "brandPrimary" -> "brand-primary"."""
    text = re.sub(r'([a-z0-9])([A-Z])', r'\1-\2', text)
    text = re.sub(r'[\s_./]+', '-', text)
    text = re.sub(r'-+', '-', text)
    return text.strip('-').lower()


def to_camel(text: str) -> str:
    """Lower camel case identifier; a leading digit gets an underscore."""
    words = [w for w in re.split(r'[^a-zA-Z0-9]+', to_kebab(text)) if w]
    if not words:
        return '_'
    identifier = words[0] + ''.join(word.capitalize() for word in words[1:])
    if identifier[0].isdigit():
        identifier = f"_{identifier}"
    return identifier


def to_pascal(text: str) -> str:
    camel = to_camel(text).lstrip('_')
    return camel[:1].upper() + camel[1:] if camel else '_'


def swift_identifier(identifier: str) -> str:
    """Backtick-quote Swift keywords (`default`, `in`, `Type`...)."""
    return f"`{identifier}`" if identifier in SWIFT_KEYWORDS else identifier


def kotlin_identifier(identifier: str) -> str:
    """Backtick-quote Kotlin hard keywords (`in`, `is`, `object`...)."""
    return f"`{identifier}`" if identifier in KOTLIN_KEYWORDS else identifier


def quote_single(value: str, escape_dollar: bool = False) -> str:
    """Single-quoted literal for JS/Dart sources (Dart interpolates '$')."""
    escaped = str(value).replace('\\', '\\\\').replace("'", "\\'")
    if escape_dollar:
        escaped = escaped.replace('$', '\\$')
    return f"'{escaped}'"


def quote_double(value: str, escape_dollar: bool = False) -> str:
    """Double-quoted literal for Swift/Kotlin sources (Kotlin interpolates '$')."""
    escaped = str(value).replace('\\', '\\\\').replace('"', '\\"')
    if escape_dollar:
        escaped = escaped.replace('$', '\\$')
    return f'"{escaped}"'


def format_number(value) -> str:
    """8.0 -> "8", 1.5 -> "1.5"."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
