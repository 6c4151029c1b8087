"""
Color literal formatting and parsing.

Canonical form is lowercase ``#rrggbb`` for opaque colors and ``#rrggbbaa``
(alpha last, CSS order) otherwise. ``parse_color`` is the inverse of
``format_color`` and also reads the short and ``rgb()``/``rgba()`` notations.
"""

import math
import re
from typing import Union

from tokenexport.snapshot.types import RGBA


RGB_FUNCTION_PATTERN = re.compile(
    r'^rgba?\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*(?:,\s*([\d.]+)\s*)?\)$',
    re.IGNORECASE
)
HEX_PATTERN = re.compile(r'^#?([0-9a-fA-F]{3,8})$')


def channel_to_byte(channel: float) -> int:
    """Scale a 0-1 channel to 0-255, rounding half up."""
    return max(0, min(255, int(math.floor(channel * 255 + 0.5))))


def _to_hex(channel: float) -> str:
    return f"{channel_to_byte(channel):02x}"


def format_color(r: float, g: float, b: float, a: float = 1.0) -> str:
    """Format an RGBA quadruple of 0-1 fractions as a hex string."""
    rgb = f"#{_to_hex(r)}{_to_hex(g)}{_to_hex(b)}"
    if a >= 1:
        return rgb
    return f"{rgb}{_to_hex(a)}"


def format_rgba(color: RGBA) -> str:
    return format_color(color.r, color.g, color.b, color.a)


def parse_color(value: Union[str, RGBA]) -> RGBA:
    """
    Parse a color string back into 0-1 fractions.

    Args:
        value: ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``, ``rgb(r, g, b)``
            or ``rgba(r, g, b, a)`` with 0-255 channels and 0-1 alpha

    Returns:
        RGBA with channels in 0-1

    Raises:
        ValueError: If the text is not a recognized color
    """
    if isinstance(value, RGBA):
        return value
    if not isinstance(value, str):
        raise ValueError(f"Not a color: {value!r}")

    text = value.strip()

    match = RGB_FUNCTION_PATTERN.match(text)
    if match:
        r, g, b = (float(match.group(i)) for i in (1, 2, 3))
        alpha = float(match.group(4)) if match.group(4) is not None else 1.0
        if max(r, g, b) > 255 or alpha > 1:
            raise ValueError(f"Color channel out of range: {value!r}")
        return RGBA(r / 255, g / 255, b / 255, alpha)

    match = HEX_PATTERN.match(text)
    if not match or len(match.group(1)) not in (3, 4, 6, 8):
        raise ValueError(f"Not a color: {value!r}")

    digits = match.group(1)
    if len(digits) in (3, 4):
        digits = ''.join(char * 2 for char in digits)

    channels = [int(digits[i:i + 2], 16) / 255 for i in range(0, len(digits), 2)]
    if len(channels) == 3:
        channels.append(1.0)
    return RGBA(*channels)


def argb_hex(color: RGBA) -> str:
    """Uppercase ``AARRGGBB`` as used by Android and Flutter color literals."""
    return ''.join(
        f"{channel_to_byte(c):02X}" for c in (color.a, color.r, color.g, color.b)
    )
