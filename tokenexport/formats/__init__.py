"""
Output format module.

Provides Style Dictionary flattening, platform generators and the registry
that maps format ids to them.
"""

from .registry import ALL_PLATFORMS, FormatRegistry, OutputFormat, RenderedOutput
from .style_dictionary import to_style_dictionary
from .tailwind import generate_tailwind
from .token_studio import generate_dtcg, generate_token_studio, to_token_studio


__all__ = [
    "ALL_PLATFORMS",
    "FormatRegistry",
    "OutputFormat",
    "RenderedOutput",
    "to_style_dictionary",
    "generate_tailwind",
    "generate_dtcg",
    "generate_token_studio",
    "to_token_studio",
]
