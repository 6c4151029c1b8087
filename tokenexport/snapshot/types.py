"""
Snapshot type definitions.

Read-only view of the host document: collections, modes, variables and the
classic paint/text styles. A snapshot is built once per export and never
mutated afterwards.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union
from enum import Enum


class ResolvedType(str, Enum):
    """Declared value type of a variable."""
    COLOR = "COLOR"
    FLOAT = "FLOAT"
    STRING = "STRING"
    BOOLEAN = "BOOLEAN"

    @classmethod
    def parse(cls, value: str) -> Optional["ResolvedType"]:
        """Return the member for ``value`` or None if it is not a known type."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class RGBA:
    """Color literal with channels as 0-1 fractions."""
    r: float
    g: float
    b: float
    a: float = 1.0

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)


@dataclass(frozen=True)
class AliasRef:
    """Value slot that points at another variable."""
    target_id: str


Literal = Union[RGBA, float, int, str, bool]
ValueSlot = Union[Literal, AliasRef]


@dataclass(frozen=True)
class Mode:
    """Named valuation context within a collection."""
    mode_id: str
    name: str


@dataclass
class Variable:
    """
    A named, typed design value.

    Attributes:
        id: Opaque identity
        name: Slash-delimited hierarchical path, e.g. "Colors/Brand/Primary"
        resolved_type: Declared type as reported by the host; may be a type
            this tool does not know, in which case the flattener drops it
        values_by_mode: Mode id -> literal or AliasRef
        description: Optional free text
        collection_id: Owning collection when the host reports it
    """
    id: str
    name: str
    resolved_type: str
    values_by_mode: Dict[str, ValueSlot] = field(default_factory=dict)
    description: str = ""
    collection_id: Optional[str] = None

    @property
    def kind(self) -> Optional[ResolvedType]:
        return ResolvedType.parse(self.resolved_type)

    @property
    def alias_name(self) -> str:
        """Name with '/' replaced by '.', as used in token references."""
        return self.name.replace("/", ".")


@dataclass
class Collection:
    """Named group of variables sharing a set of modes."""
    id: str
    name: str
    modes: List[Mode] = field(default_factory=list)
    variable_ids: List[str] = field(default_factory=list)


@dataclass
class PaintStyle:
    """Classic paint style. Only a leading SOLID paint becomes a token."""
    id: str
    name: str
    paints: List[Dict[str, Any]] = field(default_factory=list)
    description: str = ""

    def solid_color(self) -> Optional[RGBA]:
        """Color of the first paint if it is SOLID, else None."""
        if not self.paints:
            return None
        paint = self.paints[0]
        if paint.get("type") != "SOLID" or not isinstance(paint.get("color"), dict):
            return None
        color = paint["color"]
        opacity = paint.get("opacity")
        return RGBA(
            r=float(color.get("r", 0)),
            g=float(color.get("g", 0)),
            b=float(color.get("b", 0)),
            a=float(opacity) if opacity is not None else 1.0,
        )


@dataclass
class TextStyle:
    """Classic text style."""
    id: str
    name: str
    font_family: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Optional[float] = None
    line_height: Optional[float] = None
    letter_spacing: Optional[float] = None
    description: str = ""

    def properties(self) -> List[Tuple[str, Union[str, float]]]:
        """Defined typography properties in a stable order."""
        candidates = [
            ("fontFamily", self.font_family),
            ("fontSize", self.font_size),
            ("fontWeight", self.font_weight),
            ("lineHeight", self.line_height),
            ("letterSpacing", self.letter_spacing),
        ]
        return [(key, value) for key, value in candidates if value is not None]


@dataclass
class Snapshot:
    """Everything one export needs, fetched in a single bulk read."""
    collections: List[Collection] = field(default_factory=list)
    variables: Dict[str, Variable] = field(default_factory=dict)
    paint_styles: List[PaintStyle] = field(default_factory=list)
    text_styles: List[TextStyle] = field(default_factory=list)

    def collection_of(self, variable_id: str) -> Optional[Collection]:
        for collection in self.collections:
            if variable_id in collection.variable_ids:
                return collection
        return None

    def collection_names(self) -> List[str]:
        return [collection.name for collection in self.collections]
