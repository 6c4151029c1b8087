"""
Alias resolution.
Follows VARIABLE_ALIAS chains to the literal they ultimately point at.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Union

from tokenexport.snapshot.types import AliasRef, Literal, Variable


logger = logging.getLogger(__name__)

MAX_ALIAS_DEPTH = 10


class UnresolvedReason(str, Enum):
    """Why an alias chain did not produce a literal."""
    NOT_FOUND = "not_found"
    NO_VALUE_FOR_MODE = "no_value_for_mode"
    ALIAS_DEPTH_EXCEEDED = "alias_depth_exceeded"


@dataclass(frozen=True)
class Unresolved:
    """
    Failure marker returned instead of a literal.

    Attributes:
        variable_id: Variable at which resolution stopped
        reason: Failure kind
        depth: Number of alias hops taken before stopping
    """
    variable_id: str
    reason: UnresolvedReason
    depth: int = 0


Resolution = Union[Literal, Unresolved]


class AliasResolver:
    """
    Resolves a variable's value for one mode against an in-memory variable map.

    The mode id is reused unchanged for every hop. Chains longer than
    ``max_depth`` hops are abandoned, which also terminates cycles.
    """

    def __init__(self, variables_by_id: Mapping[str, Variable], max_depth: int = MAX_ALIAS_DEPTH):
        self.variables_by_id = variables_by_id
        self.max_depth = max_depth

    def resolve(self, variable_id: str, mode_id: str) -> Resolution:
        """
        Resolve ``variable_id`` in ``mode_id`` to a literal.

        Args:
            variable_id: Variable to start from (its own slot may be an alias)
            mode_id: Mode to read at every step

        Returns:
            The literal, or Unresolved describing where and why it stopped
        """
        current_id = variable_id
        depth = 0

        while True:
            if depth > self.max_depth:
                logger.debug(f"Max alias depth {self.max_depth} exceeded resolving {variable_id}")
                return Unresolved(current_id, UnresolvedReason.ALIAS_DEPTH_EXCEEDED, depth)

            variable = self.variables_by_id.get(current_id)
            if variable is None:
                logger.debug(f"Variable not found: {current_id}")
                return Unresolved(current_id, UnresolvedReason.NOT_FOUND, depth)

            slot = variable.values_by_mode.get(mode_id)
            if slot is None:
                logger.debug(f"No value for variable {variable.name} ({current_id}) in mode {mode_id}")
                return Unresolved(current_id, UnresolvedReason.NO_VALUE_FOR_MODE, depth)

            if not isinstance(slot, AliasRef):
                return slot

            logger.debug(f"Alias {variable.name} -> {slot.target_id} (depth: {depth})")
            current_id = slot.target_id
            depth += 1


def resolve_alias(variable_id: str, mode_id: str, variables_by_id: Mapping[str, Variable]) -> Resolution:
    """Resolve without constructing a resolver explicitly."""
    return AliasResolver(variables_by_id).resolve(variable_id, mode_id)
