"""Tests for depth-bounded alias resolution."""

from tokenexport.snapshot.types import RGBA, AliasRef, Variable
from tokenexport.tokens.resolver import (
    MAX_ALIAS_DEPTH,
    AliasResolver,
    Unresolved,
    UnresolvedReason,
    resolve_alias,
)


MODE = "m1"


def chain(hops: int, literal=8):
    """v0 -> v1 -> ... -> v<hops>, where the last variable holds ``literal``."""
    variables = {}
    for i in range(hops):
        variables[f"v{i}"] = Variable(
            id=f"v{i}", name=f"Chain/V{i}", resolved_type="FLOAT",
            values_by_mode={MODE: AliasRef(f"v{i + 1}")},
        )
    variables[f"v{hops}"] = Variable(
        id=f"v{hops}", name=f"Chain/V{hops}", resolved_type="FLOAT",
        values_by_mode={MODE: literal},
    )
    return variables


class TestAliasResolver:
    """Resolution of alias chains for a single mode."""

    def test_literal_returned_directly(self):
        variables = chain(0, literal=RGBA(1, 0, 0, 1))
        assert resolve_alias("v0", MODE, variables) == RGBA(1, 0, 0, 1)

    def test_spacing_alias_resolves_to_target_literal(self):
        variables = {
            "base": Variable("base", "Spacing/Base", "FLOAT", {MODE: 8}),
            "large": Variable("large", "Spacing/Large", "FLOAT", {MODE: AliasRef("base")}),
        }
        assert resolve_alias("large", MODE, variables) == 8

    def test_chains_up_to_max_depth_resolve(self):
        for hops in range(1, MAX_ALIAS_DEPTH + 1):
            assert resolve_alias("v0", MODE, chain(hops, literal=hops)) == hops

    def test_chain_longer_than_max_depth_is_unresolved(self):
        result = resolve_alias("v0", MODE, chain(MAX_ALIAS_DEPTH + 1))

        assert isinstance(result, Unresolved)
        assert result.reason == UnresolvedReason.ALIAS_DEPTH_EXCEEDED
        assert result.depth == MAX_ALIAS_DEPTH + 1

    def test_self_reference_terminates(self):
        variables = {"a": Variable("a", "A", "FLOAT", {MODE: AliasRef("a")})}

        result = resolve_alias("a", MODE, variables)

        assert isinstance(result, Unresolved)
        assert result.reason == UnresolvedReason.ALIAS_DEPTH_EXCEEDED
        assert result.variable_id == "a"

    def test_two_variable_cycle_terminates(self):
        variables = {
            "a": Variable("a", "A", "COLOR", {MODE: AliasRef("b")}),
            "b": Variable("b", "B", "COLOR", {MODE: AliasRef("a")}),
        }

        result = resolve_alias("a", MODE, variables)

        assert isinstance(result, Unresolved)
        assert result.reason == UnresolvedReason.ALIAS_DEPTH_EXCEEDED

    def test_missing_target_is_not_found(self):
        variables = {"a": Variable("a", "A", "FLOAT", {MODE: AliasRef("gone")})}

        result = resolve_alias("a", MODE, variables)

        assert result == Unresolved("gone", UnresolvedReason.NOT_FOUND, 1)

    def test_missing_start_variable_is_not_found(self):
        result = resolve_alias("nope", MODE, {})
        assert result == Unresolved("nope", UnresolvedReason.NOT_FOUND, 0)

    def test_target_without_value_for_mode(self):
        variables = {
            "a": Variable("a", "A", "FLOAT", {MODE: AliasRef("b")}),
            "b": Variable("b", "B", "FLOAT", {"other-mode": 4}),
        }

        result = resolve_alias("a", MODE, variables)

        assert result == Unresolved("b", UnresolvedReason.NO_VALUE_FOR_MODE, 1)

    def test_same_mode_used_for_every_hop(self):
        variables = {
            "a": Variable("a", "A", "FLOAT", {"light": AliasRef("b"), "dark": AliasRef("b")}),
            "b": Variable("b", "B", "FLOAT", {"light": 1, "dark": 2}),
        }
        resolver = AliasResolver(variables)

        assert resolver.resolve("a", "light") == 1
        assert resolver.resolve("a", "dark") == 2

    def test_custom_max_depth(self):
        resolver = AliasResolver(chain(3), max_depth=2)
        result = resolver.resolve("v0", MODE)
        assert isinstance(result, Unresolved)
        assert result.reason == UnresolvedReason.ALIAS_DEPTH_EXCEEDED
