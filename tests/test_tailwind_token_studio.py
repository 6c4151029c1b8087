"""Tests for the Tailwind, Token Studio and DTCG generators."""

import json

from tokenexport.formats.tailwind import classify, generate_tailwind
from tokenexport.formats.token_studio import generate_dtcg, generate_token_studio, to_token_studio
from tokenexport.snapshot.types import PaintStyle, Snapshot
from tokenexport.tokens.tree import Token, TokenTree, TokenType, build_token_tree


class TestTailwind:
    """Theme config sections."""

    def test_config_shape(self, snapshot):
        config = generate_tailwind(build_token_tree(snapshot))

        assert config.startswith("module.exports = {\n  theme: {\n    extend: {\n")
        assert config.endswith("    },\n  },\n};\n")

    def test_sections(self, snapshot):
        config = generate_tailwind(build_token_tree(snapshot))

        assert "      colors: {" in config
        assert "        'colors-light-brand-primary': '#ff0000'," in config
        assert "        'spacing-default-spacing-base': '8px'," in config
        assert "        'spacing-default-radius-small': '4px'," in config
        assert "        'heading-h1-font-size': '32px'," in config
        assert "        'heading-h1-font-family': ['Inter']," in config
        assert "        'heading-h1-font-weight': '700'," in config
        assert "        'heading-h1-line-height': '40'," in config

    def test_empty_sections_omitted(self, snapshot):
        config = generate_tailwind(build_token_tree(snapshot, ["Colors"]))

        assert "colors: {" in config
        assert "spacing: {" not in config
        assert "fontFamily: {" not in config

    def test_unresolved_tokens_left_out(self):
        tree = TokenTree()
        path = ("Colors/Light", "Brand", "Accent")
        tree.set(path, Token(path, TokenType.COLOR, "{Brand.Primary}", unresolved=True))

        assert "Brand.Primary" not in generate_tailwind(tree)

    def test_classify(self):
        number = Token(("x",), TokenType.NUMBER, 12)
        text = Token(("x",), TokenType.TEXT, "Inter")

        assert classify("card-radius", number) == ("borderRadius", "'12px'")
        assert classify("body-size", number) == ("fontSize", "'12px'")
        assert classify("gap", number) == ("spacing", "'12px'")
        assert classify("layer-z-index", number) is None
        assert classify("font-family-body", text) == ("fontFamily", "['Inter']")
        assert classify("copy-label", text) is None


class TestTokenStudio:
    """Token Studio sets and metadata."""

    def test_sets_and_order(self, snapshot):
        data = to_token_studio(build_token_tree(snapshot))

        assert data["$themes"] == []
        assert data["$metadata"]["tokenSetOrder"] == [
            "Colors/Light", "Colors/Dark", "Spacing/Default", "Surface", "Heading",
        ]
        assert data["Spacing/Default"]["Spacing"]["Large"] == {"$type": "number", "$value": 8}
        assert data["Colors/Light"]["Brand"]["Primary"]["$description"] == "Main brand color"

    def test_root_level_style_goes_to_global_set(self):
        snapshot = Snapshot(paint_styles=[
            PaintStyle("p", "Primary", [{"type": "SOLID", "color": {"r": 1, "g": 0, "b": 0}}]),
        ])

        data = to_token_studio(build_token_tree(snapshot))

        assert data["$metadata"]["tokenSetOrder"] == ["global"]
        assert data["global"]["Primary"] == {"$type": "color", "$value": "#ff0000"}

    def test_empty_sets_dropped(self):
        tree = TokenTree({"Empty/Mode": {}})
        assert to_token_studio(tree)["$metadata"]["tokenSetOrder"] == []

    def test_generate_is_json(self, snapshot):
        data = json.loads(generate_token_studio(build_token_tree(snapshot)))
        assert "Heading" in data


class TestDtcg:
    """Nested $type/$value export."""

    def test_tree_with_dollar_keys(self, snapshot):
        data = json.loads(generate_dtcg(build_token_tree(snapshot)))

        assert data["Colors/Dark"]["Brand"]["Accent"] == {"$type": "color", "$value": "#0000ff80"}
        assert data["Heading"]["H1"]["fontFamily"] == {"$type": "text", "$value": "Inter"}
        assert "Brand" not in data
