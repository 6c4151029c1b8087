"""Tests for the per-collection variable catalog."""

from tokenexport.snapshot.types import AliasRef, Collection, Mode, PaintStyle, Snapshot, Variable
from tokenexport.tokens.catalog import UNKNOWN_COLLECTION, color_palette, filter_by_collections, list_variables


class TestListVariables:
    """Catalog grouping and first-mode values."""

    def test_categories_sorted(self, snapshot):
        assert list(list_variables(snapshot)) == ["Colors", "Paint Styles", "Spacing", "Text Styles"]

    def test_variable_entries(self, snapshot):
        colors = list_variables(snapshot)["Colors"]

        assert colors[0] == {
            "id": "v-primary",
            "name": "Brand/Primary",
            "type": "COLOR",
            "value": "#ff0000",
            "collection": "Colors",
            "modes": ["Light", "Dark"],
            "description": "Main brand color",
        }
        # Alias followed in the first mode
        assert colors[1]["name"] == "Brand/Accent"
        assert colors[1]["value"] == "#ff0000"

    def test_numeric_alias(self, snapshot):
        spacing = {entry["name"]: entry for entry in list_variables(snapshot)["Spacing"]}
        assert spacing["Spacing/Large"]["value"] == 8

    def test_styles(self, snapshot):
        catalog = list_variables(snapshot)

        paint = catalog["Paint Styles"]
        assert [entry["value"] for entry in paint] == ["#00ff00", "#ffffff80"]
        assert paint[0]["type"] == "PAINT_STYLE"
        assert paint[0]["modes"] == ["Default"]

        text = catalog["Text Styles"][0]
        assert text["type"] == "TEXT_STYLE"
        assert text["value"]["fontFamily"] == "Inter"
        assert text["value"]["fontSize"] == 32

    def test_unresolved_alias_shows_placeholder(self):
        snapshot = Snapshot(
            collections=[Collection("c", "Colors", [Mode("m", "Light")], ["a", "b"])],
            variables={
                "a": Variable("a", "Loop/A", "COLOR", {"m": AliasRef("b")}),
                "b": Variable("b", "Loop/B", "COLOR", {"m": AliasRef("a")}),
            },
        )

        entries = list_variables(snapshot)["Colors"]

        assert entries[0]["value"] == "{Loop.B}"
        assert entries[1]["value"] == "{Loop.A}"

    def test_orphan_variable_listed_as_unknown(self):
        snapshot = Snapshot(variables={"x": Variable("x", "Orphan", "FLOAT", {"m": 1})})

        entry = list_variables(snapshot)[UNKNOWN_COLLECTION][0]

        assert entry["value"] is None
        assert entry["modes"] == []


class TestFilterByCollections:
    """Selection of catalog categories."""

    def test_empty_selection_keeps_all(self, snapshot):
        catalog = list_variables(snapshot)
        assert filter_by_collections(catalog, []) == catalog

    def test_selection(self, snapshot):
        filtered = filter_by_collections(list_variables(snapshot), ["Spacing", "Missing", "Text Styles"])
        assert list(filtered) == ["Spacing", "Text Styles"]


def solid(r, g, b):
    return [{"type": "SOLID", "color": {"r": r, "g": g, "b": b}}]


class TestColorPalette:
    """Paint styles grouped by family and shade."""

    def test_sample_palette(self, snapshot):
        palette = color_palette(list_variables(snapshot))

        assert palette == {
            "Brand": {"Primary": {"value": "#00ff00", "type": "color", "description": ""}},
            "Surface": {"Card": {"value": "#ffffff80", "type": "color", "description": ""}},
        }

    def test_prefix_selects_and_strips(self):
        snapshot = Snapshot(paint_styles=[
            PaintStyle("a", "Acme - colors/Greyscale/900", solid(0, 0, 0), "Darkest"),
            PaintStyle("b", "Acme - colors/Blue/Light/50", solid(0, 0, 1)),
            PaintStyle("c", "Other/Red/500", solid(1, 0, 0)),
            PaintStyle("d", "Acme - colors/Lonely", solid(1, 1, 1)),
        ])

        palette = color_palette(list_variables(snapshot), prefix="Acme - colors")

        assert palette == {
            "Greyscale": {"900": {"value": "#000000", "type": "color", "description": "Darkest"}},
            "Blue": {"Light/50": {"value": "#0000ff", "type": "color", "description": ""}},
        }

    def test_no_paint_styles(self, snapshot):
        catalog = filter_by_collections(list_variables(snapshot), ["Colors"])
        assert color_palette(catalog) == {}
