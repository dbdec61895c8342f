import pytest

from glyphart import (ConfigurationError, GlyphRasterizer, GlyphTable, PillowGlyphRasterizer,
                      build_glyph_table, default_glyph_table)
from glyphart.glyphs import CELL_HEIGHT, CELL_WIDTH, DEFAULT_ALPHABET


class FakeRasterizer(GlyphRasterizer):
    def __init__(self, values):
        self.values = values
        self.calls = []

    def measure_ink(self, char):
        self.calls.append(char)
        return self.values[char]


def test_alphabet():
    assert DEFAULT_ALPHABET[0] == " "
    assert DEFAULT_ALPHABET[94] == "~"
    assert len(DEFAULT_ALPHABET) == 95 + 200
    assert "█" in DEFAULT_ALPHABET  # full block


def test_build_sorts_dark_to_light():
    r = FakeRasterizer({" ": 1.0, ".": 0.95, "#": 0.6, "+": 0.8})
    table = build_glyph_table(r, alphabet=" .#+")
    assert table.chars == "#+. "
    assert table.intensities == (0.6, 0.8, 0.95, 1.0)
    assert r.calls == list(" .#+")


def test_build_ties_keep_alphabet_order():
    r = FakeRasterizer({"a": 0.5, "b": 0.5, "c": 0.1, "d": 0.5})
    assert build_glyph_table(r, alphabet="abcd").chars == "cabd"


def test_table_is_immutable():
    table = GlyphTable.from_chars("#. ")
    with pytest.raises(AttributeError):
        table._glyphs = ("x", "y")
    assert list(table) == ["#", ".", " "]
    assert table[1] == "."
    assert len(table) == 3


def test_table_needs_two_glyphs():
    with pytest.raises(ConfigurationError):
        GlyphTable.from_chars("#")


def test_pillow_rasterizer_measures_ink():
    r = PillowGlyphRasterizer()
    img = r.render("#")
    assert img.size == (CELL_WIDTH, CELL_HEIGHT)
    assert r.measure_ink(" ") == pytest.approx(1.0)
    assert r.measure_ink("#") < r.measure_ink(".") < 1.0


def test_pillow_rasterizer_table_ordering():
    table = build_glyph_table(PillowGlyphRasterizer(), alphabet="#.:@ -")
    values = table.intensities
    assert all(a <= b for a, b in zip(values, values[1:]))
    assert table.glyphs[-1] == " "


def test_default_table_built_once():
    table = default_glyph_table()
    assert table is default_glyph_table()
    assert len(table) == len(DEFAULT_ALPHABET)
    assert sorted(table.glyphs) == sorted(DEFAULT_ALPHABET)
