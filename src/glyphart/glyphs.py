"""
Glyph brightness table.

Every candidate character is drawn black on white into a small cell and the
mean brightness of the cell is measured. Sorting by that value gives a ramp
from the densest glyph (most ink) to the emptiest one.
"""

import functools
import os

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .errors import ConfigurationError

# printable ASCII + box drawing / block elements
ASCII_RANGE = range(0x20, 0x7F)
DRAWING_RANGE = range(9500, 9700)
DEFAULT_ALPHABET = tuple(chr(c) for c in ASCII_RANGE) + tuple(chr(c) for c in DRAWING_RANGE)

CELL_WIDTH = 15
CELL_HEIGHT = 18
FONT_SIZE = 15
BASELINE = 15

FONT_CANDIDATES = [
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/TTF/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/truetype/freefont/FreeMono.ttf",
    "/System/Library/Fonts/Menlo.ttc",
    "/System/Library/Fonts/Monaco.ttf",
    "C:/Windows/Fonts/consola.ttf",
    "C:/Windows/Fonts/cour.ttf",
]


def load_monospace_font(size=FONT_SIZE, candidates=None):
    """First monospace TrueType font found on the system, else Pillow's default."""
    for fp in candidates or FONT_CANDIDATES:
        if os.path.exists(fp):
            try:
                return ImageFont.truetype(fp, size)
            except OSError:
                continue
    return ImageFont.load_default(size=size)


class GlyphRasterizer:
    """Capability used by the table builder.

    measure_ink(char) returns the mean brightness (0..1) of the cell with the
    glyph drawn in; 1.0 means no ink at all.
    """

    def measure_ink(self, char):
        raise NotImplementedError


class PillowGlyphRasterizer(GlyphRasterizer):
    def __init__(self, font=None, width=CELL_WIDTH, height=CELL_HEIGHT, baseline=BASELINE):
        self.font = font if font is not None else load_monospace_font()
        self.width = width
        self.height = height
        self.baseline = baseline

    def render(self, char):
        img = Image.new("RGB", (self.width, self.height), "white")
        draw = ImageDraw.Draw(img)
        if isinstance(self.font, ImageFont.FreeTypeFont):
            # fill + 1px outline so hairline glyphs still register
            draw.text((0, self.baseline), char, font=self.font, fill="black",
                      anchor="ls", stroke_width=1, stroke_fill="black")
        else:
            draw.text((0, 0), char, font=self.font, fill="black")
        return img

    def measure_ink(self, char):
        arr = np.asarray(self.render(char)).astype(np.float64) / 255.0
        return float(arr.mean())


class GlyphTable:
    """Immutable ramp of glyphs ordered dark (dense) -> light (sparse)."""

    __slots__ = ("_glyphs", "_intensities")

    def __init__(self, glyphs, intensities=None):
        glyphs = tuple(glyphs)
        if len(glyphs) < 2:
            raise ConfigurationError("glyph table needs at least 2 glyphs")
        if intensities is not None:
            intensities = tuple(float(v) for v in intensities)
            if len(intensities) != len(glyphs):
                raise ValueError("one intensity per glyph expected")
        object.__setattr__(self, "_glyphs", glyphs)
        object.__setattr__(self, "_intensities", intensities)

    def __setattr__(self, name, value):
        raise AttributeError("GlyphTable is immutable")

    @classmethod
    def from_chars(cls, chars):
        """Table from a ready-made ramp, dark to light."""
        return cls(list(chars))

    @property
    def glyphs(self):
        return self._glyphs

    @property
    def intensities(self):
        return self._intensities

    @property
    def chars(self):
        return "".join(self._glyphs)

    def __len__(self):
        return len(self._glyphs)

    def __getitem__(self, index):
        return self._glyphs[index]

    def __iter__(self):
        return iter(self._glyphs)

    def __eq__(self, other):
        if not isinstance(other, GlyphTable):
            return NotImplemented
        return self._glyphs == other._glyphs

    def __hash__(self):
        return hash(self._glyphs)

    def __repr__(self):
        return f"GlyphTable({self.chars!r})"


def build_glyph_table(rasterizer, alphabet=DEFAULT_ALPHABET):
    measured = [(ch, rasterizer.measure_ink(ch)) for ch in alphabet]
    # sorted() is stable: equal coverage keeps alphabet order
    measured = sorted(measured, key=lambda item: item[1])
    return GlyphTable([ch for ch, _ in measured], [v for _, v in measured])


@functools.lru_cache(maxsize=None)
def default_glyph_table():
    """Table for the default alphabet and font, built once per process."""
    return build_glyph_table(PillowGlyphRasterizer())
