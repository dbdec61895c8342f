"""Image -> text art with glyphs ordered by measured ink coverage."""

from .config import ConversionConfig
from .convert import convert, convert_bytes
from .decode import DecodedImage, decode
from .errors import ConfigurationError, DecodeError, GlyphArtError
from .glyphs import (GlyphRasterizer, GlyphTable, PillowGlyphRasterizer, build_glyph_table,
                     default_glyph_table)
from .greyscale import get_greyscale, greyscale_names
from .mapper import map_glyphs
from .reducer import reduce_image
from .worker import LatestConverter

__version__ = "0.1.0"
