from .decode import decode
from .glyphs import default_glyph_table
from .mapper import map_glyphs
from .reducer import reduce_image


def convert(image, config, glyph_table):
    """DecodedImage + ConversionConfig + GlyphTable -> ascii art string.

    Images smaller than one cell give an empty string.
    """
    config.validate()
    grid = reduce_image(image, config)
    return map_glyphs(grid, glyph_table, config.invert)


def convert_bytes(data, config, glyph_table=None):
    # validate before paying for the decode
    config.validate()
    image = decode(data)
    if glyph_table is None:
        glyph_table = default_glyph_table()
    return convert(image, config, glyph_table)
