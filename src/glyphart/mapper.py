import numpy as np


def glyph_indices(grid, table_size, invert=False):
    """Index into the glyph table for every cell of a luminance grid."""
    arr = np.asarray(grid, dtype=np.float64)
    if invert:
        arr = 1.0 - arr
    arr = np.clip(arr, 0.0, 1.0)
    idx = np.floor(arr * (table_size - 1)).astype(np.int64)
    return np.clip(idx, 0, table_size - 1)


def map_glyphs(grid, glyph_table, invert=False):
    """Luminance grid -> text, one line per grid row, every line ends with '\\n'."""
    arr = np.asarray(grid, dtype=np.float64)
    if arr.size == 0:
        return ""
    glyphs = np.array(list(glyph_table), dtype=np.dtype("U"))
    mapped = glyphs[glyph_indices(arr, len(glyphs), invert)]
    return "".join("".join(row.tolist()) + "\n" for row in mapped)
