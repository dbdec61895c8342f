"""
Image -> luminance grid.

Contrast/brightness are applied to the whole image first, then the image is
cut into cell_size x cell_size boxes and every box is averaged down to one
greyscale value. Boxes hanging over the right/bottom edge are dropped.
"""

import numpy as np

# factor used for contrast == 1 (everything except mid grey goes to 0 or 255)
MAX_CONTRAST_FACTOR = 255.0


def adjust_contrast(rgb, contrast):
    """Linear contrast around mid grey. rgb: float array in 0..255."""
    if contrast == 0:
        return rgb
    if contrast >= 1.0:
        factor = MAX_CONTRAST_FACTOR
    else:
        factor = (contrast + 1.0) / (1.0 - contrast)
    out = np.floor(factor * (rgb - 127.0) + 127.0)
    return np.clip(out, 0.0, 255.0)


def adjust_brightness(rgb, brightness):
    """brightness < 0 scales towards black, > 0 moves towards white."""
    if brightness == 0:
        return rgb
    if brightness < 0:
        out = rgb * (1.0 + brightness)
    else:
        out = rgb + (255.0 - rgb) * brightness
    return np.clip(np.floor(out), 0.0, 255.0)


def adjust_image(pixels, contrast=0.0, brightness=0.0):
    """RGB channels of an RGBA uint8 array, adjusted, as float64 0..255.

    The source array is left untouched.
    """
    rgb = pixels[..., :3].astype(np.float64)
    rgb = adjust_contrast(rgb, contrast)
    rgb = adjust_brightness(rgb, brightness)
    return rgb


def grid_shape(width, height, cell_size):
    return height // cell_size, width // cell_size


def box_mean(grey, cell_size):
    """Mean of every cell_size x cell_size block of a 2-D array.

    A block whose pixels are all equal keeps that value exactly, so a flat
    area maps to the same glyph at every cell size.
    """
    h, w = grey.shape
    rows, cols = h // cell_size, w // cell_size
    blocks = grey[:rows * cell_size, :cols * cell_size].reshape(rows, cell_size, cols, cell_size)
    lo = blocks.min(axis=(1, 3))
    hi = blocks.max(axis=(1, 3))
    mean = np.clip(blocks.mean(axis=(1, 3)), lo, hi)
    return np.where(lo == hi, lo, mean)


def reduce_image(image, config):
    """Mean greyscale value per cell, shape (rows, cols), rows = image rows."""
    grey_fn = config.greyscale_function()
    cs = config.cell_size
    rows, cols = grid_shape(image.width, image.height, cs)
    if rows == 0 or cols == 0:
        return np.zeros((rows, cols), dtype=np.float64)

    # crop the partial cells before doing any per-pixel work
    pixels = image.pixels[:rows * cs, :cols * cs]
    rgb = adjust_image(pixels, config.contrast, config.brightness) / 255.0
    grey = grey_fn(rgb[..., 0], rgb[..., 1], rgb[..., 2])
    grey = np.asarray(grey, dtype=np.float64)
    if cs == 1:
        return grey
    return box_mean(grey, cs)
