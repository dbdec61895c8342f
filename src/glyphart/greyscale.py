"""
Greyscale functions selectable by name.

Every function takes r, g, b in 0..1 (floats or numpy arrays of the same
shape) and returns the luminance element-wise.
"""

import numpy as np

from .errors import ConfigurationError


def average(r, g, b):
    return (r + g + b) / 3.0


def luma_broadcast(r, g, b):
    return r * 0.3 + g * 0.59 + b * 0.11


def bt709(r, g, b):
    return r * 0.2126 + g * 0.7152 + b * 0.0722


def bt601(r, g, b):
    return r * 0.299 + g * 0.587 + b * 0.114


def desaturate(r, g, b):
    # HSL lightness
    return (np.maximum(np.maximum(r, g), b) + np.minimum(np.minimum(r, g), b)) / 2.0


GREYSCALE_FUNCTIONS = (
    ("Average", average),
    ("0.3/0.59/0.11", luma_broadcast),
    ("ITU-R BT.709", bt709),
    ("ITU-R BT.601", bt601),
    ("Desaturate (HSL)", desaturate),
)

DEFAULT_GREYSCALE = "ITU-R BT.601"

_BY_NAME = dict(GREYSCALE_FUNCTIONS)


def greyscale_names():
    return [name for name, _ in GREYSCALE_FUNCTIONS]


def get_greyscale(name):
    try:
        return _BY_NAME[name]
    except KeyError:
        raise ConfigurationError(
            f"unknown greyscale function {name!r} (choose from: {', '.join(greyscale_names())})"
        ) from None
