import io

import numpy as np
import pytest
from PIL import Image

from glyphart import DecodedImage, GlyphTable


def png_bytes(arr):
    buf = io.BytesIO()
    Image.fromarray(np.asarray(arr, dtype=np.uint8)).save(buf, format="PNG")
    return buf.getvalue()


def solid(width, height, rgb=(128, 128, 128)):
    arr = np.empty((height, width, 3), dtype=np.uint8)
    arr[...] = rgb
    return DecodedImage.from_array(arr)


@pytest.fixture
def three_glyphs():
    return GlyphTable.from_chars("#+.")


@pytest.fixture
def ramp():
    return GlyphTable.from_chars("@%#*+=-:. ")
