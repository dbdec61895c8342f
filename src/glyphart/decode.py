import io

import numpy as np
from PIL import Image, UnidentifiedImageError

from .errors import DecodeError


class DecodedImage:
    """RGBA pixels of a decoded image, shape (height, width, 4) uint8."""

    def __init__(self, pixels):
        self.pixels = pixels

    @classmethod
    def from_array(cls, arr):
        arr = np.asarray(arr)
        if arr.dtype != np.uint8:
            arr = np.clip(arr, 0, 255).astype(np.uint8)
        if arr.ndim == 2:
            arr = np.stack([arr, arr, arr], axis=-1)
        if arr.ndim != 3 or arr.shape[2] not in (3, 4):
            raise ValueError(f"expected (h, w), (h, w, 3) or (h, w, 4) array, got {arr.shape}")
        if arr.shape[2] == 3:
            alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
            arr = np.concatenate([arr, alpha], axis=-1)
        return cls(np.ascontiguousarray(arr))

    @classmethod
    def from_pil(cls, img):
        return cls(np.asarray(img.convert("RGBA")).copy())

    @property
    def width(self):
        return self.pixels.shape[1]

    @property
    def height(self):
        return self.pixels.shape[0]

    def get_pixel(self, x, y):
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)


def decode(data):
    """Decode PNG/JPEG/... bytes into a DecodedImage."""
    if not data:
        raise DecodeError("empty image data")
    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise DecodeError(f"cannot decode image: {e}") from e
    return DecodedImage.from_pil(img)


def open_image(path):
    with open(path, "rb") as f:
        return decode(f.read())
