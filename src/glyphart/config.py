import numbers

from .errors import ConfigurationError
from .greyscale import DEFAULT_GREYSCALE, get_greyscale

DEFAULT_CELL_SIZE = 5
DEFAULT_CONTRAST = 0.25
DEFAULT_BRIGHTNESS = 0.1

# normal: black font on white background, inverted: white font on black
COLOR_MODES = ("normal", "inverted")


def _clamp(value, lo=-1.0, hi=1.0):
    return max(lo, min(hi, float(value)))


class ConversionConfig:
    """Settings for one conversion. contrast/brightness are clamped to -1..1."""

    def __init__(self, cell_size=DEFAULT_CELL_SIZE, contrast=DEFAULT_CONTRAST,
                 brightness=DEFAULT_BRIGHTNESS, greyscale=DEFAULT_GREYSCALE, invert=True):
        self.cell_size = cell_size
        self.contrast = _clamp(contrast)
        self.brightness = _clamp(brightness)
        self.greyscale = greyscale
        self.invert = bool(invert)

    @classmethod
    def from_args(cls, args):
        if args.color_mode not in COLOR_MODES:
            raise ConfigurationError(f"unknown color mode {args.color_mode!r}")
        cfg = cls(cell_size=args.cell_size, contrast=args.contrast, brightness=args.brightness,
                  greyscale=args.greyscale, invert=args.color_mode == "inverted")
        cfg.validate()
        return cfg

    @property
    def color_mode(self):
        return "inverted" if self.invert else "normal"

    def greyscale_function(self):
        return get_greyscale(self.greyscale)

    def validate(self):
        if isinstance(self.cell_size, bool) or not isinstance(self.cell_size, numbers.Integral):
            raise ConfigurationError(f"cell size must be an integer, got {self.cell_size!r}")
        if self.cell_size < 1:
            raise ConfigurationError(f"cell size must be >= 1, got {self.cell_size}")
        get_greyscale(self.greyscale)
        return self

    def __eq__(self, other):
        if not isinstance(other, ConversionConfig):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        return (f"ConversionConfig(cell_size={self.cell_size}, contrast={self.contrast}, "
                f"brightness={self.brightness}, greyscale={self.greyscale!r}, invert={self.invert})")
