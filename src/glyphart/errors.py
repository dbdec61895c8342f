class GlyphArtError(Exception):
    """Base class for conversion errors."""


class DecodeError(GlyphArtError):
    """Source bytes are not a readable image."""


class ConfigurationError(GlyphArtError, ValueError):
    """Bad conversion settings (unknown greyscale name, cell size < 1, ...)."""
