class PngPixelError(Exception):
    """Base class for errors raised by pngpixel."""


class DecodingError(PngPixelError, ValueError):
    """The source could not be decoded into a pixel buffer."""


class PixelOutOfRangeError(PngPixelError, IndexError):
    """A strict lookup fell outside the image or its buffer."""


class UnsupportedBitDepthError(PngPixelError, ValueError):
    """A strict lookup hit a bit depth with no channel unpacker."""
