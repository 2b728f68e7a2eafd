from .decoder import ImageDecoder, read_png_header
from .errors import (
    DecodingError,
    PixelOutOfRangeError,
    PngPixelError,
    UnsupportedBitDepthError,
)
from .formats import BitDepth, ColorModel
from .image import DecodedImage
from .pixel import Pixel
from .utils import load_image

__all__ = [
    "BitDepth",
    "ColorModel",
    "DecodedImage",
    "DecodingError",
    "ImageDecoder",
    "Pixel",
    "PixelOutOfRangeError",
    "PngPixelError",
    "UnsupportedBitDepthError",
    "load_image",
    "read_png_header",
]
