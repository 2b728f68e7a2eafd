import logging
import os

from .decoder import ImageDecoder
from .errors import DecodingError
from .formats import BitDepth, ColorModel
from .image import DecodedImage

LOGGER = logging.getLogger(__name__)

RAW_EXTENSIONS = ("dng", "cr2", "nef", "arw", "raw")


def load_image(filepath: str) -> DecodedImage:
    """
    Read an image file and decode it into a DecodedImage.

    The file is read in a single blocking call. Camera RAW files need the
    optional ``rawpy`` dependency.

    :raises OSError: The file is missing or cannot be read.
    :raises DecodingError: The file is not a decodable image.
    """
    ext = os.fspath(filepath).lower().split(".")[-1]

    if ext in RAW_EXTENSIONS:
        return _load_raw(filepath)

    with open(filepath, "rb") as f:
        file_data = f.read()

    LOGGER.debug("Read %d bytes from %s", len(file_data), filepath)
    return ImageDecoder.decode(file_data)


def _load_raw(filepath) -> DecodedImage:
    # RAW formats - requires rawpy
    import rawpy

    if not os.path.isfile(filepath):
        raise FileNotFoundError(f"No such file: '{filepath}'")

    try:
        with rawpy.imread(os.fspath(filepath)) as raw:
            rgb = raw.postprocess()
    except rawpy.LibRawError as exc:
        raise DecodingError(f"load_image: {exc}") from exc

    height, width = rgb.shape[:2]
    LOGGER.debug("Developed %dx%d RAW image from %s", width, height, filepath)
    return DecodedImage(width, height, ColorModel.RGB, BitDepth.EIGHT, rgb.tobytes())
