import io
import logging
import struct
from collections import namedtuple

import numpy as np
from PIL import Image

from .errors import DecodingError
from .formats import BitDepth, ColorModel
from .image import DecodedImage

LOGGER = logging.getLogger(__name__)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
# signature(8), chunk length(4), chunk type(4), width(4), height(4),
# bit depth(1), color type(1)
PNG_HEADER_SIZE = 26

# Bit depths the PNG format allows for each color type
PNG_DEPTHS = {
    ColorModel.GRAYSCALE: (1, 2, 4, 8, 16),
    ColorModel.RGB: (8, 16),
    ColorModel.INDEXED: (1, 2, 4, 8),
    ColorModel.GRAYSCALE_ALPHA: (8, 16),
    ColorModel.RGBA: (8, 16),
}

# Pillow modes that map directly onto an 8-bit buffer
MODE_MODELS = {
    "L": ColorModel.GRAYSCALE,
    "P": ColorModel.INDEXED,
    "LA": ColorModel.GRAYSCALE_ALPHA,
    "RGB": ColorModel.RGB,
    "RGBA": ColorModel.RGBA,
}

SIXTEEN_BIT_MODES = ("I", "I;16", "I;16B", "I;16L")

PngHeader = namedtuple("PngHeader", "width height bit_depth color_model")


def read_png_header(file_data: bytes):
    """
    Read the image format from the IHDR chunk of a PNG file.

    :param file_data: Bytes of the whole file (only the first 26 are read).
    :return: PngHeader, or None if file_data is not a PNG.
    """
    if not file_data.startswith(PNG_SIGNATURE):
        return None

    if len(file_data) < PNG_HEADER_SIZE:
        raise DecodingError("PNG.header: File too short for IHDR")

    # > : Big Endian
    # 8s: signature, I: chunk length, 4s: chunk type
    # I : width, I: height, B: bit depth, B: color type
    _, _, chunk_type, width, height, depth, color_type = struct.unpack(
        ">8sI4sIIBB", file_data[:PNG_HEADER_SIZE]
    )

    if chunk_type != b"IHDR":
        raise DecodingError("PNG.header: IHDR must be the first chunk")

    try:
        color_model = ColorModel(color_type)
    except ValueError as exc:
        raise DecodingError(f"PNG.header: Invalid color type {color_type}") from exc

    if depth not in PNG_DEPTHS[color_model]:
        raise DecodingError(
            f"PNG.header: Bit depth {depth} is invalid for {color_model.name}"
        )

    return PngHeader(width, height, BitDepth(depth), color_model)


def pack_scanlines(samples: np.ndarray, bits: int) -> bytes:
    """
    Pack unpacked sample values into PNG scanlines.

    Samples are packed most significant bits first and every row is padded
    to a whole byte, like a decoded sub-byte PNG frame.

    :param samples: Array of shape (height, width) or (height, width, channels)
                    holding values below 2**bits.
    :param bits: 1, 2 or 4.
    """
    if samples.size == 0:
        return b""

    height = samples.shape[0]
    rows = samples.reshape(height, -1).astype(np.uint8)

    per_byte = 8 // bits
    padding = -rows.shape[1] % per_byte
    if padding:
        rows = np.pad(rows, ((0, 0), (0, padding)))

    groups = rows.reshape(height, -1, per_byte)
    shifts = (np.arange(per_byte - 1, -1, -1) * bits).astype(np.uint8)
    packed = np.bitwise_or.reduce(groups << shifts, axis=2)
    return packed.astype(np.uint8).tobytes()


class ImageDecoder:
    """
    Decode image files into a DecodedImage using Pillow.

    The reported format is the one the buffer is in after decoding. Sub-byte
    grayscale and indexed PNGs keep their stored depth, everything else Pillow
    widens is reported at the width it is delivered in.
    """

    @staticmethod
    def decode(file_data: bytes) -> DecodedImage:
        """
        Decode a complete image file held in memory.

        :param file_data: Bytes of the image file.
        :return: DecodedImage owning the decoded frame.
        :raises DecodingError: The data is not a readable image.
        """
        header = read_png_header(file_data)

        try:
            img = Image.open(io.BytesIO(file_data))
            img.load()
        except (
            OSError,
            SyntaxError,
            EOFError,
            struct.error,
            Image.DecompressionBombError,
        ) as exc:
            raise DecodingError(f"ImageDecoder.decode: {exc}") from exc

        with img:
            decoded = ImageDecoder._from_pillow(img, header)

        LOGGER.debug(
            "Decoded %dx%d %s image at %d bits, %d bytes",
            decoded.width,
            decoded.height,
            decoded.color_model.name,
            decoded.bit_depth,
            len(decoded.pixel_bytes),
        )
        if decoded.is_truncated:
            LOGGER.warning(
                "Decoded frame holds %d bytes, expected at least %d",
                len(decoded.pixel_bytes),
                decoded.nominal_size,
            )
        return decoded

    @staticmethod
    def _from_pillow(img: Image.Image, header) -> DecodedImage:
        width, height = img.size
        mode = img.mode
        stored_depth = header.bit_depth if header is not None else BitDepth.EIGHT

        # --- Bilevel ---
        if mode == "1":
            samples = np.asarray(img, dtype=np.uint8)
            return DecodedImage(
                width,
                height,
                ColorModel.GRAYSCALE,
                BitDepth.ONE,
                pack_scanlines(samples, 1),
            )

        # --- Sub-byte grayscale and palette ---
        if mode in ("L", "P") and stored_depth < BitDepth.EIGHT:
            samples = np.asarray(img, dtype=np.uint8)
            if mode == "L":
                # Pillow scales grayscale samples up to 0-255
                samples = samples // (255 // ((1 << stored_depth) - 1))
            return DecodedImage(
                width,
                height,
                MODE_MODELS[mode],
                stored_depth,
                pack_scanlines(samples, int(stored_depth)),
            )

        # --- 16-bit grayscale ---
        if mode in SIXTEEN_BIT_MODES and (
            mode != "I" or stored_depth == BitDepth.SIXTEEN
        ):
            samples = np.asarray(img).astype(">u2")
            return DecodedImage(
                width, height, ColorModel.GRAYSCALE, BitDepth.SIXTEEN, samples.tobytes()
            )

        # --- 8-bit ---
        if mode not in MODE_MODELS:
            target = (
                "RGBA"
                if "A" in img.getbands() or "transparency" in img.info
                else "RGB"
            )
            LOGGER.warning("Converting %s image to %s", mode, target)
            img = img.convert(target)
            mode = target

        return DecodedImage(
            width, height, MODE_MODELS[mode], BitDepth.EIGHT, img.tobytes()
        )
