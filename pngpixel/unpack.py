"""
Per-format channel unpackers.

Each unpacker takes the pixel buffer and the byte offset of a pixel and
returns its (r, g, b, a) values. ``UNPACKERS`` maps (bit depth, color model)
to the number of bytes the unpacker reads and the unpacker itself. A depth
with no entries has no unpacker and falls back to the sentinel pixel.
"""

from .formats import BitDepth, ColorModel

SUPPORTED_DEPTHS = (BitDepth.FOUR, BitDepth.EIGHT)

# Alpha reported for 8-bit RGB pixels. This is 1, not 255, for compatibility
# with existing consumers of this value.
RGB8_ALPHA = 1


def high_nibble(byte: int) -> int:
    return byte >> 4


def low_nibble(byte: int) -> int:
    return byte & 0x0F


# --- 8 bits per channel ---


def _rgba8(data, i):
    return data[i], data[i + 1], data[i + 2], data[i + 3]


def _rgb8(data, i):
    return data[i], data[i + 1], data[i + 2], RGB8_ALPHA


def _grayscale8(data, i):
    return data[i], 0, 0, 0


def _grayscale_alpha8(data, i):
    return data[i], 0, 0, data[i + 1]


# --- 4 bits per channel ---


def _rgba4(data, i):
    return (
        high_nibble(data[i]),
        low_nibble(data[i]),
        high_nibble(data[i + 1]),
        low_nibble(data[i + 1]),
    )


def _rgb4(data, i):
    return high_nibble(data[i]), low_nibble(data[i]), high_nibble(data[i + 1]), 0


def _grayscale4(data, i):
    return high_nibble(data[i]), 0, 0, 0


def _grayscale_alpha4(data, i):
    return high_nibble(data[i]), 0, 0, low_nibble(data[i])


UNPACKERS = {
    (BitDepth.EIGHT, ColorModel.RGBA): (4, _rgba8),
    (BitDepth.EIGHT, ColorModel.RGB): (3, _rgb8),
    (BitDepth.EIGHT, ColorModel.GRAYSCALE): (1, _grayscale8),
    (BitDepth.EIGHT, ColorModel.GRAYSCALE_ALPHA): (2, _grayscale_alpha8),
    # Indexed pixels expose the raw palette index as r.
    (BitDepth.EIGHT, ColorModel.INDEXED): (1, _grayscale8),
    (BitDepth.FOUR, ColorModel.RGBA): (2, _rgba4),
    (BitDepth.FOUR, ColorModel.RGB): (2, _rgb4),
    (BitDepth.FOUR, ColorModel.GRAYSCALE): (1, _grayscale4),
    (BitDepth.FOUR, ColorModel.GRAYSCALE_ALPHA): (1, _grayscale_alpha4),
    (BitDepth.FOUR, ColorModel.INDEXED): (1, _grayscale4),
}


def get_unpacker(bit_depth: BitDepth, color_model: ColorModel):
    """Return ``(bytes_needed, unpack)`` or None for an unsupported depth."""
    return UNPACKERS.get((bit_depth, color_model))
