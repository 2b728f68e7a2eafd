from enum import IntEnum


class ColorModel(IntEnum):
    """Channel layout of a stored pixel. Values are the PNG color-type codes."""

    GRAYSCALE = 0
    RGB = 2
    INDEXED = 3
    GRAYSCALE_ALPHA = 4
    RGBA = 6


class BitDepth(IntEnum):
    """Bits per channel. Values are the bit counts."""

    ONE = 1
    TWO = 2
    FOUR = 4
    EIGHT = 8
    SIXTEEN = 16


CHANNELS = {
    ColorModel.RGBA: 4,
    ColorModel.RGB: 3,
    ColorModel.GRAYSCALE_ALPHA: 2,
    ColorModel.GRAYSCALE: 1,
    ColorModel.INDEXED: 1,
}


def channels_for(color_model: ColorModel) -> int:
    return CHANNELS[color_model]


def bits_for(bit_depth: BitDepth) -> int:
    return int(bit_depth)


def byte_offset(
    x: int, y: int, width: int, color_model: ColorModel, bit_depth: BitDepth
) -> int:
    """
    Byte offset of pixel (x, y) in a packed buffer.

    The linear pixel index is scaled by channels * bits / 8 and truncated, so
    at 4 bits two single-channel pixels share one byte. Scanline padding is
    not accounted for.
    """
    samples = (y * width + x) * channels_for(color_model)
    return samples * bits_for(bit_depth) // 8


def nominal_size(
    width: int, height: int, color_model: ColorModel, bit_depth: BitDepth
) -> int:
    """Minimum buffer length expected for an unpadded frame."""
    bits = width * height * channels_for(color_model) * bits_for(bit_depth)
    return (bits + 7) // 8
