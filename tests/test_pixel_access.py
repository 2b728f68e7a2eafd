import pytest

from pngpixel import (
    BitDepth,
    ColorModel,
    DecodedImage,
    Pixel,
    PixelOutOfRangeError,
    UnsupportedBitDepthError,
)
from pngpixel.formats import byte_offset, channels_for, nominal_size
from pngpixel.unpack import SUPPORTED_DEPTHS, UNPACKERS

SENTINEL = Pixel(BitDepth.EIGHT, 0, 0, 0, 0)


def pattern(length):
    return bytes(i % 256 for i in range(length))


def test_rgba8_reads_four_bytes_at_pixel_offset():
    width, height = 7, 5
    data = pattern(width * height * 4)
    image = DecodedImage(width, height, ColorModel.RGBA, BitDepth.EIGHT, data)

    for y in range(height):
        for x in range(width):
            i = 4 * (y * width + x)
            pixel = image.get_pixel_at(x, y)
            assert pixel.rgba == (data[i], data[i + 1], data[i + 2], data[i + 3])
            assert pixel.bit_depth == BitDepth.EIGHT


def test_rgba4_splits_nibbles():
    image = DecodedImage(2, 1, ColorModel.RGBA, BitDepth.FOUR, bytes([0xAB, 0xCD]))

    pixel = image.get_pixel_at(0, 0)

    assert pixel == Pixel(BitDepth.FOUR, 0xA, 0xB, 0xC, 0xD)


def test_rgb4_has_zero_alpha():
    image = DecodedImage(1, 1, ColorModel.RGB, BitDepth.FOUR, bytes([0x12, 0x3F]))

    assert image.get_pixel_at(0, 0).rgba == (1, 2, 3, 0)


def test_grayscale8_only_sets_red():
    width, height = 4, 4
    data = bytes(range(200, 216))
    image = DecodedImage(width, height, ColorModel.GRAYSCALE, BitDepth.EIGHT, data)

    for y in range(height):
        for x in range(width):
            pixel = image.get_pixel_at(x, y)
            assert pixel.r == data[y * width + x]
            assert (pixel.g, pixel.b, pixel.a) == (0, 0, 0)


def test_rgb8_alpha_is_always_one():
    # Opaque alpha for 8-bit RGB is reported as 1, never 255 and never read
    width, height = 3, 3
    data = bytes([0xFF] * (width * height * 3))
    image = DecodedImage(width, height, ColorModel.RGB, BitDepth.EIGHT, data)

    for y in range(height):
        for x in range(width):
            pixel = image.get_pixel_at(x, y)
            assert pixel.rgba == (0xFF, 0xFF, 0xFF, 1)


def test_grayscale_alpha8():
    data = bytes([10, 20, 30, 40])
    image = DecodedImage(2, 1, ColorModel.GRAYSCALE_ALPHA, BitDepth.EIGHT, data)

    assert image.get_pixel_at(0, 0).rgba == (10, 0, 0, 20)
    assert image.get_pixel_at(1, 0).rgba == (30, 0, 0, 40)


def test_indexed8_returns_raw_index():
    image = DecodedImage(3, 1, ColorModel.INDEXED, BitDepth.EIGHT, bytes([0, 7, 255]))

    assert [image.get_pixel_at(x, 0).r for x in range(3)] == [0, 7, 255]
    assert image.get_pixel_at(2, 0).rgba == (255, 0, 0, 0)


def test_grayscale_alpha4_uses_both_nibbles():
    image = DecodedImage(
        1, 1, ColorModel.GRAYSCALE_ALPHA, BitDepth.FOUR, bytes([0x5A])
    )

    assert image.get_pixel_at(0, 0) == Pixel(BitDepth.FOUR, 0x5, 0, 0, 0xA)


@pytest.mark.parametrize("color_model", [ColorModel.GRAYSCALE, ColorModel.INDEXED])
def test_single_channel4_reads_high_nibble_of_shared_byte(color_model):
    # Two pixels share a byte and both read its high nibble
    image = DecodedImage(4, 1, color_model, BitDepth.FOUR, bytes([0x12, 0x34]))

    assert [image.get_pixel_at(x, 0).r for x in range(4)] == [1, 1, 3, 3]
    assert image.get_pixel_at(3, 0).rgba == (3, 0, 0, 0)
    assert image.get_pixel_at(3, 0).bit_depth == BitDepth.FOUR


@pytest.mark.parametrize("x, y", [(3, 0), (0, 2), (3, 2), (100, 100), (-1, 0), (0, -1)])
def test_out_of_range_coordinates_return_sentinel(x, y):
    image = DecodedImage(3, 2, ColorModel.RGBA, BitDepth.EIGHT, pattern(3 * 2 * 4))

    assert image.get_pixel_at(x, y) == SENTINEL


def test_truncated_buffer_returns_sentinel():
    # Room for one and a half RGBA pixels
    image = DecodedImage(2, 2, ColorModel.RGBA, BitDepth.EIGHT, pattern(6))

    assert image.get_pixel_at(0, 0).rgba == (0, 1, 2, 3)
    assert image.get_pixel_at(1, 0) == SENTINEL
    assert image.get_pixel_at(1, 1) == SENTINEL
    assert image.is_truncated


def test_empty_buffer_returns_sentinel():
    image = DecodedImage(2, 2, ColorModel.GRAYSCALE, BitDepth.FOUR, b"")

    assert image.get_pixel_at(0, 0) == SENTINEL


@pytest.mark.parametrize("bit_depth", [BitDepth.ONE, BitDepth.TWO, BitDepth.SIXTEEN])
@pytest.mark.parametrize("color_model", list(ColorModel))
def test_unsupported_depths_return_sentinel(bit_depth, color_model):
    image = DecodedImage(2, 2, color_model, bit_depth, bytes([0xFF] * 64))

    for y in range(2):
        for x in range(2):
            assert image.get_pixel_at(x, y) == SENTINEL


def test_dimensions_are_unaffected_by_buffer_and_queries():
    image = DecodedImage(640, 480, ColorModel.RGB, BitDepth.EIGHT, b"\x01\x02")

    image.get_pixel_at(0, 0)
    image.get_pixel_at(639, 479)

    assert image.width == 640
    assert image.height == 480


def test_repeated_queries_are_equal():
    image = DecodedImage(2, 2, ColorModel.RGBA, BitDepth.FOUR, pattern(8))

    first = image.get_pixel_at(1, 1)
    for _ in range(5):
        assert image.get_pixel_at(1, 1) == first


def test_pixels_are_independent_copies():
    data = bytearray([1, 2, 3, 4])
    image = DecodedImage(1, 1, ColorModel.RGBA, BitDepth.EIGHT, data)

    pixel = image.get_pixel_at(0, 0)
    pixel.r = 99
    pixel.a += 1
    data[0] = 50

    assert pixel.rgba == (99, 2, 3, 5)
    assert image.get_pixel_at(0, 0).rgba == (1, 2, 3, 4)


def test_sentinel_is_fresh_each_time():
    image = DecodedImage(1, 1, ColorModel.RGBA, BitDepth.EIGHT, b"")

    pixel = image.get_pixel_at(5, 5)
    pixel.r = 1

    assert image.get_pixel_at(5, 5) == SENTINEL


def test_strict_lookup_raises_out_of_range():
    image = DecodedImage(2, 2, ColorModel.RGBA, BitDepth.EIGHT, pattern(6))

    with pytest.raises(PixelOutOfRangeError):
        image.get_pixel_at(2, 0, strict=True)

    with pytest.raises(PixelOutOfRangeError):
        image.get_pixel_at(1, 0, strict=True)

    with pytest.raises(IndexError):
        image.get_pixel_at(-1, 0, strict=True)


def test_strict_lookup_raises_unsupported_depth():
    image = DecodedImage(2, 2, ColorModel.GRAYSCALE, BitDepth.SIXTEEN, pattern(8))

    with pytest.raises(UnsupportedBitDepthError):
        image.get_pixel_at(0, 0, strict=True)


def test_strict_lookup_returns_pixel_when_readable():
    image = DecodedImage(2, 1, ColorModel.RGBA, BitDepth.FOUR, bytes([0xAB, 0xCD]))

    assert image.get_pixel_at(0, 0, strict=True).rgba == (0xA, 0xB, 0xC, 0xD)


def test_unpackers_cover_every_supported_combination():
    expected = {(depth, model) for depth in SUPPORTED_DEPTHS for model in ColorModel}

    assert set(UNPACKERS) == expected


def test_unpackers_read_one_byte_per_channel_at_eight_bits():
    for model in ColorModel:
        size, _ = UNPACKERS[(BitDepth.EIGHT, model)]
        assert size == channels_for(model)


def test_byte_offset():
    assert byte_offset(2, 1, 4, ColorModel.RGBA, BitDepth.EIGHT) == 24
    assert byte_offset(3, 0, 4, ColorModel.GRAYSCALE, BitDepth.FOUR) == 1
    assert byte_offset(1, 0, 2, ColorModel.RGB, BitDepth.FOUR) == 1
    assert byte_offset(1, 0, 2, ColorModel.RGBA, BitDepth.FOUR) == 2


def test_nominal_size_rounds_up():
    assert nominal_size(3, 1, ColorModel.GRAYSCALE, BitDepth.FOUR) == 2
    assert nominal_size(3, 2, ColorModel.RGB, BitDepth.EIGHT) == 18
    assert nominal_size(0, 5, ColorModel.RGBA, BitDepth.EIGHT) == 0
