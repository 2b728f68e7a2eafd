from dataclasses import dataclass

from .errors import PixelOutOfRangeError, UnsupportedBitDepthError
from .formats import BitDepth, ColorModel, byte_offset, channels_for, nominal_size
from .pixel import Pixel
from .unpack import get_unpacker


@dataclass(frozen=True)
class DecodedImage:
    """
    A fully decoded frame and the format needed to address its pixels.

    Fields:
        width: Width in pixels.
        height: Height in pixels.
        color_model: Channel layout of each pixel.
        bit_depth: Bits per channel.
        pixel_bytes: Packed frame data. May be shorter than ``nominal_size``.
    """

    width: int
    height: int
    color_model: ColorModel
    bit_depth: BitDepth
    pixel_bytes: bytes

    def __post_init__(self):
        # Take a private immutable copy of whatever buffer was handed in.
        object.__setattr__(self, "pixel_bytes", bytes(self.pixel_bytes))

    @property
    def channels(self) -> int:
        return channels_for(self.color_model)

    @property
    def nominal_size(self) -> int:
        return nominal_size(self.width, self.height, self.color_model, self.bit_depth)

    @property
    def is_truncated(self) -> bool:
        return len(self.pixel_bytes) < self.nominal_size

    def get_pixel_at(self, x: int, y: int, strict: bool = False) -> Pixel:
        """
        Read the channels of pixel (x, y).

        :param x: Zero-based column.
        :param y: Zero-based row.
        :param strict: Raise instead of returning the sentinel pixel when the
                       lookup cannot be served.
        :return: A new Pixel tagged with the image's bit depth, or
                 ``Pixel.sentinel()`` for a failed lenient lookup.
        :raises PixelOutOfRangeError: strict mode, coordinates outside the
                                      image or past the end of the buffer.
        :raises UnsupportedBitDepthError: strict mode, depth other than 4 or 8.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            return self._fallback(
                strict,
                PixelOutOfRangeError(
                    f"DecodedImage.get_pixel_at: ({x}, {y}) is outside "
                    f"{self.width}x{self.height}"
                ),
            )

        offset = byte_offset(x, y, self.width, self.color_model, self.bit_depth)

        unpacker = get_unpacker(self.bit_depth, self.color_model)
        if unpacker is None:
            return self._fallback(
                strict,
                UnsupportedBitDepthError(
                    f"DecodedImage.get_pixel_at: {self.bit_depth.name} bit "
                    f"{self.color_model.name} pixels are not supported"
                ),
            )

        size, unpack = unpacker
        if offset + size > len(self.pixel_bytes):
            return self._fallback(
                strict,
                PixelOutOfRangeError(
                    f"DecodedImage.get_pixel_at: offset {offset} of ({x}, {y}) "
                    f"is past the {len(self.pixel_bytes)} byte buffer"
                ),
            )

        r, g, b, a = unpack(self.pixel_bytes, offset)
        return Pixel(self.bit_depth, r, g, b, a)

    @staticmethod
    def _fallback(strict: bool, error: Exception) -> Pixel:
        if strict:
            raise error
        return Pixel.sentinel()
