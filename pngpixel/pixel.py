from dataclasses import dataclass

from .formats import BitDepth


@dataclass
class Pixel:
    """
    Channel values of a single pixel.

    Every query returns a new Pixel, so callers are free to edit the
    channels in place. ``bit_depth`` records the depth the values were read
    at (0-15 at 4 bits, 0-255 at 8 bits).
    """

    bit_depth: BitDepth
    r: int = 0
    g: int = 0
    b: int = 0
    a: int = 0

    @classmethod
    def sentinel(cls) -> "Pixel":
        """Fallback for out-of-range and unsupported lookups."""
        return cls(BitDepth.EIGHT, 0, 0, 0, 0)

    @property
    def rgba(self) -> tuple:
        return (self.r, self.g, self.b, self.a)
