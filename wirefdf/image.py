"""An off-screen image: a block of pixel bytes in a fixed layout."""

from __future__ import annotations

_SUPPORTED_DEPTHS = (8, 16, 24, 32)


class Image:
    """Pixel storage with rows padded to 32 bits, as a ZPixmap image."""

    def __init__(
        self,
        width: int,
        height: int,
        bits_per_pixel: int = 32,
        big_endian: bool = False,
    ) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        if bits_per_pixel not in _SUPPORTED_DEPTHS:
            raise ValueError(f"unsupported bits per pixel: {bits_per_pixel}")
        self.width = width
        self.height = height
        self.bits_per_pixel = bits_per_pixel
        self.big_endian = bool(big_endian)
        self.bytes_per_pixel = bits_per_pixel // 8
        self.size_line = ((width * bits_per_pixel + 31) // 32) * 4
        self.data = bytearray(self.size_line * height)
        self._mask = (1 << bits_per_pixel) - 1
        self._order = "big" if self.big_endian else "little"

    @property
    def endian(self) -> int:
        """1 when pixels are stored most significant byte first, else 0."""
        return int(self.big_endian)

    def _contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _offset(self, x: int, y: int) -> int:
        return y * self.size_line + x * self.bytes_per_pixel

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` at (x, y); points outside the image are ignored."""
        if not self._contains(x, y):
            return
        start = self._offset(x, y)
        value = (color & self._mask).to_bytes(self.bytes_per_pixel, self._order)
        self.data[start:start + self.bytes_per_pixel] = value

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel value stored at (x, y)."""
        if not self._contains(x, y):
            raise IndexError(f"pixel ({x}, {y}) is outside a {self.width}x{self.height} image")
        start = self._offset(x, y)
        return int.from_bytes(self.data[start:start + self.bytes_per_pixel], self._order)

    def clear(self) -> None:
        """Set every pixel to zero."""
        self.data[:] = bytes(len(self.data))

    def to_rgb(self) -> bytes:
        """Return the pixels as packed RGB triples, row by row.

        Pixel values are read as 0xRRGGBB.
        """
        count = self.width * self.height
        if self.bits_per_pixel == 32:
            row_bytes = self.width * 4
            packed = b"".join(
                self.data[row:row + row_bytes]
                for row in range(0, len(self.data), self.size_line)
            )
            if self.big_endian:
                red, green, blue = packed[1::4], packed[2::4], packed[3::4]
            else:
                red, green, blue = packed[2::4], packed[1::4], packed[0::4]
            out = bytearray(count * 3)
            out[0::3] = red
            out[1::3] = green
            out[2::3] = blue
            return bytes(out)
        out = bytearray()
        for y in range(self.height):
            for x in range(self.width):
                value = self.get_pixel(x, y)
                out += bytes(((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF))
        return bytes(out)