"""
Pixel Buffers
Converts decoded RGB(A) rasters into the bottom-up BGR(A) layout of a
legacy bitmap and derives the 1-bit AND mask from the alpha channel.
"""
from dataclasses import dataclass

from encoding.errors import InvalidBufferLength, UnsupportedBitDepth, UnsupportedDimensions

SUPPORTED_BYTES_PER_PIXEL = (3, 4)
MAX_DIMENSION = 256


@dataclass(frozen=True)
class DecodedImage:
    """Raw raster, top row first, channel order R,G,B[,A]"""

    width: int
    height: int
    bytes_per_pixel: int
    pixels: bytes

    @property
    def bit_count(self) -> int:
        return self.bytes_per_pixel * 8

    @property
    def has_alpha(self) -> bool:
        return self.bytes_per_pixel == 4


def validate_image(image: DecodedImage, index=None):
    """
    Check an image against the encoder's preconditions

    Raises:
        UnsupportedBitDepth, UnsupportedDimensions, InvalidBufferLength
    """
    if image.bytes_per_pixel not in SUPPORTED_BYTES_PER_PIXEL:
        raise UnsupportedBitDepth(
            f"{image.bytes_per_pixel} bytes per pixel (expected 3 or 4)", index
        )

    for name, value in (("width", image.width), ("height", image.height)):
        if not 1 <= value <= MAX_DIMENSION:
            raise UnsupportedDimensions(f"{name} {value} outside 1..{MAX_DIMENSION}", index)

    expected = image.width * image.height * image.bytes_per_pixel
    if len(image.pixels) != expected:
        raise InvalidBufferLength(
            f"pixel buffer is {len(image.pixels)} bytes, expected {expected} "
            f"({image.width}x{image.height}x{image.bytes_per_pixel})",
            index,
        )


def transpose_pixels(pixels: bytes, width: int, height: int, bytes_per_pixel: int) -> bytes:
    """
    Flip row order and swap the R and B channels of every pixel.

    Row r of the source lands on row (height - 1 - r) of the output. Applying
    the transform twice gives back the original buffer.
    """
    stride = width * bytes_per_pixel
    if len(pixels) != stride * height:
        raise InvalidBufferLength(
            f"pixel buffer is {len(pixels)} bytes, expected {stride * height}"
        )

    out = bytearray(len(pixels))
    last = stride * (height - 1)

    for src in range(0, stride * height, stride):
        dst = last - src
        row = pixels[src:src + stride]

        # G and A keep their position, R and B trade places
        out[dst:dst + stride] = row
        out[dst:dst + stride:bytes_per_pixel] = row[2::bytes_per_pixel]
        out[dst + 2:dst + stride:bytes_per_pixel] = row[0::bytes_per_pixel]

    return bytes(out)


def mask_scan_width(width: int) -> int:
    """Bytes per mask row, padded to a 32-bit boundary"""
    return ((width + 31) >> 5) << 2


def _mask_byte(alphas, start: int, count: int, threshold: int) -> int:
    """Pack `count` alpha values into the high bits of one byte (bit 7 = leftmost)"""
    value = 0
    for bit in range(count):
        if alphas[start + bit] < threshold:
            value |= 0x80 >> bit
    return value


def pack_mask(dib: bytes, width: int, height: int, threshold: int = 1) -> bytes:
    """
    Build the AND mask from the alpha channel of a transposed BGRA buffer.

    A bit is 1 (transparent) when alpha < threshold. Rows keep the order of
    the input buffer, so a bottom-up DIB yields a bottom-up mask.
    """
    if len(dib) != width * height * 4:
        raise InvalidBufferLength(
            f"mask source is {len(dib)} bytes, expected {width * height * 4}"
        )

    scan_width = mask_scan_width(width)
    stride = width * 4
    full_groups = width // 8
    tail = width % 8
    mask = bytearray(scan_width * height)

    for y in range(height):
        alphas = dib[y * stride + 3:(y + 1) * stride:4]
        dst = y * scan_width

        for group in range(full_groups):
            mask[dst] = _mask_byte(alphas, group * 8, 8, threshold)
            dst += 1

        # Partial byte: unused low bits stay 0
        if tail:
            mask[dst] = _mask_byte(alphas, full_groups * 8, tail, threshold)

    return bytes(mask)
