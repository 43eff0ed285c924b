"""
ICO Structures
ICONDIR header, ICONDIRENTRY descriptors and the BITMAPINFOHEADER that
precedes each image block. All integers are little-endian.
"""
import struct
from dataclasses import dataclass

from encoding.pixels import DecodedImage

HEADER_FMT = "<HHH"           # reserved, type, count
DIRECTORY_FMT = "<BBBBHHII"   # width, height, colors, reserved, planes, bpp, size, offset
BITMAP_FMT = "<IiiHHIIiiII"   # BITMAPINFOHEADER


@dataclass(frozen=True)
class IcoConstants:
    header_size: int = struct.calcsize(HEADER_FMT)
    directory_size: int = struct.calcsize(DIRECTORY_FMT)
    bitmap_size: int = struct.calcsize(BITMAP_FMT)
    icon_type: int = 1
    compression_mode: int = 0


ICO_CONSTANTS = IcoConstants()


def create_header(count: int) -> bytes:
    """6-byte ICONDIR: reserved=0, type=1 (icon), image count"""
    return struct.pack(HEADER_FMT, 0, ICO_CONSTANTS.icon_type, count)


def encode_dimension(value: int) -> int:
    """256 does not fit the single-byte field and is stored as 0"""
    return 0 if value == 256 else value


@dataclass(frozen=True)
class DirectoryEntry:
    """One ICONDIRENTRY, in the same order as the image blocks"""

    encoded_width: int
    encoded_height: int
    bit_count: int
    block_size: int
    block_offset: int

    def pack(self) -> bytes:
        return struct.pack(
            DIRECTORY_FMT,
            self.encoded_width,
            self.encoded_height,
            0,  # color count
            0,  # reserved
            1,  # planes
            self.bit_count,
            self.block_size,
            self.block_offset,
        )


def create_directory_entry(image: DecodedImage, block_size: int, block_offset: int) -> DirectoryEntry:
    return DirectoryEntry(
        encoded_width=encode_dimension(image.width),
        encoded_height=encode_dimension(image.height),
        bit_count=image.bit_count,
        block_size=block_size,
        block_offset=block_offset,
    )


def create_bitmap_header(
    image: DecodedImage,
    pixel_array_size: int,
    compression: int = ICO_CONSTANTS.compression_mode,
) -> bytes:
    """
    40-byte BITMAPINFOHEADER for one image block.

    The declared height is doubled to cover the AND plane. This holds for
    24-bit images too, even though no mask follows them.
    """
    return struct.pack(
        BITMAP_FMT,
        ICO_CONSTANTS.bitmap_size,
        image.width,
        image.height * 2,
        1,  # planes
        image.bit_count,
        compression,
        pixel_array_size,
        0,  # x pixels per meter
        0,  # y pixels per meter
        0,  # colors used
        0,  # colors important
    )
