"""
ICO Assembler
Packs decoded images into one ICO container: header, directory, then one
bitmap block per image, all in input order.
"""
from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, Field

from encoding.ico_structs import (
    ICO_CONSTANTS,
    DirectoryEntry,
    create_bitmap_header,
    create_directory_entry,
    create_header,
)
from encoding.pixels import DecodedImage, pack_mask, transpose_pixels, validate_image


class EncodeOptions(BaseModel):
    mask_threshold: int = Field(default=1, ge=0, description="Alpha below this is transparent")
    compression_mode: Literal[0] = Field(default=0, description="BI_RGB only")


@dataclass(frozen=True)
class ImageBlock:
    """BITMAPINFOHEADER + pixel array + AND mask for one image"""

    bitmap_header: bytes
    pixel_array: bytes
    mask: bytes

    @property
    def size(self) -> int:
        return len(self.bitmap_header) + len(self.pixel_array) + len(self.mask)


class IcoAssembler:
    """Builds ICO files from decoded images"""

    def __init__(self, options: Optional[EncodeOptions] = None):
        self.options = options or EncodeOptions()

    def build_block(self, image: DecodedImage) -> ImageBlock:
        pixel_array = transpose_pixels(
            image.pixels, image.width, image.height, image.bytes_per_pixel
        )

        if image.has_alpha:
            mask = pack_mask(pixel_array, image.width, image.height, self.options.mask_threshold)
        else:
            mask = b""

        header = create_bitmap_header(image, len(pixel_array), self.options.compression_mode)
        return ImageBlock(bitmap_header=header, pixel_array=pixel_array, mask=mask)

    def build_directory(self, images: Sequence[DecodedImage], blocks: Sequence[ImageBlock]) -> List[DirectoryEntry]:
        """Offsets run contiguously from the end of the directory region"""
        offset = ICO_CONSTANTS.header_size + ICO_CONSTANTS.directory_size * len(images)
        entries = []

        for image, block in zip(images, blocks):
            entries.append(create_directory_entry(image, block.size, offset))
            offset += block.size

        return entries

    def encode(self, images: Sequence[DecodedImage]) -> bytes:
        """
        Encode images into a complete ICO file

        Args:
            images: Decoded images, in the order they should appear

        Returns:
            ICO file bytes

        Raises:
            IcoError: on the first invalid image; nothing is emitted
        """
        images = list(images)

        for index, image in enumerate(images):
            validate_image(image, index)

        blocks = [self.build_block(image) for image in images]
        entries = self.build_directory(images, blocks)

        parts = [create_header(len(images))]
        parts.extend(entry.pack() for entry in entries)
        for block in blocks:
            parts.extend((block.bitmap_header, block.pixel_array, block.mask))

        data = b"".join(parts)
        logger.info(f"✅ Encoded {len(images)} images into ICO ({len(data)} bytes)")
        return data


def encode_ico(images: Sequence[DecodedImage], options: Optional[EncodeOptions] = None) -> bytes:
    return IcoAssembler(options).encode(images)
