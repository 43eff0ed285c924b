"""
Image Source
Pillow-backed decode, measure and resize for source images
"""
from io import BytesIO
from typing import Tuple

from PIL import Image
from loguru import logger

from encoding.errors import DecodeFailure, ResizeFailure
from encoding.pixels import DecodedImage


def _has_alpha(img: Image.Image) -> bool:
    return img.mode in ("RGBA", "LA", "PA") or (
        img.mode == "P" and "transparency" in img.info
    )


def decode_image(data: bytes) -> DecodedImage:
    """
    Decode an image file into a raw RGB(A) buffer

    Images with an alpha channel (or palette transparency) decode to 4 bytes
    per pixel, everything else to 3.
    """
    try:
        with Image.open(BytesIO(data)) as img:
            img.load()
            mode = "RGBA" if _has_alpha(img) else "RGB"
            rgb = img.convert(mode)
            return DecodedImage(
                width=rgb.width,
                height=rgb.height,
                bytes_per_pixel=len(mode),
                pixels=rgb.tobytes(),
            )
    except Exception as e:
        logger.error(f"❌ Failed to decode image: {e}")
        raise DecodeFailure(f"could not decode image: {e}") from e


def measure_size(data: bytes) -> Tuple[int, int]:
    """Native (width, height) without decoding the pixel data"""
    try:
        with Image.open(BytesIO(data)) as img:
            return img.size
    except Exception as e:
        raise DecodeFailure(f"could not read image size: {e}") from e


def resize_image(data: bytes, size: int) -> bytes:
    """Resample to size x size and re-encode as PNG"""
    try:
        with Image.open(BytesIO(data)) as img:
            mode = "RGBA" if _has_alpha(img) else "RGB"
            resized = img.convert(mode).resize((size, size), Image.Resampling.LANCZOS)

        out = BytesIO()
        resized.save(out, format="PNG")
        logger.info(f"Resized source to {size}x{size}")
        return out.getvalue()
    except Exception as e:
        logger.error(f"❌ Failed to resize image to {size}x{size}: {e}")
        raise ResizeFailure(f"could not resize to {size}x{size}: {e}") from e
