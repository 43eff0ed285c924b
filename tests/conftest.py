from io import BytesIO

import pytest
from PIL import Image

from encoding.pixels import DecodedImage


def png_bytes(width, height, mode="RGBA", color=None):
    if color is None:
        color = (59, 130, 246, 255)[: len(mode)]
    img = Image.new(mode, (width, height), color)
    out = BytesIO()
    img.save(out, format="PNG")
    return out.getvalue()


def solid_image(width, height, bytes_per_pixel=4, pixel=None):
    if pixel is None:
        pixel = (59, 130, 246, 255)[:bytes_per_pixel]
    return DecodedImage(
        width=width,
        height=height,
        bytes_per_pixel=bytes_per_pixel,
        pixels=bytes(pixel) * (width * height),
    )


@pytest.fixture
def make_png():
    return png_bytes


@pytest.fixture
def make_image():
    return solid_image
