"""
ICO Encoding Errors
Every failure aborts the whole encode call
"""
from typing import Optional


class IcoError(Exception):
    """Base class for all icon generation failures"""

    def __init__(self, reason: str, index: Optional[int] = None):
        self.reason = reason
        self.index = index
        super().__init__(reason)

    def __str__(self) -> str:
        if self.index is None:
            return self.reason
        return f"image #{self.index}: {self.reason}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.reason!r}, index={self.index!r})"


class InvalidBufferLength(IcoError):
    """Pixel buffer does not match width * height * bytes_per_pixel"""


class UnsupportedBitDepth(IcoError):
    """bytes_per_pixel is neither 3 nor 4"""


class UnsupportedDimensions(IcoError):
    """Width or height outside 1..256"""


class DecodeFailure(IcoError):
    """Source image could not be decoded"""


class ResizeFailure(IcoError):
    """Source image could not be resized"""
