"""
Size Selector
Chooses the source image and the output sizes when resizing is requested
"""
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from encoding.errors import IcoError
from processing.image_source import measure_size


def select_source(sources: Sequence[bytes]) -> Optional[Tuple[bytes, int]]:
    """
    Pick the widest source image (the last one wins on ties)

    Returns:
        (source bytes, width), or None when there are no sources
    """
    best = None

    for index, data in enumerate(sources):
        try:
            width, _ = measure_size(data)
        except IcoError as e:
            e.index = index
            raise
        if best is None or width >= best[1]:
            best = (data, width)

    return best


def select_sizes(sizes: Sequence[int], source_width: int) -> List[int]:
    """Keep the candidate sizes that do not upscale the source, in order"""
    accepted = [size for size in sizes if size <= source_width]
    logger.info(f"Selected sizes {accepted} for {source_width}px source")
    return accepted
