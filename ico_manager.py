"""
ICO Manager - Main orchestrator
Combines source preparation (resize), concurrent decoding and ICO encoding
"""
from typing import List, Optional, Sequence, Union
import asyncio
from concurrent.futures import ThreadPoolExecutor

from loguru import logger

from config import settings
from encoding.errors import IcoError
from encoding.ico_assembler import EncodeOptions, IcoAssembler
from encoding.pixels import DecodedImage
from processing.image_source import decode_image, resize_image
from processing.size_selector import select_sizes, select_source


class IcoManager:
    def __init__(self, max_workers: int = 4, mask_threshold: int = 1):
        self.executor = ThreadPoolExecutor(max_workers=max_workers)
        self.mask_threshold = mask_threshold
        logger.info(f"✅ ICO Manager initialized ({max_workers} workers)")

    # ========================================
    # Source Preparation
    # ========================================

    async def _run_indexed(self, func, index: int, *args):
        """Run func in the executor, tagging any IcoError with the input position"""
        loop = asyncio.get_event_loop()
        try:
            return await loop.run_in_executor(self.executor, func, *args)
        except IcoError as e:
            e.index = index
            raise

    async def resize_sources(self, sources: Sequence[bytes], sizes: Sequence[int]) -> List[bytes]:
        """
        Resize the widest source to every candidate size it can cover

        Returns:
            One PNG buffer per accepted size, in candidate order
        """
        loop = asyncio.get_event_loop()
        selected = await loop.run_in_executor(self.executor, select_source, sources)
        if selected is None:
            return []

        source, width = selected
        accepted = select_sizes(sizes, width)

        return await asyncio.gather(
            *(self._run_indexed(resize_image, i, source, size) for i, size in enumerate(accepted))
        )

    async def decode_all(self, sources: Sequence[bytes]) -> List[DecodedImage]:
        """Decode all sources concurrently; results keep input order"""
        return await asyncio.gather(
            *(self._run_indexed(decode_image, i, data) for i, data in enumerate(sources))
        )

    # ========================================
    # Generation
    # ========================================

    async def generate_ico(
        self,
        sources: Union[bytes, Sequence[bytes]],
        resize: bool = False,
        sizes: Optional[Sequence[int]] = None,
        mask_threshold: Optional[int] = None,
    ) -> bytes:
        """
        Generate an ICO file from one or more source images

        Args:
            sources: Encoded image file(s), e.g. PNG bytes
            resize: Build every size in `sizes` from the widest source
            sizes: Candidate square sizes (default: configured sizes)
            mask_threshold: Alpha below this is transparent in the AND mask

        Returns:
            ICO file bytes

        Raises:
            IcoError: the first failure; no partial file is returned
        """
        if isinstance(sources, (bytes, bytearray)):
            sources = [bytes(sources)]
        sources = list(sources)

        threshold = self.mask_threshold if mask_threshold is None else mask_threshold
        options = EncodeOptions(mask_threshold=threshold)

        try:
            if resize:
                if sizes is None:
                    sizes = settings.sizes_list
                sources = await self.resize_sources(sources, sizes)

            images = await self.decode_all(sources)
            return IcoAssembler(options).encode(images)

        except IcoError as e:
            logger.error(f"❌ ICO generation failed: {e}")
            raise

    def shutdown(self):
        self.executor.shutdown(wait=True)


# Singleton instance
_ico_manager = None


def get_ico_manager() -> IcoManager:
    global _ico_manager
    if _ico_manager is None:
        _ico_manager = IcoManager(
            max_workers=settings.decode_workers,
            mask_threshold=settings.mask_threshold,
        )
    return _ico_manager
