#!/usr/bin/env python3
"""
Build a Windows .ico from one or more images.

    make_ico.py OUT.ico in16.png in32.png ...
    make_ico.py OUT.ico logo.png --resize --sizes 16,32,48,256
"""
import argparse
import asyncio
import os
import sys
import tempfile

from loguru import logger

from config import settings, parse_sizes
from encoding.errors import IcoError
from ico_manager import IcoManager


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Assemble images into a .ICO file.")
    parser.add_argument("output", help="Path of the .ico file to write")
    parser.add_argument("inputs", nargs="+", help="Source images, in icon order")
    parser.add_argument(
        "--resize",
        action="store_true",
        help="Build every size from the widest input instead of using inputs as-is",
    )
    parser.add_argument(
        "--sizes",
        type=parse_sizes,
        default=None,
        help=f"Comma-separated sizes for --resize (default: {settings.default_sizes})",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=settings.mask_threshold,
        help="Alpha below this value is transparent in the AND mask",
    )
    return parser


def write_atomic(path: str, data: bytes):
    """Write to a temp file next to `path`, then move it into place"""
    directory = os.path.dirname(os.path.abspath(path))
    with tempfile.NamedTemporaryFile(dir=directory, suffix=".ico.tmp", delete=False) as tmp:
        tmp_path = tmp.name

    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except OSError:
        os.unlink(tmp_path)
        raise


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.threshold < 0:
        parser.error("--threshold must be >= 0")

    logger.remove()
    logger.add(
        sys.stderr,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <level>{message}</level>",
        level=settings.log_level,
    )

    manager = IcoManager(max_workers=settings.decode_workers, mask_threshold=args.threshold)
    try:
        sources = []
        for path in args.inputs:
            with open(path, "rb") as f:
                sources.append(f.read())

        ico = asyncio.run(
            manager.generate_ico(sources, resize=args.resize, sizes=args.sizes)
        )

        write_atomic(args.output, ico)

    except (IcoError, OSError) as e:
        logger.error(f"❌ {e}")
        return 1
    finally:
        manager.shutdown()

    count = int.from_bytes(ico[4:6], "little")
    logger.info(f"✅ ICO saved to {os.path.abspath(args.output)} ({len(ico)} bytes, {count} images)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
