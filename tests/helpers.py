"""Helpers for building icon sources on disk."""

import struct
import zlib
from pathlib import Path

from PIL import Image

# 40x40 document, no viewBox, red square in the bottom-right quadrant.
# Scaled to 20px it fills pixels 10..20; forced to 20px unscaled it is off-canvas.
OFFSET_SQUARE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="40" height="40">'
    '<rect x="20" y="20" width="20" height="20" fill="#ff0000"/>'
    "</svg>"
)

WHITE_CIRCLE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="40" height="40" viewBox="0 0 40 40">'
    '<circle cx="20" cy="20" r="20" fill="#ffffff"/>'
    "</svg>"
)

FULL_GREEN_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="32" height="32" viewBox="0 0 32 32">'
    '<rect x="0" y="0" width="32" height="32" fill="#00ff00"/>'
    "</svg>"
)


def write_png(directory: Path, name: str, size=(40, 40), color=(0, 0, 255, 255)) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}.png"
    Image.new("RGBA", size, color).save(path, format="PNG")
    return path


def write_svg(directory: Path, name: str, content: str = FULL_GREEN_SVG) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}.svg"
    path.write_text(content, encoding="utf-8")
    return path


def cell_pixels(canvas: Image.Image, column: int, row: int, cell_size: int) -> bytes:
    box = (column * cell_size, row * cell_size, (column + 1) * cell_size, (row + 1) * cell_size)
    return canvas.crop(box).tobytes()


def is_transparent(image: Image.Image) -> bool:
    return image.getextrema()[3] == (0, 0)


def _png_chunk(kind: bytes, data: bytes) -> bytes:
    return (
        struct.pack(">I", len(data)) + kind + data
        + struct.pack(">I", zlib.crc32(kind + data) & 0xFFFFFFFF)
    )


def write_oversized_png(directory: Path, name: str, side: int = 40000) -> Path:
    """Write a tiny PNG whose header declares a ``side`` x ``side`` image."""
    directory.mkdir(parents=True, exist_ok=True)
    header = struct.pack(">IIBBBBB", side, side, 8, 6, 0, 0, 0)
    path = directory / f"{name}.png"
    path.write_bytes(
        b"\x89PNG\r\n\x1a\n"
        + _png_chunk(b"IHDR", header)
        + _png_chunk(b"IDAT", b"")
        + _png_chunk(b"IEND", b"")
    )
    return path
