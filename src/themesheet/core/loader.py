"""Resolve catalog names to source files and rasterize them to cell size.

Sources live in a single directory as ``<name>.svg`` or ``<name>.png``. The
vector source wins when both exist.

Vector rasterization has two paths. Most icons render the whole document
scaled into the target square. Soft shadows, glow dots and circular
highlights are instead rendered after forcing the document's own
``width``/``height`` to the target size, onto a transparent background; the
scaled whole-document path leaves visible edge artifacts on those shapes at
small cell sizes.
"""

import io
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

import cairosvg
from PIL import Image

from ..utils.image import load_raster

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

SIZED_DOCUMENT_MARKERS = ("DropShadow", "GlowDot", "WhiteCircle")


class AssetLoadError(Exception):
    """A source file exists but could not be turned into pixels."""


class MalformedVectorDocument(AssetLoadError):
    pass


class UnreadableRasterSource(AssetLoadError):
    pass


@dataclass
class RasterizedAsset:
    """Pixels for one catalog entry at one cell size.

    ``pixels`` is ``None`` when no usable source was found; the compositor
    leaves that cell empty.
    """

    name: str
    pixels: Optional[Image.Image]
    cell_size: int
    source: Optional[Path] = None

    @property
    def is_missing(self) -> bool:
        return self.pixels is None


Rasterizer = Callable[[Path, int, str], Image.Image]


@dataclass(frozen=True)
class SourceFormat:
    extension: str
    rasterize: Rasterizer


def needs_sized_document(name: str) -> bool:
    """Whether ``name`` must use the sized-document vector path."""
    return any(marker in name for marker in SIZED_DOCUMENT_MARKERS)


def _read_svg(path: Path) -> Tuple[bytes, ET.Element]:
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise MalformedVectorDocument(f"Cannot read {path}: {e}") from e

    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise MalformedVectorDocument(f"Malformed SVG {path}: {e}") from e

    if root.tag not in (f"{{{SVG_NS}}}svg", "svg"):
        raise MalformedVectorDocument(f"Root element of {path} is not <svg>: {root.tag}")

    return data, root


def _png_to_image(png_bytes: bytes) -> Image.Image:
    with Image.open(io.BytesIO(png_bytes)) as img:
        rgba = img.convert("RGBA")
        rgba.load()
    return rgba


def _cairo_render(path: Path, **kwargs) -> Image.Image:
    try:
        png_bytes = cairosvg.svg2png(**kwargs)
    except Exception as e:
        raise MalformedVectorDocument(f"Cannot render SVG {path}: {e}") from e
    return _png_to_image(png_bytes)


def render_whole_document(path: Path, size: int) -> Image.Image:
    """Render the full document scaled into a ``size`` x ``size`` image."""
    data, _ = _read_svg(path)
    image = _cairo_render(
        path,
        bytestring=data,
        output_width=size,
        output_height=size,
    )
    if image.size != (size, size):
        image = image.resize((size, size), Image.Resampling.BILINEAR)
    return image


def render_sized_document(path: Path, size: int) -> Image.Image:
    """Force the document to ``size`` x ``size`` and render it unscaled.

    The result is placed on a fully transparent square so the bounding box
    is always exactly the requested size.
    """
    _, root = _read_svg(path)
    root.set("width", str(size))
    root.set("height", str(size))
    sized = ET.tostring(root, encoding="utf-8")

    rendered = _cairo_render(path, bytestring=sized, background_color=None)

    canvas = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    if rendered.size != (size, size):
        rendered = rendered.crop((0, 0, size, size))
    canvas.alpha_composite(rendered)
    return canvas


def rasterize_vector(path: Path, size: int, name: str) -> Image.Image:
    if needs_sized_document(name):
        logger.debug(f"Rendering {name} through the sized-document path")
        return render_sized_document(path, size)
    return render_whole_document(path, size)


def rasterize_raster(path: Path, size: int, name: str) -> Image.Image:
    try:
        return load_raster(path, size)
    except (RuntimeError, ValueError, FileNotFoundError) as e:
        raise UnreadableRasterSource(f"Cannot decode {path} for {name}: {e}") from e


DEFAULT_SOURCE_FORMATS: List[SourceFormat] = [
    SourceFormat(".svg", rasterize_vector),
    SourceFormat(".png", rasterize_raster),
]


class AssetLoader:
    """Turn catalog names into rasterized assets."""

    def __init__(
        self,
        images_dir: Path,
        source_formats: Optional[Sequence[SourceFormat]] = None,
    ):
        self.images_dir = Path(images_dir)
        self.source_formats = list(
            DEFAULT_SOURCE_FORMATS if source_formats is None else source_formats
        )
        if not self.images_dir.is_dir():
            logger.warning(f"Images directory {self.images_dir} does not exist")

    def resolve(self, name: str) -> Optional[Tuple[Path, SourceFormat]]:
        """Find the highest-priority source file for ``name``."""
        for source_format in self.source_formats:
            candidate = self.images_dir / f"{name}{source_format.extension}"
            if candidate.is_file():
                return candidate, source_format
        return None

    def load(self, name: str, size: int) -> RasterizedAsset:
        """Rasterize ``name`` at ``size`` x ``size``; missing on any failure."""
        if size <= 0:
            raise ValueError(f"Cell size must be positive, got {size}")

        resolved = self.resolve(name)
        if resolved is None:
            logger.warning(f"Image for {name} was not found! Skipping ...")
            return RasterizedAsset(name=name, pixels=None, cell_size=size)

        path, source_format = resolved
        try:
            pixels = source_format.rasterize(path, size, name)
        except AssetLoadError as e:
            logger.error(f"Failed to load {name}: {e}")
            return RasterizedAsset(name=name, pixels=None, cell_size=size, source=path)

        logger.debug(f"Rasterized {name} from {path.name} at {size}x{size}")
        return RasterizedAsset(name=name, pixels=pixels, cell_size=size, source=path)
