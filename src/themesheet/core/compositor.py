"""Grid compositing of rasterized icons into sprite sheets."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

from PIL import Image

from ..utils.config import FilterConfig
from .catalog import AssetCatalog, GridPosition
from .loader import AssetLoader, RasterizedAsset
from .sharpen import apply_filter, should_sharpen

logger = logging.getLogger(__name__)

BASE_CELL_SIZE = 80


@dataclass(frozen=True)
class OutputSpec:
    """One sheet to produce: file name, canvas size and density divisor."""

    file_name: str
    width: int
    height: int
    scale_factor: int

    def __post_init__(self):
        """Validate sheet dimensions."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Canvas size must be positive, got {self.width}x{self.height}")
        if self.scale_factor <= 0:
            raise ValueError(f"Scale factor must be positive, got {self.scale_factor}")

    def cell_size(self, base_cell_size: int = BASE_CELL_SIZE) -> int:
        """Side of one cell in pixels on this sheet."""
        if base_cell_size % self.scale_factor != 0:
            raise ValueError(
                f"Base cell size {base_cell_size} is not divisible by "
                f"scale factor {self.scale_factor}"
            )
        return base_cell_size // self.scale_factor

    @classmethod
    def for_catalog(
        cls,
        file_name: str,
        catalog: AssetCatalog,
        scale_factor: int,
        base_cell_size: int = BASE_CELL_SIZE,
    ) -> "OutputSpec":
        """Build a spec whose canvas exactly fits ``catalog``'s grid."""
        # Same divisibility check as cell_size()
        cell = cls(file_name, 1, 1, scale_factor).cell_size(base_cell_size)
        return cls(
            file_name=file_name,
            width=catalog.row_width * cell,
            height=catalog.row_count * cell,
            scale_factor=scale_factor,
        )


# The base layout is authored at 80px cells; each sheet divides it down.
DEFAULT_OUTPUT_SPECS: Tuple[OutputSpec, ...] = (
    OutputSpec("UI.png", 400, 160, 4),
    OutputSpec("UI_2.png", 800, 320, 2),
    OutputSpec("UI_4.png", 1600, 640, 1),
)


@dataclass
class CompositedSheet:
    """A finished canvas plus what went into it."""

    spec: OutputSpec
    canvas: Image.Image
    placed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    sharpened: List[str] = field(default_factory=list)


class GridCompositor:
    """Lay out every catalog asset on a transparent canvas per output spec."""

    def __init__(
        self,
        catalog: AssetCatalog,
        loader: AssetLoader,
        filter_config: Optional[FilterConfig] = None,
        base_cell_size: int = BASE_CELL_SIZE,
        max_workers: Optional[int] = None,
    ):
        """
        Initialize the compositor.

        Args:
            catalog: Ordered asset names defining the grid
            loader: Source resolver and rasterizer
            filter_config: Sharpening settings, or None to disable sharpening
            base_cell_size: Cell side in pixels at scale factor 1
            max_workers: Rasterize on a thread pool of this size (None or 1
                rasterizes sequentially); placement order is unaffected
        """
        if base_cell_size <= 0:
            raise ValueError(f"Base cell size must be positive, got {base_cell_size}")
        if max_workers is not None and max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {max_workers}")

        self.catalog = catalog
        self.loader = loader
        self.filter_config = filter_config
        self.base_cell_size = base_cell_size
        self.max_workers = max_workers

    def _rasterize_all(self, cell_size: int) -> Iterator[RasterizedAsset]:
        names = list(self.catalog)
        if self.max_workers is None or self.max_workers == 1:
            for name in names:
                yield self.loader.load(name, cell_size)
            return

        # map() yields in submission order, so placement stays in catalog order
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            yield from executor.map(lambda n: self.loader.load(n, cell_size), names)

    def compose(self, spec: OutputSpec) -> CompositedSheet:
        """Composite one sheet. Missing assets leave their cell transparent."""
        cell_size = spec.cell_size(self.base_cell_size)
        canvas = Image.new("RGBA", (spec.width, spec.height), (0, 0, 0, 0))
        sheet = CompositedSheet(spec=spec, canvas=canvas)

        logger.info(
            f"Composing {spec.file_name}: {spec.width}x{spec.height}, "
            f"{cell_size}px cells, scale {spec.scale_factor}"
        )

        cells = self.catalog.cells()
        for (_, name, position), asset in zip(cells, self._rasterize_all(cell_size)):
            origin_x, origin_y = position.origin(cell_size)

            if asset.is_missing:
                logger.warning(f"Skipping {name}! Data not present ...")
                sheet.skipped.append(name)
                continue

            if not self._fits(spec, position, cell_size):
                logger.warning(
                    f"Skipping {name}: cell ({position.row}, {position.column}) "
                    f"lies outside the {spec.width}x{spec.height} canvas"
                )
                sheet.skipped.append(name)
                continue

            pixels = asset.pixels
            if should_sharpen(name, spec, self.filter_config):
                pixels = apply_filter(pixels, self.filter_config)
                sheet.sharpened.append(name)

            if pixels.size != (cell_size, cell_size):
                pixels = pixels.resize((cell_size, cell_size), Image.Resampling.BILINEAR)

            logger.info(f"Adding {name}, X:{origin_x}, Y:{origin_y}, Size:{cell_size}x{cell_size}")
            canvas.alpha_composite(pixels, dest=(origin_x, origin_y))
            sheet.placed.append(name)

        logger.info(
            f"Finished {spec.file_name}: {len(sheet.placed)} placed, "
            f"{len(sheet.skipped)} skipped"
        )
        return sheet

    def compose_all(self, specs: Iterable[OutputSpec]) -> Iterator[CompositedSheet]:
        """Composite sheets one at a time; nothing is shared between them."""
        for spec in specs:
            yield self.compose(spec)

    @staticmethod
    def _fits(spec: OutputSpec, position: GridPosition, cell_size: int) -> bool:
        x, y = position.origin(cell_size)
        return x + cell_size <= spec.width and y + cell_size <= spec.height
