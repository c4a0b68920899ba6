"""themesheet - Build IDE theme sprite sheets from SVG and PNG icons."""

__version__ = "0.1.0"
__description__ = "Rasterize and grid-pack theme icons into multi-scale sprite sheets"

from .core.catalog import AssetCatalog, GridPosition, grid_position
from .core.compositor import GridCompositor, OutputSpec, DEFAULT_OUTPUT_SPECS
from .core.export import SheetExporter
from .core.loader import AssetLoader, RasterizedAsset
from .utils.config import FilterConfig, load_filter_config

__all__ = [
    "AssetCatalog",
    "GridPosition",
    "grid_position",
    "GridCompositor",
    "OutputSpec",
    "DEFAULT_OUTPUT_SPECS",
    "SheetExporter",
    "AssetLoader",
    "RasterizedAsset",
    "FilterConfig",
    "load_filter_config",
]
