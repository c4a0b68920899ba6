"""Core sheet-building modules for themesheet."""

from .catalog import ASSET_NAMES, ROW_WIDTH, AssetCatalog, GridPosition, grid_position
from .loader import (
    AssetLoader,
    AssetLoadError,
    MalformedVectorDocument,
    RasterizedAsset,
    SourceFormat,
    UnreadableRasterSource,
)
from .sharpen import gaussian_sharpen, should_sharpen
from .compositor import (
    BASE_CELL_SIZE,
    DEFAULT_OUTPUT_SPECS,
    CompositedSheet,
    GridCompositor,
    OutputSpec,
)
from .export import ExportError, SheetExporter

__all__ = [
    "ASSET_NAMES",
    "ROW_WIDTH",
    "AssetCatalog",
    "GridPosition",
    "grid_position",
    "AssetLoader",
    "AssetLoadError",
    "MalformedVectorDocument",
    "RasterizedAsset",
    "SourceFormat",
    "UnreadableRasterSource",
    "gaussian_sharpen",
    "should_sharpen",
    "BASE_CELL_SIZE",
    "DEFAULT_OUTPUT_SPECS",
    "CompositedSheet",
    "GridCompositor",
    "OutputSpec",
    "ExportError",
    "SheetExporter",
]
