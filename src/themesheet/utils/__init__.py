"""Utility modules for themesheet."""

from .image import ImageLoader, load_raster
from .config import FilterConfig, MalformedConfiguration, load_filter_config

__all__ = [
    "ImageLoader",
    "load_raster",
    "FilterConfig",
    "MalformedConfiguration",
    "load_filter_config",
]
