"""Sharpening filter configuration loaded from ``FilterConfig.yaml``.

Example file::

    ApplyFilterOn:
      - Check
      - RadioOn
    SharpeningSize: 3
    SharpeningSigma: 1.4

A missing file disables sharpening. A file that exists but cannot be parsed
or validated aborts the run before any sheet is composited.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "FilterConfig.yaml"
DEFAULT_IMAGES_DIR = "images"
REQUIRED_KEYS = ("ApplyFilterOn", "SharpeningSize", "SharpeningSigma")


class MalformedConfiguration(ValueError):
    """The filter configuration exists but is unusable."""


@dataclass(frozen=True)
class FilterConfig:
    """Which assets to sharpen and the Gaussian kernel to sharpen them with."""

    apply_filter_on: FrozenSet[str] = field(default_factory=frozenset)
    sharpening_size: int = 3
    sharpening_sigma: float = 1.0

    def __post_init__(self):
        """Validate configuration parameters."""
        # bool is an int subclass; reject it explicitly
        if isinstance(self.sharpening_size, bool) or not isinstance(self.sharpening_size, int):
            raise MalformedConfiguration(
                f"SharpeningSize must be an integer, got {self.sharpening_size!r}"
            )
        if self.sharpening_size <= 0:
            raise MalformedConfiguration(
                f"SharpeningSize must be positive, got {self.sharpening_size}"
            )
        if isinstance(self.sharpening_sigma, bool) or not isinstance(self.sharpening_sigma, (int, float)):
            raise MalformedConfiguration(
                f"SharpeningSigma must be a number, got {self.sharpening_sigma!r}"
            )
        if self.sharpening_sigma <= 0:
            raise MalformedConfiguration(
                f"SharpeningSigma must be positive, got {self.sharpening_sigma}"
            )
        object.__setattr__(self, "sharpening_sigma", float(self.sharpening_sigma))
        object.__setattr__(self, "apply_filter_on", frozenset(self.apply_filter_on))

    def applies_to(self, name: str) -> bool:
        return name in self.apply_filter_on


def parse_filter_config(text: str, source: str = "<string>") -> FilterConfig:
    """Parse the YAML body of a filter configuration."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise MalformedConfiguration(f"Cannot parse {source}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise MalformedConfiguration(
            f"{source} must contain a mapping, got {type(data).__name__}"
        )

    for key in REQUIRED_KEYS:
        if key not in data:
            raise MalformedConfiguration(f"{source} is missing required key {key}")

    names = data["ApplyFilterOn"] or []
    if isinstance(names, str) or not isinstance(names, list):
        raise MalformedConfiguration(f"ApplyFilterOn in {source} must be a list of asset names")
    if not all(isinstance(name, str) for name in names):
        raise MalformedConfiguration(f"ApplyFilterOn in {source} must only contain strings")

    unknown = sorted(set(data) - set(REQUIRED_KEYS))
    if unknown:
        logger.warning(f"Ignoring unknown keys in {source}: {', '.join(map(str, unknown))}")

    return FilterConfig(
        apply_filter_on=frozenset(names),
        sharpening_size=data["SharpeningSize"],
        sharpening_sigma=data["SharpeningSigma"],
    )


def load_filter_config(path: Path) -> Optional[FilterConfig]:
    """Load the filter configuration, or ``None`` when the file is absent."""
    path = Path(path)
    if not path.exists():
        logger.info(f"No filter config at {path}; sharpening disabled")
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise MalformedConfiguration(f"Cannot read {path}: {e}") from e

    config = parse_filter_config(text, source=str(path))
    logger.info(
        f"Loaded filter config: {len(config.apply_filter_on)} assets, "
        f"size={config.sharpening_size}, sigma={config.sharpening_sigma}"
    )
    return config


def warn_unknown_assets(config: FilterConfig, known: Iterable[str]) -> None:
    """Warn about sharpen-set names that are not in the catalog."""
    missing = sorted(config.apply_filter_on - set(known))
    for name in missing:
        logger.warning(f"ApplyFilterOn lists unknown asset {name}; it will never be sharpened")
