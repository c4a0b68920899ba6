"""Command-line interface for themesheet."""

import logging
import sys
import time
from pathlib import Path
from typing import Optional, Tuple

import click

from . import __version__
from .core.catalog import AssetCatalog
from .core.compositor import DEFAULT_OUTPUT_SPECS, CompositedSheet, GridCompositor
from .core.export import ExportError, SheetExporter
from .core.loader import AssetLoader
from .utils.config import (
    DEFAULT_CONFIG_NAME,
    DEFAULT_IMAGES_DIR,
    MalformedConfiguration,
    load_filter_config,
    warn_unknown_assets,
)


class SheetProgress:
    """One status line per finished sheet, then the total build time."""

    def __init__(self, total_sheets: int, description: str = "Building"):
        self.total_sheets = total_sheets
        self.completed = 0
        self.description = description
        self.start_time = time.time()

    def update(self, sheet: CompositedSheet, failed: bool = False) -> None:
        """Report a composited sheet and whether writing it failed."""
        self.completed += 1
        mark = "❌" if failed else "✓"
        click.echo(
            f"{self.description} [{self.completed}/{self.total_sheets}] {mark} "
            f"{sheet.spec.file_name}: {len(sheet.placed)} placed, {len(sheet.skipped)} skipped"
        )

        if self.completed == self.total_sheets:
            elapsed = time.time() - self.start_time
            click.echo(f"   Complete ({elapsed:.1f}s)")


@click.command()
@click.option(
    "--workdir",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Working directory (default: current directory)",
)
@click.option(
    "--images",
    "images_dir",
    type=click.Path(file_okay=False, path_type=Path),
    help=f"Icon source directory (default: <workdir>/{DEFAULT_IMAGES_DIR})",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help=f"Filter config file (default: <workdir>/{DEFAULT_CONFIG_NAME})",
)
@click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory for generated sheets (default: <workdir>)",
)
@click.option(
    "--sheet",
    "sheets",
    multiple=True,
    type=click.Choice([spec.file_name for spec in DEFAULT_OUTPUT_SPECS]),
    help="Only build the named sheet (repeatable)",
)
@click.option(
    "--workers",
    default=1,
    help="Rasterization threads (default: 1)",
    type=click.IntRange(1, 64),
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
def main(
    workdir: Path,
    images_dir: Optional[Path],
    config_path: Optional[Path],
    output_dir: Optional[Path],
    sheets: Tuple[str, ...],
    workers: int,
    verbose: bool,
) -> None:
    """Build the theme sprite sheets from the icons in the images directory.

    Examples:
        themesheet
        themesheet --workdir theme/ -v
        themesheet --sheet UI.png --config sharpen.yaml
    """
    if verbose:
        logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s')
    else:
        logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(message)s')

    click.echo(f"🎨 themesheet v{__version__} - Theme Sprite Sheet Generator")
    click.echo()

    images_dir = images_dir or workdir / DEFAULT_IMAGES_DIR
    config_path = config_path or workdir / DEFAULT_CONFIG_NAME
    output_dir = output_dir or workdir

    catalog = AssetCatalog()

    try:
        filter_config = load_filter_config(config_path)
    except MalformedConfiguration as e:
        click.echo(f"❌ Invalid filter config: {e}", err=True)
        sys.exit(1)

    if filter_config is not None:
        warn_unknown_assets(filter_config, catalog)
        if verbose:
            click.echo(
                f"Sharpening {len(filter_config.apply_filter_on)} assets "
                f"(size {filter_config.sharpening_size}, sigma {filter_config.sharpening_sigma})"
            )

    specs = [spec for spec in DEFAULT_OUTPUT_SPECS if not sheets or spec.file_name in sheets]

    compositor = GridCompositor(
        catalog,
        AssetLoader(images_dir),
        filter_config=filter_config,
        max_workers=workers,
    )
    exporter = SheetExporter(output_dir)

    progress = SheetProgress(len(specs), "Building")
    results = []
    failed = []

    for sheet in compositor.compose_all(specs):
        try:
            path = exporter.save(sheet)
        except ExportError as e:
            failed.append(sheet.spec.file_name)
            click.echo(f"❌ Error: {e}", err=True)
            progress.update(sheet, failed=True)
        else:
            results.append((path, sheet))
            progress.update(sheet)

    click.echo()
    click.echo("📊 Final statistics:")
    for path, sheet in results:
        click.echo(
            f"   {path.name}: {sheet.spec.width}x{sheet.spec.height}, "
            f"{len(sheet.placed)} placed, {len(sheet.skipped)} skipped"
        )
        if verbose and sheet.sharpened:
            click.echo(f"      Sharpened: {', '.join(sheet.sharpened)}")
        if verbose and sheet.skipped:
            click.echo(f"      Skipped: {', '.join(sheet.skipped)}")

    if failed:
        click.echo(f"❌ Failed sheets: {', '.join(failed)}", err=True)
        sys.exit(1)

    click.echo("✅ Done!")


if __name__ == "__main__":
    main()
