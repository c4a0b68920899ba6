"""Write finished sheets to disk as lossless PNG files."""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Union

from PIL import Image

from .compositor import CompositedSheet

logger = logging.getLogger(__name__)


def default_file_mode() -> int:
    """Permissions a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class ExportError(RuntimeError):
    """A sheet could not be written."""


class SheetExporter:
    """Persist canvases atomically so a failed write never leaves a partial file."""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)

    def save(self, sheet: Union[CompositedSheet, Image.Image], file_name: Optional[str] = None) -> Path:
        """Save a sheet (or bare canvas) as PNG and return the written path."""
        if isinstance(sheet, CompositedSheet):
            canvas = sheet.canvas
            file_name = file_name or sheet.spec.file_name
        else:
            canvas = sheet

        if not file_name:
            raise ValueError("A file name is required to save a bare canvas")

        target_path = self.output_dir / file_name
        if canvas.mode != "RGBA":
            canvas = canvas.convert("RGBA")

        temp_path = None
        try:
            target_path.parent.mkdir(parents=True, exist_ok=True)

            # Temporary file in the same directory keeps the final move atomic
            with tempfile.NamedTemporaryFile(
                dir=target_path.parent,
                delete=False,
                suffix=".tmp",
            ) as temp_file:
                temp_path = Path(temp_file.name)
                canvas.save(temp_file, format="PNG")
                temp_file.flush()
                os.fsync(temp_file.fileno())

            # NamedTemporaryFile creates 0600 files
            os.chmod(temp_path, default_file_mode())

            shutil.move(str(temp_path), str(target_path))
            temp_path = None

        except (OSError, ValueError) as e:
            logger.error(f"Failed to save {file_name} to {target_path}: {e}")
            raise ExportError(f"Failed to save {target_path}: {e}") from e

        finally:
            if temp_path is not None and temp_path.exists():
                temp_path.unlink()

        logger.info(f"Saved {canvas.width}x{canvas.height} sheet to {target_path}")
        return target_path
