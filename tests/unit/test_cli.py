"""Unit tests for CLI functionality."""

from unittest.mock import patch

from click.testing import CliRunner
from PIL import Image

from themesheet.cli import SheetProgress, main
from themesheet.core.compositor import DEFAULT_OUTPUT_SPECS, CompositedSheet
from themesheet.core.export import ExportError, SheetExporter
from tests.helpers import FULL_GREEN_SVG, write_png, write_svg


class TestSheetProgress:
    """Test per-sheet progress reporting."""

    def make_sheet(self, placed, skipped):
        return CompositedSheet(
            spec=DEFAULT_OUTPUT_SPECS[0],
            canvas=Image.new("RGBA", (1, 1)),
            placed=list(placed),
            skipped=list(skipped),
        )

    def test_progress_initialization(self):
        progress = SheetProgress(3, "Testing")
        assert progress.total_sheets == 3
        assert progress.completed == 0
        assert progress.description == "Testing"

    @patch('themesheet.cli.click.echo')
    def test_progress_update_reports_counts(self, mock_echo):
        progress = SheetProgress(3, "Testing")
        progress.update(self.make_sheet(["a", "b"], ["c"]))

        line = mock_echo.call_args[0][0]
        assert line.startswith("Testing [1/3] ✓ UI.png")
        assert "2 placed, 1 skipped" in line
        assert mock_echo.call_count == 1

    @patch('themesheet.cli.click.echo')
    def test_progress_marks_failed_sheet(self, mock_echo):
        progress = SheetProgress(2, "Testing")
        progress.update(self.make_sheet([], ["a"]), failed=True)
        assert "❌ UI.png" in mock_echo.call_args[0][0]

    @patch('themesheet.cli.click.echo')
    def test_progress_completion(self, mock_echo):
        progress = SheetProgress(1, "Testing")
        progress.update(self.make_sheet(["a"], []))
        assert "Complete" in mock_echo.call_args[0][0]
        assert mock_echo.call_count == 2


class TestCLIMain:
    """Test the themesheet command."""

    def setup_method(self):
        self.runner = CliRunner()

    def make_workdir(self, tmp_path):
        images = tmp_path / "images"
        write_png(images, "Bkg", color=(255, 0, 0, 255))
        write_svg(images, "Window", FULL_GREEN_SVG)
        return tmp_path

    def test_builds_all_sheets(self, tmp_path):
        workdir = self.make_workdir(tmp_path)

        result = self.runner.invoke(main, ["--workdir", str(workdir)])

        assert result.exit_code == 0, result.output
        expected = {"UI.png": (400, 160), "UI_2.png": (800, 320), "UI_4.png": (1600, 640)}
        for name, size in expected.items():
            with Image.open(workdir / name) as img:
                assert img.size == size
        assert "2 placed, 156 skipped" in result.output

    def test_cells_land_in_grid(self, tmp_path):
        workdir = self.make_workdir(tmp_path)
        self.runner.invoke(main, ["--workdir", str(workdir), "--sheet", "UI_2.png"])

        with Image.open(workdir / "UI_2.png") as img:
            img = img.convert("RGBA")
            assert img.getpixel((20, 20)) == (255, 0, 0, 255)
            assert img.getpixel((60, 20)) == (0, 255, 0, 255)
            assert img.getpixel((100, 20)) == (0, 0, 0, 0)

    def test_sheet_selection(self, tmp_path):
        workdir = self.make_workdir(tmp_path)

        result = self.runner.invoke(main, ["--workdir", str(workdir), "--sheet", "UI.png"])

        assert result.exit_code == 0, result.output
        assert (workdir / "UI.png").exists()
        assert not (workdir / "UI_2.png").exists()
        assert not (workdir / "UI_4.png").exists()

    def test_custom_directories(self, tmp_path):
        write_png(tmp_path / "icons", "Bkg")
        out = tmp_path / "out"

        result = self.runner.invoke(main, [
            "--workdir", str(tmp_path),
            "--images", str(tmp_path / "icons"),
            "--output-dir", str(out),
            "--sheet", "UI.png",
        ])

        assert result.exit_code == 0, result.output
        assert (out / "UI.png").exists()
        assert "1 placed" in result.output

    def test_malformed_config_aborts_before_compositing(self, tmp_path):
        workdir = self.make_workdir(tmp_path)
        (workdir / "FilterConfig.yaml").write_text("ApplyFilterOn: [Bkg\n")

        result = self.runner.invoke(main, ["--workdir", str(workdir)])

        assert result.exit_code == 1
        assert "Invalid filter config" in result.output
        assert not (workdir / "UI.png").exists()

    def test_valid_config_is_used(self, tmp_path):
        workdir = self.make_workdir(tmp_path)
        (workdir / "FilterConfig.yaml").write_text(
            "ApplyFilterOn: [Bkg]\nSharpeningSize: 3\nSharpeningSigma: 1.0\n"
        )

        result = self.runner.invoke(main, ["--workdir", str(workdir), "-v", "--sheet", "UI.png"])

        assert result.exit_code == 0, result.output
        assert "Sharpened: Bkg" in result.output

    def test_failed_export_does_not_stop_other_sheets(self, tmp_path):
        workdir = self.make_workdir(tmp_path)
        original_save = SheetExporter.save

        def flaky_save(self, sheet, file_name=None):
            if sheet.spec.file_name == "UI_2.png":
                raise ExportError("disk full")
            return original_save(self, sheet, file_name)

        with patch.object(SheetExporter, "save", flaky_save):
            result = self.runner.invoke(main, ["--workdir", str(workdir)])

        assert result.exit_code == 1
        assert (workdir / "UI.png").exists()
        assert (workdir / "UI_4.png").exists()
        assert not (workdir / "UI_2.png").exists()
        assert "Building [2/3] ❌ UI_2.png" in result.output
        assert "Failed sheets: UI_2.png" in result.output

    def test_workers_option(self, tmp_path):
        workdir = self.make_workdir(tmp_path)
        result = self.runner.invoke(main, ["--workdir", str(workdir), "--workers", "4", "--sheet", "UI.png"])
        assert result.exit_code == 0, result.output
