"""Display management for CLI interface."""

from magicreplace.ui.cli.display.catalog import CatalogDisplay
from magicreplace.ui.cli.display.preview import PreviewDisplay
from magicreplace.ui.cli.display.result import ResultDisplay
from magicreplace.ui.cli.display.scan import ScanDisplay
from magicreplace.ui.cli.display.stepper import render_stepper

__all__ = ["CatalogDisplay", "PreviewDisplay", "ResultDisplay", "ScanDisplay", "render_stepper"]
