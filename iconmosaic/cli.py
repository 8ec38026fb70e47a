"""
iconmosaic: composite a folder of SVG icons into one circular-cell grid.

Usage:
  iconmosaic icons/ -o grid.png                          # PNG, defaults from env/.env
  iconmosaic icons/ -o grid.svg                          # self-contained SVG
  iconmosaic a.svg b.svg -o grid.png --border-cell-size 640 --border-color "#ffffff80"
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from iconmosaic.config import Settings
from iconmosaic.engine.context import CompositeResult
from iconmosaic.engine.pipeline import create_pipeline
from iconmosaic.errors import AssemblyFailure, EmptyInput
from iconmosaic.models.layout import OutputFormat
from iconmosaic.sources import load_sources
from iconmosaic.utils.rasterizer import save_png

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="iconmosaic", description="Composite SVG icons into a circular-cell grid")
    parser.add_argument("inputs", nargs="+", help="SVG files or folders of SVGs")
    parser.add_argument("-o", "--output", required=True, help="Output file (.png or .svg)")
    parser.add_argument("--format", choices=[f.value for f in OutputFormat], help="Output format (default: from extension)")
    parser.add_argument("--cell-size", type=int, help="Icon cell edge in pixels")
    parser.add_argument("--cell-gap", type=int, help="Gap between cells")
    parser.add_argument("--padding", type=int, help="Canvas padding (default: cell gap)")
    parser.add_argument("--border-cell-size", type=int, help="Draw background discs of this diameter")
    parser.add_argument("--background", help="Canvas colour, #rrggbb[aa]")
    parser.add_argument("--border-color", help="Disc colour, #rrggbb[aa]")
    parser.add_argument("--output-size", type=int, help="Bitmap edge in pixels (raster only)")
    parser.add_argument("--compact", action="store_true", help="Close the gaps left by dropped icons")
    parser.add_argument("--workers", type=int, help="Threads for per-icon preparation")
    parser.add_argument("--log-level", help="Logging level (default: ICONMOSAIC_LOG_LEVEL)")
    return parser


def infer_format(output: str | Path, explicit: str | None) -> OutputFormat:
    if explicit:
        return OutputFormat(explicit)
    return OutputFormat.VECTOR if Path(output).suffix.lower() == ".svg" else OutputFormat.RASTER


def write_result(result: CompositeResult, output: str | Path) -> Path:
    out = Path(output)
    if result.image is not None:
        return save_png(result.image, out)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(result.document, encoding="utf-8")
    return out


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    settings = Settings()

    level = (args.log_level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        spec = settings.layout_spec(
            cell_size=args.cell_size,
            cell_gap=args.cell_gap,
            padding=args.padding,
            border_cell_size=args.border_cell_size,
            background_color=args.background,
            border_color=args.border_color,
        )
        config = settings.pipeline_config(
            output_format=infer_format(args.output, args.format),
            output_size=args.output_size,
            compact_layout=args.compact or None,
            max_workers=args.workers,
        )
    except ValidationError as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    try:
        sources = load_sources(args.inputs)
    except OSError as e:
        logger.error("%s", e)
        return 1

    try:
        result = create_pipeline(spec, config).run(sources)
    except EmptyInput:
        logger.info("No images found. Exiting.")
        return 0
    except AssemblyFailure as e:
        logger.error("%s", e)
        return 1

    for skipped in result.warnings:
        logger.warning("Skipped %s: %s", skipped.locator, skipped.message)

    out = write_result(result, args.output)
    logger.info(
        "Grid image saved as %s (%d icons, %dx%d grid, %dpx)",
        out,
        result.placed_count,
        result.grid_size,
        result.grid_size,
        result.canvas_size,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
