"""CLI application entry point for PlateKit.

This module provides the main CLI interface using Typer.
"""

import re
import time
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Annotated

import typer

from platekit import __version__
from platekit.cli.output import (
    SYM_DOT,
    console,
    create_contour_table,
    print_contours_found,
    print_error,
    print_header,
    print_image_info,
    print_merge_result,
    print_project_info,
    print_step,
    print_success,
    print_summary,
)
from platekit.config import ExportConfig, GeometryConfig, LoggingConfig, TraceConfig
from platekit.core import ShapeConsolidator, find_self_intersections, render_layer, winding_direction
from platekit.domain import (
    Layer,
    PageSize,
    Point,
    Project,
    ProjectMetadata,
    get_page_size_info,
)
from platekit.exceptions import LayerNotFoundError, PlateKitError
from platekit.io import (
    create_cut_layer,
    create_print_layer,
    default_project_path,
    find_layer_image,
    load_image,
    load_project,
    retrace_layer,
    save_project,
    stored_trace_config,
    write_pdf,
    write_svg,
)
from platekit.utils import ProcessingLogger, configure_logging

# Create the Typer app
app = typer.Typer(
    name="platekit",
    help="Trace images into cut-paths, offset and merge them, and export cut files.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class CliState:
    """Options shared by all commands."""

    quiet: bool = False
    processing_logger: ProcessingLogger | None = None


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]PlateKit[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """PlateKit: lay out print images and cut paths on a sheet."""
    settings = LoggingConfig(log_file=log_file, log_level=log_level)
    logger = configure_logging(
        log_file=settings.log_file,
        console_level=settings.log_level,
        file_level=settings.file_log_level,
        quiet=quiet,
    )
    ctx.obj = CliState(quiet=quiet, processing_logger=ProcessingLogger(logger))


def _state(ctx: typer.Context) -> CliState:
    return ctx.obj if isinstance(ctx.obj, CliState) else CliState()


def _get_layer(project: Project, layer_id: str) -> Layer:
    layer = project.get_layer(layer_id)
    if layer is None:
        raise LayerNotFoundError(layer_id)
    return layer


def _parse_page(page: str) -> PageSize:
    try:
        return PageSize(page.lower())
    except ValueError:
        valid = ", ".join(size.value for size in PageSize)
        print_error(f"Invalid page size: {page}", details=f"Valid values: {valid}")
        raise typer.Exit(code=1)


def parse_stroke(stroke: str) -> list[Point]:
    """Parse pointer samples written as ``"x,y x,y ..."``.

    Samples may be separated by whitespace or semicolons.

    Raises:
        typer.BadParameter: If a sample is not a pair of numbers
    """
    points: list[Point] = []
    for sample in re.split(r"[\s;]+", stroke.strip()):
        if not sample:
            continue
        parts = sample.split(",")
        try:
            x, y = (float(part) for part in parts)
        except ValueError:
            raise typer.BadParameter(f"Invalid stroke sample '{sample}', expected x,y") from None
        points.append(Point(x, y))
    return points


@app.command()
def trace(
    ctx: typer.Context,
    image_path: Annotated[
        Path,
        typer.Argument(
            help="Path to input image (PNG with transparency works best)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Project output path (default: {name}.platekit.json)",
        ),
    ] = None,
    svg: Annotated[
        Path | None,
        typer.Option(
            "--svg",
            help="Also write the SVG cut file",
        ),
    ] = None,
    offset: Annotated[
        float,
        typer.Option(
            "--offset",
            "-d",
            help="Cut offset in image pixels (negative shrinks)",
        ),
    ] = 0.0,
    reduce: Annotated[
        float,
        typer.Option(
            "--reduce",
            "-r",
            help="Point reduction tolerance in image pixels (0 disables)",
            min=0.0,
        ),
    ] = 0.0,
    min_area: Annotated[
        float,
        typer.Option(
            "--min-area",
            help="Discard contours smaller than this many square pixels",
            min=0.0,
        ),
    ] = 4.0,
    threshold: Annotated[
        int,
        typer.Option(
            "--threshold",
            "-t",
            help="Alpha threshold (0-255)",
            min=0,
            max=255,
        ),
    ] = 128,
    no_smoothing: Annotated[
        bool,
        typer.Option(
            "--no-smoothing",
            help="Keep raw traced contours",
        ),
    ] = False,
    tolerance: Annotated[
        float,
        typer.Option(
            "--tolerance",
            help="Curve smoothing tolerance in pixels",
            min=0.0,
        ),
    ] = 2.0,
    page: Annotated[
        str,
        typer.Option(
            "--page",
            "-p",
            help="Sheet size (us-letter|a4|a5)",
        ),
    ] = "us-letter",
    embed: Annotated[
        bool,
        typer.Option(
            "--embed/--no-embed",
            help="Store the image in the project file",
        ),
    ] = True,
) -> None:
    """Trace an image into a new project with a print layer and a cut layer.

    Example:
        platekit trace sticker.png --offset 4 --svg sticker-cut.svg
    """
    state = _state(ctx)
    page_size = _parse_page(page)

    if not state.quiet:
        print_header(__version__)

    try:
        if not state.quiet:
            print_step("Loading image")
        image = load_image(image_path)
        height, width = image.shape[:2]
        channels = image.shape[2] if image.ndim == 3 else 1
        if not state.quiet:
            print_image_info(str(image_path), width, height, channels)

        if not state.quiet:
            print_step("Tracing")
        params = TraceConfig(
            min_contour_area=min_area,
            alpha_threshold=threshold,
            enable_curve_smoothing=not no_smoothing,
            curve_smoothing_tolerance=tolerance,
        )
        start_time = time.time()
        if state.processing_logger:
            state.processing_logger.stats.start_time = start_time
        page_info = get_page_size_info(page_size)
        print_layer = create_print_layer(
            image_path.name, image, page_info, str(image_path), embed=embed
        )
        cut_layer = create_cut_layer(print_layer, image, params)
        cut_layer = replace(cut_layer, offset=offset, point_reduction=reduce)
        if state.processing_logger:
            state.processing_logger.log_trace_complete(
                str(image_path),
                len(cut_layer.vector_paths),
                (time.time() - start_time) * 1000,
            )
        if not state.quiet:
            print_contours_found(len(cut_layer.vector_paths), offset, reduce)

        project = Project(
            metadata=ProjectMetadata(name=image_path.stem, page_size=page_size),
            layers=[print_layer, cut_layer],
        )
        project_path = save_project(project, output or default_project_path(image_path))
        if not state.quiet:
            print_success("Project saved", str(project_path))

        if svg is not None:
            write_svg(project, svg)
            if not state.quiet:
                print_success("Cut file written", str(svg))

        if state.processing_logger:
            state.processing_logger.stats.end_time = time.time()
            if not state.quiet:
                print_summary(state.processing_logger.stats)

    except PlateKitError as e:
        if state.processing_logger:
            state.processing_logger.log_error("trace", e)
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def inspect(
    ctx: typer.Context,
    project_path: Annotated[
        Path,
        typer.Argument(help="Project file", show_default=False),
    ],
) -> None:
    """List the rendered contours of every cut layer."""
    state = _state(ctx)
    geometry = GeometryConfig()

    try:
        project = load_project(project_path)
    except PlateKitError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    page_info = get_page_size_info(project.metadata.page_size)
    print_project_info(project.metadata.name, page_info, len(project.layers))

    for layer in project.layers:
        if not layer.is_cut():
            continue

        table = create_contour_table(layer)
        rendered = render_layer(layer, geometry)
        total_points = 0
        total_crossings = 0
        for index, (stored, shown) in enumerate(zip(layer.vector_paths, rendered)):
            crossings = len(find_self_intersections(shown.points, geometry.determinant_epsilon))
            winding = winding_direction(shown.points, geometry.y_down)
            table.add_row(
                str(index),
                stored.id,
                str(len(stored.points)),
                str(len(shown.points)),
                winding.name.lower().replace("_", "-"),
                str(crossings),
            )
            total_points += len(shown.points)
            total_crossings += crossings

        console.print()
        console.print(table)
        console.print(f"  offset {layer.offset:g} {SYM_DOT} point reduction {layer.point_reduction:g}")
        if state.processing_logger:
            state.processing_logger.log_layer_rendered(
                layer.id, len(rendered), total_points, total_crossings
            )

    if state.processing_logger:
        print_summary(state.processing_logger.stats)


@app.command()
def offset(
    ctx: typer.Context,
    project_path: Annotated[
        Path,
        typer.Argument(help="Project file", show_default=False),
    ],
    layer_id: Annotated[
        str,
        typer.Argument(help="Cut layer id", show_default=False),
    ],
    distance: Annotated[
        float,
        typer.Option(
            "--distance",
            "-d",
            help="Offset in image pixels (negative shrinks)",
        ),
    ] = 0.0,
    point_reduction: Annotated[
        float | None,
        typer.Option(
            "--reduce",
            "-r",
            help="Point reduction tolerance (unchanged if omitted)",
            min=0.0,
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output path (default: overwrite)"),
    ] = None,
) -> None:
    """Set the live offset (and optionally point reduction) of a cut layer."""
    state = _state(ctx)

    try:
        project = load_project(project_path)
        layer = _get_layer(project, layer_id)
        updated = replace(layer, offset=distance)
        if point_reduction is not None:
            updated = replace(updated, point_reduction=point_reduction)
        saved = save_project(project.replace_layer(updated), output or project_path)
    except PlateKitError as e:
        if state.processing_logger:
            state.processing_logger.log_error("offset", e)
        print_error(str(e))
        raise typer.Exit(code=1)

    if not state.quiet:
        print_success(f"Offset set to {distance:g}", str(saved))


@app.command()
def merge(
    ctx: typer.Context,
    project_path: Annotated[
        Path,
        typer.Argument(help="Project file", show_default=False),
    ],
    layer_id: Annotated[
        str,
        typer.Argument(help="Cut layer id", show_default=False),
    ],
    stroke: Annotated[
        str,
        typer.Option(
            "--stroke",
            "-s",
            help='Pointer samples in sheet points, e.g. "10,10 40,12 80,15"',
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output path (default: overwrite)"),
    ] = None,
) -> None:
    """Merge every contour a freeform stroke touches, as the shape tool does."""
    state = _state(ctx)
    samples = parse_stroke(stroke)

    try:
        project = load_project(project_path)
        layer = _get_layer(project, layer_id)
        outcome = ShapeConsolidator().run_stroke(layer, samples)

        if state.processing_logger:
            if outcome.merged:
                produced = len(outcome.layer.vector_paths) - len(layer.vector_paths) + len(outcome.touched)
                state.processing_logger.log_merge(layer.id, outcome.touched, produced)
            else:
                state.processing_logger.log_merge_skipped(layer.id, outcome.reason)

        if not state.quiet:
            print_merge_result(outcome.merged, outcome.touched, outcome.reason)

        if outcome.merged:
            saved = save_project(project.replace_layer(outcome.layer), output or project_path)
            if not state.quiet:
                print_success("Project saved", str(saved))
    except PlateKitError as e:
        if state.processing_logger:
            state.processing_logger.log_error("merge", e)
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command()
def retrace(
    ctx: typer.Context,
    project_path: Annotated[
        Path,
        typer.Argument(help="Project file", show_default=False),
    ],
    layer_id: Annotated[
        str,
        typer.Argument(help="Cut layer id", show_default=False),
    ],
    min_area: Annotated[
        float | None,
        typer.Option(
            "--min-area",
            help="Minimum contour area (stored value if omitted)",
            min=0.0,
        ),
    ] = None,
    threshold: Annotated[
        int | None,
        typer.Option(
            "--threshold",
            "-t",
            help="Alpha threshold (stored value if omitted)",
            min=0,
            max=255,
        ),
    ] = None,
    tolerance: Annotated[
        float | None,
        typer.Option(
            "--tolerance",
            help="Curve smoothing tolerance (stored value if omitted)",
            min=0.0,
            max=50.0,
        ),
    ] = None,
    smoothing: Annotated[
        bool | None,
        typer.Option(
            "--smoothing/--no-smoothing",
            help="Polygon approximation (stored value if omitted)",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output path (default: overwrite)"),
    ] = None,
) -> None:
    """Trace a cut layer again from its image with the stored tracer parameters."""
    state = _state(ctx)
    overrides = {
        "min_contour_area": min_area,
        "alpha_threshold": threshold,
        "curve_smoothing_tolerance": tolerance,
        "enable_curve_smoothing": smoothing,
    }

    try:
        project = load_project(project_path)
        layer = _get_layer(project, layer_id)
        params = stored_trace_config(layer).model_copy(
            update={key: value for key, value in overrides.items() if value is not None}
        )
        image = find_layer_image(project, layer, project_path.parent)
        updated = retrace_layer(layer, image, params)
        saved = save_project(project.replace_layer(updated), output or project_path)
    except PlateKitError as e:
        if state.processing_logger:
            state.processing_logger.log_error("retrace", e)
        print_error(str(e))
        raise typer.Exit(code=1)

    if not state.quiet:
        print_contours_found(len(updated.vector_paths), updated.offset, updated.point_reduction)
        print_success("Project saved", str(saved))


@app.command()
def export(
    ctx: typer.Context,
    project_path: Annotated[
        Path,
        typer.Argument(help="Project file", show_default=False),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="SVG cut file output path"),
    ] = None,
    pdf: Annotated[
        Path | None,
        typer.Option("--pdf", help="PDF print sheet output path"),
    ] = None,
    stroke_width: Annotated[
        float,
        typer.Option("--stroke-width", help="Cut line width in points", min=0.01),
    ] = 0.5,
    dpi: Annotated[
        int,
        typer.Option("--dpi", help="Print sheet resolution", min=36, max=1200),
    ] = 300,
    page: Annotated[
        str | None,
        typer.Option("--page", "-p", help="Sheet size override (us-letter|a4|a5)"),
    ] = None,
) -> None:
    """Write the SVG cut file and/or the PDF print sheet of a project."""
    state = _state(ctx)
    if output is None and pdf is None:
        print_error(
            "Nothing to export",
            details="Pass --output for the cut file and/or --pdf for the print sheet",
        )
        raise typer.Exit(code=1)

    page_size = _parse_page(page) if page is not None else None
    config = ExportConfig(page_size=page_size, stroke_width=stroke_width, dpi=dpi)

    try:
        project = load_project(project_path)
        if output is not None:
            written = write_svg(project, output, config)
            if not state.quiet:
                print_success("Cut file written", str(written))
        if pdf is not None:
            written = write_pdf(project, pdf, config, project_path.parent)
            if not state.quiet:
                print_success("Print sheet written", str(written))
    except PlateKitError as e:
        if state.processing_logger:
            state.processing_logger.log_error("export", e)
        print_error(str(e))
        raise typer.Exit(code=1)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
