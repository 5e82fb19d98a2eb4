"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from platekit.domain import Layer, PageSizeInfo
from platekit.utils import ProcessingStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]PlateKit[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_image_info(image_path: str, width: int, height: int, channels: int) -> None:
    """Print source image information."""
    line = Text("  ")
    line.append(image_path)
    console.print(line)
    alpha = "alpha" if channels == 4 else "no alpha"
    console.print(f"  {width:,} × {height:,} px {SYM_DOT} {alpha}")


def print_project_info(name: str, page: PageSizeInfo, layer_count: int) -> None:
    """Print project summary line."""
    console.print(f"  {name} {SYM_DOT} {page.name} ({page.display_size}) {SYM_DOT} {layer_count} layers")


def print_contours_found(count: int, offset: float, reduction: float) -> None:
    """Print trace result.

    Args:
        count: Number of contours traced
        offset: Offset applied when rendering
        reduction: Point reduction tolerance
    """
    console.print(f"  [green]{count}[/green] contours")
    console.print(f"  offset {offset:g} {SYM_DOT} point reduction {reduction:g}")


def create_contour_table(layer: Layer) -> Table:
    """Create a table for the contours of a cut layer.

    Returns:
        Table with one row per contour, filled by the caller
    """
    table = Table(
        title=f"{layer.name} [dim]({layer.id})[/dim]",
        title_justify="left",
        show_edge=False,
    )
    table.add_column("#", justify="right")
    table.add_column("Contour")
    table.add_column("Points", justify="right")
    table.add_column("Rendered", justify="right")
    table.add_column("Winding")
    table.add_column("Crossings", justify="right")
    return table


def print_merge_result(merged: bool, touched: tuple[int, ...], reason: str | None) -> None:
    """Print the outcome of a consolidation gesture."""
    touched_str = ", ".join(str(i) for i in touched) or "none"
    if merged:
        console.print(f"\n[bold green]{SYM_OK} Merged[/bold green] contours {touched_str}")
    else:
        console.print(f"\n{SYM_DOT} [bold]Nothing merged[/bold] ({reason}) {SYM_DOT} touched: {touched_str}")


def print_success(message: str, output_path: str) -> None:
    """Print success message with the written file."""
    console.print(f"\n[bold green]{SYM_OK} {message}[/bold green]")
    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)


def print_summary(stats: ProcessingStats) -> None:
    """Print run statistics.

    Args:
        stats: Counters collected by the ProcessingLogger
    """
    parts = []
    if stats.contours_traced:
        parts.append(f"{stats.contours_traced} traced")
    if stats.contours_rendered:
        parts.append(f"{stats.contours_rendered} rendered")
        parts.append(f"{stats.self_intersections} self-intersections")
    if stats.duration_seconds:
        parts.append(f"{stats.duration_seconds:.2f}s")
    if parts:
        separator = f" {SYM_DOT} "
        console.print(f"\n  [dim]{separator.join(parts)}[/dim]")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
