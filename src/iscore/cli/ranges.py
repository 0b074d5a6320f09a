"""iscore ranges — run only the global range-discovery pass."""

from __future__ import annotations

from pathlib import Path

import click
from rich.table import Table

from iscore.cli.utils import console, error_handler


@click.command()
@click.argument("path", type=click.Path(exists=True))
@click.option(
    "--batch", is_flag=True,
    help="Also include every other file in the same directory with the same extension.",
)
@click.option("--extension", default=None, help="File extension to include in a batch.")
@error_handler
def ranges(path: str, batch: bool, extension: str | None) -> None:
    """Show per-channel value ranges accumulated over the images."""
    from iscore.io import open_images
    from iscore.score import BatchScorer

    path_obj = Path(path)
    try:
        images = open_images(path_obj, extension=extension, batch=batch or path_obj.is_dir())
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    with console.status("[bold blue]Discovering value ranges..."):
        tracker = BatchScorer(range_mode="global").discover_ranges(images)

    table = Table(show_header=True, title=f"Global ranges ({len(images)} images)")
    table.add_column("Channel", style="bold")
    table.add_column("Min", justify="right")
    table.add_column("Max", justify="right")
    table.add_column("Width", justify="right")
    for index, value_range in enumerate(tracker.ranges()):
        if value_range.is_set:
            table.add_row(
                str(index + 1),
                f"{value_range.minimum:g}",
                f"{value_range.maximum:g}",
                f"{value_range.width:g}",
            )
        else:
            table.add_row(str(index + 1), "-", "-", "[dim]no pixels[/dim]")
    console.print(table)
