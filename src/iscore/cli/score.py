"""iscore score — score one image or a batch of images."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.table import Table

from iscore.cli.utils import console, error_handler, format_score, make_progress

if TYPE_CHECKING:
    from iscore.config import ScoringConfig
    from iscore.score import BatchResult


@click.command()
@click.argument("path", type=click.Path(exists=True))
@click.option(
    "--mode", type=click.Choice(["novel", "classic"]), default=None,
    help="Scoring scheme: novel I-Score (default) or classic IHC-Score.",
)
@click.option(
    "--range", "range_mode", type=click.Choice(["local", "global", "fixed"]),
    default=None,
    help="Value range per image (local), per batch (global) or user-fixed.",
)
@click.option(
    "--min", "range_min", type=float, multiple=True,
    help="Fixed range minimum. Repeat once per channel, or give once for all.",
)
@click.option(
    "--max", "range_max", type=float, multiple=True,
    help="Fixed range maximum. Repeat once per channel, or give once for all.",
)
@click.option(
    "--batch", is_flag=True,
    help="Also score every other file in the same directory with the same extension.",
)
@click.option("--extension", default=None, help="File extension to include in a batch.")
@click.option(
    "--config", "config_path", type=click.Path(exists=True), default=None,
    help="Load settings from a YAML scoring config.",
)
@click.option(
    "--save-config", type=click.Path(), default=None,
    help="Write the effective settings to a YAML scoring config.",
)
@click.option("--output", "-o", type=click.Path(), default=None, help="Write the summary table to CSV.")
@click.option(
    "--report", type=click.Path(), default=None,
    help="Write the per-group classification report to CSV.",
)
@error_handler
def score(
    path: str,
    mode: str | None,
    range_mode: str | None,
    range_min: tuple[float, ...],
    range_max: tuple[float, ...],
    batch: bool,
    extension: str | None,
    config_path: str | None,
    save_config: str | None,
    output: str | None,
    report: str | None,
) -> None:
    """Score every channel of an image (or a batch of images)."""
    from iscore.io import open_images
    from iscore.score import BatchScorer

    config = _build_config(config_path, mode, range_mode, range_min, range_max, extension)
    if save_config:
        config.to_yaml(Path(save_config))
        console.print(f"[green]Saved scoring config to {save_config}[/green]")

    path_obj = Path(path)
    if path_obj.is_dir():
        batch = True
    try:
        images = open_images(path_obj, extension=config.extension, batch=batch)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    scorer = BatchScorer.from_config(config)
    with make_progress() as progress:
        task = progress.add_task("Scoring images...", total=None)

        def on_progress(current: int, total: int, name: str) -> None:
            progress.update(task, total=total, completed=current,
                            description=f"Processed {name}")

        result = scorer.run(images, progress_callback=on_progress)

    _show_result(result)

    if output:
        result.to_csv(Path(output))
        console.print(f"[green]Wrote summary to {output}[/green]")
    if report:
        result.classification_report().to_csv(Path(report), index=False)
        console.print(f"[green]Wrote classification report to {report}[/green]")


def _build_config(
    config_path: str | None,
    mode: str | None,
    range_mode: str | None,
    range_min: tuple[float, ...],
    range_max: tuple[float, ...],
    extension: str | None,
) -> ScoringConfig:
    """Merge a YAML config with command-line overrides."""
    from iscore.config import ScoringConfig
    from iscore.core.exceptions import ConfigError

    base = ScoringConfig.from_yaml(Path(config_path)) if config_path else ScoringConfig()

    if len(range_min) != len(range_max):
        raise ConfigError(
            f"--min and --max must be given the same number of times "
            f"(got {len(range_min)} and {len(range_max)})"
        )
    fixed_ranges = tuple(zip(range_min, range_max)) or base.fixed_ranges
    if range_mode is None:
        range_mode = "fixed" if range_min else base.range_mode
    if range_mode != "fixed":
        fixed_ranges = ()

    return ScoringConfig(
        mode=mode or base.mode,
        range_mode=range_mode,
        fixed_ranges=fixed_ranges,
        extension=extension or base.extension,
    )


def _show_result(result: BatchResult) -> None:
    """Print the per-image score table and any warnings."""
    labels = result.channel_labels()
    title = f"{'I-Score' if result.mode == 'novel' else 'IHC-Score'} ({result.range_mode} range)"
    table = Table(show_header=True, title=title)
    table.add_column("Image", style="bold")
    for label in labels:
        table.add_column(label, justify="right")
    table.add_column("Mean", justify="right", style="cyan")

    for img in result.images:
        scores = img.scores
        cells = [format_score(scores.get(label)) for label in labels]
        table.add_row(img.name, *cells, format_score(img.mean_score))
    console.print(table)

    console.print(
        f"  Images scored: {result.images_scored}/{len(result.images)}"
    )
    for w in result.warnings:
        console.print(f"  [yellow]Warning:[/yellow] {w}")
    console.print(f"  Elapsed: {result.elapsed_seconds}s")
