"""Shared CLI utilities — Rich console, logging, error handling, progress."""

from __future__ import annotations

import functools
import logging
import traceback
from typing import Any, Callable

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

console = Console()

# Set by the --verbose flag on the top-level CLI group.
verbose: bool = False


def configure_logging(verbose_output: bool) -> None:
    """Route iscore log records through Rich.

    Warnings and above are shown by default; --verbose shows everything.
    """
    level = logging.DEBUG if verbose_output else logging.WARNING
    logger = logging.getLogger("iscore")
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        logger.addHandler(
            RichHandler(console=console, show_path=False, rich_tracebacks=verbose_output)
        )


def error_handler(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator wrapping CLI commands with standard error handling.

    Catches ScoringError (exit 1) and unexpected exceptions (exit 2).
    With --verbose, unexpected errors include the full traceback.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        from iscore.core.exceptions import ScoringError

        try:
            return func(*args, **kwargs)
        except SystemExit:
            raise
        except ScoringError as e:
            console.print(f"[red]Error:[/red] {e}")
            raise SystemExit(1)
        except Exception as e:
            if verbose:
                console.print(f"[red]Internal error:[/red] {e}")
                console.print(traceback.format_exc())
            else:
                console.print(
                    f"[red]Internal error:[/red] {type(e).__name__}: {e}\n"
                    "[dim]Use --verbose for the full traceback.[/dim]"
                )
            raise SystemExit(2)

    return wrapper


def format_score(value: float | None) -> str:
    """Two-decimal score, or the unscored marker."""
    if value is None:
        return "[dim]unscored[/dim]"
    return f"{value:.2f}"


def make_progress() -> Progress:
    """Create a Rich progress bar for CLI operations."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    )
