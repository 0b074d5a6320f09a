"""iScore CLI — top-level Click group."""

from __future__ import annotations

import click


@click.group()
@click.version_option(package_name="iscore")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging and full tracebacks on errors.")
def cli(verbose: bool) -> None:
    """iScore — histogram-based intensity scoring for microscopy images."""
    from iscore.cli import utils

    utils.verbose = verbose
    utils.configure_logging(verbose)


def _register_commands() -> None:
    """Register all subcommands. Imports are deferred to keep startup light."""
    from iscore.cli.ranges import ranges
    from iscore.cli.score import score

    cli.add_command(ranges)
    cli.add_command(score)


_register_commands()
