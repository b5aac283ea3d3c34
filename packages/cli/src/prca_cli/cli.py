"""CLI entry point for prca.

Commands:
  report   — reconcile a findings file with pull request threads (dry run)
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from prca_cli.commands.report import report_cmd

console = Console()


def _setup_logging(verbose: bool) -> None:
    if not verbose:
        return

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return

    handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(handler)


@click.group()
@click.version_option(
    version=importlib.metadata.version("prca"),
    prog_name="prca",
)
@click.option(
    "--config",
    "config_path",
    default=".prca.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRCA_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log every reconciliation step.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Post code analysis findings to pull requests exactly once."""
    _setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(report_cmd)
