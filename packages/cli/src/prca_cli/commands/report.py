"""report command — reconcile findings with existing pull request threads."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from prca_core.config import ReportSettings, load_config
from prca_core.errors import ConfigurationError
from prca_core.issues import CommentFormat
from prca_core.orchestrator import Orchestrator, RunResult
from prca_core.providers.json_file import JsonFileIssueProvider
from prca_core.shadow import ShadowPullRequestSystem, load_threads

console = Console()


def _print_result(result: RunResult) -> None:
    if result.posted_findings:
        table = Table(title="Findings to post", show_header=True, header_style="bold cyan")
        table.add_column("File", max_width=50)
        table.add_column("Line", justify="right", width=6)
        table.add_column("Rule", width=16)
        table.add_column("Message", max_width=60)
        for f in result.posted_findings:
            table.add_row(
                f.affected_file_relative_path or "—",
                str(f.line) if f.line else "—",
                f.rule,
                f.message,
            )
        console.print(table)

    console.print(
        f"[bold]{len(result.found_findings)} finding(s) found · "
        f"{len(result.posted_findings)} new comment(s)[/bold]"
    )


@click.command("report")
@click.option(
    "--findings",
    "findings_path",
    required=True,
    type=click.Path(dir_okay=False),
    help="JSON file with normalized findings.",
)
@click.option(
    "--threads",
    "threads_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with the discussion threads already on the pull request.",
)
@click.option("--comment-source", default=None, help="Tag identifying threads created by prca. Overrides config file.")
@click.option("--max-issues", type=int, default=None, help="Maximum number of findings to post. Overrides config file.")
@click.option(
    "--max-issues-per-file",
    type=int,
    default=None,
    help="Maximum number of findings to post for each file. Overrides config file.",
)
@click.pass_context
def report_cmd(
    ctx,
    findings_path: str,
    threads_path: str | None,
    comment_source: str | None,
    max_issues: int | None,
    max_issues_per_file: int | None,
):
    """Reconcile findings with the threads of a pull request.

    Shows which findings would be posted and which existing threads would be
    resolved, without contacting a review backend.
    """
    config_path = ctx.obj.get("config_path", ".prca.yml") if ctx.obj else ".prca.yml"
    try:
        config = load_config(
            config_path,
            cli_overrides={
                "comment_source": comment_source,
                "max_issues_to_post": max_issues,
                "max_issues_to_post_for_each_file": max_issues_per_file,
            },
        )
        settings = ReportSettings.from_config(config)
        try:
            threads = load_threads(threads_path) if threads_path else []
        except (KeyError, TypeError, ValueError) as e:
            raise click.BadParameter(f"could not read threads: {e}", param_hint="--threads")
        system = ShadowPullRequestSystem(
            threads=threads,
            comment_format=settings.comment_format or CommentFormat.MARKDOWN,
            console=console,
        )
        orchestrator = Orchestrator([JsonFileIssueProvider(findings_path)], system, settings)
    except ConfigurationError as e:
        raise click.UsageError(str(e))

    result = orchestrator.run()
    _print_result(result)
