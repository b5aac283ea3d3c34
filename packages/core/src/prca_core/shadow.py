"""Dry-run pull request system.

Prints what would be posted and resolved instead of calling a review
backend. Existing threads can be seeded from a JSON file so a run can be
reconciled against a known PR state.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Sequence

from rich.console import Console
from rich.markup import escape

from prca_core.config import ReportSettings
from prca_core.issues import CommentFormat, Finding
from prca_core.threads import DiscussionComment, DiscussionStatus, DiscussionThread


def load_threads(path: str | Path) -> list[DiscussionThread]:
    """Load discussion threads from a JSON array.

    Each entry: ``{"id", "status", "file", "comment_source", "comments": [{"id", "content", "is_deleted"}]}``.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return [
        DiscussionThread(
            id=str(t["id"]),
            status=DiscussionStatus(t.get("status", "active")),
            affected_file_relative_path=t.get("file"),
            comment_source=t.get("comment_source", ""),
            comments=tuple(
                DiscussionComment(
                    id=str(c["id"]),
                    content=c.get("content", ""),
                    is_deleted=bool(c.get("is_deleted", False)),
                )
                for c in t.get("comments", [])
            ),
        )
        for t in data
    ]


class ShadowPullRequestSystem:
    """PullRequestSystem that records calls and prints them to the console."""

    def __init__(
        self,
        threads: Iterable[DiscussionThread] = (),
        comment_format: CommentFormat = CommentFormat.MARKDOWN,
        console: Console | None = None,
    ):
        self.threads = list(threads)
        self.comment_format = comment_format
        self.console = console or Console()
        self.posted: list[Finding] = []
        self.resolved: list[DiscussionThread] = []

    def initialize(self, settings: ReportSettings) -> bool:
        return True

    def get_preferred_comment_format(self) -> CommentFormat:
        return self.comment_format

    def fetch_active_discussion_threads(self, comment_source: str) -> list[DiscussionThread]:
        return [
            t for t in self.threads if t.status == DiscussionStatus.ACTIVE and t.comment_source == comment_source
        ]

    def post_discussion_threads(self, findings: Sequence[Finding], comment_source: str) -> None:
        self.posted.extend(findings)
        self.console.print(f"\n[bold]Shadow run — {len(findings)} comment(s) would be posted[/bold]\n")
        for f in findings:
            location = escape(f.affected_file_relative_path or "(pull request)")
            line = f"  line [bold]{f.line}[/bold]" if f.line else ""
            self.console.print(f"[bold cyan]{location}[/bold cyan]{line}  [yellow]{escape(f.rule)}[/yellow]")
            self.console.print(f"  {f.message}", markup=False)
            self.console.print()

    def mark_threads_as_fixed(self, threads: Sequence[DiscussionThread]) -> None:
        self.resolved.extend(threads)
        if threads:
            ids = ", ".join(t.id for t in threads)
            self.console.print(f"[green]Would resolve {len(threads)} thread(s): {ids}[/green]")
