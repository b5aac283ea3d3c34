"""Contract for adapters that talk to a code review backend.

Adapters implement the five operations below over their own transport. All
calls are blocking and are never retried by the orchestrator; a failing call
should raise ``RemoteSystemError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from prca_core.config import ReportSettings
    from prca_core.issues import CommentFormat, Finding
    from prca_core.threads import DiscussionThread


@runtime_checkable
class PullRequestSystem(Protocol):
    def initialize(self, settings: ReportSettings) -> bool:
        """Prepare the adapter for a run. Returns False if the remote system is unusable."""
        ...

    def get_preferred_comment_format(self) -> CommentFormat:
        ...

    def fetch_active_discussion_threads(self, comment_source: str) -> Sequence[DiscussionThread]:
        """Return the active threads created with ``comment_source``."""
        ...

    def post_discussion_threads(self, findings: Sequence[Finding], comment_source: str) -> None:
        ...

    def mark_threads_as_fixed(self, threads: Sequence[DiscussionThread]) -> None:
        ...


__all__ = ["PullRequestSystem"]
