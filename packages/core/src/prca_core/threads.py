"""Discussion threads and comments fetched from a pull request system.

Threads are fetched fresh on every run and never cached. A comment is
identified by its remote id together with the id of its thread, since many
backends number comments per thread. Two handles to the same remote comment
are equal even if the adapter built them separately.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from prca_core.issues import normalize_path


class DiscussionStatus(Enum):
    ACTIVE = "active"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class DiscussionComment:
    id: str
    content: str = field(compare=False)
    is_deleted: bool = field(default=False, compare=False)
    thread_id: str | None = None


@dataclass(frozen=True)
class DiscussionThread:
    """A comment thread on the pull request.

    ``comment_source`` scopes which threads were created by this tool;
    threads from any other source are never matched or resolved. Comments
    passed in are rebound to this thread's id.
    """

    id: str
    status: DiscussionStatus = field(compare=False)
    affected_file_relative_path: str | None = field(compare=False)
    comment_source: str = field(compare=False)
    comments: tuple[DiscussionComment, ...] = field(default=(), compare=False)

    def __post_init__(self):
        object.__setattr__(self, "affected_file_relative_path", normalize_path(self.affected_file_relative_path))
        object.__setattr__(
            self,
            "comments",
            tuple(c if c is None or c.thread_id == self.id else replace(c, thread_id=self.id) for c in self.comments),
        )
