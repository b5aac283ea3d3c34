"""Detection of threads whose findings no longer reproduce."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping

from prca_core.issues import Finding
from prca_core.threads import DiscussionComment, DiscussionThread

logger = logging.getLogger(__name__)


def find_stale_threads(
    threads: Iterable[DiscussionThread],
    issue_comments: Mapping[Finding, Iterable[DiscussionComment]],
) -> list[DiscussionThread]:
    """Return the threads none of whose comments belong to a current finding.

    A thread with one live comment is kept even if it also holds unrelated
    comments. A thread without comments, or with deleted comments only, is
    stale.
    """
    current_comments = {c for comments in issue_comments.values() for c in comments}

    result = [t for t in threads if not any(c in current_comments for c in t.comments)]

    logger.debug(
        "Found %d existing thread(s) that do not match any new issue and can be resolved.",
        len(result),
    )
    return result
