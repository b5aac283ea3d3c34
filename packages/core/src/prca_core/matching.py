"""Matching of findings against existing discussion threads.

A comment is considered to already represent a finding when all of these hold:
  * its thread is active,
  * its thread is for the same file (or both have no file),
  * its thread was created with the same comment source,
  * the comment is not deleted and its content equals the finding's message.

The line is deliberately not compared: comments move around as the pull
request gets new commits, while the message text stays the same.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from typing import Iterable

from prca_core.issues import Finding
from prca_core.threads import DiscussionComment, DiscussionStatus, DiscussionThread

logger = logging.getLogger(__name__)

IssueCommentMap = dict[Finding, list[DiscussionComment]]


def paths_match(finding: Finding, thread: DiscussionThread) -> bool:
    """Return True if both paths are equal or if neither is set."""
    finding_path = finding.affected_file_relative_path
    thread_path = thread.affected_file_relative_path
    if finding_path is None and thread_path is None:
        return True
    return finding_path is not None and thread_path is not None and finding_path == thread_path


def _is_candidate(thread: DiscussionThread | None, comment_source: str) -> bool:
    return thread is not None and thread.status == DiscussionStatus.ACTIVE and thread.comment_source == comment_source


def _matching_comments_in_thread(finding: Finding, thread: DiscussionThread) -> list[DiscussionComment]:
    return [c for c in thread.comments if c is not None and not c.is_deleted and c.content == finding.message]


def get_matching_comments(
    finding: Finding,
    threads: Iterable[DiscussionThread],
    comment_source: str,
) -> list[DiscussionComment]:
    """Return all comments from ``threads`` that already represent ``finding``."""
    matching_threads = [t for t in threads if _is_candidate(t, comment_source) and paths_match(finding, t)]
    return _collect(finding, matching_threads)


def _collect(finding: Finding, matching_threads: list[DiscussionThread]) -> list[DiscussionComment]:
    if matching_threads:
        logger.debug(
            "Found %d matching thread(s) for the issue at %s line %s",
            len(matching_threads),
            finding.affected_file_relative_path,
            finding.line,
        )

    result: list[DiscussionComment] = []
    for thread in matching_threads:
        comments = _matching_comments_in_thread(finding, thread)
        if comments:
            logger.debug(
                "Found %d matching comment(s) for the issue at %s line %s",
                len(comments),
                finding.affected_file_relative_path,
                finding.line,
            )
        result.extend(comments)
    return result


def build_issue_comment_map(
    findings: Iterable[Finding],
    threads: Iterable[DiscussionThread],
    comment_source: str,
) -> IssueCommentMap:
    """Map each finding to the existing comments that already represent it.

    Findings without any matching comment are absent from the result; callers
    treat that absence as "not posted yet".
    """
    start = time.monotonic()

    # Candidate threads grouped by normalized path. None is a valid key for
    # threads that are not attached to a file.
    threads_by_path: dict[str | None, list[DiscussionThread]] = defaultdict(list)
    for thread in threads:
        if _is_candidate(thread, comment_source):
            threads_by_path[thread.affected_file_relative_path].append(thread)

    result: IssueCommentMap = {}
    for finding in findings:
        comments = _collect(finding, threads_by_path.get(finding.affected_file_relative_path, []))
        if comments:
            result[finding] = comments

    logger.debug("Built an issue to comment map in %d ms", (time.monotonic() - start) * 1000)
    return result
