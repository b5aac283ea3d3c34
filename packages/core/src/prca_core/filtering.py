"""Default policy deciding which findings may be posted in a run."""

from __future__ import annotations

import logging
from collections import Counter
from typing import TYPE_CHECKING, Mapping, Protocol, Sequence

if TYPE_CHECKING:
    from prca_core.config import ReportSettings
    from prca_core.issues import Finding
    from prca_core.threads import DiscussionComment

logger = logging.getLogger(__name__)


class IssueFilter(Protocol):
    def filter_issues(
        self,
        findings: Sequence[Finding],
        issue_comments: Mapping[Finding, Sequence[DiscussionComment]],
    ) -> list[Finding]:
        ...


def _priority_key(finding: Finding) -> tuple[int, int]:
    # Higher priority first; findings without a priority go last.
    if finding.priority is None:
        return (1, 0)
    return (0, -finding.priority)


class IssueFilterer:
    """Removes findings that are already posted and applies the configured caps."""

    def __init__(self, settings: ReportSettings):
        self._settings = settings

    def filter_issues(
        self,
        findings: Sequence[Finding],
        issue_comments: Mapping[Finding, Sequence[DiscussionComment]],
    ) -> list[Finding]:
        remaining = self._filter_pre_existing(findings, issue_comments)
        remaining = sorted(remaining, key=_priority_key)
        remaining = self._filter_per_file(remaining)
        return self._filter_total(remaining)

    @staticmethod
    def _filter_pre_existing(
        findings: Sequence[Finding],
        issue_comments: Mapping[Finding, Sequence[DiscussionComment]],
    ) -> list[Finding]:
        result = [f for f in findings if f not in issue_comments]
        logger.debug("%d issue(s) were filtered because they were already posted", len(findings) - len(result))
        return result

    def _filter_per_file(self, findings: list[Finding]) -> list[Finding]:
        limit = self._settings.max_issues_to_post_for_each_file
        if limit is None:
            return findings

        counts: Counter = Counter()
        result = []
        for finding in findings:
            path = finding.affected_file_relative_path
            if counts[path] < limit:
                result.append(finding)
            counts[path] += 1

        for path, count in counts.items():
            if count > limit:
                logger.info(
                    "%d issue(s) for %s were filtered to match the limit of %d issue(s) per file",
                    count - limit,
                    path or "the pull request",
                    limit,
                )
        return result

    def _filter_total(self, findings: list[Finding]) -> list[Finding]:
        limit = self._settings.max_issues_to_post
        if limit is None or len(findings) <= limit:
            return findings

        logger.info(
            "%d issue(s) were filtered to match the global limit of %d issue(s) which should be reported",
            len(findings) - limit,
            limit,
        )
        return findings[:limit]
