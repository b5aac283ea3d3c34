"""Run-level orchestration: read findings, reconcile them with the PR, post and resolve.

    initialize → read findings → fetch threads → match → resolve stale threads
               → filter → post

If the pull request system cannot be initialized the run still reads
findings and returns them, but nothing is fetched, posted or resolved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from prca_core.errors import ConfigurationError, RemoteSystemError
from prca_core.filtering import IssueFilterer
from prca_core.issues import CommentFormat, Finding
from prca_core.matching import IssueCommentMap, build_issue_comment_map
from prca_core.reader import IssueReader
from prca_core.resolver import find_stale_threads

if TYPE_CHECKING:
    from prca_core.config import ReportSettings
    from prca_core.filtering import IssueFilter
    from prca_core.reader import IssueProvider
    from prca_core.review_system import PullRequestSystem
    from prca_core.threads import DiscussionThread

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Findings discovered by the providers and the subset posted to the pull request."""

    found_findings: list[Finding] = field(default_factory=list)
    posted_findings: list[Finding] = field(default_factory=list)


def validate_arguments(providers, pull_request_system, settings) -> ConfigurationError | None:
    """Return the first problem with the orchestrator arguments, or None if they are usable."""
    if pull_request_system is None:
        return ConfigurationError("pull_request_system must be set")
    if settings is None:
        return ConfigurationError("settings must be set")
    if not getattr(settings, "comment_source", None):
        return ConfigurationError("settings.comment_source must be a non-empty string")
    if providers is None:
        return ConfigurationError("providers must be set")
    if not providers:
        return ConfigurationError("at least one issue provider is required")
    if any(p is None for p in providers):
        return ConfigurationError("providers must not contain empty entries")
    return None


class Orchestrator:
    """Posts new findings, skips ones already commented and resolves threads whose findings are gone."""

    def __init__(
        self,
        providers: Iterable[IssueProvider],
        pull_request_system: PullRequestSystem,
        settings: ReportSettings,
        issue_filter: IssueFilter | None = None,
    ):
        providers = list(providers) if providers is not None else None
        error = validate_arguments(providers, pull_request_system, settings)
        if error is not None:
            raise error

        self.providers = providers
        self.pull_request_system = pull_request_system
        self.settings = settings
        self.issue_filter = issue_filter if issue_filter is not None else IssueFilterer(settings)

    def run(self) -> RunResult:
        comment_format = CommentFormat.UNDEFINED

        logger.debug("Initialize pull request system...")
        initialized = self._initialize_pull_request_system()
        if initialized:
            comment_format = self.pull_request_system.get_preferred_comment_format()
            logger.debug("Pull request system prefers comments in %s format.", comment_format.value)
        else:
            logger.warning("Error initializing the pull request system.")

        issues = IssueReader(self.providers, self.settings).read_issues(comment_format)

        # Read-only mode: report what was found without touching the pull request.
        if not initialized:
            return RunResult(found_findings=issues, posted_findings=[])

        logger.info("Processing %d new issue(s)", len(issues))
        posted = self._post_and_resolve_comments(issues)
        return RunResult(found_findings=issues, posted_findings=posted)

    def _initialize_pull_request_system(self) -> bool:
        try:
            return bool(self.pull_request_system.initialize(self.settings))
        except RemoteSystemError as e:
            logger.warning("Pull request system could not be reached: %s", e)
            return False

    def _post_and_resolve_comments(self, issues: list[Finding]) -> list[Finding]:
        comment_source = self.settings.comment_source

        logger.info("Fetching existing threads and comments...")
        existing_threads = list(self.pull_request_system.fetch_active_discussion_threads(comment_source))

        issue_comments = build_issue_comment_map(issues, existing_threads, comment_source)
        logger.debug("%d of %d issue(s) already have a matching comment", len(issue_comments), len(issues))

        # Threads created by this tool which no longer have a finding can be marked as resolved.
        self._resolve_existing_comments(existing_threads, issue_comments)

        if not issues:
            logger.info("No new issues were posted")
            return []

        remaining = list(self.issue_filter.filter_issues(issues, issue_comments))

        if remaining:
            formatted = "\n".join(
                f"  Rule: {i.rule} Line: {i.line} File: {i.affected_file_relative_path}" for i in remaining
            )
            logger.debug("Posting %d issue(s):\n%s", len(remaining), formatted)
            self.pull_request_system.post_discussion_threads(remaining, comment_source)
        else:
            logger.info("All issues were filtered. Nothing new to post.")

        return remaining

    def _resolve_existing_comments(
        self,
        existing_threads: list[DiscussionThread],
        issue_comments: IssueCommentMap,
    ) -> None:
        if not existing_threads:
            logger.debug("No existing threads to resolve.")
            return

        resolved = find_stale_threads(existing_threads, issue_comments)
        logger.debug("Mark %d thread(s) as fixed...", len(resolved))
        self.pull_request_system.mark_threads_as_fixed(resolved)
