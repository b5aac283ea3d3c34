"""Aggregation of findings from all configured issue providers."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Iterable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from prca_core.config import ReportSettings
    from prca_core.issues import CommentFormat, Finding

logger = logging.getLogger(__name__)


@runtime_checkable
class IssueProvider(Protocol):
    """Source of normalized findings, typically wrapping one analyzer's output."""

    name: str

    def initialize(self, settings: ReportSettings) -> bool:
        ...

    def read_issues(self, comment_format: CommentFormat) -> Iterable[Finding]:
        """Return findings with messages rendered in ``comment_format``.

        ``CommentFormat.UNDEFINED`` must be accepted; it is passed when the
        pull request system could not be initialized.
        """
        ...


class IssueReader:
    def __init__(self, providers: Iterable[IssueProvider], settings: ReportSettings):
        self._providers = list(providers)
        self._settings = settings

    def read_issues(self, comment_format: CommentFormat) -> list[Finding]:
        """Read findings from every provider.

        A provider that fails to initialize or raises while reading is logged
        and skipped, so one broken analyzer never hides the others' results.
        """
        start = time.monotonic()
        issues: list[Finding] = []

        for provider in self._providers:
            name = getattr(provider, "name", type(provider).__name__)
            try:
                if not provider.initialize(self._settings):
                    logger.warning("Error initializing issue provider %s. Skipping.", name)
                    continue
                provider_issues = list(provider.read_issues(comment_format))
            except Exception as e:
                logger.warning("Issue provider %s failed (%s): %s", name, type(e).__name__, e)
                continue

            logger.debug("Issue provider %s reported %d issue(s)", name, len(provider_issues))
            issues.extend(provider_issues)

        logger.info(
            "Found %d issue(s) from %d provider(s) in %d ms",
            len(issues),
            len(self._providers),
            (time.monotonic() - start) * 1000,
        )
        return issues
