"""Issue provider reading findings that were already normalized into JSON.

The file holds a JSON array; each entry looks like::

    {"file": "src/foo.py", "line": 12, "message": "...", "rule": "E501",
     "priority": 2, "provider": "flake8"}

Only ``message`` and ``rule`` are required. This is prca's own interchange
format; converting analyzer output into it happens upstream.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from prca_core.issues import CommentFormat, Finding

if TYPE_CHECKING:
    from prca_core.config import ReportSettings

logger = logging.getLogger(__name__)


class JsonFileIssueProvider:
    name = "json-file"

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def initialize(self, settings: ReportSettings) -> bool:
        if not self.path.is_file():
            logger.warning("Findings file not found: %s", self.path)
            return False
        return True

    def read_issues(self, comment_format: CommentFormat) -> list[Finding]:
        data = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(data, list):
            raise ValueError(f"{self.path} must contain a JSON array of findings")

        issues = []
        for index, entry in enumerate(data):
            try:
                issues.append(self._to_finding(entry))
            except (TypeError, ValueError, AttributeError) as e:
                logger.warning("Skipping finding #%d in %s: %s", index, self.path, e)
        return issues

    def _to_finding(self, entry: dict) -> Finding:
        return Finding(
            affected_file_relative_path=entry.get("file"),
            line=entry.get("line"),
            message=entry.get("message"),
            rule=entry.get("rule"),
            provider_type=entry.get("provider") or self.name,
            priority=entry.get("priority"),
        )
