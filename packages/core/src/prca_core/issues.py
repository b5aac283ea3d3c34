"""Normalized code analysis findings.

A Finding is built once per analyzer result by an issue provider and is never
mutated afterwards. The affected file path is stored relative to the
repository root with forward slashes, whatever separator style the analyzer
reported, so it can be compared as a plain string against the path of an
existing discussion thread.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

_INVALID_PATH_CHARS = set('"<>|') | {chr(c) for c in range(32)}
_DRIVE_RE = re.compile(r"^[A-Za-z]:")


class CommentFormat(Enum):
    """Rendering format a pull request system prefers for comment bodies."""

    UNDEFINED = "undefined"
    PLAIN_TEXT = "plain_text"
    MARKDOWN = "markdown"
    HTML = "html"


def normalize_path(path: str | None) -> str | None:
    """Return ``path`` with forward slashes and no leading ``./`` or trailing ``/``.

    Empty and whitespace-only paths become None. ``..`` segments are kept
    verbatim; resolving them would need a file system.
    """
    if path is None or not path.strip():
        return None

    normalized = path.strip().replace("\\", "/")
    normalized = re.sub(r"/{2,}", "/", normalized)
    while normalized.startswith("./"):
        normalized = normalized[2:]
    normalized = normalized.rstrip("/")
    return normalized or None


def is_absolute_path(path: str) -> bool:
    return path.startswith(("/", "\\")) or bool(_DRIVE_RE.match(path))


@dataclass(frozen=True)
class Finding:
    """A single code analysis issue reported by one provider.

    ``line`` is only meaningful together with a file path and is never used to
    match existing comments, since lines move between revisions of a PR.
    """

    affected_file_relative_path: str | None
    line: int | None
    message: str
    rule: str
    provider_type: str
    priority: int | None = None

    def __post_init__(self):
        path = self.affected_file_relative_path
        if path is not None and path.strip():
            if any(c in _INVALID_PATH_CHARS for c in path):
                raise ValueError(f"affected_file_relative_path contains invalid characters: {path!r}")
            if is_absolute_path(path.strip()):
                raise ValueError(f"affected_file_relative_path must be relative, got {path!r}")
        object.__setattr__(self, "affected_file_relative_path", normalize_path(path))

        if self.line is not None:
            if isinstance(self.line, bool) or not isinstance(self.line, int):
                raise ValueError(f"line must be a positive integer, got {self.line!r}")
            if self.line <= 0:
                raise ValueError(f"line must be a positive integer, got {self.line}")
            if self.affected_file_relative_path is None:
                raise ValueError("line cannot be set for an issue without an affected file")

        if self.message is None or not self.message.strip():
            raise ValueError("message must be a non-empty string")
        if self.rule is None or not self.rule.strip():
            raise ValueError("rule must be a non-empty string")
