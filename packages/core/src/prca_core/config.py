from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from prca_core.errors import ConfigurationError
from prca_core.issues import CommentFormat

DEFAULT_CONFIG: dict = {
    "comment_source": "prca",
    "max_issues_to_post": None,  # None = no limit
    "max_issues_to_post_for_each_file": None,
    "comment_format": None,  # None = use the pull request system's preference
}


def load_config(config_path: str = ".prca.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prca.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping, got {type(file_config).__name__}")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    return config


def _parse_limit(config: dict, key: str) -> int | None:
    value = config.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(f"{key} must be a non-negative integer, got {value!r}")
    return value


@dataclass(frozen=True)
class ReportSettings:
    """Settings shared by the orchestrator, issue providers and the filtering policy."""

    comment_source: str
    max_issues_to_post: int | None = None
    max_issues_to_post_for_each_file: int | None = None
    comment_format: CommentFormat | None = None

    @classmethod
    def from_config(cls, config: dict) -> ReportSettings:
        comment_format = config.get("comment_format")
        if comment_format is not None:
            try:
                comment_format = CommentFormat(comment_format)
            except ValueError:
                choices = ", ".join(f.value for f in CommentFormat)
                raise ConfigurationError(f"Unknown comment_format {comment_format!r}. Choose one of: {choices}.")

        return cls(
            comment_source=config.get("comment_source") or "",
            max_issues_to_post=_parse_limit(config, "max_issues_to_post"),
            max_issues_to_post_for_each_file=_parse_limit(config, "max_issues_to_post_for_each_file"),
            comment_format=comment_format,
        )
