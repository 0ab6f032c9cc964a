"""Run context for a single CI invocation.

The controller never reads the process environment itself. The CLI builds a
RunContext once via ``RunContext.from_env()`` and passes it in, so theme name
derivation and the pull request checks can be tested with plain values.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from themepreview_core.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class RunContext:
    event_name: str = ""
    head_ref: str = ""
    ref_name: str = ""
    repository: str = ""  # "owner/name"
    pull_request_number: int | None = None

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request_number is not None

    @classmethod
    def from_env(cls, environ: dict | None = None) -> RunContext:
        """Build a context from the GitHub Actions environment variables."""
        env = os.environ if environ is None else environ
        return cls(
            event_name=env.get("GITHUB_EVENT_NAME", ""),
            head_ref=env.get("GITHUB_HEAD_REF", ""),
            ref_name=env.get("GITHUB_REF_NAME", ""),
            repository=env.get("GITHUB_REPOSITORY", ""),
            pull_request_number=_read_pull_request_number(env.get("GITHUB_EVENT_PATH")),
        )


def _read_pull_request_number(event_path: str | None) -> int | None:
    """Return ``pull_request.number`` from the webhook payload file, or None."""
    if not event_path:
        return None
    try:
        payload = json.loads(Path(event_path).read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.debug("Could not read event payload %s: %s", event_path, e)
        return None
    pull_request = payload.get("pull_request") if isinstance(payload, dict) else None
    if not pull_request:
        return None
    number = pull_request.get("number")
    return int(number) if number is not None else None


def get_theme_name(context: RunContext) -> str:
    """Return the last path segment of the branch that triggered the run.

    Pull request runs use the head branch; every other trigger uses the ref
    name. ``feature/foo`` and ``refs/heads/feature/foo`` both give ``foo``.
    """
    if context.event_name == "pull_request":
        branch, source = context.head_ref, "GITHUB_HEAD_REF"
    else:
        branch, source = context.ref_name, "GITHUB_REF_NAME"
    if not branch:
        raise ConfigurationError(
            f"Cannot derive a theme name as '{source}' is not set "
            f"(event: {context.event_name or 'unknown'})."
        )
    return branch.split("/")[-1]
